"""Combining a prior and a likelihood into an unnormalised log-posterior."""

from collections.abc import Callable

import numpy as np


class Posterior:
    """
    Represents an unnormalised log-posterior density.

    The posterior combines a log-likelihood function and a log-prior function.
    Both are pure callables; the posterior itself holds no other state, so the
    same instance can be shared between grid evaluation and any number of
    independent chains.
    """

    def __init__(
        self,
        likelihood_fn: Callable[[np.ndarray], float | np.ndarray],
        prior_fn: Callable[[np.ndarray], float | np.ndarray],
    ) -> None:
        """
        Initialise the Posterior.

        Parameters
        ----------
        likelihood_fn : Callable[[np.ndarray], float | np.ndarray]
            Function that takes parameters and returns the log-likelihood.
        prior_fn : Callable[[np.ndarray], float | np.ndarray]
            Function that takes parameters and returns the log-prior.
        """
        self.likelihood_fn = likelihood_fn
        self.prior_fn = prior_fn

    def __call__(self, model_params: np.ndarray) -> float | np.ndarray:
        """
        Evaluate the log-posterior for given parameters.

        For a scalar log-prior of ``-inf`` the likelihood is not evaluated at
        all, since the posterior is zero there whatever the data say. In a
        batch, points where the log-prior is ``-inf`` come out as ``-inf``
        even if the likelihood is undefined (NaN) there.

        Parameters
        ----------
        model_params : ndarray
            Parameters at which to evaluate the posterior. Either a single
            point or, for vectorised callables, a batch of points.

        Returns
        -------
        log_posterior : float | ndarray
            The log-posterior value(s).
        """
        log_prior = self.prior_fn(model_params)
        if np.ndim(log_prior) == 0 and np.isneginf(log_prior):
            return -np.inf
        log_likelihood = self.likelihood_fn(model_params)
        if np.ndim(log_prior) > 0:
            return np.where(np.isneginf(log_prior), -np.inf, log_likelihood + log_prior)
        return log_likelihood + log_prior
