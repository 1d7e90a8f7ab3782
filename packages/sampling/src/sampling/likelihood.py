"""Log-likelihood functions built from conditionally independent observations."""

from collections.abc import Callable

import numpy as np
from scipy import stats


class IndependentLikelihood:
    """
    Log-likelihood of observations that are independent given the parameters.

    The joint likelihood is the product of the per-observation likelihoods, so
    in log-space it is their sum. Summing logs keeps hundreds of observations
    representable where the raw product would underflow to zero.
    """

    def __init__(
        self,
        log_density_fn: Callable[[np.ndarray, np.ndarray], np.ndarray],
        observations: np.ndarray,
    ) -> None:
        """
        Initialise the likelihood.

        Parameters
        ----------
        log_density_fn : Callable[[np.ndarray, np.ndarray], np.ndarray]
            Function ``(observations, params) -> log_densities`` returning one
            log-density per observation. Must broadcast over observations.
        observations : ndarray, shape (m,)
            Observed data.

        Raises
        ------
        ValueError
            If the observations are not one-dimensional.
        """
        observations = np.asarray(observations)
        _validate_data_vector(observations)
        self.log_density_fn = log_density_fn
        self.observations = observations

    def __call__(self, model_params: float | np.ndarray) -> float:
        """
        Evaluate the log-likelihood at a single parameter point.

        Parameters
        ----------
        model_params : float | ndarray
            Parameter value, or parameter vector.

        Returns
        -------
        log_likelihood : float
            Sum of the per-observation log-densities.
        """
        return float(np.sum(self.log_density_fn(self.observations, model_params)))


class BinomialLikelihood:
    """
    Binomial log-likelihood for a success probability.

    Evaluates ``log Binomial(successes | trials, p)`` and accepts either a
    single probability or an array of probabilities (e.g. a whole grid).
    """

    def __init__(self, successes: int, trials: int) -> None:
        """
        Parameters
        ----------
        successes : int
            Number of observed successes.
        trials : int
            Number of trials.
        """
        if trials < 0 or not 0 <= successes <= trials:
            raise ValueError("Need 0 <= successes <= trials.")
        self.successes = successes
        self.trials = trials

    def __call__(self, p: float | np.ndarray) -> float | np.ndarray:
        log_likelihood = stats.binom.logpmf(self.successes, self.trials, p)
        # scipy gives nan outside [0, 1]; there the likelihood is zero
        log_likelihood = np.where(np.isnan(log_likelihood), -np.inf, log_likelihood)
        return float(log_likelihood) if log_likelihood.ndim == 0 else log_likelihood


class NormalLikelihood:
    """
    Likelihood of i.i.d. normal observations.

    With a fixed ``scale`` the parameter is the mean ``mu``. Without one the
    parameter is the pair ``(mu, sigma)``. Batches of parameters are evaluated
    in one call: shape (batch,) for ``mu`` only, or (batch, 2).
    """

    def __init__(self, observations: np.ndarray, scale: float | None = None) -> None:
        observations = np.asarray(observations, dtype=float)
        _validate_data_vector(observations)
        if scale is not None and scale <= 0:
            raise ValueError("Scale must be positive.")
        self.observations = observations
        self.scale = scale

    def __call__(self, model_params: float | np.ndarray) -> float | np.ndarray:
        model_params = np.asarray(model_params, dtype=float)
        if self.scale is None:
            mu, sigma = model_params[..., 0], model_params[..., 1]
        else:
            mu, sigma = model_params, np.full_like(model_params, self.scale)

        # Broadcast the observations along a new trailing axis
        mu = np.asarray(mu)[..., None]
        sigma = np.asarray(sigma)[..., None]
        with np.errstate(invalid="ignore"):
            terms = stats.norm.logpdf(self.observations, loc=mu, scale=sigma)
        log_likelihood = np.sum(terms, axis=-1)
        # Non-positive sigma is outside the parameter space
        log_likelihood = np.where(sigma[..., 0] > 0, log_likelihood, -np.inf)
        return float(log_likelihood) if log_likelihood.ndim == 0 else log_likelihood


def _validate_data_vector(data: np.ndarray) -> None:
    """
    Validate that the data vector is one-dimensional.

    Parameters
    ----------
    data : ndarray
        Data vector to validate.

    Raises
    ------
    ValueError
        If the data vector is not one-dimensional.
    """
    if data.ndim != 1:
        raise ValueError("Data vector must be one-dimensional.")
