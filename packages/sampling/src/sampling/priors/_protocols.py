"""Common Prior Protocols."""

from typing import Protocol

import numpy as np


class PriorFunction(Protocol):
    """Protocol for prior log-density functions.

    Priors are callables returning a log-density and can also be sampled,
    which is how independent chains get their starting points.
    """

    n: int

    def __call__(self, model_params: np.ndarray) -> float | np.ndarray:
        """Calculate the log-prior for given parameters.

        Parameters
        ----------
        model_params : ndarray
            A single point (scalar or shape (n,)) or a batch of points
            (shape (batch,) for n == 1, or (batch, n)).

        Returns
        -------
        log_prior : float | ndarray
            Log-prior value(s). Scalar for a single point, array for a batch.
        """

    def sample(self, num_samples: int, rng: np.random.Generator) -> np.ndarray:
        """Sample from the prior.

        Parameters
        ----------
        num_samples : int
            Number of samples to draw.
        rng : np.random.Generator
            Random number generator.

        Returns
        -------
        samples : ndarray, shape (num_samples,) or (num_samples, n)
            Samples drawn from the prior.
        """
