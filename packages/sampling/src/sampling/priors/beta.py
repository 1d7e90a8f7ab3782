"""Beta Prior, for parameters that are probabilities."""

import numpy as np
from scipy import stats


class BetaPrior:
    """Beta(a, b) prior on a single parameter in [0, 1].

    ``BetaPrior(1, 1)`` is the flat prior on a proportion.

    Parameters
    ----------
    a, b : float
        Shape parameters. Must be positive.
    """

    n = 1

    def __init__(self, a: float, b: float) -> None:
        if a <= 0 or b <= 0:
            raise ValueError("Beta shape parameters must be positive.")
        self.a = float(a)
        self.b = float(b)

    def __call__(self, model_params: float | np.ndarray) -> float | np.ndarray:
        """Beta log-prior, ``-inf`` outside [0, 1]."""
        log_prior = stats.beta.logpdf(model_params, self.a, self.b)
        return float(log_prior) if np.ndim(log_prior) == 0 else log_prior

    def sample(self, num_samples: int, rng: np.random.Generator) -> np.ndarray:
        """Sample from the Beta prior."""
        return rng.beta(self.a, self.b, size=num_samples)
