"""Gaussian Prior."""

import numpy as np
from scipy import stats

from ._utils import _as_bounds, _reduce_log_density


class GaussianPrior:
    """Independent Gaussian prior on each parameter.

    Parameters
    ----------
    mean : float | ndarray, shape (n,)
        Prior means.
    std : float | ndarray, shape (n,)
        Prior standard deviations. Must be positive.
    """

    def __init__(self, mean: float | np.ndarray, std: float | np.ndarray) -> None:
        mean = _as_bounds(mean)
        std = _as_bounds(std)
        if mean.shape != std.shape:
            raise ValueError(
                f"Shape mismatch: mean has shape {mean.shape}, std has shape {std.shape}."
            )
        if np.any(std <= 0):
            raise ValueError("Standard deviations must be positive.")
        self.mean = mean
        self.std = std
        self._n = mean.size

    def __call__(self, model_params: float | np.ndarray) -> float | np.ndarray:
        """Gaussian log-prior."""
        mean, std = self.mean, self.std
        if self._n == 1:
            mean, std = mean[0], std[0]
        terms = stats.norm.logpdf(model_params, loc=mean, scale=std)
        return _reduce_log_density(terms, self._n)

    def sample(self, num_samples: int, rng: np.random.Generator) -> np.ndarray:
        """Sample from the Gaussian prior."""
        samples = rng.normal(self.mean, self.std, size=(num_samples, self._n))
        return samples[:, 0] if self._n == 1 else samples

    @property
    def n(self) -> int:
        """Number of parameters in the Gaussian prior."""
        return self._n
