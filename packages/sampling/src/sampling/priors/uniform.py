"""Uniform Prior."""

import numpy as np

from ._utils import _as_bounds, _reduce_log_density


class UniformPrior:
    """Class representing a Uniform prior.

    Parameters
    ----------
    lower_bounds : float | ndarray, shape (n,)
        Lower bounds of the uniform prior.
    upper_bounds : float | ndarray, shape (n,)
        Upper bounds of the uniform prior.

    Raises
    ------
    ValueError
        If `lower_bounds` and `upper_bounds` have mismatched shapes,
        or if any lower bound is not less than the corresponding upper bound.
    """

    def __init__(
        self,
        lower_bounds: float | np.ndarray,
        upper_bounds: float | np.ndarray,
    ) -> None:
        lower_bounds = _as_bounds(lower_bounds)
        upper_bounds = _as_bounds(upper_bounds)
        if lower_bounds.shape != upper_bounds.shape:
            raise ValueError(
                f"Shape mismatch: lower_bounds has shape {lower_bounds.shape}, upper_bounds has shape {upper_bounds.shape}."
            )
        if np.any(lower_bounds >= upper_bounds):
            raise ValueError(
                "Each lower bound must be less than the corresponding upper bound."
            )
        self.lower_bounds = lower_bounds
        self.upper_bounds = upper_bounds
        self._n = lower_bounds.size
        self._volume = float(np.prod(upper_bounds - lower_bounds))
        self._normalisation = -np.log(self._volume)

    def __call__(self, model_params: float | np.ndarray) -> float | np.ndarray:
        """Uniform log-prior.

        Boundaries are inside the support.
        """
        model_params = np.asarray(model_params, dtype=float)
        lower, upper = self.lower_bounds, self.upper_bounds
        if self._n == 1:
            lower, upper = lower[0], upper[0]
        out_of_bounds = (model_params < lower) | (model_params > upper)
        terms = np.where(out_of_bounds, -np.inf, self._normalisation / self._n)
        return _reduce_log_density(terms, self._n)

    def sample(self, num_samples: int, rng: np.random.Generator) -> np.ndarray:
        """Sample from the Uniform prior.

        Parameters
        ----------
        num_samples : int
            Number of samples to draw.
        rng : np.random.Generator
            Random number generator.

        Returns
        -------
        samples : ndarray, shape (num_samples,) or (num_samples, n)
            Samples drawn from the Uniform prior. One-parameter priors
            return a flat array.
        """
        samples = rng.uniform(
            low=self.lower_bounds,
            high=self.upper_bounds,
            size=(num_samples, self._n),
        )
        return samples[:, 0] if self._n == 1 else samples

    @property
    def n(self) -> int:
        """Number of parameters in the Uniform prior."""
        return self._n

    @property
    def volume(self) -> float:
        """Volume of the Uniform prior."""
        return self._volume
