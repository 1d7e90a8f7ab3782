"""Grid approximation of a one-dimensional posterior."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np
from intervals import (
    Interval,
    grid_highest_density_interval,
    grid_percentile_interval,
)
from sampling.errors import DomainError
from sampling.posterior import Posterior
from sampling.weighted import draw

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grid:
    """Evenly spaced points over ``[lo, hi]``.

    Parameters
    ----------
    lo, hi : float
        Bounds of the parameter domain. Both are grid points.
    n : int
        Number of points. A single-point grid sits at ``lo`` and allows
        ``lo == hi``.

    Raises
    ------
    DomainError
        If ``n < 1`` or the bounds are not increasing.
    """

    lo: float
    hi: float
    n: int
    points: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.n < 1:
            raise DomainError(f"A grid needs at least one point, got n={self.n}.")
        if not (np.isfinite(self.lo) and np.isfinite(self.hi)):
            raise DomainError(f"Grid bounds must be finite, got [{self.lo}, {self.hi}].")
        if not (self.lo < self.hi or (self.n == 1 and self.lo == self.hi)):
            raise DomainError(f"Grid bounds must satisfy lo < hi, got [{self.lo}, {self.hi}].")
        points = np.linspace(self.lo, self.hi, self.n)
        points.flags.writeable = False
        object.__setattr__(self, "points", points)

    @classmethod
    def from_points(cls, points: Sequence[float] | np.ndarray) -> Grid:
        """Build a grid from explicit, strictly increasing points.

        The points need not be evenly spaced.
        """
        points = np.asarray(points, dtype=float)
        _validate_points(points)
        grid = cls(float(points[0]), float(points[-1]), points.size)
        points = points.copy()
        points.flags.writeable = False
        object.__setattr__(grid, "points", points)
        return grid

    def __len__(self) -> int:
        return self.n

    # Grids are equal when their points are, however they were built
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.points, other.points)

    def __hash__(self) -> int:
        return hash(self.points.tobytes())


@dataclass(frozen=True)
class PosteriorMass:
    """Normalised posterior probabilities over the points of a grid.

    Parameters
    ----------
    points : ndarray, shape (n,)
        Grid points.
    probabilities : ndarray, shape (n,)
        Non-negative probabilities summing to one.
    log_density : ndarray, shape (n,)
        Unnormalised log-posterior at each point, as evaluated.
    """

    points: np.ndarray
    probabilities: np.ndarray
    log_density: np.ndarray

    @property
    def mode(self) -> float:
        """Most probable grid point (maximum a posteriori)."""
        return float(self.points[np.argmax(self.probabilities)])

    @property
    def mean(self) -> float:
        """Posterior mean."""
        return float(np.sum(self.points * self.probabilities))

    def sample(self, count: int, rng: np.random.Generator) -> np.ndarray:
        """Draw grid points with probability equal to their posterior mass."""
        return draw(self.points, self.probabilities, count, rng)

    def percentile_interval(self, mass: float) -> Interval:
        """Central interval computed from the cumulative mass."""
        return grid_percentile_interval(self.points, self.probabilities, mass)

    def highest_density_interval(self, mass: float) -> Interval:
        """Highest-density interval computed from the mass function."""
        return grid_highest_density_interval(self.points, self.probabilities, mass)


def evaluate(
    grid: Grid | Sequence[float] | np.ndarray,
    log_prior: Callable[[float], float],
    log_likelihood: Callable[[float], float],
    vectorised: bool = False,
) -> PosteriorMass:
    """Approximate a posterior by normalising prior times likelihood on a grid.

    The log-posterior is evaluated at every point, its maximum is subtracted
    before exponentiating, and the result is divided by its sum. This keeps
    the result exact up to rounding however small the raw likelihoods are,
    e.g. a product of hundreds of per-observation likelihoods.

    Parameters
    ----------
    grid : Grid or sequence of float
        Points at which to evaluate the posterior.
    log_prior : Callable[[float], float]
        Log-prior density. May return ``-inf``.
    log_likelihood : Callable[[float], float]
        Log-likelihood of the data. May return ``-inf``.
    vectorised : bool, optional
        If True, both functions are called once with the array of all points
        and must return an array of values. Default is False (one call per
        point).

    Returns
    -------
    posterior : PosteriorMass
        Normalised posterior probabilities over the grid.

    Raises
    ------
    DomainError
        If the grid is empty, the log-posterior is NaN or ``+inf`` anywhere,
        or it is ``-inf`` everywhere.
    """
    points = grid.points if isinstance(grid, Grid) else np.asarray(grid, dtype=float)
    if points.size == 0:
        raise DomainError("Cannot evaluate a posterior on an empty grid.")

    posterior = Posterior(log_likelihood, log_prior)
    if vectorised:
        log_density = np.asarray(posterior(points), dtype=float)
        if log_density.shape != points.shape:
            raise ValueError(
                f"Vectorised log-density returned shape {log_density.shape} for {points.shape} points."
            )
    else:
        log_density = np.array([posterior(point) for point in points], dtype=float)

    probabilities = _normalise(log_density, points)
    logger.debug(
        "Evaluated posterior on %d grid points; mode at %s",
        points.size,
        points[np.argmax(probabilities)],
    )
    return PosteriorMass(points, probabilities, log_density)


def _normalise(log_density: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Turn unnormalised log-densities into probabilities, stably."""
    if np.any(np.isnan(log_density)):
        bad = points[np.isnan(log_density)][0]
        raise DomainError(f"Log-posterior is NaN at grid point {bad}.")
    if np.any(np.isposinf(log_density)):
        bad = points[np.isposinf(log_density)][0]
        raise DomainError(f"Log-posterior is +inf at grid point {bad}.")

    max_log_density = np.max(log_density)
    if np.isneginf(max_log_density):
        raise DomainError(
            "Log-posterior is -inf at every grid point; there is no probability mass."
        )

    unnormalised = np.exp(log_density - max_log_density)
    return unnormalised / unnormalised.sum()


def _validate_points(points: np.ndarray) -> None:
    if points.ndim != 1:
        raise DomainError("Grid points must be one-dimensional.")
    if points.size == 0:
        raise DomainError("A grid needs at least one point.")
    if not np.all(np.isfinite(points)):
        raise DomainError("Grid points must be finite.")
    if np.any(np.diff(points) <= 0):
        raise DomainError("Grid points must be strictly increasing.")
