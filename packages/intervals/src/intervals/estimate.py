"""Credible intervals from samples or from a probability mass over a grid."""

from dataclasses import dataclass

import numpy as np
from sampling.errors import DomainError

# Rounding in cumulative sums of masses, and in mass * n, is absorbed by this
_MASS_TOLERANCE = 1e-12
# Normalised probabilities may differ from a total of one by this much
_NORMALISATION_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Interval:
    """A closed interval and the probability mass it is meant to capture.

    Parameters
    ----------
    lower, upper : float
        Bounds of the interval.
    mass : float
        Target probability mass. For a region returned by
        :func:`grid_highest_density_regions` this is the mass the region
        actually holds.
    """

    lower: float
    upper: float
    mass: float

    @property
    def width(self) -> float:
        """Distance between the bounds."""
        return self.upper - self.lower


def percentile_interval(samples: np.ndarray, mass: float) -> Interval:
    """Central interval between the ``(1-mass)/2`` and ``(1+mass)/2`` quantiles.

    Equal mass is left out in each tail, so for a skewed distribution the
    interval can exclude the mode.

    Parameters
    ----------
    samples : ndarray, shape (num_samples,)
        Draws from the distribution.
    mass : float
        Probability mass in ``(0, 1)``.

    Returns
    -------
    interval : Interval
    """
    samples = _validate_samples(samples)
    _validate_mass(mass)
    lower, upper = np.quantile(samples, [(1 - mass) / 2, (1 + mass) / 2])
    return Interval(float(lower), float(upper), mass)


def highest_density_interval(samples: np.ndarray, mass: float) -> Interval:
    """Narrowest interval containing ``ceil(mass * n)`` of the ``n`` samples.

    Every window of that many consecutive sorted samples is a candidate; the
    shortest one wins. For a multi-modal distribution the window spans the
    gap between modes.

    Parameters
    ----------
    samples : ndarray, shape (num_samples,)
        Draws from the distribution.
    mass : float
        Probability mass in ``(0, 1)``.

    Returns
    -------
    interval : Interval
    """
    samples = np.sort(_validate_samples(samples))
    _validate_mass(mass)
    n = samples.size
    # Two points at least, so that tiny masses still locate the densest region
    window = min(n, max(int(np.ceil(mass * n * (1 - _MASS_TOLERANCE))), 2))
    widths = samples[window - 1 :] - samples[: n - window + 1]
    start = int(np.argmin(widths))
    return Interval(float(samples[start]), float(samples[start + window - 1]), mass)


def grid_percentile_interval(
    points: np.ndarray, probabilities: np.ndarray, mass: float
) -> Interval:
    """Central interval of a probability mass function over ordered points.

    The bounds are the first points at which the cumulative mass reaches
    ``(1-mass)/2`` and ``(1+mass)/2``.

    Parameters
    ----------
    points : ndarray, shape (n,)
        Strictly increasing grid points.
    probabilities : ndarray, shape (n,)
        Normalised probability of each point.
    mass : float
        Probability mass in ``(0, 1)``.

    Returns
    -------
    interval : Interval
    """
    points, probabilities = _validate_grid(points, probabilities)
    _validate_mass(mass)
    cdf = np.cumsum(probabilities)
    last = points.size - 1
    lower_index = np.searchsorted(cdf, (1 - mass) / 2 - _MASS_TOLERANCE)
    upper_index = np.searchsorted(cdf, (1 + mass) / 2 - _MASS_TOLERANCE)
    return Interval(
        float(points[min(lower_index, last)]),
        float(points[min(upper_index, last)]),
        mass,
    )


def grid_highest_density_interval(
    points: np.ndarray, probabilities: np.ndarray, mass: float
) -> Interval:
    """Highest-density interval of a probability mass function over a grid.

    Points are taken in order of decreasing probability until their total
    reaches ``mass``. The interval reported is the convex hull of the
    selected points: for a multi-modal distribution it also covers the
    low-density gaps between modes. Use :func:`grid_highest_density_regions`
    to get the modes separately.

    Parameters
    ----------
    points : ndarray, shape (n,)
        Strictly increasing grid points.
    probabilities : ndarray, shape (n,)
        Normalised probability of each point.
    mass : float
        Probability mass in ``(0, 1)``.

    Returns
    -------
    interval : Interval
    """
    points, probabilities = _validate_grid(points, probabilities)
    _validate_mass(mass)
    selected = points[_highest_density_indices(probabilities, mass)]
    return Interval(float(selected.min()), float(selected.max()), mass)


def grid_highest_density_regions(
    points: np.ndarray, probabilities: np.ndarray, mass: float
) -> list[Interval]:
    """Highest-density set of a grid mass function, as disjoint intervals.

    Same selection as :func:`grid_highest_density_interval`, but split into
    runs of adjacent grid points. Each run becomes one interval whose ``mass``
    is the probability it holds; together they hold at least ``mass``.

    Returns
    -------
    regions : list of Interval
        Disjoint intervals in increasing order.
    """
    points, probabilities = _validate_grid(points, probabilities)
    _validate_mass(mass)
    indices = np.sort(_highest_density_indices(probabilities, mass))
    # A gap in grid indices starts a new region
    breaks = np.flatnonzero(np.diff(indices) > 1) + 1
    return [
        Interval(
            float(points[run[0]]),
            float(points[run[-1]]),
            float(probabilities[run].sum()),
        )
        for run in np.split(indices, breaks)
    ]


def _highest_density_indices(probabilities: np.ndarray, mass: float) -> np.ndarray:
    """Indices of the most probable points whose total reaches ``mass``."""
    order = np.argsort(-probabilities, kind="stable")
    cumulative = np.cumsum(probabilities[order])
    count = np.searchsorted(cumulative, mass - _MASS_TOLERANCE) + 1
    return order[: min(count, order.size)]


def _validate_mass(mass: float) -> None:
    if not 0 < mass < 1:
        raise DomainError(f"Interval mass must be in (0, 1), got {mass}.")


def _validate_samples(samples: np.ndarray) -> np.ndarray:
    samples = np.asarray(samples, dtype=float)
    if samples.ndim != 1:
        raise DomainError("Samples must be one-dimensional.")
    if samples.size == 0:
        raise DomainError("Cannot compute an interval from an empty sample.")
    return samples


def _validate_grid(
    points: np.ndarray, probabilities: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    points = np.asarray(points, dtype=float)
    probabilities = np.asarray(probabilities, dtype=float)
    if points.ndim != 1 or probabilities.shape != points.shape:
        raise DomainError(
            "Points and probabilities must be one-dimensional and of equal length."
        )
    if points.size == 0:
        raise DomainError("Cannot compute an interval over an empty grid.")
    if not np.all(np.isfinite(probabilities)):
        raise DomainError("Probabilities must be finite.")
    if np.any(probabilities < 0):
        raise DomainError("Probabilities must be non-negative.")
    total = probabilities.sum()
    if abs(total - 1.0) > _NORMALISATION_TOLERANCE:
        raise DomainError(f"Probabilities must sum to one, got a total of {total}.")
    return points, probabilities
