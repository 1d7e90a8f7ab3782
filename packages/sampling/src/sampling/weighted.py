"""Exact categorical sampling from weighted values."""

import numpy as np

from .errors import DomainError


def draw(
    values: np.ndarray,
    weights: np.ndarray,
    count: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw values independently and with replacement, proportionally to weight.

    The probability of drawing ``values[i]`` is ``weights[i] / sum(weights)``.
    Sampling inverts the cumulative distribution of the normalised weights,
    so it is exact and categories with zero weight are never drawn.

    Parameters
    ----------
    values : ndarray, shape (k,) or (k, ...)
        Values to draw from. Rows of a multi-dimensional array are drawn as
        whole values.
    weights : ndarray, shape (k,)
        Non-negative weights. Need not sum to one.
    count : int
        Number of draws.
    rng : np.random.Generator
        Source of randomness. Not consulted when ``count`` is zero.

    Returns
    -------
    samples : ndarray, shape (count,) or (count, ...)
        Drawn values, in draw order.

    Raises
    ------
    DomainError
        If ``count`` is negative, the lengths of ``values`` and ``weights``
        differ, any weight is negative or not finite, or all weights are zero.
    """
    values = np.asarray(values)
    weights = np.asarray(weights, dtype=float)

    if count < 0:
        raise DomainError(f"Number of draws must be non-negative, got {count}.")
    if weights.ndim != 1:
        raise DomainError("Weights must be one-dimensional.")
    if values.ndim == 0 or len(values) != weights.size:
        raise DomainError(
            f"Got {values.size if values.ndim == 0 else len(values)} values but {weights.size} weights."
        )
    if count == 0 and weights.size == 0:
        return values[:0]

    cdf = _cumulative_probabilities(weights)
    if count == 0:
        return values[:0]

    u = rng.random(count)
    # side="right" skips zero-width steps, i.e. zero-weight categories
    indices = np.searchsorted(cdf, u, side="right")
    return values[indices]


def _cumulative_probabilities(weights: np.ndarray) -> np.ndarray:
    """Normalised cumulative weights, with the last entry exactly one."""
    if weights.size == 0:
        raise DomainError("Cannot draw from an empty set of values.")
    if not np.all(np.isfinite(weights)):
        raise DomainError("Weights must be finite.")
    if np.any(weights < 0):
        raise DomainError("Weights must be non-negative.")

    total = weights.sum()
    if total <= 0:
        raise DomainError("All weights are zero; the distribution is undefined.")

    cdf = np.cumsum(weights / total)
    # Rounding can leave the total a hair below one; clamp the tail (including
    # any trailing zero-weight entries) so every u in [0, 1) lands in range.
    last = np.flatnonzero(weights)[-1]
    cdf[last:] = 1.0
    return cdf
