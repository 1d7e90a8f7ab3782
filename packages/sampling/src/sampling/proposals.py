"""Symmetric proposal rules for the Metropolis sampler.

The Metropolis acceptance rule is only valid for symmetric proposals: the
density of proposing B from A must equal that of proposing A from B. All
proposals here satisfy that, including at boundaries. They are plain classes
rather than closures so that they can be pickled into worker processes.
"""

import numpy as np


class GaussianRandomWalk:
    """Add a zero-mean Gaussian perturbation to the current state.

    Parameters
    ----------
    scale : float | ndarray
        Standard deviation of the step, scalar or one per dimension.
    """

    def __init__(self, scale: float | np.ndarray) -> None:
        scale = np.asarray(scale, dtype=float)
        if np.any(scale <= 0):
            raise ValueError("Proposal scale must be positive.")
        self.scale = scale

    def __call__(self, state: float | np.ndarray, rng: np.random.Generator):
        step = rng.normal(0.0, self.scale, size=np.shape(state))
        if np.ndim(state) == 0:
            return float(state + step)
        return state + step


class RingStep:
    """Step one position left or right on a ring of integer positions.

    Positions run from ``first`` to ``first + n_positions - 1``; stepping past
    either end wraps around to the other.

    Parameters
    ----------
    n_positions : int
        Number of positions on the ring.
    first : int, optional
        Label of the first position. Default is 1.
    """

    def __init__(self, n_positions: int, first: int = 1) -> None:
        if n_positions < 2:
            raise ValueError("A ring needs at least two positions.")
        self.n_positions = n_positions
        self.first = first

    def __call__(self, state: int, rng: np.random.Generator) -> int:
        step = 1 if rng.random() < 0.5 else -1
        return self.first + (state - self.first + step) % self.n_positions


class ReflectingRandomWalk:
    """Gaussian random walk reflected back into ``[lower, upper]``.

    Reflection keeps the proposal symmetric, unlike clipping to the boundary.

    Parameters
    ----------
    scale : float | ndarray
        Standard deviation of the step.
    lower, upper : float | ndarray
        Bounds of the state space.
    """

    def __init__(
        self,
        scale: float | np.ndarray,
        lower: float | np.ndarray,
        upper: float | np.ndarray,
    ) -> None:
        lower = np.asarray(lower, dtype=float)
        upper = np.asarray(upper, dtype=float)
        if np.any(lower >= upper):
            raise ValueError("Lower bound must be less than upper bound.")
        self._walk = GaussianRandomWalk(scale)
        self.lower = lower
        self.upper = upper

    def __call__(self, state: float | np.ndarray, rng: np.random.Generator):
        candidate = self._walk(state, rng)
        width = self.upper - self.lower
        # Fold onto a circle of circumference 2 * width, then mirror the far half
        offset = np.mod(np.asarray(candidate) - self.lower, 2 * width)
        reflected = self.lower + np.where(offset > width, 2 * width - offset, offset)
        if np.ndim(state) == 0:
            return float(reflected)
        return reflected
