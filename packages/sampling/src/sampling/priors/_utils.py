"""Shared helpers for priors."""

import numpy as np


def _as_bounds(values: float | np.ndarray) -> np.ndarray:
    """Convert scalar or array-like parameters to a 1D float array."""
    return np.atleast_1d(np.asarray(values, dtype=float))


def _reduce_log_density(terms: np.ndarray, n: int) -> float | np.ndarray:
    """Collapse per-parameter log-density terms into one value per point.

    Parameters
    ----------
    terms : ndarray
        Elementwise log-densities, shaped like the parameters passed in.
    n : int
        Number of parameters of the prior.

    Returns
    -------
    float or ndarray
        Scalar for a single point, array of shape (batch,) for a batch.
    """
    terms = np.asarray(terms, dtype=float)
    if n == 1:
        # A one-parameter prior sees scalars, (batch,) or (batch, 1)
        if terms.ndim == 2:
            terms = terms[:, 0]
    else:
        terms = np.sum(terms, axis=-1)
    return float(terms) if terms.ndim == 0 else terms
