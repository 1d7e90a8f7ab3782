"""Simulating observations from sampled parameters."""

from collections.abc import Callable

import numpy as np


def simulate_predictive(
    parameter_samples: np.ndarray,
    simulate: Callable[[np.ndarray, np.random.Generator], np.ndarray],
    rng: np.random.Generator,
    vectorised: bool = True,
) -> np.ndarray:
    """Simulate one observation per parameter draw.

    Feeding posterior draws through the data-generating process gives draws
    from the posterior predictive distribution, so parameter uncertainty is
    carried into the predictions.

    Parameters
    ----------
    parameter_samples : ndarray, shape (num_samples,) or (num_samples, n)
        Parameter draws, e.g. from :func:`sampling.weighted.draw`.
    simulate : Callable[[np.ndarray, np.random.Generator], np.ndarray]
        Data-generating process ``(params, rng) -> observation``. For example
        ``lambda p, rng: rng.binomial(9, p)``.
    rng : np.random.Generator
        Random number generator.
    vectorised : bool, optional
        If True (default), ``simulate`` is called once with all draws and must
        return one observation per draw. If False, it is called per draw.

    Returns
    -------
    observations : ndarray, shape (num_samples, ...)
        Simulated observations, aligned with ``parameter_samples``.
    """
    parameter_samples = np.asarray(parameter_samples)
    if vectorised:
        observations = np.asarray(simulate(parameter_samples, rng))
        if observations.shape[:1] != parameter_samples.shape[:1]:
            raise ValueError(
                f"Simulator returned {observations.shape[:1]} observations for {parameter_samples.shape[:1]} draws."
            )
        return observations
    return np.array([simulate(params, rng) for params in parameter_samples])
