"""Test the posterior module."""

import pickle

import numpy as np
from sampling.posterior import Posterior


def _dummy_likelihood_fn(params):
    """Dummy likelihood function for pickling test."""
    if params.ndim == 1:
        return -0.5 * np.sum(params**2)
    else:
        return -0.5 * np.sum(params**2, axis=1)


def _dummy_prior_fn(params):
    """Dummy prior function for pickling test."""
    if params.ndim == 1:
        return -np.sum(np.abs(params))
    else:
        return -np.sum(np.abs(params), axis=1)


def test_posterior():
    """Test the posterior on a simple example."""

    posterior_fn = Posterior(_dummy_likelihood_fn, _dummy_prior_fn)

    params = np.array([1.0, 2.0, -1.5])
    log_posterior = posterior_fn(params)

    expected_log_likelihood = -0.5 * (1.0**2 + 2.0**2 + (-1.5) ** 2)
    expected_log_prior = -(np.abs(1.0) + np.abs(2.0) + np.abs(-1.5))
    expected_log_posterior = expected_log_likelihood + expected_log_prior

    assert np.isclose(log_posterior, expected_log_posterior)


def test_posterior_picklable():
    """Test that Posterior is picklable and works after unpickling."""
    posterior = Posterior(_dummy_likelihood_fn, _dummy_prior_fn)
    pickled = pickle.dumps(posterior)
    unpickled = pickle.loads(pickled)
    params = np.array([0.5, -0.5])
    assert np.isclose(posterior(params), unpickled(params))


def test_posterior_batched_consistent_with_single():
    """Test that batched evaluation gives same results as individual calls."""

    posterior_fn = Posterior(_dummy_likelihood_fn, _dummy_prior_fn)

    models = [
        np.array([1.0, 2.0, -1.5]),
        np.array([0.5, -0.5, 1.0]),
        np.array([-1.0, 1.5, 0.0]),
    ]

    individual_results = np.array([posterior_fn(m) for m in models])
    batched_results = posterior_fn(np.array(models))

    assert batched_results.shape == (3,)
    np.testing.assert_allclose(individual_results, batched_results)


def test_zero_prior_skips_likelihood():
    """The likelihood is not evaluated where the prior rules a point out."""
    calls = []

    def likelihood_fn(params):
        calls.append(params)
        return 0.0

    posterior_fn = Posterior(likelihood_fn, lambda params: -np.inf)

    assert posterior_fn(np.array([0.3])) == -np.inf
    assert calls == []


def test_batched_zero_prior_gives_neg_inf_entries():
    """In a batch, points with zero prior come out as -inf."""
    prior_fn = lambda params: np.where(params > 0, 0.0, -np.inf)  # noqa: E731
    posterior_fn = Posterior(lambda params: -params, prior_fn)

    result = posterior_fn(np.array([-1.0, 1.0, 2.0]))

    np.testing.assert_array_equal(result, [-np.inf, -1.0, -2.0])
