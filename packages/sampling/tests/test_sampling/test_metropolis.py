"""Tests for the Metropolis sampler."""

import math

import numpy as np
import pytest
from sampling.errors import DomainError
from sampling.metropolis import Chain, MetropolisSampler, _accept, run
from sampling.proposals import GaussianRandomWalk, RingStep


def standard_normal_log_density(x: float) -> float:
    return -0.5 * x * x


def ring_log_density(i: int) -> float:
    return math.log(i)


def test_standard_normal_moments() -> None:
    """A long chain reproduces the mean and standard deviation of N(0, 1)."""
    rng = np.random.default_rng(1234)
    chain = run(
        0.0, standard_normal_log_density, GaussianRandomWalk(2.4), 100_000, rng
    )

    assert chain.states.shape == (100_000,)
    assert abs(chain.states.mean()) < 0.05
    assert abs(chain.states.std() - 1.0) < 0.05


def test_ring_walk_visits_proportional_to_position() -> None:
    """On a ring with target proportional to i, position 10 is ~10x position 1."""
    rng = np.random.default_rng(2024)
    chain = run(5, ring_log_density, RingStep(10), 100_000, rng).discard(1_000)

    counts = np.bincount(chain.states, minlength=11)
    assert counts[10] > counts[1]
    assert counts[10] / counts[1] == pytest.approx(10.0, rel=0.15)
    # States stay on the ring
    assert chain.states.min() >= 1
    assert chain.states.max() <= 10


def test_rejected_proposals_repeat_the_state(rng: np.random.Generator) -> None:
    """If every candidate has zero density the chain never moves."""

    def log_target(x: float) -> float:
        return 0.0 if x == 3.0 else -np.inf

    chain = run(3.0, log_target, GaussianRandomWalk(1.0), 500, rng)

    assert len(chain) == 500
    np.testing.assert_array_equal(chain.states, np.full(500, 3.0))
    assert not chain.accepted.any()
    assert chain.acceptance_rate == 0.0


def test_vector_states(rng: np.random.Generator) -> None:
    """States of any dimension are supported."""
    mean = np.array([1.0, -2.0])

    def log_target(x: np.ndarray) -> float:
        return -0.5 * float(np.sum((x - mean) ** 2))

    chain = run(np.zeros(2), log_target, GaussianRandomWalk(1.5), 40_000, rng)

    assert chain.states.shape == (40_000, 2)
    np.testing.assert_allclose(chain.discard(1000).states.mean(axis=0), mean, atol=0.1)


def test_log_densities_are_cached_values(rng: np.random.Generator) -> None:
    chain = run(0.0, standard_normal_log_density, GaussianRandomWalk(1.0), 200, rng)
    expected = [standard_normal_log_density(x) for x in chain.states]
    np.testing.assert_allclose(chain.log_densities, expected)


def test_target_evaluated_once_per_iteration(rng: np.random.Generator) -> None:
    calls = 0

    def log_target(x: float) -> float:
        nonlocal calls
        calls += 1
        return -0.5 * x * x

    run(0.0, log_target, GaussianRandomWalk(1.0), 100, rng)
    assert calls == 101


def test_reproducible_with_fixed_seed() -> None:
    proposal = GaussianRandomWalk(1.0)
    chain1 = run(0.0, standard_normal_log_density, proposal, 300, np.random.default_rng(5))
    chain2 = run(0.0, standard_normal_log_density, proposal, 300, np.random.default_rng(5))
    np.testing.assert_array_equal(chain1.states, chain2.states)


def test_sampler_class_matches_function() -> None:
    sampler = MetropolisSampler(standard_normal_log_density, GaussianRandomWalk(1.0))
    chain1 = sampler.run(0.5, 300, np.random.default_rng(9))
    chain2 = run(
        0.5,
        standard_normal_log_density,
        GaussianRandomWalk(1.0),
        300,
        np.random.default_rng(9),
    )
    np.testing.assert_array_equal(chain1.states, chain2.states)


class TestInvalidStart:
    def test_zero_density_start(self, rng: np.random.Generator) -> None:
        with pytest.raises(DomainError, match="initial state"):
            run(-1.0, lambda x: np.log(x) if x > 0 else -np.inf, GaussianRandomWalk(1.0), 10, rng)

    def test_nan_density_start(self, rng: np.random.Generator) -> None:
        with pytest.raises(DomainError, match="initial state"):
            run(0.0, lambda x: np.nan, GaussianRandomWalk(1.0), 10, rng)

    def test_pos_inf_density_at_candidate(self, rng: np.random.Generator) -> None:
        """A target that is +inf somewhere is not a density; the run stops with an error."""

        def log_target(x: float) -> float:
            return np.inf if x > 1.0 else -0.5 * x * x

        with pytest.raises(DomainError, match=r"\+inf at proposed state"):
            run(0.0, log_target, GaussianRandomWalk(2.0), 1_000, rng)

    @pytest.mark.parametrize("iterations", [0, -5])
    def test_non_positive_iterations(
        self, iterations: int, rng: np.random.Generator
    ) -> None:
        with pytest.raises(DomainError, match="iterations"):
            run(0.0, standard_normal_log_density, GaussianRandomWalk(1.0), iterations, rng)


class TestAcceptanceRule:
    def test_uphill_always_accepted_without_randomness(
        self, rng: np.random.Generator
    ) -> None:
        state_before = rng.bit_generator.state
        assert _accept(0.0, rng)
        assert _accept(3.0, rng)
        assert rng.bit_generator.state == state_before

    def test_neg_inf_and_nan_rejected(self, rng: np.random.Generator) -> None:
        assert not _accept(-np.inf, rng)
        assert not _accept(np.nan, rng)

    def test_very_negative_ratio_is_rejection(self, rng: np.random.Generator) -> None:
        assert not any(_accept(-1e6, rng) for _ in range(1000))

    def test_downhill_acceptance_probability(self, rng: np.random.Generator) -> None:
        accepted = np.mean([_accept(np.log(0.3), rng) for _ in range(20_000)])
        assert accepted == pytest.approx(0.3, abs=0.015)


def test_time_budget_truncates_chain(rng: np.random.Generator) -> None:
    with pytest.warns(UserWarning, match="Time budget"):
        chain = run(
            0.0,
            standard_normal_log_density,
            GaussianRandomWalk(1.0),
            10_000_000,
            rng,
            max_seconds=0.05,
        )
    assert 0 < len(chain) < 10_000_000
    assert chain.log_densities.shape == (len(chain),)
    assert chain.accepted.shape == (len(chain),)


class TestChain:
    chain = Chain(
        states=np.arange(10.0),
        log_densities=-np.arange(10.0),
        accepted=np.array([True, False] * 5),
    )

    def test_discard(self) -> None:
        trimmed = self.chain.discard(4)
        np.testing.assert_array_equal(trimmed.states, np.arange(4.0, 10.0))
        assert len(trimmed.log_densities) == 6

    def test_thin(self) -> None:
        thinned = self.chain.thin(3)
        np.testing.assert_array_equal(thinned.states, [0.0, 3.0, 6.0, 9.0])
        np.testing.assert_array_equal(thinned.accepted, [True, False, True, False])

    def test_acceptance_rate(self) -> None:
        assert self.chain.acceptance_rate == pytest.approx(0.5)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            self.chain.discard(-1)
        with pytest.raises(ValueError, match="positive"):
            self.chain.thin(0)
