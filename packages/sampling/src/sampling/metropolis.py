"""Random-walk Metropolis sampling from an unnormalised log-density."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias
from warnings import warn

import numpy as np

from .errors import DomainError

logger = logging.getLogger(__name__)

LogTarget: TypeAlias = Callable[[Any], float]
Proposal: TypeAlias = Callable[[Any, np.random.Generator], Any]


@dataclass(frozen=True)
class Chain:
    """The recorded history of one Metropolis run.

    Entry ``i`` of every array describes the chain after iteration ``i``.
    A rejected proposal repeats the previous state; the repeats are part of
    the sample and must be kept.

    Parameters
    ----------
    states : ndarray, shape (iterations,) or (iterations, ndim)
        Chain positions in iteration order.
    log_densities : ndarray, shape (iterations,)
        Unnormalised log-target at each recorded state.
    accepted : ndarray of bool, shape (iterations,)
        Whether the proposal made in each iteration was accepted.
    """

    states: np.ndarray
    log_densities: np.ndarray
    accepted: np.ndarray

    def __len__(self) -> int:
        return len(self.states)

    @property
    def acceptance_rate(self) -> float:
        """Fraction of accepted proposals."""
        if len(self) == 0:
            return float("nan")
        return float(np.mean(self.accepted))

    def discard(self, warmup: int) -> "Chain":
        """Drop the first ``warmup`` iterations."""
        if warmup < 0:
            raise ValueError("Warm-up length must be non-negative.")
        return Chain(
            self.states[warmup:], self.log_densities[warmup:], self.accepted[warmup:]
        )

    def thin(self, step: int) -> "Chain":
        """Keep every ``step``-th iteration, starting with the first."""
        if step < 1:
            raise ValueError("Thinning step must be a positive integer.")
        return Chain(
            self.states[::step], self.log_densities[::step], self.accepted[::step]
        )


class MetropolisSampler:
    """
    Metropolis sampler for a fixed target and proposal.

    The sampler itself is stateless between runs: every call to :meth:`run`
    starts a fresh chain with its own generator, so one sampler can drive any
    number of independent chains.

    Parameters
    ----------
    log_target : Callable
        Unnormalised log-density of the target. May return ``-inf``.
    propose : Callable
        Symmetric proposal ``(state, rng) -> candidate``. Responsible for any
        boundary handling (wraparound, reflection) of the state space.
    """

    def __init__(self, log_target: LogTarget, propose: Proposal) -> None:
        self.log_target = log_target
        self.propose = propose

    def run(
        self,
        initial_state: Any,
        iterations: int,
        rng: np.random.Generator,
        max_seconds: float | None = None,
    ) -> Chain:
        """Run one chain. See :func:`run`."""
        return run(
            initial_state,
            self.log_target,
            self.propose,
            iterations,
            rng,
            max_seconds=max_seconds,
        )


def run(
    initial_state: Any,
    log_target: LogTarget,
    propose: Proposal,
    iterations: int,
    rng: np.random.Generator,
    max_seconds: float | None = None,
) -> Chain:
    """Run a Metropolis chain.

    Each iteration proposes ``candidate = propose(current, rng)`` and accepts it
    with probability ``min(1, exp(log_target(candidate) - log_target(current)))``.
    The log-target of the current state is cached, so the target is evaluated
    once per iteration.

    Parameters
    ----------
    initial_state : Any
        Starting point. Scalars, integers and arrays are all valid states.
    log_target : Callable
        Unnormalised log-density of the target.
    propose : Callable
        Symmetric proposal ``(state, rng) -> candidate``.
    iterations : int
        Number of iterations, i.e. length of the returned chain.
    rng : np.random.Generator
        Random number generator owned by this chain for the whole run.
    max_seconds : float, optional
        Wall-clock budget checked between iterations. When it runs out the
        chain is returned early with the iterations completed so far.

    Returns
    -------
    chain : Chain
        States, log-densities and acceptance flags, one entry per iteration.

    Raises
    ------
    DomainError
        If ``iterations`` is not positive, the log-target at the initial
        state is not finite, or the log-target at a proposed state is
        ``+inf``. Candidates with a log-target of ``-inf`` or NaN are
        rejected rather than raising.
    """
    if iterations < 1:
        raise DomainError(f"Number of iterations must be positive, got {iterations}.")

    current = initial_state
    current_log = float(log_target(current))
    if not np.isfinite(current_log):
        raise DomainError(
            f"Log-target at the initial state is {current_log}; a chain must start where the target has positive, finite density."
        )

    states = []
    log_densities = np.empty(iterations)
    accepted = np.zeros(iterations, dtype=bool)

    deadline = None if max_seconds is None else time.perf_counter() + max_seconds
    for i in range(iterations):
        if deadline is not None and time.perf_counter() > deadline:
            warn(
                f"Time budget of {max_seconds}s exhausted after {i} of {iterations} iterations; returning a truncated chain.",
                stacklevel=2,
            )
            log_densities = log_densities[:i]
            accepted = accepted[:i]
            break

        candidate = propose(current, rng)
        candidate_log = float(log_target(candidate))
        if np.isposinf(candidate_log):
            raise DomainError(
                f"Log-target is +inf at proposed state {candidate!r}; the target is not a proper density."
            )

        if _accept(candidate_log - current_log, rng):
            current = candidate
            current_log = candidate_log
            accepted[i] = True

        states.append(current)
        log_densities[i] = current_log

    chain = Chain(np.asarray(states), log_densities, accepted)
    logger.debug(
        "Metropolis run finished: %d iterations, acceptance rate %.3f",
        len(chain),
        chain.acceptance_rate,
    )
    return chain


def _accept(log_ratio: float, rng: np.random.Generator) -> bool:
    """Metropolis accept/reject decision.

    A NaN ratio (e.g. a NaN candidate density) compares false and is rejected,
    as is a ratio of ``-inf``. Very negative ratios need no special handling:
    ``log(u)`` is never below ``-inf``, so underflow is simply rejection.
    """
    if log_ratio >= 0:
        return True
    if np.isnan(log_ratio):
        return False
    with np.errstate(divide="ignore"):
        return bool(np.log(rng.random()) < log_ratio)
