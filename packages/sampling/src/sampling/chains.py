"""Running several independent Metropolis chains."""

import logging
from multiprocessing import Pool
from warnings import warn

import numpy as np

from .config import MetropolisConfig
from .metropolis import Chain, LogTarget, MetropolisSampler, Proposal
from .priors import PriorFunction

logger = logging.getLogger(__name__)


def run_chains(
    log_target: LogTarget,
    propose: Proposal,
    initial_states: np.ndarray | PriorFunction,
    rng: np.random.Generator,
    config: MetropolisConfig | None = None,
) -> list[Chain]:
    """Run independent Metropolis chains and apply warm-up and thinning.

    Each chain gets its own generator spawned from ``rng``, so chains never
    share a random stream and the whole set is reproducible from one seed.

    Parameters
    ----------
    log_target : Callable
        Unnormalised log-density of the target.
    propose : Callable
        Symmetric proposal ``(state, rng) -> candidate``.
    initial_states : ndarray or PriorFunction
        Starting points, one per chain along the first axis, or a prior to
        draw ``config.n_chains`` starting points from.
    rng : np.random.Generator
        Parent random number generator.
    config : MetropolisConfig, optional
        Run configuration. If None, default configuration is used.

    Returns
    -------
    chains : list of Chain
        One post-warm-up, thinned chain per starting point.

    Raises
    ------
    ValueError
        If the number of starting points does not match ``config.n_chains``.
    """
    if config is None:
        config = MetropolisConfig()

    if hasattr(initial_states, "sample"):
        initial_states = initial_states.sample(config.n_chains, rng)
    initial_states = np.asarray(initial_states)
    if initial_states.ndim == 0 or len(initial_states) != config.n_chains:
        raise ValueError(
            f"Expected {config.n_chains} initial states, one per chain, along the first axis."
        )

    sampler = MetropolisSampler(log_target, propose)
    chain_rngs = rng.spawn(config.n_chains)
    args = [
        (sampler, state, config.iterations, chain_rng, config.max_seconds)
        for state, chain_rng in zip(initial_states, chain_rngs)
    ]

    if config.parallel:
        with Pool() as pool:
            raw_chains = pool.starmap(_run_single, args)
    else:
        raw_chains = [_run_single(*a) for a in args]

    chains = [_trim(chain, config.warmup, config.thin) for chain in raw_chains]
    logger.debug(
        "Ran %d chains; acceptance rates %s",
        len(chains),
        [round(c.acceptance_rate, 3) for c in raw_chains],
    )
    return chains


def _run_single(
    sampler: MetropolisSampler,
    initial_state: np.ndarray,
    iterations: int,
    rng: np.random.Generator,
    max_seconds: float | None,
) -> Chain:
    """Run one chain. Top-level so that it can be sent to worker processes."""
    return sampler.run(initial_state, iterations, rng, max_seconds=max_seconds)


def _trim(chain: Chain, warmup: int, thin: int) -> Chain:
    """Discard warm-up then thin, ignoring settings that would empty the chain."""
    if warmup >= len(chain):
        warn(
            f"Warm-up of {warmup} iterations is not shorter than the chain ({len(chain)}); keeping the full chain.",
            stacklevel=3,
        )
    else:
        chain = chain.discard(warmup)

    if thin >= len(chain) and thin > 1:
        warn(
            f"Thinning step {thin} is not shorter than the retained chain ({len(chain)}); not thinning.",
            stacklevel=3,
        )
        return chain
    return chain.thin(thin)
