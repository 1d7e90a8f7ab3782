"""Sampling from unnormalised log-densities."""

from .errors import DomainError
from .metropolis import Chain, MetropolisSampler, run
from .posterior import Posterior
from .weighted import draw

__all__ = [
    "Chain",
    "DomainError",
    "MetropolisSampler",
    "Posterior",
    "draw",
    "run",
]
