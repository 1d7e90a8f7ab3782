"""Prior definitions."""

from ._protocols import PriorFunction
from .beta import BetaPrior
from .gaussian import GaussianPrior
from .uniform import UniformPrior

__all__ = [
    "BetaPrior",
    "GaussianPrior",
    "PriorFunction",
    "UniformPrior",
]
