"""Configuration of Metropolis runs."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class MetropolisConfig:
    """Configuration of a set of independent Metropolis chains.

    Parameters
    ----------
    iterations : int
        Iterations per chain, warm-up included.
    warmup : int
        Iterations discarded from the start of each chain.
    thin : int
        Keep every ``thin``-th iteration after warm-up.
    n_chains : int
        Number of independent chains.
    parallel : bool
        Run chains in a process pool. The target and proposal must then be
        picklable (module-level functions or plain class instances).
    max_seconds : float or None
        Wall-clock budget per chain. None means no limit.

    Examples
    --------
    From a YAML file:

    .. code-block:: yaml

        iterations: 20000
        warmup: 1000
        thin: 2
        n_chains: 4

    >>> config = load_config("metropolis.yaml")
    """

    iterations: int = 10000
    warmup: int = 1000
    thin: int = 1
    n_chains: int = 4
    parallel: bool = False
    max_seconds: float | None = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if self.iterations < 1:
            raise ValueError("iterations must be a positive integer.")
        if self.warmup < 0:
            raise ValueError("warmup must be non-negative.")
        if self.thin < 1:
            raise ValueError("thin must be a positive integer.")
        if self.n_chains < 1:
            raise ValueError("n_chains must be a positive integer.")
        if self.max_seconds is not None and self.max_seconds <= 0:
            raise ValueError("max_seconds must be positive.")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> MetropolisConfig:
        """Build configuration from a dictionary (e.g., loaded from YAML).

        Unknown keys are silently ignored.
        """
        known_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known_fields})


def load_config(path: str | Path) -> MetropolisConfig:
    """Load a :class:`MetropolisConfig` from a YAML file.

    An empty file gives the default configuration.
    """
    with open(path) as f:
        config_dict = yaml.safe_load(f) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(config_dict).__name__}.")
    return MetropolisConfig.from_dict(config_dict)
