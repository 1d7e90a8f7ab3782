"""Percentile and highest-density intervals."""

from .estimate import (
    Interval,
    grid_highest_density_interval,
    grid_highest_density_regions,
    grid_percentile_interval,
    highest_density_interval,
    percentile_interval,
)

__all__ = [
    "Interval",
    "grid_highest_density_interval",
    "grid_highest_density_regions",
    "grid_percentile_interval",
    "highest_density_interval",
    "percentile_interval",
]
