"""Grid approximation of one-dimensional posteriors."""

from .grid import Grid, PosteriorMass, evaluate

__all__ = ["Grid", "PosteriorMass", "evaluate"]
