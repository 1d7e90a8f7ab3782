"""Exceptions raised by the inference kernel."""


class DomainError(ValueError):
    """Raised when an input is invalid or describes a degenerate distribution.

    Examples are an empty grid, all-zero sampling weights, an interval mass
    outside ``(0, 1)`` or a chain started at a zero-probability state.
    """
