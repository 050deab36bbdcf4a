"""Exceptions raised by timespan."""


class InvalidArgumentError(ValueError):
    """An operation received an input it cannot accept.

    Raised for negative or non-finite magnitudes, non-positive multiply
    factors, and missing or non-Duration operands.
    """


class InvalidOperationError(RuntimeError):
    """The operation is undefined for this duration, e.g. converting forever."""
