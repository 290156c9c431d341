"""
Exceptions raised by volatility term structures.

Construction errors and query errors are kept apart so callers can tell
malformed market data from an out-of-domain lookup.
"""


class TermStructureError(ValueError):
    """Base exception for term structure failures."""


class InvalidInputError(TermStructureError):
    """Market data supplied at construction is malformed."""


class DomainError(TermStructureError):
    """Query time lies outside the domain of the term structure."""


class ExtrapolationError(DomainError):
    """Query time lies outside the node range and extrapolation was not allowed."""


__all__ = [
    "TermStructureError",
    "InvalidInputError",
    "DomainError",
    "ExtrapolationError",
]
