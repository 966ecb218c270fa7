"""
Lease Calculation Errors

Every error raised by the engine derives from ``LeaseCalculationError``,
itself a ``ValueError`` so callers can treat bad input uniformly.
"""


class LeaseCalculationError(ValueError):
    """Base class for rejected lease calculation input."""


class InvalidTerm(LeaseCalculationError):
    """Lease term (or number of payments) is not positive."""


class InvalidPaymentAmount(LeaseCalculationError):
    """Payment amount is negative."""


class InvalidRate(LeaseCalculationError):
    """Interest or rent-increase rate is negative."""


class InvalidFrequency(LeaseCalculationError):
    """Payment frequency is not monthly, quarterly or yearly."""


class UnparseableDate(LeaseCalculationError):
    """A start or effective date is not a calendar date."""


class MissingStartDate(LeaseCalculationError):
    """Modifications were supplied for a lease with no start date."""
