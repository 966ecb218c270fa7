"""
Lease Contract Data Model

Inputs and outputs of the lease liability engine, plus the validation
that turns caller-supplied contracts into a normalised snapshot.
"""

import enum
import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional, Sequence, Tuple, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from app.calculations.exceptions import (
    InvalidFrequency,
    InvalidPaymentAmount,
    InvalidRate,
    InvalidTerm,
    MissingStartDate,
    UnparseableDate,
)

DateInput = Union[date, str, None]


class PaymentFrequency(str, enum.Enum):
    """Payment frequency enumeration."""

    monthly = "monthly"
    quarterly = "quarterly"
    yearly = "yearly"


PAYMENTS_PER_YEAR = {
    PaymentFrequency.monthly: 12,
    PaymentFrequency.quarterly: 4,
    PaymentFrequency.yearly: 1,
}

MONTHS_PER_PERIOD = {
    frequency: 12 // count for frequency, count in PAYMENTS_PER_YEAR.items()
}


@dataclass
class LeaseModification:
    """A remeasurement event. ``None`` fields keep the value in effect."""

    effective_date: DateInput
    payment_amount: Optional[float] = None
    lease_term_years: Optional[int] = None
    interest_rate: Optional[float] = None  # Annual percent (e.g., 6 for 6%)
    rent_increase_rate: Optional[float] = None  # Annual percent


@dataclass
class LeaseContract:
    """Lease terms as entered by the user."""

    lease_term_years: int
    payment_amount: float  # Per period
    payment_frequency: Union[PaymentFrequency, str]
    interest_rate: float  # Annual percent (e.g., 6 for 6%)
    start_date: DateInput = None
    rent_increase_rate: float = 0.0  # Annual percent, applied each anniversary
    modifications: Sequence[LeaseModification] = field(default_factory=list)

    @property
    def payments_per_year(self) -> int:
        return PAYMENTS_PER_YEAR[parse_frequency(self.payment_frequency)]

    @property
    def total_periods(self) -> int:
        return self.lease_term_years * self.payments_per_year


@dataclass(frozen=True)
class ScheduleRow:
    """Single period of the lease amortization schedule."""

    period: int
    period_end: Optional[date]
    opening_liability: float
    interest_expense: float
    payment: float
    principal: float
    closing_liability: float
    depreciation: float
    closing_asset: float
    modified: bool = False


@dataclass(frozen=True)
class LeaseSchedule:
    """Headline present value together with the amortization rows."""

    present_value: float
    payments_per_year: int
    total_periods: int
    rows: Tuple[ScheduleRow, ...]


def parse_frequency(value: Union[PaymentFrequency, str]) -> PaymentFrequency:
    """Coerce a frequency name into ``PaymentFrequency``."""
    try:
        return PaymentFrequency(value)
    except ValueError:
        raise InvalidFrequency(
            f"Payment frequency must be monthly, quarterly or yearly, got {value!r}"
        ) from None


def parse_date(value: DateInput, field_name: str = "date") -> Optional[date]:
    """
    Parse a calendar date.

    Accepts ``date`` objects or ISO-8601 strings (``YYYY-MM-DD``). Empty
    strings and ``None`` mean "no date".

    Raises:
        UnparseableDate: If the value is not a calendar date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise UnparseableDate(f"{field_name} must be a date, got {value!r}")
    try:
        return isoparse(value.strip()).date()
    except ValueError:
        raise UnparseableDate(f"{field_name} is not a valid date: {value!r}") from None


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _check_rate(value: float, name: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidRate(f"{name} must be a finite non-negative number, got {value}")


def _check_payment(value: float, name: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidPaymentAmount(
            f"{name} must be a finite non-negative number, got {value}"
        )


def _check_calendar_range(start_date: date, lease_term_years: int) -> None:
    try:
        start_date + relativedelta(years=lease_term_years)
    except (ValueError, OverflowError):
        raise InvalidTerm(
            f"Lease term of {lease_term_years} years from {start_date} "
            "ends past the last supported calendar date"
        ) from None


def _prepare_modification(mod: LeaseModification) -> LeaseModification:
    effective_date = parse_date(mod.effective_date, "effective_date")
    if effective_date is None:
        raise UnparseableDate("Modification effective_date is required")
    if mod.payment_amount is not None:
        _check_payment(mod.payment_amount, "Modified payment amount")
    if mod.lease_term_years is not None and not _is_positive_int(mod.lease_term_years):
        raise InvalidTerm(
            f"Modified lease term must be positive, got {mod.lease_term_years}"
        )
    if mod.interest_rate is not None:
        _check_rate(mod.interest_rate, "Modified interest rate")
    if mod.rent_increase_rate is not None:
        _check_rate(mod.rent_increase_rate, "Modified rent increase rate")
    return replace(mod, effective_date=effective_date)


def prepare_contract(contract: LeaseContract) -> LeaseContract:
    """
    Validate a contract and return a normalised copy.

    The copy has a ``PaymentFrequency`` member, parsed dates, and its
    modifications as a tuple stably sorted by effective date. The caller's
    contract and modification list are left untouched.

    Raises:
        LeaseCalculationError: If any field is invalid
    """
    if not _is_positive_int(contract.lease_term_years):
        raise InvalidTerm(
            f"Lease term must be a positive number of years, got {contract.lease_term_years}"
        )
    _check_payment(contract.payment_amount, "Payment amount")
    _check_rate(contract.interest_rate, "Interest rate")
    _check_rate(contract.rent_increase_rate, "Rent increase rate")

    frequency = parse_frequency(contract.payment_frequency)
    start_date = parse_date(contract.start_date, "start_date")
    if start_date is not None:
        _check_calendar_range(start_date, contract.lease_term_years)

    modifications = [_prepare_modification(mod) for mod in contract.modifications]
    if modifications and start_date is None:
        raise MissingStartDate("Lease modifications require a lease start date")

    return replace(
        contract,
        payment_frequency=frequency,
        start_date=start_date,
        modifications=tuple(sorted(modifications, key=lambda mod: mod.effective_date)),
    )
