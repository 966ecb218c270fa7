"""
Lease Modification Remeasurement

Applies mid-term lease modifications to the running schedule state,
remeasuring the liability and right-of-use asset at the modification point.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Sequence, Tuple

from app.calculations.lease import LeaseModification
from app.calculations.present_value import calculate_present_value


@dataclass(frozen=True)
class RunningState:
    """Values carried from one schedule period to the next."""

    payment: float
    interest_rate: float  # Annual percent
    rent_increase_rate: float  # Annual percent
    remaining_periods: int
    liability: float
    asset: float
    depreciation_per_period: float
    escalation_anchor: int  # Period from which anniversaries are counted


def apply_if_due(
    modifications: Sequence[LeaseModification],
    cursor: int,
    period_start: date,
    period: int,
    state: RunningState,
    payments_per_year: int,
    total_periods: int,
) -> Tuple[RunningState, bool]:
    """
    Apply the modification at ``cursor`` if it takes effect by ``period_start``.

    Only one modification is applied per call, so several modifications
    sharing an effective date are applied in consecutive periods.

    Args:
        modifications: Modifications sorted by effective date
        cursor: Index of the next unapplied modification
        period_start: First day of the current period
        period: Current period number (1-based)
        state: Running state before this period
        payments_per_year: Payment periods per year
        total_periods: Number of periods in the schedule

    Returns:
        Tuple of (new running state, whether the cursor advanced)
    """
    if cursor >= len(modifications):
        return state, False

    mod = modifications[cursor]
    if mod.effective_date > period_start:
        return state, False

    payment = mod.payment_amount if mod.payment_amount is not None else state.payment
    interest_rate = (
        mod.interest_rate if mod.interest_rate is not None else state.interest_rate
    )
    rent_increase_rate = (
        mod.rent_increase_rate
        if mod.rent_increase_rate is not None
        else state.rent_increase_rate
    )

    if mod.lease_term_years is not None:
        remaining_periods = mod.lease_term_years * payments_per_year
    else:
        # Current period included: its payment is still to be made
        remaining_periods = total_periods - period + 1

    liability = calculate_present_value(
        payment, interest_rate / 100 / payments_per_year, remaining_periods
    )
    depreciation = liability / remaining_periods if remaining_periods > 0 else 0.0

    new_state = replace(
        state,
        payment=payment,
        interest_rate=interest_rate,
        rent_increase_rate=rent_increase_rate,
        remaining_periods=remaining_periods,
        liability=liability,
        asset=liability,
        depreciation_per_period=depreciation,
        escalation_anchor=period,
    )
    return new_state, True
