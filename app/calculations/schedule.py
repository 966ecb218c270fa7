"""
Lease Liability Schedule

Generates the period-by-period lease liability and right-of-use asset
schedule: interest/principal split, straight-line depreciation, annual
rent escalation and remeasurement on lease modifications.
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from app.calculations.lease import (
    MONTHS_PER_PERIOD,
    LeaseContract,
    LeaseSchedule,
    ScheduleRow,
    prepare_contract,
)
from app.calculations.modifications import RunningState, apply_if_due
from app.calculations.present_value import calculate_present_value


def _initial_present_value(contract: LeaseContract) -> float:
    return calculate_present_value(
        contract.payment_amount,
        contract.interest_rate / 100 / contract.payments_per_year,
        contract.total_periods,
    )


def calculate_lease_present_value(contract: LeaseContract) -> float:
    """
    Calculate the present value of the lease liability at commencement.

    Uses the original contract terms only; modifications and rent
    escalation affect the schedule, not this headline value.
    """
    return _initial_present_value(prepare_contract(contract))


def _period_bounds(
    start_date: Optional[date], months_per_period: int, period: int
) -> Tuple[Optional[date], Optional[date]]:
    """Return (period start, period end) for a 1-based period, or (None, None)."""
    if start_date is None:
        return None, None
    period_start = start_date + relativedelta(months=(period - 1) * months_per_period)
    next_start = start_date + relativedelta(months=period * months_per_period)
    return period_start, next_start - timedelta(days=1)


def _generate_rows(contract: LeaseContract, present_value: float) -> List[ScheduleRow]:
    payments_per_year = contract.payments_per_year
    total_periods = contract.total_periods
    months_per_period = MONTHS_PER_PERIOD[contract.payment_frequency]
    modifications = contract.modifications

    state = RunningState(
        payment=contract.payment_amount,
        interest_rate=contract.interest_rate,
        rent_increase_rate=contract.rent_increase_rate,
        remaining_periods=total_periods,
        liability=present_value,
        asset=present_value,
        depreciation_per_period=present_value / total_periods,
        escalation_anchor=1,
    )
    cursor = 0
    rows: List[ScheduleRow] = []

    for period in range(1, total_periods + 1):
        period_start, period_end = _period_bounds(
            contract.start_date, months_per_period, period
        )

        modified = False
        if period_start is not None:
            state, modified = apply_if_due(
                modifications,
                cursor,
                period_start,
                period,
                state,
                payments_per_year,
                total_periods,
            )
            if modified:
                cursor += 1

        # Rent escalation on each anniversary of the anchor period
        payment = state.payment
        periods_since_anchor = period - state.escalation_anchor
        if (
            state.rent_increase_rate > 0
            and periods_since_anchor > 0
            and periods_since_anchor % payments_per_year == 0
        ):
            payment = payment * (1 + state.rent_increase_rate / 100)

        opening_liability = state.liability
        rate_per_period = state.interest_rate / 100 / payments_per_year
        interest = max(opening_liability, 0.0) * rate_per_period
        principal = payment - interest
        ending_liability = opening_liability - principal

        # Nothing left to depreciate once the remeasured term has run out
        if state.remaining_periods > 0:
            depreciation = state.depreciation_per_period
        else:
            depreciation = 0.0
        closing_asset = max(0.0, state.asset - depreciation)

        rows.append(
            ScheduleRow(
                period=period,
                period_end=period_end,
                opening_liability=opening_liability,
                interest_expense=interest,
                payment=payment,
                principal=principal,
                closing_liability=max(0.0, ending_liability),
                depreciation=depreciation,
                closing_asset=closing_asset,
                modified=modified,
            )
        )

        # Carry the unclamped balance forward for numerical continuity
        state = RunningState(
            payment=payment,
            interest_rate=state.interest_rate,
            rent_increase_rate=state.rent_increase_rate,
            remaining_periods=max(0, state.remaining_periods - 1),
            liability=ending_liability,
            asset=closing_asset,
            depreciation_per_period=state.depreciation_per_period,
            escalation_anchor=state.escalation_anchor,
        )

    return rows


def generate_lease_schedule(contract: LeaseContract) -> List[ScheduleRow]:
    """
    Generate the lease amortization schedule.

    Args:
        contract: Lease terms, optionally with modifications

    Returns:
        One row per period; the row count is lease term x payments per year

    Raises:
        LeaseCalculationError: If the contract is invalid
    """
    prepared = prepare_contract(contract)
    return _generate_rows(prepared, _initial_present_value(prepared))


def build_lease_schedule(contract: LeaseContract) -> LeaseSchedule:
    """Calculate the headline present value and the schedule together."""
    prepared = prepare_contract(contract)
    present_value = _initial_present_value(prepared)
    return LeaseSchedule(
        present_value=present_value,
        payments_per_year=prepared.payments_per_year,
        total_periods=prepared.total_periods,
        rows=tuple(_generate_rows(prepared, present_value)),
    )


def calculate_total_interest(schedule: Sequence[ScheduleRow]) -> float:
    """Calculate total interest expense over the lease term."""
    return sum(row.interest_expense for row in schedule)


def calculate_total_payments(schedule: Sequence[ScheduleRow]) -> float:
    """Calculate total lease payments over the lease term."""
    return sum(row.payment for row in schedule)


def calculate_total_principal(schedule: Sequence[ScheduleRow]) -> float:
    """Calculate total liability reduction over the lease term."""
    return sum(row.principal for row in schedule)
