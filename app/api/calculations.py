"""
Lease calculation API endpoints.

These endpoints accept lease terms and return the present value of the
lease liability and its amortization schedule. Amounts are returned
unformatted; currency and date display belong to the client.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.calculations.exceptions import LeaseCalculationError
from app.calculations.lease import LeaseContract, LeaseModification, PaymentFrequency
from app.calculations.schedule import (
    build_lease_schedule,
    calculate_lease_present_value,
    calculate_total_interest,
    calculate_total_payments,
    calculate_total_principal,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class LeaseModificationInput(BaseModel):
    """A change to the lease terms from an effective date onwards."""

    effective_date: str = Field(..., description="ISO date (YYYY-MM-DD).")
    payment_amount: Optional[float] = None
    lease_term_years: Optional[int] = None
    interest_rate: Optional[float] = None
    rent_increase_rate: Optional[float] = None


class LeaseInput(BaseModel):
    """Input for lease liability calculation."""

    lease_term_years: int = 5
    payment_amount: float = 10000
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly
    interest_rate: float = Field(6.0, description="Annual rate in percent.")
    start_date: Optional[str] = Field(None, description="ISO date (YYYY-MM-DD).")
    rent_increase_rate: float = Field(0.0, description="Annual increase in percent.")
    modifications: List[LeaseModificationInput] = Field(default_factory=list)

    def to_contract(self) -> LeaseContract:
        return LeaseContract(
            lease_term_years=self.lease_term_years,
            payment_amount=self.payment_amount,
            payment_frequency=self.payment_frequency,
            interest_rate=self.interest_rate,
            start_date=self.start_date,
            rent_increase_rate=self.rent_increase_rate,
            modifications=[
                LeaseModification(**mod.model_dump()) for mod in self.modifications
            ],
        )


class PresentValueResponse(BaseModel):
    """Present value of the lease liability at commencement."""

    present_value: float


class SchedulePeriod(BaseModel):
    """Single row of the lease schedule."""

    period: int
    period_end: Optional[date] = None
    opening_liability: float
    interest_expense: float
    payment: float
    principal: float
    closing_liability: float
    depreciation: float
    closing_asset: float
    modified: bool


class LeaseScheduleResponse(BaseModel):
    """Response with present value, totals and the full schedule."""

    present_value: float
    payments_per_year: int
    total_periods: int
    total_payments: float
    total_interest: float
    total_principal: float
    schedule: List[SchedulePeriod]


@router.post("/lease/present-value", response_model=PresentValueResponse)
async def calculate_present_value_endpoint(inputs: LeaseInput):
    """Calculate the present value of the lease liability."""
    try:
        present_value = calculate_lease_present_value(inputs.to_contract())
    except LeaseCalculationError as e:
        logger.warning(f"Rejected lease present value request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return PresentValueResponse(present_value=present_value)


@router.post("/lease/schedule", response_model=LeaseScheduleResponse)
async def calculate_schedule_endpoint(inputs: LeaseInput):
    """Generate the lease liability and right-of-use asset schedule."""
    logger.info(
        f"Calculating {inputs.lease_term_years} year {inputs.payment_frequency.value} "
        f"lease schedule with {len(inputs.modifications)} modification(s)"
    )
    try:
        result = build_lease_schedule(inputs.to_contract())
    except LeaseCalculationError as e:
        logger.warning(f"Rejected lease schedule request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return LeaseScheduleResponse(
        present_value=result.present_value,
        payments_per_year=result.payments_per_year,
        total_periods=result.total_periods,
        total_payments=calculate_total_payments(result.rows),
        total_interest=calculate_total_interest(result.rows),
        total_principal=calculate_total_principal(result.rows),
        schedule=[SchedulePeriod(**asdict(row)) for row in result.rows],
    )
