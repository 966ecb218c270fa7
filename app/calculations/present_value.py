"""
Present Value Calculations

Ordinary annuity present value, matching Excel's PV() for payments made
at the end of each period (sign flipped to return a positive liability).
"""

import math

from app.calculations.exceptions import InvalidRate, InvalidTerm


def calculate_present_value(
    payment: float, rate_per_period: float, number_of_payments: int
) -> float:
    """
    Calculate the present value of an ordinary annuity.

    Args:
        payment: Payment made at the end of each period
        rate_per_period: Discount rate per period as decimal (e.g., 0.01 for 1%)
        number_of_payments: Number of remaining payments

    Returns:
        Present value of the payment stream

    Raises:
        InvalidRate: If the rate is negative or not finite
        InvalidTerm: If the number of payments is negative
    """
    if not math.isfinite(rate_per_period) or rate_per_period < 0:
        raise InvalidRate(
            f"Rate per period must be a finite non-negative number, got {rate_per_period}"
        )
    if number_of_payments < 0:
        raise InvalidTerm(
            f"Number of payments must not be negative, got {number_of_payments}"
        )
    if number_of_payments == 0:
        return 0.0

    # No discounting: the formula below would divide by zero
    if rate_per_period == 0:
        return payment * number_of_payments

    # 1 - (1 + r)^-n, computed without cancellation for very small rates
    discount = -math.expm1(-number_of_payments * math.log1p(rate_per_period))
    return payment * discount / rate_per_period
