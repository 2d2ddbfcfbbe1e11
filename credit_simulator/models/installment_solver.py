"""
Level payments for credit schedules.

On-balance credits get their level payment from the annuity closed form over
the per-period rates. The constant installment of a fixed-amount credit has no
closed form once periods differ in length and insurance varies per
installment, so it is found numerically: an upper bound is grown geometrically
until it over-amortizes, then a fixed number of bisection steps narrows it
down. The work done is the same for every input of a given length.
"""

import logging
import math
from typing import List, Sequence

from pydantic import BaseModel, Field

from .money import MONEY_DECIMALS, round_money
from .terms import FinancingType, InsuranceAccrualMethod
from .insurance import calculate_insurance_charge

logger = logging.getLogger(__name__)

BISECTION_ITERATIONS = 80
EXPANSION_FACTOR = 1.5
EXPANSION_CAP_MULTIPLIER = 10


class SolverOutcome(BaseModel):
    """Result of a level-payment search."""

    payment: float = Field(..., description="Level payment, rounded to money precision")
    converged: bool = Field(
        ..., description="Whether an over-amortizing upper bound was found"
    )
    expansion_steps: int = Field(..., ge=0, description="Upper bound growth steps")
    bisection_steps: int = Field(..., ge=0, description="Bisection steps performed")


def calculate_installment_interest(
    financing_type: FinancingType,
    principal: float,
    opening_balance: float,
    period_rate: float,
    decimals: int = MONEY_DECIMALS,
) -> float:
    """
    Calculate the interest portion of an installment.

    Fixed-amount credits charge flat interest on the original principal,
    on-balance credits charge it on the opening balance.
    """
    if financing_type == FinancingType.FIXED_AMOUNT:
        return round_money(principal * period_rate, decimals)
    if financing_type == FinancingType.ON_BALANCE:
        return round_money(opening_balance * period_rate, decimals)
    raise ValueError(f"Unsupported financing type: {financing_type}")


def calculate_annuity_payment(
    principal: float,
    period_rates: Sequence[float],
    insurance_accrual_method: InsuranceAccrualMethod = InsuranceAccrualMethod.PER_INSTALLMENT,
    insurance_rate_percent: float = 0.0,
    insurance_fixed_amount: float = 0.0,
    decimals: int = MONEY_DECIMALS,
) -> float:
    """
    Calculate the level payment of a credit charged on its declining balance.

    The payment is ``principal / sum(prod(1 / (1 + r_j)))`` over the period
    rates, which reduces to the usual annuity formula when every period has
    the same rate and to an even split when every rate is zero. Per-installment
    percentage insurance is charged on the same balance, so it is added to each
    period rate; a per-installment fixed charge is added to the payment.
    One-time insurance and insurance minimums are not level and are left to
    the final installment.

    Args:
        principal: Original credit amount
        period_rates: Period rate of each installment, one per installment
        insurance_accrual_method: Insurance accrual method
        insurance_rate_percent: Insurance rate as a percentage
        insurance_fixed_amount: Fixed insurance charge
        decimals: Monetary precision

    Returns:
        Rounded level payment
    """
    balance_rate = 0.0
    fixed_charge = 0.0
    if insurance_accrual_method == InsuranceAccrualMethod.PER_INSTALLMENT:
        if insurance_fixed_amount > 0:
            fixed_charge = insurance_fixed_amount
        else:
            balance_rate = insurance_rate_percent / 100

    discount = 1.0
    annuity_factor = 0.0
    for period_rate in period_rates:
        discount /= 1 + period_rate + balance_rate
        annuity_factor += discount

    if annuity_factor <= 0:
        return round_money(principal, decimals)
    return round_money(principal / annuity_factor + fixed_charge, decimals)


def simulate_remaining_balance(
    payment_amount: float,
    financing_type: FinancingType,
    principal: float,
    period_rates: Sequence[float],
    insurance_accrual_method: InsuranceAccrualMethod,
    insurance_rate_percent: float = 0.0,
    insurance_fixed_amount: float = 0.0,
    insurance_minimum_amount: float = 0.0,
    decimals: int = MONEY_DECIMALS,
) -> float:
    """
    Run the schedule with a constant payment and return the balance left over.

    Each installment applies ``payment - interest - insurance`` to principal,
    capped at the opening balance. A payment that leaves no room for principal
    on some installment can never amortize, which is reported as ``inf``.

    Args:
        payment_amount: Candidate constant payment
        financing_type: Financing type, selects the interest base
        principal: Original credit amount
        period_rates: Period rate of each installment, one per installment
        insurance_accrual_method: Insurance accrual method
        insurance_rate_percent: Insurance rate as a percentage
        insurance_fixed_amount: Fixed insurance charge
        insurance_minimum_amount: Minimum insurance charge
        decimals: Monetary precision

    Returns:
        Remaining balance after the last installment, ``inf`` if unreachable
    """
    remaining = round_money(principal, decimals)

    for index, period_rate in enumerate(period_rates, start=1):
        opening_balance = remaining
        interest = calculate_installment_interest(
            financing_type, principal, opening_balance, period_rate, decimals
        )
        insurance = calculate_insurance_charge(
            installment_number=index,
            opening_balance=opening_balance,
            principal=principal,
            accrual_method=insurance_accrual_method,
            rate_percent=insurance_rate_percent,
            fixed_amount=insurance_fixed_amount,
            minimum_amount=insurance_minimum_amount,
            decimals=decimals,
        )

        principal_payment = round_money(payment_amount - interest - insurance, decimals)
        if principal_payment <= 0:
            return math.inf
        if principal_payment > opening_balance:
            principal_payment = round_money(opening_balance, decimals)

        remaining = round_money(opening_balance - principal_payment, decimals)

    return remaining


def find_fixed_payment_amount(
    financing_type: FinancingType,
    principal: float,
    period_rates: List[float],
    insurance_accrual_method: InsuranceAccrualMethod,
    insurance_rate_percent: float = 0.0,
    insurance_fixed_amount: float = 0.0,
    insurance_minimum_amount: float = 0.0,
    decimals: int = MONEY_DECIMALS,
) -> SolverOutcome:
    """
    Find the smallest constant payment that fully amortizes the credit.

    The upper bound starts at an even principal split and grows by half until
    the schedule closes at or below zero or the bound reaches ten times the
    principal. Bisection then always runs its full iteration count. When no
    amortizing bound exists under the cap the search still returns a payment,
    flagged as not converged, and that payment leaves a balance which the
    final installment has to absorb.

    Returns:
        SolverOutcome with the rounded payment and convergence flag
    """

    def remaining_for(payment_amount: float) -> float:
        return simulate_remaining_balance(
            payment_amount,
            financing_type,
            principal,
            period_rates,
            insurance_accrual_method,
            insurance_rate_percent,
            insurance_fixed_amount,
            insurance_minimum_amount,
            decimals,
        )

    installments = max(len(period_rates), 1)
    low = 0.0
    high = round_money(max(1.0, principal / installments), decimals)
    cap = principal * EXPANSION_CAP_MULTIPLIER

    converged = False
    expansion_steps = 0
    while high < cap:
        remaining = remaining_for(high)
        if math.isfinite(remaining) and remaining <= 0:
            converged = True
            break
        high = round_money(high * EXPANSION_FACTOR, decimals)
        expansion_steps += 1

    if not converged:
        # the bound that crossed the cap was never tried
        remaining = remaining_for(high)
        converged = math.isfinite(remaining) and remaining <= 0

    for _ in range(BISECTION_ITERATIONS):
        mid = (low + high) / 2
        remaining = remaining_for(mid)
        if not math.isfinite(remaining) or remaining > 0:
            low = mid
        else:
            high = mid

    payment = round_money(high, decimals)
    logger.debug(
        f"Level payment search: payment={payment} converged={converged} "
        f"expansion_steps={expansion_steps}"
    )
    if not converged:
        logger.warning(
            f"Level payment search did not find an amortizing payment below {cap}; "
            f"returning {payment}"
        )

    return SolverOutcome(
        payment=payment,
        converged=converged,
        expansion_steps=expansion_steps,
        bisection_steps=BISECTION_ITERATIONS,
    )
