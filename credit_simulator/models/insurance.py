"""
Credit insurance charges.

This module computes the insurance charged on each installment and resolves
the insurer rate rule that applies to a simulation from the insurer's ranges.
"""

from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field

from .money import MONEY_DECIMALS, round_money, to_safe_number
from .terms import InsuranceAccrualMethod, InsuranceRangeMetric, InsuranceRateType


class InsuranceRateRangeRule(BaseModel):
    """A rate rule an insurer applies within a range of a metric."""

    range_metric: InsuranceRangeMetric = Field(..., description="Metric the range bounds")
    value_from: float = Field(..., description="Inclusive lower bound")
    value_to: float = Field(..., description="Inclusive upper bound")
    rate_type: InsuranceRateType = Field(..., description="Percentage or fixed amount")
    rate_value: Optional[Union[float, str]] = Field(
        default=None, description="Percentage for PERCENTAGE rules"
    )
    fixed_amount: Optional[Union[float, str]] = Field(
        default=None, description="Amount for FIXED_AMOUNT rules"
    )


class ResolvedInsuranceFactor(BaseModel):
    """Insurance terms ready to feed a simulation input."""

    insurance_factor: float = 0.0
    insurance_rate_type: Optional[InsuranceRateType] = None
    insurance_rate_percent: float = 0.0
    insurance_fixed_amount: float = 0.0
    insurance_minimum_amount: float = 0.0


def calculate_insurance_charge(
    installment_number: int,
    opening_balance: float,
    principal: float,
    accrual_method: InsuranceAccrualMethod,
    rate_percent: float,
    fixed_amount: float,
    minimum_amount: float,
    decimals: int = MONEY_DECIMALS,
) -> float:
    """
    Calculate the insurance charged on one installment.

    One-time insurance is charged on installment 1 only, over the original
    principal. Per-installment insurance is charged over the opening balance.
    A positive fixed amount replaces the percentage, and a positive minimum
    floors any non-zero charge.

    Args:
        installment_number: Installment number (1-based)
        opening_balance: Balance before the installment
        principal: Original credit amount
        accrual_method: One-time or per-installment accrual
        rate_percent: Insurance rate as a percentage
        fixed_amount: Fixed insurance charge
        minimum_amount: Minimum insurance charge
        decimals: Monetary precision

    Returns:
        Rounded insurance charge
    """
    if accrual_method == InsuranceAccrualMethod.ONE_TIME:
        if installment_number > 1:
            return 0.0
        balance_base = principal
    elif accrual_method == InsuranceAccrualMethod.PER_INSTALLMENT:
        balance_base = opening_balance
    else:
        raise ValueError(f"Unsupported insurance accrual method: {accrual_method}")

    if fixed_amount > 0:
        insurance = fixed_amount
    else:
        insurance = balance_base * (rate_percent / 100)

    if minimum_amount > 0 and insurance > 0:
        insurance = max(insurance, minimum_amount)

    return round_money(insurance, decimals)


def find_insurance_rate_range(
    ranges: Optional[Iterable[InsuranceRateRangeRule]],
    range_metric: InsuranceRangeMetric,
    metric_value: float,
) -> Optional[InsuranceRateRangeRule]:
    """Get the first range on ``range_metric`` whose bounds contain ``metric_value``."""
    for rate_range in ranges or ():
        if (
            rate_range.range_metric == range_metric
            and rate_range.value_from <= metric_value <= rate_range.value_to
        ):
            return rate_range
    return None


def resolve_insurance_factor_from_range(
    rate_range: Optional[InsuranceRateRangeRule],
    minimum_value: Optional[Union[float, str]] = None,
) -> ResolvedInsuranceFactor:
    """
    Turn an insurer rate rule into simulation insurance terms.

    Fixed-amount rules zero the percentage and percentage rules zero the fixed
    amount, so only one of them drives the charge. The insurer's minimum is
    carried through even when no rule applies.
    """
    minimum_amount = to_safe_number(minimum_value)

    if rate_range is None:
        return ResolvedInsuranceFactor(insurance_minimum_amount=minimum_amount)

    if rate_range.rate_type == InsuranceRateType.FIXED_AMOUNT:
        fixed_amount = to_safe_number(rate_range.fixed_amount)
        return ResolvedInsuranceFactor(
            insurance_factor=fixed_amount,
            insurance_rate_type=InsuranceRateType.FIXED_AMOUNT,
            insurance_fixed_amount=fixed_amount,
            insurance_minimum_amount=minimum_amount,
        )

    rate_percent = to_safe_number(rate_range.rate_value)
    return ResolvedInsuranceFactor(
        insurance_factor=rate_percent,
        insurance_rate_type=InsuranceRateType.PERCENTAGE,
        insurance_rate_percent=rate_percent,
        insurance_minimum_amount=minimum_amount,
    )
