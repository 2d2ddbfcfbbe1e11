"""Borrower payment capacity checks for simulated credits."""

from typing import Optional

from pydantic import BaseModel, Field

from .money import MONEY_DECIMALS, round_money


class PaymentCapacityAssessment(BaseModel):
    """How the largest installment compares to what the borrower can pay."""

    payment_capacity: float = Field(..., ge=0, description="Income left after expenses")
    max_installment_payment: float = Field(..., description="Largest installment")
    is_within_capacity: bool = Field(..., description="Largest installment is payable")
    capacity_gap: float = Field(..., description="Capacity minus largest installment")
    warning_message: Optional[str] = Field(default=None)


def calculate_payment_capacity(
    income: float, expenses: float, decimals: int = MONEY_DECIMALS
) -> float:
    """Get the amount a borrower can devote to installments, never negative."""
    return round_money(max(0.0, income - expenses), decimals)


def assess_payment_capacity(
    income: float,
    expenses: float,
    max_installment_payment: float,
    decimals: int = MONEY_DECIMALS,
) -> PaymentCapacityAssessment:
    """
    Compare the largest installment of a simulation with the borrower's capacity.

    Args:
        income: Borrower income per installment period
        expenses: Borrower expenses per installment period
        max_installment_payment: Largest payment of the simulated schedule
        decimals: Monetary precision

    Returns:
        PaymentCapacityAssessment with a warning when the installment is too large
    """
    capacity = calculate_payment_capacity(income, expenses, decimals)
    is_within_capacity = max_installment_payment <= capacity

    warning_message = None
    if not is_within_capacity:
        warning_message = (
            f"Maximum installment ({max_installment_payment:.{decimals}f}) exceeds "
            f"payment capacity ({capacity:.{decimals}f})."
        )

    return PaymentCapacityAssessment(
        payment_capacity=capacity,
        max_installment_payment=max_installment_payment,
        is_within_capacity=is_within_capacity,
        capacity_gap=round_money(capacity - max_installment_payment, decimals),
        warning_message=warning_message,
    )
