"""
Credit simulation data models.

This module defines the immutable input of a credit simulation and the
installment table and summary the amortization engine produces from it.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .terms import (
    DayCountConvention,
    FinancingType,
    InsuranceAccrualMethod,
    InterestRateType,
    PaymentScheduleMode,
    SolverStatus,
)


class CreditSimulationInput(BaseModel):
    """
    Fully resolved financing parameters for one simulation.

    Catalog lookups (product terms, payment frequency rule and the insurance
    rate picked from an insurer's ranges) happen before this model is built.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    financing_type: FinancingType = Field(..., description="Financing type")
    principal: float = Field(..., gt=0, description="Credit amount")
    annual_rate_percent: float = Field(
        ..., ge=0, description="Rate as a percentage in the product's convention"
    )
    installments: int = Field(..., gt=0, description="Number of installments")
    first_payment_date: date = Field(..., description="Due date of installment 1")
    disbursement_date: date = Field(
        default_factory=date.today, description="Date the credit is disbursed"
    )
    days_interval: int = Field(
        default=30, ge=0, description="Days between due dates in INTERVAL_DAYS mode"
    )
    payment_schedule_mode: PaymentScheduleMode = Field(
        default=PaymentScheduleMode.INTERVAL_DAYS, description="Due date layout"
    )
    day_of_month: Optional[int] = Field(
        default=None, ge=1, le=31, description="Configured monthly anchor day"
    )
    semi_month_day1: Optional[int] = Field(
        default=None, ge=1, le=31, description="First semi-monthly anchor day"
    )
    semi_month_day2: Optional[int] = Field(
        default=None, ge=1, le=31, description="Second semi-monthly anchor day"
    )
    use_end_of_month_fallback: bool = Field(
        default=True, description="Clamp anchor days past month end to the last day"
    )
    interest_rate_type: InterestRateType = Field(
        default=InterestRateType.EFFECTIVE_ANNUAL, description="Rate convention"
    )
    interest_day_count_convention: DayCountConvention = Field(
        default=DayCountConvention.ACTUAL_360, description="Day-count basis"
    )
    insurance_accrual_method: InsuranceAccrualMethod = Field(
        default=InsuranceAccrualMethod.PER_INSTALLMENT,
        description="Insurance charged once or per installment",
    )
    insurance_rate_percent: float = Field(
        default=0.0, ge=0, description="Insurance rate as a percentage of the base"
    )
    insurance_fixed_amount: float = Field(
        default=0.0, ge=0, description="Fixed insurance charge, wins over the rate"
    )
    insurance_minimum_amount: float = Field(
        default=0.0, ge=0, description="Floor applied to a non-zero insurance charge"
    )


class CreditSimulationInstallment(BaseModel):
    """One row of the installment table."""

    model_config = ConfigDict(frozen=True)

    installment_number: int = Field(..., ge=1, description="Installment number (1-based)")
    due_date: date = Field(..., description="Due date")
    days: int = Field(..., ge=0, description="Days since the previous due date")
    opening_balance: float = Field(..., description="Balance before this installment")
    principal: float = Field(..., description="Principal portion")
    interest: float = Field(..., description="Interest portion")
    insurance: float = Field(..., description="Insurance portion")
    payment: float = Field(..., description="principal + interest + insurance")
    closing_balance: float = Field(..., description="Balance after this installment")


class CreditSimulationSummary(BaseModel):
    """Aggregates over the installment table plus the echoed terms."""

    model_config = ConfigDict(frozen=True)

    principal: float
    annual_rate_percent: float
    insurance_rate_percent: float
    installments: int
    days_interval: int
    total_principal: float
    total_interest: float
    total_insurance: float
    total_payment: float
    first_installment_payment: float
    max_installment_payment: float
    min_installment_payment: float


class CreditSimulationResult(BaseModel):
    """Output of a single simulation."""

    model_config = ConfigDict(frozen=True)

    summary: CreditSimulationSummary
    installments: List[CreditSimulationInstallment]
    solver_status: SolverStatus = Field(
        default=SolverStatus.NOT_APPLICABLE,
        description="Whether the level-payment search found an amortizing payment",
    )
    level_payment: float = Field(
        default=0.0, description="Level payment of the schedule, 0 for single installments"
    )
