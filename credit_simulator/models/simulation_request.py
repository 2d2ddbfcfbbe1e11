"""
Request and response models for the credit simulation service.

A request carries catalog data the caller has already loaded (product terms,
payment frequency rule and insurer ranges); the service narrows it down to a
CreditSimulationInput.
"""

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .credit_simulation import CreditSimulationInstallment, CreditSimulationSummary
from .insurance import InsuranceRateRangeRule
from .payment_capacity import PaymentCapacityAssessment
from .terms import (
    DayCountConvention,
    FinancingType,
    InsuranceAccrualMethod,
    InsuranceRangeMetric,
    InsuranceRateType,
    InterestRateType,
    PaymentScheduleMode,
    SolverStatus,
)


class CreditProductTerms(BaseModel):
    """Terms of the credit product being simulated."""

    model_config = ConfigDict(extra="forbid")

    financing_type: FinancingType
    interest_rate_type: InterestRateType = InterestRateType.EFFECTIVE_ANNUAL
    interest_day_count_convention: DayCountConvention = DayCountConvention.ACTUAL_360
    insurance_accrual_method: InsuranceAccrualMethod = (
        InsuranceAccrualMethod.PER_INSTALLMENT
    )
    pays_insurance: bool = False
    insurance_range_metric: InsuranceRangeMetric = InsuranceRangeMetric.CREDIT_AMOUNT
    max_installments: Optional[int] = Field(default=None, gt=0)


class PaymentFrequencyRule(BaseModel):
    """Payment frequency the borrower picked."""

    model_config = ConfigDict(extra="forbid")

    schedule_mode: PaymentScheduleMode = PaymentScheduleMode.INTERVAL_DAYS
    interval_days: Optional[int] = Field(default=None, ge=0)
    day_of_month: Optional[int] = Field(default=None, ge=1, le=31)
    semi_month_day1: Optional[int] = Field(default=None, ge=1, le=31)
    semi_month_day2: Optional[int] = Field(default=None, ge=1, le=31)
    use_end_of_month_fallback: bool = True


class InsurerTerms(BaseModel):
    """Insurer rate ranges and minimum charge."""

    model_config = ConfigDict(extra="forbid")

    insurance_rate_ranges: List[InsuranceRateRangeRule] = Field(default_factory=list)
    minimum_value: Optional[Union[float, str]] = None


class CreditSimulationRequest(BaseModel):
    """Everything needed to simulate a credit for a borrower."""

    model_config = ConfigDict(extra="forbid")

    product: CreditProductTerms
    payment_frequency: PaymentFrequencyRule
    insurer: Optional[InsurerTerms] = None
    financing_factor: float = Field(
        ..., ge=0, description="Annual rate percent of the product category"
    )
    credit_amount: float = Field(..., gt=0)
    installments: int = Field(..., gt=0)
    first_payment_date: date
    disbursement_date: Optional[date] = None
    income: float = Field(..., ge=0)
    expenses: float = Field(..., ge=0)


class CreditSimulationResponse(BaseModel):
    """Simulation outcome with the borrower's payment capacity check."""

    financing_type: FinancingType
    financing_factor: float
    insurance_factor: float
    insurance_rate_type: Optional[InsuranceRateType] = None
    solver_status: SolverStatus
    capacity: PaymentCapacityAssessment
    summary: CreditSimulationSummary
    installments: List[CreditSimulationInstallment]
