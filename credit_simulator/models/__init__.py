"""Domain models and calculations for credit simulations."""

from .amortization_engine import AmortizationEngine, calculate_credit_simulation
from .credit_simulation import (
    CreditSimulationInput,
    CreditSimulationInstallment,
    CreditSimulationResult,
    CreditSimulationSummary,
)
from .date_schedule import (
    build_due_dates,
    calculate_period_days,
    next_semi_monthly_date,
    resolve_payment_frequency_interval_days,
)
from .installment_solver import (
    SolverOutcome,
    calculate_annuity_payment,
    find_fixed_payment_amount,
    simulate_remaining_balance,
)
from .insurance import (
    InsuranceRateRangeRule,
    ResolvedInsuranceFactor,
    calculate_insurance_charge,
    find_insurance_rate_range,
    resolve_insurance_factor_from_range,
)
from .money import round_money, to_safe_number
from .payment_capacity import PaymentCapacityAssessment, assess_payment_capacity
from .rate_conversion import calculate_period_rate, get_year_base_days
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

__all__ = [
    "AmortizationEngine",
    "calculate_credit_simulation",
    "CreditSimulationInput",
    "CreditSimulationInstallment",
    "CreditSimulationResult",
    "CreditSimulationSummary",
    "build_due_dates",
    "calculate_period_days",
    "next_semi_monthly_date",
    "resolve_payment_frequency_interval_days",
    "SolverOutcome",
    "calculate_annuity_payment",
    "find_fixed_payment_amount",
    "simulate_remaining_balance",
    "InsuranceRateRangeRule",
    "ResolvedInsuranceFactor",
    "calculate_insurance_charge",
    "find_insurance_rate_range",
    "resolve_insurance_factor_from_range",
    "round_money",
    "to_safe_number",
    "PaymentCapacityAssessment",
    "assess_payment_capacity",
    "calculate_period_rate",
    "get_year_base_days",
    "DayCountConvention",
    "FinancingType",
    "InsuranceAccrualMethod",
    "InsuranceRangeMetric",
    "InsuranceRateType",
    "InterestRateType",
    "PaymentScheduleMode",
    "SolverStatus",
]
