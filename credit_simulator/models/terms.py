"""
Closed vocabularies for credit product and payment frequency terms.

Every conversion site matches these members exhaustively, so adding a new
member means touching the rate converter, the schedule builder and the
insurance calculator on purpose.
"""

from enum import Enum


class FinancingType(str, Enum):
    """How interest is charged and how the installment is obtained."""

    FIXED_AMOUNT = "FIXED_AMOUNT"  # flat interest on principal, solved level payment
    ON_BALANCE = "ON_BALANCE"  # interest on the declining balance


class PaymentScheduleMode(str, Enum):
    """Rule used to lay out due dates after the first payment date."""

    INTERVAL_DAYS = "INTERVAL_DAYS"
    MONTHLY_CALENDAR = "MONTHLY_CALENDAR"
    SEMI_MONTHLY = "SEMI_MONTHLY"


class InterestRateType(str, Enum):
    """Convention in which the product's rate is quoted."""

    NOMINAL_ANNUAL = "NOMINAL_ANNUAL"
    NOMINAL_MONTHLY = "NOMINAL_MONTHLY"
    EFFECTIVE_ANNUAL = "EFFECTIVE_ANNUAL"
    EFFECTIVE_MONTHLY = "EFFECTIVE_MONTHLY"
    MONTHLY_FLAT = "MONTHLY_FLAT"


class DayCountConvention(str, Enum):
    """Day-count basis used to turn elapsed days into a year fraction."""

    THIRTY_360 = "30_360"
    ACTUAL_360 = "ACTUAL_360"
    ACTUAL_365 = "ACTUAL_365"
    ACTUAL_ACTUAL = "ACTUAL_ACTUAL"


class InsuranceAccrualMethod(str, Enum):
    """Whether insurance is charged once or on every installment."""

    ONE_TIME = "ONE_TIME"
    PER_INSTALLMENT = "PER_INSTALLMENT"


class InsuranceRangeMetric(str, Enum):
    """Metric an insurer's rate ranges are keyed on."""

    INSTALLMENT_COUNT = "INSTALLMENT_COUNT"
    CREDIT_AMOUNT = "CREDIT_AMOUNT"


class InsuranceRateType(str, Enum):
    """Shape of an insurer's rate rule."""

    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class SolverStatus(str, Enum):
    """Outcome of the level-payment search for a simulation."""

    CONVERGED = "CONVERGED"
    NOT_CONVERGED = "NOT_CONVERGED"
    NOT_APPLICABLE = "NOT_APPLICABLE"
