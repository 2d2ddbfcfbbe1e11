"""Conversion of quoted interest rates into per-period rates."""

from .terms import DayCountConvention, InterestRateType


def get_year_base_days(convention: DayCountConvention) -> float:
    """Get the number of days in a year under a day-count convention."""
    if convention in (DayCountConvention.THIRTY_360, DayCountConvention.ACTUAL_360):
        return 360
    if convention == DayCountConvention.ACTUAL_365:
        return 365
    if convention == DayCountConvention.ACTUAL_ACTUAL:
        return 365.25
    raise ValueError(f"Unsupported day count convention: {convention}")


def calculate_period_rate(
    rate_percent: float,
    period_days: int,
    interest_rate_type: InterestRateType,
    day_count_convention: DayCountConvention,
) -> float:
    """
    Calculate the rate that applies to one installment period.

    Nominal and flat rates scale proportionally with the period length,
    effective rates compound over it. Months count as 30 days; years use the
    day-count convention's base.

    Args:
        rate_percent: Quoted rate as a percentage (24 means 24%)
        period_days: Elapsed days of the period
        interest_rate_type: Convention the rate is quoted in
        day_count_convention: Day-count basis for annual rates

    Returns:
        Period rate as a decimal fraction
    """
    rate_decimal = rate_percent / 100
    if rate_decimal == 0:
        return 0.0

    month_fraction = period_days / 30
    year_fraction = period_days / get_year_base_days(day_count_convention)

    if interest_rate_type == InterestRateType.EFFECTIVE_ANNUAL:
        return (1 + rate_decimal) ** year_fraction - 1
    if interest_rate_type == InterestRateType.EFFECTIVE_MONTHLY:
        return (1 + rate_decimal) ** month_fraction - 1
    if interest_rate_type in (
        InterestRateType.NOMINAL_MONTHLY,
        InterestRateType.MONTHLY_FLAT,
    ):
        return rate_decimal * month_fraction
    if interest_rate_type == InterestRateType.NOMINAL_ANNUAL:
        return rate_decimal * year_fraction
    raise ValueError(f"Unsupported interest rate type: {interest_rate_type}")
