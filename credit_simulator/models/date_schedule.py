"""
Due date scheduling for credit simulations.

This module lays out installment due dates under the three payment frequency
models (fixed day interval, monthly calendar anchor and semi-monthly anchors)
and measures the elapsed days of each period.
"""

import calendar
from datetime import date, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from .terms import PaymentScheduleMode

DEFAULT_SEMI_MONTH_DAY1 = 15
DEFAULT_SEMI_MONTH_DAY2 = 30


def valid_calendar_day(
    year: int, month: int, day: int, use_end_of_month_fallback: bool = True
) -> int:
    """
    Return ``day`` if it exists in the month, otherwise the month's last day.

    Note: the fallback flag is accepted but both branches clamp to the last
    day of the month. This mirrors how payment frequencies have always been
    scheduled; a frequency with the flag disabled still gets clamped dates.
    """
    last_day = calendar.monthrange(year, month)[1]
    if day <= last_day:
        return day
    # TODO: decide with product owners what a disabled fallback should do
    # (roll into next month or reject) before giving the flag an effect.
    return last_day


def calendar_date(
    year: int, month: int, day: int, use_end_of_month_fallback: bool = True
) -> date:
    """Build a date from an anchor day, clamped to the month length."""
    return date(
        year, month, valid_calendar_day(year, month, day, use_end_of_month_fallback)
    )


def next_semi_monthly_date(
    previous: date, day1: int, day2: int, use_end_of_month_fallback: bool = True
) -> date:
    """
    Get the first semi-monthly anchor strictly after ``previous``.

    Tries ``day1`` then ``day2`` in the month of ``previous``, then ``day1``
    of the following month.

    Args:
        previous: Previous due date
        day1: Earlier anchor day of the month
        day2: Later anchor day of the month
        use_end_of_month_fallback: Clamp flag forwarded to the calendar helper

    Returns:
        Next due date
    """
    first_candidate = calendar_date(
        previous.year, previous.month, day1, use_end_of_month_fallback
    )
    if previous < first_candidate:
        return first_candidate

    second_candidate = calendar_date(
        previous.year, previous.month, day2, use_end_of_month_fallback
    )
    if previous < second_candidate:
        return second_candidate

    next_month = previous.replace(day=1) + relativedelta(months=1)
    return calendar_date(
        next_month.year, next_month.month, day1, use_end_of_month_fallback
    )


def build_due_dates(
    first_payment_date: date,
    installments: int,
    mode: PaymentScheduleMode = PaymentScheduleMode.INTERVAL_DAYS,
    days_interval: int = 30,
    semi_month_day1: Optional[int] = None,
    semi_month_day2: Optional[int] = None,
    use_end_of_month_fallback: bool = True,
) -> List[date]:
    """
    Lay out the due dates of a credit.

    The first due date is always ``first_payment_date``. ``installments`` must
    be positive; a single installment yields a one-element list.

    Args:
        first_payment_date: Due date of installment 1
        installments: Number of installments
        mode: Scheduling model
        days_interval: Day gap between due dates in INTERVAL_DAYS mode
        semi_month_day1: One of the two semi-monthly anchor days (default 15)
        semi_month_day2: The other semi-monthly anchor day (default 30)
        use_end_of_month_fallback: Clamp flag for calendar anchored modes

    Returns:
        Ordered list of ``installments`` due dates
    """
    due_dates = [first_payment_date]
    if installments <= 1:
        return due_dates

    if mode == PaymentScheduleMode.MONTHLY_CALENDAR:
        anchor_day = first_payment_date.day
        first_month = first_payment_date.replace(day=1)
        for offset in range(1, installments):
            month_ref = first_month + relativedelta(months=offset)
            due_dates.append(
                calendar_date(
                    month_ref.year,
                    month_ref.month,
                    anchor_day,
                    use_end_of_month_fallback,
                )
            )
        return due_dates

    if mode == PaymentScheduleMode.SEMI_MONTHLY:
        first_day = (
            semi_month_day1 if semi_month_day1 is not None else DEFAULT_SEMI_MONTH_DAY1
        )
        second_day = (
            semi_month_day2 if semi_month_day2 is not None else DEFAULT_SEMI_MONTH_DAY2
        )
        day1, day2 = min(first_day, second_day), max(first_day, second_day)
        previous = first_payment_date
        for _ in range(1, installments):
            previous = next_semi_monthly_date(
                previous, day1, day2, use_end_of_month_fallback
            )
            due_dates.append(previous)
        return due_dates

    if mode == PaymentScheduleMode.INTERVAL_DAYS:
        for offset in range(1, installments):
            due_dates.append(first_payment_date + timedelta(days=offset * days_interval))
        return due_dates

    raise ValueError(f"Unsupported payment schedule mode: {mode}")


def calculate_period_days(disbursement_date: date, due_dates: List[date]) -> List[int]:
    """
    Get the elapsed days of each installment period.

    The first period runs from disbursement to the first due date, later ones
    between consecutive due dates. Negative gaps count as zero days.
    """
    period_days = []
    previous = disbursement_date
    for due_date in due_dates:
        period_days.append(max(0, (due_date - previous).days))
        previous = due_date
    return period_days


def resolve_payment_frequency_interval_days(
    mode: PaymentScheduleMode, interval_days: Optional[int] = None
) -> int:
    """
    Get the nominal day length of a payment frequency.

    INTERVAL_DAYS frequencies use their configured interval, monthly calendar
    frequencies count as 30 days and semi-monthly ones as 15. A result of zero
    or less means the frequency is not usable.
    """
    if mode == PaymentScheduleMode.INTERVAL_DAYS:
        return interval_days or 0
    if mode == PaymentScheduleMode.MONTHLY_CALENDAR:
        return 30
    if mode == PaymentScheduleMode.SEMI_MONTHLY:
        return 15
    raise ValueError(f"Unsupported payment schedule mode: {mode}")
