"""
Pytest configuration and shared fixtures for the credit simulator tests.
"""

from datetime import date

import pytest

from credit_simulator.config import reset_global_settings
from credit_simulator.models.credit_simulation import CreditSimulationInput
from credit_simulator.models.terms import (
    DayCountConvention,
    FinancingType,
    InterestRateType,
    PaymentScheduleMode,
)


@pytest.fixture(autouse=True)
def app_environment(monkeypatch):
    """Provide a valid environment and fresh global settings for every test."""
    monkeypatch.setenv("SECRET_KEY", "test-secret-key-123")
    monkeypatch.setenv("APP_ENV", "testing")
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def base_input():
    """A 12 installment fixed-amount credit with 30 day periods."""
    return CreditSimulationInput(
        financing_type=FinancingType.FIXED_AMOUNT,
        principal=1_200_000,
        annual_rate_percent=0,
        installments=12,
        first_payment_date=date(2024, 2, 1),
        disbursement_date=date(2024, 1, 2),
        days_interval=30,
        payment_schedule_mode=PaymentScheduleMode.INTERVAL_DAYS,
        interest_rate_type=InterestRateType.NOMINAL_ANNUAL,
        interest_day_count_convention=DayCountConvention.THIRTY_360,
    )
