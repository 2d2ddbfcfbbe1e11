"""
Tests for the credit simulation service.

This module tests how a simulation request is resolved into engine input:
payment frequency checks, installment limits, insurer range selection,
capacity assessment and the handling of unconverged level payments.
"""

from datetime import date, timedelta

import pytest

from credit_simulator.config import Settings
from credit_simulator.exceptions import (
    CreditSimulationError,
    InstallmentLimitExceededError,
    InsuranceRangeNotFoundError,
    InsurerRequiredError,
    InvalidPaymentFrequencyError,
    SimulationNotConvergedError,
)
from credit_simulator.models.simulation_request import CreditSimulationRequest
from credit_simulator.models.terms import (
    FinancingType,
    InsuranceRateType,
    PaymentScheduleMode,
    SolverStatus,
)
from credit_simulator.services.simulation_service import CreditSimulationService


def make_request(**overrides):
    """Build a request for a 12 installment fixed-amount credit."""
    data = {
        "product": {
            "financing_type": "FIXED_AMOUNT",
            "interest_rate_type": "NOMINAL_ANNUAL",
            "interest_day_count_convention": "30_360",
        },
        "payment_frequency": {"schedule_mode": "INTERVAL_DAYS", "interval_days": 30},
        "financing_factor": 24,
        "credit_amount": 1_200_000,
        "installments": 12,
        "first_payment_date": "2024-02-01",
        "disbursement_date": "2024-01-02",
        "income": 3_000_000,
        "expenses": 1_000_000,
    }
    data.update(overrides)
    return CreditSimulationRequest.model_validate(data)


def insured_product(metric="CREDIT_AMOUNT", **extra):
    product = {
        "financing_type": "ON_BALANCE",
        "interest_rate_type": "NOMINAL_MONTHLY",
        "pays_insurance": True,
        "insurance_range_metric": metric,
    }
    product.update(extra)
    return product


INSURER = {
    "insurance_rate_ranges": [
        {
            "range_metric": "CREDIT_AMOUNT",
            "value_from": 0,
            "value_to": 1_000_000,
            "rate_type": "PERCENTAGE",
            "rate_value": "0.1",
        },
        {
            "range_metric": "CREDIT_AMOUNT",
            "value_from": 1_000_001,
            "value_to": 10_000_000,
            "rate_type": "FIXED_AMOUNT",
            "fixed_amount": 5_000,
        },
        {
            "range_metric": "INSTALLMENT_COUNT",
            "value_from": 1,
            "value_to": 12,
            "rate_type": "PERCENTAGE",
            "rate_value": 0.2,
        },
    ],
    "minimum_value": "1500",
}


class TestCreditSimulationService:
    """Test the CreditSimulationService class."""

    def test_initialization(self):
        """Test service initialization from global settings."""
        service = CreditSimulationService()

        assert service.logger is not None
        assert service.settings.max_installments == 600
        assert service.engine.decimals == 2

    def test_calculate_fixed_amount_credit(self):
        response = CreditSimulationService().calculate(make_request())

        assert response.financing_type == FinancingType.FIXED_AMOUNT
        assert response.financing_factor == 24
        assert response.solver_status == SolverStatus.CONVERGED
        assert response.insurance_factor == 0.0
        assert response.insurance_rate_type is None
        assert len(response.installments) == 12
        # 24% nominal annual over 30/360 periods is 2% of the principal
        assert all(row.interest == 24_000.0 for row in response.installments)
        assert response.installments[-1].closing_balance == 0.0
        assert response.summary.total_interest == 288_000.0

    def test_capacity_is_assessed_against_largest_installment(self):
        response = CreditSimulationService().calculate(
            make_request(income=150_000, expenses=50_000)
        )

        capacity = response.capacity
        assert capacity.payment_capacity == 100_000.0
        assert capacity.max_installment_payment == response.summary.max_installment_payment
        assert capacity.is_within_capacity is False
        assert capacity.warning_message is not None

    def test_disbursement_defaults_to_today(self):
        request = make_request(
            disbursement_date=None,
            first_payment_date=(date.today() + timedelta(days=30)).isoformat(),
        )

        response = CreditSimulationService().calculate(request)

        assert response.installments[0].days == 30

    def test_monthly_calendar_frequency(self):
        request = make_request(
            payment_frequency={"schedule_mode": "MONTHLY_CALENDAR"},
            first_payment_date="2024-01-31",
            disbursement_date="2024-01-01",
            installments=3,
        )

        simulation_input, _ = CreditSimulationService().build_input(request)

        assert simulation_input.days_interval == 30
        assert simulation_input.payment_schedule_mode == PaymentScheduleMode.MONTHLY_CALENDAR

    def test_semi_monthly_frequency_forwards_anchor_days(self):
        request = make_request(
            payment_frequency={
                "schedule_mode": "SEMI_MONTHLY",
                "semi_month_day1": 5,
                "semi_month_day2": 20,
            },
            first_payment_date="2024-03-05",
            disbursement_date="2024-02-20",
            installments=3,
        )

        service = CreditSimulationService()
        simulation_input, _ = service.build_input(request)
        response = service.calculate(request)

        assert simulation_input.days_interval == 15
        assert simulation_input.semi_month_day1 == 5
        assert simulation_input.semi_month_day2 == 20
        assert [row.due_date for row in response.installments] == [
            date(2024, 3, 5),
            date(2024, 3, 20),
            date(2024, 4, 5),
        ]


class TestPaymentFrequencyValidation:
    """Test cases for rejecting unusable payment frequencies."""

    @pytest.mark.parametrize("interval_days", [None, 0])
    def test_interval_frequency_without_days(self, interval_days):
        request = make_request(
            payment_frequency={
                "schedule_mode": "INTERVAL_DAYS",
                "interval_days": interval_days,
            }
        )

        with pytest.raises(InvalidPaymentFrequencyError) as exc_info:
            CreditSimulationService().calculate(request)

        assert exc_info.value.details == {"schedule_mode": "INTERVAL_DAYS"}
        assert isinstance(exc_info.value, CreditSimulationError)


class TestInstallmentLimits:
    """Test cases for installment count limits."""

    def test_product_limit(self):
        request = make_request(
            product={"financing_type": "FIXED_AMOUNT", "max_installments": 6}
        )

        with pytest.raises(InstallmentLimitExceededError) as exc_info:
            CreditSimulationService().calculate(request)

        assert exc_info.value.details == {"installments": 12, "max_installments": 6}

    def test_product_limit_not_exceeded(self):
        request = make_request(
            product={"financing_type": "FIXED_AMOUNT", "max_installments": 12}
        )

        response = CreditSimulationService().calculate(request)

        assert len(response.installments) == 12

    def test_settings_limit_caps_product_limit(self):
        settings = Settings(SECRET_KEY="test-secret-key-123", MAX_INSTALLMENTS=10)
        request = make_request(
            product={"financing_type": "FIXED_AMOUNT", "max_installments": 48}
        )

        with pytest.raises(InstallmentLimitExceededError) as exc_info:
            CreditSimulationService(settings).calculate(request)

        assert exc_info.value.details["max_installments"] == 10


class TestInsuranceResolution:
    """Test cases for selecting the insurer rate range."""

    def test_product_without_insurance_ignores_insurer(self):
        request = make_request(insurer=INSURER)

        response = CreditSimulationService().calculate(request)

        assert response.insurance_factor == 0.0
        assert response.summary.total_insurance == 0.0

    def test_insured_product_requires_insurer(self):
        request = make_request(product=insured_product())

        with pytest.raises(InsurerRequiredError):
            CreditSimulationService().calculate(request)

    def test_fixed_amount_range_by_credit_amount(self):
        request = make_request(product=insured_product(), insurer=INSURER)

        response = CreditSimulationService().calculate(request)

        assert response.insurance_rate_type == InsuranceRateType.FIXED_AMOUNT
        assert response.insurance_factor == 5_000.0
        assert all(row.insurance == 5_000.0 for row in response.installments)

    def test_percentage_range_applies_minimum(self):
        request = make_request(
            product=insured_product(), insurer=INSURER, credit_amount=1_000_000
        )

        service = CreditSimulationService()
        simulation_input, insurance = service.build_input(request)
        response = service.calculate(request)

        assert insurance.insurance_rate_type == InsuranceRateType.PERCENTAGE
        assert simulation_input.insurance_rate_percent == 0.1
        assert simulation_input.insurance_minimum_amount == 1_500.0
        # 0.1% of the opening balance never falls below the 1,500 minimum
        assert response.installments[0].insurance == 1_500.0
        assert all(row.insurance == 1_500.0 for row in response.installments)

    def test_range_by_installment_count(self):
        request = make_request(
            product=insured_product("INSTALLMENT_COUNT"),
            insurer=INSURER,
            credit_amount=5_000_000,
        )

        _, insurance = CreditSimulationService().build_input(request)

        assert insurance.insurance_rate_type == InsuranceRateType.PERCENTAGE
        assert insurance.insurance_rate_percent == 0.2

    def test_no_matching_range(self):
        request = make_request(
            product=insured_product(), insurer=INSURER, credit_amount=20_000_000
        )

        with pytest.raises(InsuranceRangeNotFoundError) as exc_info:
            CreditSimulationService().calculate(request)

        assert exc_info.value.details == {
            "range_metric": "CREDIT_AMOUNT",
            "metric_value": 20_000_000,
        }


class TestUnconvergedSimulations:
    """Test cases for level payments that cannot amortize the credit."""

    UNPAYABLE_INSURER = {
        "insurance_rate_ranges": [
            {
                "range_metric": "CREDIT_AMOUNT",
                "value_from": 0,
                "value_to": 10_000,
                "rate_type": "FIXED_AMOUNT",
                "fixed_amount": 20_000,
            }
        ]
    }

    def make_unpayable_request(self):
        return make_request(
            product={"financing_type": "FIXED_AMOUNT", "pays_insurance": True},
            insurer=self.UNPAYABLE_INSURER,
            credit_amount=1_000,
            installments=2,
            financing_factor=0,
        )

    def test_returned_with_status_by_default(self):
        response = CreditSimulationService().calculate(self.make_unpayable_request())

        assert response.solver_status == SolverStatus.NOT_CONVERGED
        assert response.installments[-1].closing_balance == 0.0

    def test_rejected_when_configured(self):
        settings = Settings(
            SECRET_KEY="test-secret-key-123", REJECT_UNCONVERGED_SIMULATIONS=True
        )

        with pytest.raises(SimulationNotConvergedError) as exc_info:
            CreditSimulationService(settings).calculate(self.make_unpayable_request())

        assert "level_payment" in exc_info.value.details
