"""
Credit simulation service.

This service turns a simulation request (product terms, payment frequency and
insurer data already loaded by the caller) into a resolved simulation input,
runs the amortization engine and checks the result against the borrower's
payment capacity.
"""

import logging
from typing import Optional, Tuple

from credit_simulator.config import Settings, get_global_settings
from credit_simulator.exceptions import (
    InstallmentLimitExceededError,
    InsuranceRangeNotFoundError,
    InsurerRequiredError,
    InvalidPaymentFrequencyError,
    SimulationNotConvergedError,
)
from credit_simulator.models.amortization_engine import AmortizationEngine
from credit_simulator.models.credit_simulation import CreditSimulationInput
from credit_simulator.models.date_schedule import resolve_payment_frequency_interval_days
from credit_simulator.models.insurance import (
    ResolvedInsuranceFactor,
    find_insurance_rate_range,
    resolve_insurance_factor_from_range,
)
from credit_simulator.models.payment_capacity import assess_payment_capacity
from credit_simulator.models.simulation_request import (
    CreditSimulationRequest,
    CreditSimulationResponse,
)
from credit_simulator.models.terms import InsuranceRangeMetric, SolverStatus


class CreditSimulationService:
    """Service for running credit simulations on behalf of a caller."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the simulation service.

        Args:
            settings: Application settings, the global settings when omitted
        """
        self.settings = settings or get_global_settings()
        self.engine = AmortizationEngine(decimals=self.settings.money_decimals)
        self.logger = logging.getLogger(__name__)

    def calculate(self, request: CreditSimulationRequest) -> CreditSimulationResponse:
        """Simulate a credit and assess it against the borrower's capacity.

        Args:
            request: Simulation request

        Returns:
            CreditSimulationResponse with schedule, summary and capacity

        Raises:
            CreditSimulationError: If the request cannot be simulated
        """
        self.logger.info(
            f"Simulating {request.product.financing_type.value} credit of "
            f"{request.credit_amount} in {request.installments} installments"
        )

        simulation_input, insurance = self.build_input(request)
        result = self.engine.simulate(simulation_input)

        if result.solver_status == SolverStatus.NOT_CONVERGED:
            self.logger.warning(
                f"Level payment {result.level_payment} does not amortize a credit "
                f"of {request.credit_amount}"
            )
            if self.settings.reject_unconverged_simulations:
                raise SimulationNotConvergedError(
                    "No level payment amortizes the credit with these terms",
                    {"level_payment": result.level_payment},
                )

        capacity = assess_payment_capacity(
            income=request.income,
            expenses=request.expenses,
            max_installment_payment=result.summary.max_installment_payment,
            decimals=self.settings.money_decimals,
        )

        self.logger.info(
            f"Simulation finished: total payment {result.summary.total_payment}, "
            f"within capacity: {capacity.is_within_capacity}"
        )

        return CreditSimulationResponse(
            financing_type=request.product.financing_type,
            financing_factor=request.financing_factor,
            insurance_factor=insurance.insurance_factor,
            insurance_rate_type=insurance.insurance_rate_type,
            solver_status=result.solver_status,
            capacity=capacity,
            summary=result.summary,
            installments=result.installments,
        )

    def build_input(
        self, request: CreditSimulationRequest
    ) -> Tuple[CreditSimulationInput, ResolvedInsuranceFactor]:
        """Resolve a request into engine input and the insurance terms it used."""
        frequency = request.payment_frequency
        interval_days = resolve_payment_frequency_interval_days(
            frequency.schedule_mode, frequency.interval_days
        )
        if interval_days <= 0:
            raise InvalidPaymentFrequencyError(
                "Payment frequency is not valid",
                {"schedule_mode": frequency.schedule_mode.value},
            )

        max_installments = request.product.max_installments
        if max_installments is None or max_installments > self.settings.max_installments:
            max_installments = self.settings.max_installments
        if request.installments > max_installments:
            raise InstallmentLimitExceededError(request.installments, max_installments)

        insurance = self.resolve_insurance(request)

        optional_fields = {}
        if request.disbursement_date is not None:
            optional_fields["disbursement_date"] = request.disbursement_date

        simulation_input = CreditSimulationInput(
            financing_type=request.product.financing_type,
            principal=request.credit_amount,
            annual_rate_percent=request.financing_factor,
            installments=request.installments,
            first_payment_date=request.first_payment_date,
            days_interval=interval_days,
            payment_schedule_mode=frequency.schedule_mode,
            day_of_month=frequency.day_of_month,
            semi_month_day1=frequency.semi_month_day1,
            semi_month_day2=frequency.semi_month_day2,
            use_end_of_month_fallback=frequency.use_end_of_month_fallback,
            interest_rate_type=request.product.interest_rate_type,
            interest_day_count_convention=request.product.interest_day_count_convention,
            insurance_accrual_method=request.product.insurance_accrual_method,
            insurance_rate_percent=insurance.insurance_rate_percent,
            insurance_fixed_amount=insurance.insurance_fixed_amount,
            insurance_minimum_amount=insurance.insurance_minimum_amount,
            **optional_fields,
        )
        return simulation_input, insurance

    def resolve_insurance(self, request: CreditSimulationRequest) -> ResolvedInsuranceFactor:
        """Pick the insurer rate rule that applies to the request."""
        if not request.product.pays_insurance:
            return ResolvedInsuranceFactor()

        if request.insurer is None:
            raise InsurerRequiredError(
                "An insurer must be selected for this credit product"
            )

        metric = request.product.insurance_range_metric
        metric_value = (
            request.installments
            if metric == InsuranceRangeMetric.INSTALLMENT_COUNT
            else request.credit_amount
        )
        rate_range = find_insurance_rate_range(
            request.insurer.insurance_rate_ranges, metric, metric_value
        )
        if rate_range is None:
            raise InsuranceRangeNotFoundError(
                "The insurer has no rate range for this simulation",
                {"range_metric": metric.value, "metric_value": metric_value},
            )

        return resolve_insurance_factor_from_range(
            rate_range, request.insurer.minimum_value
        )
