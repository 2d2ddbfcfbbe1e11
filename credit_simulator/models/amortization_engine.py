"""
Credit amortization simulation engine.

This module ties the due date schedule, the rate converter, the insurance
calculator and the level-payment search into a single forward pass that
produces the installment table and its summary. Nothing is persisted and no
state is kept between simulations.
"""

from typing import List, Optional

from .credit_simulation import (
    CreditSimulationInput,
    CreditSimulationInstallment,
    CreditSimulationResult,
    CreditSimulationSummary,
)
from .date_schedule import build_due_dates, calculate_period_days
from .installment_solver import (
    calculate_annuity_payment,
    calculate_installment_interest,
    find_fixed_payment_amount,
)
from .insurance import calculate_insurance_charge
from .money import MONEY_DECIMALS, round_money
from .rate_conversion import calculate_period_rate
from .terms import FinancingType, SolverStatus


class AmortizationEngine:
    """Builds installment schedules for credit simulations."""

    def __init__(self, decimals: int = MONEY_DECIMALS) -> None:
        """
        Initialize the engine.

        Args:
            decimals: Monetary precision used for every rounded amount
        """
        self.decimals = decimals

    def simulate(self, simulation_input: CreditSimulationInput) -> CreditSimulationResult:
        """
        Simulate a credit and return its installment table and summary.

        The last installment always takes the whole remaining balance, so the
        schedule closes at zero whatever rounding happened along the way.

        Args:
            simulation_input: Fully resolved simulation parameters

        Returns:
            CreditSimulationResult with summary, installments and solver status
        """
        decimals = self.decimals
        data = simulation_input
        principal = data.principal

        due_dates = build_due_dates(
            first_payment_date=data.first_payment_date,
            installments=data.installments,
            mode=data.payment_schedule_mode,
            days_interval=data.days_interval,
            semi_month_day1=data.semi_month_day1,
            semi_month_day2=data.semi_month_day2,
            use_end_of_month_fallback=data.use_end_of_month_fallback,
        )
        period_days = calculate_period_days(data.disbursement_date, due_dates)
        period_rates = [
            calculate_period_rate(
                data.annual_rate_percent,
                days,
                data.interest_rate_type,
                data.interest_day_count_convention,
            )
            for days in period_days
        ]

        level_payment = 0.0
        solver_status = SolverStatus.NOT_APPLICABLE
        if data.financing_type == FinancingType.FIXED_AMOUNT and data.installments > 1:
            outcome = find_fixed_payment_amount(
                financing_type=data.financing_type,
                principal=principal,
                period_rates=period_rates,
                insurance_accrual_method=data.insurance_accrual_method,
                insurance_rate_percent=data.insurance_rate_percent,
                insurance_fixed_amount=data.insurance_fixed_amount,
                insurance_minimum_amount=data.insurance_minimum_amount,
                decimals=decimals,
            )
            level_payment = outcome.payment
            solver_status = (
                SolverStatus.CONVERGED if outcome.converged else SolverStatus.NOT_CONVERGED
            )
        elif data.financing_type == FinancingType.ON_BALANCE and data.installments > 1:
            level_payment = calculate_annuity_payment(
                principal=principal,
                period_rates=period_rates,
                insurance_accrual_method=data.insurance_accrual_method,
                insurance_rate_percent=data.insurance_rate_percent,
                insurance_fixed_amount=data.insurance_fixed_amount,
                decimals=decimals,
            )

        installments: List[CreditSimulationInstallment] = []
        remaining = round_money(principal, decimals)
        total_principal = 0.0
        total_interest = 0.0
        total_insurance = 0.0

        for index, (due_date, days, period_rate) in enumerate(
            zip(due_dates, period_days, period_rates), start=1
        ):
            opening_balance = remaining
            interest = calculate_installment_interest(
                data.financing_type, principal, opening_balance, period_rate, decimals
            )
            insurance = calculate_insurance_charge(
                installment_number=index,
                opening_balance=opening_balance,
                principal=principal,
                accrual_method=data.insurance_accrual_method,
                rate_percent=data.insurance_rate_percent,
                fixed_amount=data.insurance_fixed_amount,
                minimum_amount=data.insurance_minimum_amount,
                decimals=decimals,
            )

            if index == data.installments:
                principal_payment = opening_balance
            else:
                principal_payment = round_money(
                    level_payment - interest - insurance, decimals
                )
            principal_payment = min(max(principal_payment, 0.0), opening_balance)

            closing_balance = round_money(opening_balance - principal_payment, decimals)
            installments.append(
                CreditSimulationInstallment(
                    installment_number=index,
                    due_date=due_date,
                    days=days,
                    opening_balance=opening_balance,
                    principal=principal_payment,
                    interest=interest,
                    insurance=insurance,
                    payment=round_money(principal_payment + interest + insurance, decimals),
                    closing_balance=closing_balance,
                )
            )

            remaining = closing_balance
            total_principal += principal_payment
            total_interest += interest
            total_insurance += insurance

        summary = self._summarize(
            data,
            installments,
            round_money(total_principal, decimals),
            round_money(total_interest, decimals),
            round_money(total_insurance, decimals),
        )
        return CreditSimulationResult(
            summary=summary,
            installments=installments,
            solver_status=solver_status,
            level_payment=level_payment,
        )

    def _summarize(
        self,
        data: CreditSimulationInput,
        installments: List[CreditSimulationInstallment],
        total_principal: float,
        total_interest: float,
        total_insurance: float,
    ) -> CreditSimulationSummary:
        payments = [item.payment for item in installments]
        return CreditSimulationSummary(
            principal=round_money(data.principal, self.decimals),
            annual_rate_percent=data.annual_rate_percent,
            insurance_rate_percent=data.insurance_rate_percent,
            installments=data.installments,
            days_interval=data.days_interval,
            total_principal=total_principal,
            total_interest=total_interest,
            total_insurance=total_insurance,
            total_payment=round_money(
                total_principal + total_interest + total_insurance, self.decimals
            ),
            first_installment_payment=payments[0] if payments else 0.0,
            max_installment_payment=max(payments) if payments else 0.0,
            min_installment_payment=min(payments) if payments else 0.0,
        )


def calculate_credit_simulation(
    simulation_input: CreditSimulationInput, decimals: Optional[int] = None
) -> CreditSimulationResult:
    """Simulate a credit with a throwaway engine."""
    engine = AmortizationEngine(MONEY_DECIMALS if decimals is None else decimals)
    return engine.simulate(simulation_input)
