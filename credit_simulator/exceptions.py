"""Exceptions raised while preparing or accepting a credit simulation."""

from typing import Any, Dict, Optional


class CreditSimulationError(Exception):
    """Base exception for simulation request errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class InvalidPaymentFrequencyError(CreditSimulationError):
    """Raised when a payment frequency does not yield a usable period length."""


class InstallmentLimitExceededError(CreditSimulationError):
    """Raised when the requested installments exceed the product maximum."""

    def __init__(self, installments: int, max_installments: int):
        super().__init__(
            f"Installment count exceeds the maximum allowed ({max_installments})",
            {"installments": installments, "max_installments": max_installments},
        )


class InsurerRequiredError(CreditSimulationError):
    """Raised when a product that pays insurance is simulated without an insurer."""


class InsuranceRangeNotFoundError(CreditSimulationError):
    """Raised when no insurer rate range applies to the simulation."""


class SimulationNotConvergedError(CreditSimulationError):
    """Raised when no level payment amortizes the credit and such results are rejected."""
