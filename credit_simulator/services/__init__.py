"""Services that run credit simulations for callers."""

from .simulation_service import CreditSimulationService

__all__ = ["CreditSimulationService"]
