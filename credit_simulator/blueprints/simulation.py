"""
Credit simulation blueprint.

This module exposes the credit simulation service over HTTP. Requests carry
product, payment frequency and insurer data already loaded by the caller.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from credit_simulator.exceptions import CreditSimulationError, SimulationNotConvergedError
from credit_simulator.models.simulation_request import CreditSimulationRequest
from credit_simulator.services.simulation_service import CreditSimulationService

simulation_bp = Blueprint("simulation", __name__, url_prefix="/api")


@simulation_bp.route("/credit-simulations", methods=["POST"])
def calculate_simulation() -> Any:
    """Simulate a credit.

    Returns:
        JSON response with the installment table, summary and capacity check
    """
    try:
        data = request.get_json(silent=True) or {}
        simulation_request = CreditSimulationRequest.model_validate(data)

        response = CreditSimulationService().calculate(simulation_request)
        return jsonify(response.model_dump(mode="json")), 200

    except ValidationError as e:
        return (
            jsonify(
                {
                    "error": "Invalid simulation request",
                    "details": e.errors(include_url=False, include_context=False),
                }
            ),
            400,
        )
    except SimulationNotConvergedError as e:
        return jsonify({"error": e.message, "details": e.details}), 422
    except CreditSimulationError as e:
        return jsonify({"error": e.message, "details": e.details}), 400
    except Exception as e:
        current_app.logger.error(f"Error calculating credit simulation: {str(e)}")
        return jsonify({"error": "Error calculating credit simulation"}), 500
