"""Credit Simulator Flask Application Factory."""

import logging
from typing import Optional

from flask import Flask

from credit_simulator.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = config_name or settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = (config_name or settings.app_env) == "testing"

    logging.getLogger(__name__).setLevel(settings.log_level)

    # Register blueprints
    from credit_simulator.blueprints.health import health_bp
    from credit_simulator.blueprints.simulation import simulation_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(simulation_bp)

    return app
