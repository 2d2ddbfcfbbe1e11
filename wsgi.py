"""WSGI entry point for the credit simulator application."""

import argparse
import os

from credit_simulator import create_app
from credit_simulator.config import get_global_settings

app = create_app()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the credit simulator API")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", 5000)))
    args = parser.parse_args()

    settings = get_global_settings()
    app.run(debug=settings.flask_env == "development", host="0.0.0.0", port=args.port)
