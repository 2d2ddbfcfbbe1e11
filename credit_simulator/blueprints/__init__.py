"""HTTP blueprints for the credit simulator."""
