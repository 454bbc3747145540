"""HTTP layer: FastAPI routes, dependencies and form parsing."""
