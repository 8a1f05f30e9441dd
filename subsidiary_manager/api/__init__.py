"""HTTP API layer: FastAPI app, routers, middleware and dependencies."""
