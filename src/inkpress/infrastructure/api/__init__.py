"""HTTP binding: FastAPI application, dependencies, routes and schemas."""
