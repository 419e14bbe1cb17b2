"""HTTP API package: FastAPI app and Pydantic models."""
