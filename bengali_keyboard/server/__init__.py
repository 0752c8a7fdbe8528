"""HTTP API: FastAPI app, pydantic models, and the session store."""
