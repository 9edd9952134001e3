"""FastAPI application setup for the Outfit Recommender."""

from fastapi import FastAPI

from .api import router as api_router
from .config import settings
from utils.logging_utils import setup_logging

setup_logging(level=settings.log_level, service_name="outfit_api")

app = FastAPI(title="Outfit Recommender")


@app.get("/healthz")
def healthz():
    """Liveness check."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")
