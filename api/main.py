"""
Dashboard Data Service - FastAPI application

Mounts the client report and service rollup endpoints.

Run with:
    uvicorn api.main:app --reload
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from api.cache import router as cache_router
from api.report import router as report_router
from api.services import router as services_router
from src import __version__
from src.utils.config import get_settings

settings = get_settings()

# Configure logging to stdout
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,  # Explicitly use stdout
    force=True,  # Override any existing config
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("google.auth").setLevel(logging.WARNING)

# Create FastAPI app
app = FastAPI(
    title="Dashboard Data Service",
    description="Spreadsheet-backed client reports and service rollups for the dashboard",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(report_router)
app.include_router(services_router)
app.include_router(cache_router)

logger.info(f"Dashboard Data Service {__version__} started (environment={settings.ENVIRONMENT})")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    environment: str


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Dashboard Data Service"}


@app.get("/api/health", response_model=HealthResponse)
def health():
    """Health check with version and environment."""
    return HealthResponse(status="ok", version=__version__, environment=settings.ENVIRONMENT)
