"""
FastAPI application entry point for the Outreach Analytics API.

This module configures logging and CORS, registers the API routers and,
when METRICS_CSV_PATH is set, preloads the metrics sheet export into the
shared analytics cache at startup.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from outreach_analytics import __version__
from outreach_analytics.api import api_router
from outreach_analytics.core.config import get_settings
from outreach_analytics.core.dependencies import get_analytics_cache
from outreach_analytics.services.ingestion import load_records_csv

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Load METRICS_CSV_PATH into the analytics cache, if configured
        - Log startup message

    On shutdown:
        - Drop cached results
        - Log shutdown message
    """
    # Startup
    logger.info(f"{settings.app_name} starting")
    if settings.metrics_csv_path:
        try:
            records = load_records_csv(settings.metrics_csv_path)
            get_analytics_cache().replace_records(records)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to preload metrics from {settings.metrics_csv_path}: {e}")
            # Continue startup: the dataset can still be posted via PUT /analytics/dataset

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")
    get_analytics_cache().invalidate()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description=(
        "Analytics engine for weekly LinkedIn outreach metrics. "
        "Provides aggregation, trend and forecast, agent scoring, "
        "benchmark comparison, insight and export endpoints."
    ),
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "outreach_analytics.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
