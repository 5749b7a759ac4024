"""
API package initialization.

This package contains the FastAPI router modules of the outreach analytics
service:
- analytics: computation, trend/forecast, scoring, benchmarks, goals,
  exports and the server-held dataset
"""

from fastapi import APIRouter

# Import router modules
from outreach_analytics.api.analytics import router as analytics_router

# Create main API router
api_router = APIRouter()

# analytics router has its own /analytics prefix
api_router.include_router(analytics_router)

__all__ = ['api_router', 'analytics_router']
