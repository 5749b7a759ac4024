"""
FastAPI dependency injection module for the outreach analytics API.

Provides reusable dependencies for configuration access and the shared
analytics result cache, so endpoint handlers stay free of infrastructure
wiring and tests can swap either through app.dependency_overrides.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_analytics_cache: Returns the process-wide AnalyticsCache
- SettingsDep: Type alias for injecting Settings into endpoints
- AnalyticsCacheDep: Type alias for injecting the AnalyticsCache

Usage Examples:
    @router.post("/dataset/compute")
    async def compute_dataset(
        filters: AnalyticsFilters,
        cache: AnalyticsCacheDep,
    ) -> Optional[AnalyticsResult]:
        return cache.get_or_compute(filters)
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from outreach_analytics.core.config import Settings, get_settings
from outreach_analytics.services.analytics import AnalyticsCache


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it:

        app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    """
    return get_settings()


# =============================================================================
# Analytics Cache Dependency
# =============================================================================

@lru_cache()
def get_analytics_cache() -> AnalyticsCache:
    """
    Return the process-wide AnalyticsCache.

    The cache starts bound to an empty collection; PUT /analytics/dataset
    or the startup CSV preload binds the real records.
    """
    settings = get_settings()
    return AnalyticsCache(max_size=settings.analytics_cache_size, settings=settings)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(cache: AnalyticsCacheDep)
AnalyticsCacheDep = Annotated[AnalyticsCache, Depends(get_analytics_cache)]
