"""
Core infrastructure package for the outreach analytics API.

Provides:
- Configuration management via pydantic-settings (config)
- FastAPI dependency injection utilities (dependencies)

Only configuration is re-exported here, because the service layer imports
it. The dependencies module imports the service layer in turn, so it is
imported directly:

    from outreach_analytics.core import get_settings
    from outreach_analytics.core.dependencies import AnalyticsCacheDep, SettingsDep
"""

# =============================================================================
# Re-exports from outreach_analytics.core.config
# =============================================================================
from outreach_analytics.core.config import Settings, get_settings

__all__ = [
    'Settings',
    'get_settings',
]
