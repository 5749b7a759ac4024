"""
Settings and environment management for the outreach analytics service.

Configuration is loaded with pydantic-settings from environment variables and
an optional .env file. Every value has a development default, so the engine
can run with no environment at all.

Environment Variables:
- APP_NAME: Display name reported by the API root endpoint
- LOG_LEVEL: Root logging level (default: INFO)
- CORS_ORIGINS: JSON list of origins allowed to call the API
- FORECAST_PERIODS: Number of future weeks to forecast (default: 4)
- CONFIDENCE_LEVEL: Confidence level for historical intervals (default: 0.95)
- TREND_STABLE_SLOPE: |slope| below which a trend is "stable" (default: 0.5)
- TREND_MIN_R2: r2 below which a trend is "stable" (default: 0.3)
- ANALYTICS_CACHE_SIZE: Max memoized results per record collection (default: 32)
- METRICS_CSV_PATH: Optional CSV export of the metrics sheet loaded at startup

Usage:
    from outreach_analytics.core.config import get_settings

    settings = get_settings()
    periods = settings.forecast_periods
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Name reported by the API.
        log_level: Logging level name for logging.basicConfig.
        cors_origins: Origins allowed by the CORS middleware.
        forecast_periods: How many periods compute_analytics forecasts.
        confidence_level: Confidence used for historical intervals and bands.
        trend_stable_slope: Slope magnitude under which a trend is stable.
        trend_min_r2: Goodness of fit under which a trend is stable.
        analytics_cache_size: LRU bound of the AnalyticsCache.
        metrics_csv_path: CSV file preloaded into the dataset cache, if set.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    app_name: str = 'Outreach Analytics API'
    log_level: str = 'INFO'

    # Dashboard dev servers
    cors_origins: List[str] = [
        'http://localhost:5173',
        'http://127.0.0.1:5173',
        'http://localhost:3000',
    ]

    # =========================================================================
    # Forecasting defaults
    # =========================================================================

    # Weekly forecasts shown on the predictions tab (one month ahead)
    forecast_periods: int = Field(default=4, ge=0, le=52)

    # 0.95 -> z=1.96, 0.99 -> z=2.576, anything else -> z=1.645
    confidence_level: float = Field(default=0.95, gt=0.0, lt=1.0)

    # A trend is stable when |slope| < trend_stable_slope or r2 < trend_min_r2
    trend_stable_slope: float = Field(default=0.5, ge=0.0)
    trend_min_r2: float = Field(default=0.3, ge=0.0, le=1.0)

    # =========================================================================
    # Caching and data source
    # =========================================================================

    analytics_cache_size: int = Field(default=32, ge=1)

    metrics_csv_path: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
