"""
FastAPI router module for outreach analytics endpoints.

This module exposes the analytics engine over HTTP for the dashboard:
- Full computation passes over posted records (stateless)
- Trend fits, forecasts and composite scores for ad-hoc series
- The industry benchmark table
- Personal goal progress
- CSV exports of result tables
- A server-held dataset with a cached compute endpoint

The engine itself never raises for bad data: malformed numbers count as 0
and an empty filter result is returned as null. Request validation is left
to the pydantic models (422 on malformed bodies).
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from outreach_analytics.core.dependencies import AnalyticsCacheDep, SettingsDep
from outreach_analytics.models import (
    AnalyticsFilters,
    AnalyticsResult,
    ComputeRequest,
    DatasetRequest,
    DatasetResponse,
    ExportRequest,
    ForecastRequest,
    ForecastResponse,
    GoalProgress,
    GoalProgressRequest,
    ScoreRequest,
    ScoreResponse,
    SeriesRequest,
    TrendModel,
)
from outreach_analytics.services.analytics import compute_analytics
from outreach_analytics.services.benchmarks import benchmark_table
from outreach_analytics.services.export import export_filename, export_rows, to_csv
from outreach_analytics.services.filters import distinct_values
from outreach_analytics.services.forecasting import (
    confidence_interval,
    forecast,
    linear_regression,
)
from outreach_analytics.services.scoring import (
    calculate_agent_score,
    compute_goal_progress,
    get_performance_tier,
)

# Configure logging
logger = logging.getLogger(__name__)

# Create router with prefix and tags for OpenAPI documentation
router = APIRouter(prefix="/analytics", tags=["analytics"])


# =============================================================================
# Stateless Computation
# =============================================================================


@router.post("/compute", response_model=Optional[AnalyticsResult])
async def compute(request: ComputeRequest, settings: SettingsDep) -> Optional[AnalyticsResult]:
    """
    Run a full computation pass over the posted records.

    Args:
        request: Records and filter parameters.

    Returns:
        AnalyticsResult, or null when no record survives filtering.
    """
    logger.info(f"Computing analytics for {len(request.records)} records")
    return compute_analytics(request.records, request.filters, settings)


@router.post("/trend", response_model=TrendModel)
async def fit_trend(request: SeriesRequest, settings: SettingsDep) -> TrendModel:
    """Least-squares trend of a series against its index."""
    return linear_regression(
        request.series,
        stable_slope=settings.trend_stable_slope,
        min_r2=settings.trend_min_r2,
    )


@router.post("/forecast", response_model=ForecastResponse)
async def forecast_series(request: ForecastRequest, settings: SettingsDep) -> ForecastResponse:
    """
    Trend, historical interval and forecast points for a series.

    periods and confidence default to the configured forecast settings.
    """
    periods = request.periods if request.periods is not None else settings.forecast_periods
    confidence = request.confidence if request.confidence is not None else settings.confidence_level

    trend = linear_regression(
        request.series,
        stable_slope=settings.trend_stable_slope,
        min_r2=settings.trend_min_r2,
    )
    return ForecastResponse(
        trend=trend,
        interval=confidence_interval(request.series, confidence),
        points=forecast(request.series, periods, confidence, trend),
    )


@router.post("/score", response_model=ScoreResponse)
async def score(request: ScoreRequest) -> ScoreResponse:
    """Composite performance score and acceptance-rate tier."""
    return ScoreResponse(
        score=calculate_agent_score(
            request.acceptanceRate,
            request.replyRate,
            request.invitedVolume,
            request.weeksActive,
        ),
        tier=get_performance_tier(request.acceptanceRate),
    )


@router.get("/benchmarks")
async def get_benchmarks() -> Dict[str, Any]:
    """Static industry benchmark table and tier ladder."""
    return benchmark_table()


@router.post("/goals/progress", response_model=List[GoalProgress])
async def goals_progress(request: GoalProgressRequest, settings: SettingsDep) -> List[GoalProgress]:
    """
    Progress of personal goals.

    Each goal is evaluated against the records of its own agent, within the
    posted filters. Agents are computed once however many goals they have.
    """
    results: Dict[str, Optional[AnalyticsResult]] = OrderedDict()
    for goal in request.goals:
        if goal.agentName not in results:
            agent_filters = request.filters.model_copy(update={'agents': [goal.agentName]})
            results[goal.agentName] = compute_analytics(request.records, agent_filters, settings)

    return [compute_goal_progress(goal, results[goal.agentName]) for goal in request.goals]


@router.post("/export")
async def export_csv(request: ExportRequest, settings: SettingsDep) -> Response:
    """
    Export one result table as CSV.

    Returns:
        text/csv attachment named {prefix}_{YYYY-MM-DD}.csv.

    Raises:
        HTTPException 404: If no record survives filtering.
    """
    result = compute_analytics(request.records, request.filters, settings)
    if result is None:
        raise HTTPException(status_code=404, detail="No records match the filter criteria")

    content = to_csv(export_rows(result, request.table))
    filename = export_filename(request.filenamePrefix)
    logger.info(f"Exported {request.table.value} table as {filename}")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Server-held Dataset
# =============================================================================


@router.get("/dataset", response_model=DatasetResponse)
async def get_dataset(cache: AnalyticsCacheDep) -> DatasetResponse:
    """Size and filter option values of the held dataset."""
    return DatasetResponse(
        recordCount=len(cache.records),
        distinctValues=distinct_values(cache.records),
    )


@router.put("/dataset", response_model=DatasetResponse)
async def replace_dataset(request: DatasetRequest, cache: AnalyticsCacheDep) -> DatasetResponse:
    """Replace the held records; every cached result is discarded."""
    cache.replace_records(request.records)
    return DatasetResponse(
        recordCount=len(request.records),
        distinctValues=distinct_values(request.records),
    )


@router.post("/dataset/compute", response_model=Optional[AnalyticsResult])
async def compute_dataset(filters: AnalyticsFilters, cache: AnalyticsCacheDep) -> Optional[AnalyticsResult]:
    """Cached computation pass over the held records."""
    return cache.get_or_compute(filters)
