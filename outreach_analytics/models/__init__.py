"""
Package initialization file for the analytics data models.

Re-exports all Pydantic schemas and enumerations so other modules can import
them from `outreach_analytics.models` without knowing the internal layout:

    from outreach_analytics.models import (
        RawMetricRecord,
        AnalyticsFilters,
        AnalyticsResult,
        Dimension,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from outreach_analytics.models.enums import (
    Dimension,
    TrendDirection,
    InsightType,
    InsightPriority,
    TierKey,
    GoalMetric,
    ExportTable,
)


# =============================================================================
# Schemas
# =============================================================================

from outreach_analytics.models.schemas import (
    # Inputs
    RawMetricRecord,
    DateRange,
    AnalyticsFilters,
    # Aggregation
    AggregationBucket,
    Totals,
    Rates,
    NetworkSummary,
    # Trends and forecasts
    TrendModel,
    ConfidenceInterval,
    ForecastPoint,
    TrendSet,
    ForecastSet,
    IntervalSet,
    # Scoring
    PerformanceTier,
    AgentScoreRecord,
    BenchmarkComparison,
    # Insights
    Insight,
    CoercionWarning,
    # Result
    AnalyticsResult,
    # Goals
    PersonalGoal,
    GoalProgress,
    TeamComparison,
    # API envelopes
    ComputeRequest,
    SeriesRequest,
    ForecastRequest,
    ForecastResponse,
    ScoreRequest,
    ScoreResponse,
    GoalProgressRequest,
    ExportRequest,
    DatasetRequest,
    DatasetResponse,
)


__all__ = [
    # Enums
    'Dimension',
    'TrendDirection',
    'InsightType',
    'InsightPriority',
    'TierKey',
    'GoalMetric',
    'ExportTable',
    # Inputs
    'RawMetricRecord',
    'DateRange',
    'AnalyticsFilters',
    # Aggregation
    'AggregationBucket',
    'Totals',
    'Rates',
    'NetworkSummary',
    # Trends and forecasts
    'TrendModel',
    'ConfidenceInterval',
    'ForecastPoint',
    'TrendSet',
    'ForecastSet',
    'IntervalSet',
    # Scoring
    'PerformanceTier',
    'AgentScoreRecord',
    'BenchmarkComparison',
    # Insights
    'Insight',
    'CoercionWarning',
    # Result
    'AnalyticsResult',
    # Goals
    'PersonalGoal',
    'GoalProgress',
    'TeamComparison',
    # API envelopes
    'ComputeRequest',
    'SeriesRequest',
    'ForecastRequest',
    'ForecastResponse',
    'ScoreRequest',
    'ScoreResponse',
    'GoalProgressRequest',
    'ExportRequest',
    'DatasetRequest',
    'DatasetResponse',
]
