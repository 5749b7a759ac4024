"""
Analytics Services Module

This module contains the analytics engine. Every service is a pure, stateless
function of its inputs except AnalyticsCache, which memoizes results for one
record collection.

Services:
- normalizer: Numeric normalization of raw sheet text
- filters: Date range and dimension filtering
- aggregation: Week/month/agent/campaign/location/audience buckets
- forecasting: Linear trend, forecasts and confidence intervals
- scoring: Composite agent score, performance tiers and goal progress
- insights: Rule-based insight generation
- benchmarks: Static industry benchmark table
- analytics: Full computation pass and result cache
- ingestion: Sheet rows / CSV to RawMetricRecords (pandas)
- export: Result tables to CSV (pandas)

All services are designed to be consumed by the API layer
(outreach_analytics/api/) or called directly from Python.
"""

# =============================================================================
# Normalizer and Filter Exports
# =============================================================================

from outreach_analytics.services.normalizer import (
    normalize_number,
    safe_percent,
    find_coercion_failures,
    collect_coercion_warnings,
    NUMERIC_FIELDS,
)
from outreach_analytics.services.filters import (
    filter_records,
    record_matches,
    distinct_values,
)

# =============================================================================
# Aggregation Exports
# =============================================================================

from outreach_analytics.services.aggregation import (
    aggregate,
    aggregate_ordered,
    ordered_buckets,
    calculate_rates,
    compute_totals,
    compute_network,
    best_month,
)

# =============================================================================
# Trend and Forecast Exports
# =============================================================================

from outreach_analytics.services.forecasting import (
    linear_regression,
    trend_direction,
    predict_future,
    confidence_interval,
    forecast,
    STABLE_SLOPE_THRESHOLD,
    MIN_R2_FOR_DIRECTION,
)

# =============================================================================
# Scoring and Insight Exports
# =============================================================================

from outreach_analytics.services.scoring import (
    calculate_agent_score,
    get_performance_tier,
    score_agents,
    compute_goal_progress,
    compare_to_team,
    ACCEPTANCE_WEIGHT,
    REPLY_WEIGHT,
    VOLUME_WEIGHT,
    CONSISTENCY_WEIGHT,
)
from outreach_analytics.services.insights import (
    InsightContext,
    generate_insights,
    sort_insights,
    INSIGHT_RULES,
    generate_recommendations,
    RECOMMENDATION_RULES,
)
from outreach_analytics.services.benchmarks import (
    ACCEPTANCE_BENCHMARK,
    REPLY_BENCHMARK,
    BENCHMARK_VERSION,
    PERFORMANCE_TIERS,
    benchmark_table,
)

# =============================================================================
# Computation Pass, Ingestion and Export
# =============================================================================

from outreach_analytics.services.analytics import (
    compute_analytics,
    AnalyticsCache,
)
from outreach_analytics.services.ingestion import (
    records_from_rows,
    records_from_dataframe,
    load_records_csv,
    SHEET_COLUMNS,
)
from outreach_analytics.services.export import (
    export_rows,
    to_csv,
    export_filename,
)


__all__ = [
    # Normalizer / filters
    'normalize_number',
    'safe_percent',
    'find_coercion_failures',
    'collect_coercion_warnings',
    'NUMERIC_FIELDS',
    'filter_records',
    'record_matches',
    'distinct_values',
    # Aggregation
    'aggregate',
    'aggregate_ordered',
    'ordered_buckets',
    'calculate_rates',
    'compute_totals',
    'compute_network',
    'best_month',
    # Trend & forecast
    'linear_regression',
    'trend_direction',
    'predict_future',
    'confidence_interval',
    'forecast',
    'STABLE_SLOPE_THRESHOLD',
    'MIN_R2_FOR_DIRECTION',
    # Scoring / insights / benchmarks
    'calculate_agent_score',
    'get_performance_tier',
    'score_agents',
    'compute_goal_progress',
    'compare_to_team',
    'ACCEPTANCE_WEIGHT',
    'REPLY_WEIGHT',
    'VOLUME_WEIGHT',
    'CONSISTENCY_WEIGHT',
    'InsightContext',
    'generate_insights',
    'sort_insights',
    'INSIGHT_RULES',
    'generate_recommendations',
    'RECOMMENDATION_RULES',
    'ACCEPTANCE_BENCHMARK',
    'REPLY_BENCHMARK',
    'BENCHMARK_VERSION',
    'PERFORMANCE_TIERS',
    'benchmark_table',
    # Computation pass
    'compute_analytics',
    'AnalyticsCache',
    # Ingestion / export
    'records_from_rows',
    'records_from_dataframe',
    'load_records_csv',
    'SHEET_COLUMNS',
    'export_rows',
    'to_csv',
    'export_filename',
]
