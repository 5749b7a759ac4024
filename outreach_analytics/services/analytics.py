"""
Computation pass and result cache.

compute_analytics() runs the full pipeline over a record collection:

    filter -> normalize/aggregate -> totals & network -> trends & forecasts
           -> agent scoring -> insights & recommendations -> AnalyticsResult

It is a pure function of (records, filters, settings). AnalyticsCache
memoizes results for one record collection at a time and drops them when the
collection is replaced.
"""

import logging
import threading
from collections import OrderedDict
from typing import Hashable, List, Optional, Tuple

from outreach_analytics.core.config import Settings, get_settings
from outreach_analytics.models import (
    AnalyticsFilters,
    AnalyticsResult,
    BenchmarkComparison,
    Dimension,
    ForecastSet,
    IntervalSet,
    RawMetricRecord,
    TrendSet,
)
from outreach_analytics.services.aggregation import (
    aggregate,
    aggregate_ordered,
    best_month,
    compute_network,
    compute_totals,
)
from outreach_analytics.services.benchmarks import ACCEPTANCE_BENCHMARK, REPLY_BENCHMARK
from outreach_analytics.services.filters import filter_records
from outreach_analytics.services.forecasting import (
    confidence_interval,
    forecast,
    linear_regression,
)
from outreach_analytics.services.insights import (
    InsightContext,
    generate_insights,
    generate_recommendations,
)
from outreach_analytics.services.normalizer import collect_coercion_warnings
from outreach_analytics.services.scoring import get_performance_tier, score_agents


logger = logging.getLogger(__name__)


def compute_analytics(
    records: List[RawMetricRecord],
    filters: Optional[AnalyticsFilters] = None,
    settings: Optional[Settings] = None,
) -> Optional[AnalyticsResult]:
    """
    Run one complete computation pass.

    Args:
        records: Full record collection in source order.
        filters: Filter parameters (default: no filtering).
        settings: Forecast and trend configuration (default: get_settings()).

    Returns:
        AnalyticsResult, or None when no record survives filtering.

    Example:
        >>> result = compute_analytics(records, AnalyticsFilters(agents=["Dana"]))
        >>> result.rates.acceptance
        32.0
    """
    settings = settings or get_settings()
    filtered = filter_records(records, filters)
    if not filtered:
        return None

    totals, rates = compute_totals(filtered)
    weekly = aggregate_ordered(filtered, Dimension.WEEK)
    monthly = aggregate_ordered(filtered, Dimension.MONTH)
    campaigns = aggregate_ordered(filtered, Dimension.CAMPAIGN)
    locations = aggregate_ordered(filtered, Dimension.LOCATION)
    audiences = aggregate_ordered(filtered, Dimension.AUDIENCE)
    agents = score_agents(list(aggregate(filtered, Dimension.AGENT).values()))

    acceptance_series = [bucket.acceptanceRate for bucket in weekly]
    reply_series = [bucket.replyRate for bucket in weekly]
    volume_series = [bucket.invited for bucket in weekly]
    accepted_series = [bucket.accepted for bucket in weekly]
    net_new_series = [bucket.netNew for bucket in weekly]

    fit_options = {
        'stable_slope': settings.trend_stable_slope,
        'min_r2': settings.trend_min_r2,
    }
    trends = TrendSet(
        acceptance=linear_regression(acceptance_series, **fit_options),
        reply=linear_regression(reply_series, **fit_options),
        invited=linear_regression(volume_series, **fit_options),
    )

    periods, confidence = settings.forecast_periods, settings.confidence_level
    forecasts = ForecastSet(
        acceptance=forecast(acceptance_series, periods, confidence, trends.acceptance),
        reply=forecast(reply_series, periods, confidence, trends.reply),
        volume=forecast(volume_series, periods, confidence, trends.invited),
        accepted=forecast(accepted_series, periods, confidence),
        netNew=forecast(net_new_series, periods, confidence),
    )
    intervals = IntervalSet(
        acceptance=confidence_interval(acceptance_series, confidence),
        reply=confidence_interval(reply_series, confidence),
    )

    insight_context = InsightContext(
        acceptance_rate=rates.acceptance,
        reply_rate=rates.reply,
        acceptance_trend=trends.acceptance,
        agents=agents,
        campaigns=campaigns,
        audiences=audiences,
        locations=locations,
        volume_trend=trends.invited,
    )

    warnings = collect_coercion_warnings(filtered)
    if warnings:
        logger.info(f"{len(warnings)} numeric fields could not be parsed and were read as 0")

    return AnalyticsResult(
        recordCount=len(filtered),
        totals=totals,
        rates=rates,
        network=compute_network(filtered),
        benchmarkComparison=BenchmarkComparison(
            acceptanceBenchmark=ACCEPTANCE_BENCHMARK,
            replyBenchmark=REPLY_BENCHMARK,
            acceptanceVsBenchmark=rates.acceptance - ACCEPTANCE_BENCHMARK,
            replyVsBenchmark=rates.reply - REPLY_BENCHMARK,
        ),
        performanceTier=get_performance_tier(rates.acceptance),
        weeklyTrends=weekly,
        monthlyTrends=monthly,
        bestMonth=best_month(monthly),
        agentPerformance=agents,
        campaignPerformance=campaigns,
        locationPerformance=locations,
        audiencePerformance=audiences,
        trends=trends,
        forecasts=forecasts,
        confidenceIntervals=intervals,
        insights=generate_insights(insight_context),
        recommendations=generate_recommendations(insight_context),
        coercionWarnings=warnings,
    )


# =============================================================================
# Result Cache
# =============================================================================


class AnalyticsCache:
    """
    LRU memo of AnalyticsResults for a single record collection.

    Results are keyed by the filters' cache_key(). Binding a different
    collection (by identity), replace_records() or invalidate() discards
    every cached result. Safe to share between request threads.

    Example:
        cache = AnalyticsCache(records, max_size=32)
        first = cache.get_or_compute(filters)
        assert cache.get_or_compute(filters) is first
    """

    def __init__(
        self,
        records: Optional[List[RawMetricRecord]] = None,
        max_size: int = 32,
        settings: Optional[Settings] = None,
    ):
        self._records: List[RawMetricRecord] = records if records is not None else []
        self._max_size = max(1, max_size)
        self._settings = settings
        self._results: "OrderedDict[Tuple[int, Hashable], Optional[AnalyticsResult]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def records(self) -> List[RawMetricRecord]:
        return self._records

    def __len__(self) -> int:
        return len(self._results)

    def replace_records(self, records: List[RawMetricRecord]) -> None:
        """Bind a new record collection and drop all cached results."""
        with self._lock:
            self._records = records
            self._results.clear()
        logger.info(f"Analytics cache bound to {len(records)} records")

    def invalidate(self) -> None:
        with self._lock:
            self._results.clear()

    def get_or_compute(
        self,
        filters: Optional[AnalyticsFilters] = None,
        records: Optional[List[RawMetricRecord]] = None,
    ) -> Optional[AnalyticsResult]:
        """
        Cached compute_analytics() for the bound collection.

        Args:
            filters: Filter parameters (default: no filtering).
            records: When given and not the bound collection, it is bound
                first, which invalidates the cache.

        Returns:
            The cached or freshly computed result (None when nothing matches).
        """
        if records is not None and records is not self._records:
            self.replace_records(records)

        filters = filters or AnalyticsFilters()
        filters_key = filters.cache_key()

        with self._lock:
            records_snapshot = self._records
            key = (id(records_snapshot), filters_key)
            if key in self._results:
                self._results.move_to_end(key)
                self.hits += 1
                logger.debug(f"Analytics cache hit for {filters_key}")
                return self._results[key]

        result = compute_analytics(records_snapshot, filters, self._settings)

        with self._lock:
            self.misses += 1
            # Collection swapped while computing: do not store a stale result
            if records_snapshot is self._records:
                self._results[key] = result
                self._results.move_to_end(key)
                while len(self._results) > self._max_size:
                    self._results.popitem(last=False)
        return result
