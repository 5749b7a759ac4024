"""
Industry benchmark reference table for LinkedIn outreach.

Static, versioned constants consumed by the scoring and insight engines.
These are external reference values, not derived from the user's own data,
and are never mutated at runtime.

Sources (2024-2025 research data): Belkins, Expandi, Alsona, InsureSoft,
InsightSoftware. Expandi publishes the 7.22% reply-rate average; 29.61% is
the industry-standard acceptance-rate average.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from outreach_analytics.models import PerformanceTier, TierKey


BENCHMARK_VERSION: str = "2024-2025"


# =============================================================================
# LinkedIn outreach benchmarks (percentages)
# =============================================================================

ACCEPTANCE_RATE_BENCHMARKS: Mapping[str, float] = MappingProxyType({
    "poor": 15.0,
    "average": 29.61,
    "good": 40.0,
    "excellent": 50.0,
    "elite": 60.0,
})

REPLY_RATE_BENCHMARKS: Mapping[str, float] = MappingProxyType({
    "poor": 3.0,
    "average": 7.22,
    "good": 15.0,
    "excellent": 25.0,
    "elite": 35.0,
})

# Reply rates by message strategy
PERSONALIZATION_BENCHMARKS: Mapping[str, float] = MappingProxyType({
    "noMessage": 5.44,
    "withMessage": 9.36,
    "multiTouch": 11.87,
})

BEST_OUTREACH_DAYS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "acceptance": ("Monday", "Thursday", "Wednesday"),
    "reply": ("Tuesday", "Monday", "Wednesday"),
})

# Insurance funnel reference rates, surfaced on the benchmarks tab
INSURANCE_BENCHMARKS: Mapping[str, Mapping[str, float]] = MappingProxyType({
    "quoteToBindRate": MappingProxyType({"poor": 10.0, "average": 25.0, "good": 35.0, "excellent": 45.0}),
    "contactRate": MappingProxyType({"poor": 20.0, "average": 40.0, "good": 55.0, "excellent": 70.0}),
    "customerRetention": MappingProxyType({"poor": 70.0, "average": 80.0, "good": 88.0, "excellent": 95.0}),
    "leadConversion": MappingProxyType({"basic": 7.2, "withLeadScoring": 12.8}),
})

ACCEPTANCE_BENCHMARK: float = ACCEPTANCE_RATE_BENCHMARKS["average"]
REPLY_BENCHMARK: float = REPLY_RATE_BENCHMARKS["average"]


# =============================================================================
# Performance tier ladder (acceptance rate, highest first)
# =============================================================================

PERFORMANCE_TIERS: Tuple[PerformanceTier, ...] = (
    PerformanceTier(key=TierKey.ELITE, label="Elite", min=50.0, color="#8B5CF6"),
    PerformanceTier(key=TierKey.EXCELLENT, label="Excellent", min=40.0, color="#10B981"),
    PerformanceTier(key=TierKey.GOOD, label="Above Benchmark", min=ACCEPTANCE_BENCHMARK, color="#13BCC5"),
    PerformanceTier(key=TierKey.AVERAGE, label="Average", min=20.0, color="#F59E0B"),
    PerformanceTier(key=TierKey.NEEDS_WORK, label="Needs Improvement", min=0.0, color="#EF4444"),
)


def personalization_lift() -> float:
    """Relative reply-rate lift of a personalized message, in percent."""
    return (
        PERSONALIZATION_BENCHMARKS["withMessage"] / PERSONALIZATION_BENCHMARKS["noMessage"] - 1
    ) * 100


def benchmark_table() -> dict:
    """Plain-dict snapshot of the benchmark table for API responses."""
    return {
        "version": BENCHMARK_VERSION,
        "linkedin": {
            "acceptanceRate": dict(ACCEPTANCE_RATE_BENCHMARKS),
            "replyRate": dict(REPLY_RATE_BENCHMARKS),
            "personalization": dict(PERSONALIZATION_BENCHMARKS),
            "bestDays": {k: list(v) for k, v in BEST_OUTREACH_DAYS.items()},
        },
        "insurance": {k: dict(v) for k, v in INSURANCE_BENCHMARKS.items()},
        "performanceTiers": [tier.model_dump(mode="json") for tier in PERFORMANCE_TIERS],
    }
