"""
Test suite for the rule-based insight engine.

Each rule is exercised on its own with a minimal InsightContext, then the
full table is checked for priority ordering. The recommendation table is
covered the same way.
"""

from typing import List

import pytest

from outreach_analytics.models import (
    AgentScoreRecord,
    AggregationBucket,
    Insight,
    InsightPriority,
    InsightType,
    TrendDirection,
    TrendModel,
)
from outreach_analytics.services.aggregation import UNKNOWN_KEY
from outreach_analytics.services.insights import (
    InsightContext,
    acceptance_benchmark_rule,
    acceptance_trend_rule,
    agent_gap_rule,
    generate_insights,
    generate_recommendations,
    market_recommendation,
    personalization_rule,
    reply_rate_rule,
    sort_insights,
    template_recommendation,
    top_audience_rule,
    top_campaign_rule,
    volume_recommendation,
)
from outreach_analytics.services.scoring import get_performance_tier


# =============================================================================
# FIXTURES
# =============================================================================


def _context(**overrides) -> InsightContext:
    """Neutral context: at benchmark, flat trend, no dimension data."""
    values = {
        'acceptance_rate': 29.61,
        'reply_rate': 7.22,
        'acceptance_trend': TrendModel(),
    }
    values.update(overrides)
    return InsightContext(**values)


def _agent(name: str, rate: float, score: int) -> AgentScoreRecord:
    return AgentScoreRecord(
        agent=name,
        acceptanceRate=rate,
        score=score,
        tier=get_performance_tier(rate),
        vsBenchmark=rate - 29.61,
    )


def _insight(priority: InsightPriority, title: str) -> Insight:
    return Insight(type=InsightType.INFO, title=title, description="", priority=priority)


# =============================================================================
# TEST CLASS: INDIVIDUAL RULES
# =============================================================================


class TestBenchmarkRule:
    def test_exceptional_acceptance(self) -> None:
        insight = acceptance_benchmark_rule(_context(acceptance_rate=40.0))

        assert insight.type == InsightType.SUCCESS
        assert insight.title == "Exceptional Acceptance Rate"
        assert insight.priority == InsightPriority.MEDIUM
        assert insight.metric == "+10.4% vs benchmark"

    def test_low_acceptance(self) -> None:
        insight = acceptance_benchmark_rule(_context(acceptance_rate=10.0))

        assert insight.type == InsightType.DANGER
        assert insight.priority == InsightPriority.HIGH
        assert insight.metric == "-19.6% vs benchmark"

    def test_near_benchmark_is_silent(self) -> None:
        assert acceptance_benchmark_rule(_context(acceptance_rate=30.0)) is None


class TestTrendRule:
    def test_positive_trend(self) -> None:
        ctx = _context(acceptance_trend=TrendModel(slope=2.0, r2=0.9))

        insight = acceptance_trend_rule(ctx)

        assert insight.title == "Positive Trend Detected"
        assert insight.description == "Acceptance rate is trending upward with 90% confidence."
        assert insight.metric == "+2.00% per week"
        assert insight.priority == InsightPriority.LOW

    def test_declining_trend(self) -> None:
        insight = acceptance_trend_rule(_context(acceptance_trend=TrendModel(slope=-1.5, r2=0.8)))

        assert insight.title == "Declining Performance Trend"
        assert insight.type == InsightType.WARNING
        assert insight.priority == InsightPriority.HIGH

    def test_weak_fit_is_silent(self) -> None:
        assert acceptance_trend_rule(_context(acceptance_trend=TrendModel(slope=3.0, r2=0.5))) is None


class TestAgentGapRule:
    def test_gap_between_first_and_last(self) -> None:
        agents = [_agent("Dana", 40.0, 61), _agent("Kim", 30.0, 40), _agent("Lee", 7.0, 25)]

        insight = agent_gap_rule(_context(agents=agents))

        assert insight.title == "Agent Performance Gap"
        assert "Dana" in insight.action
        assert insight.metric == "40.0% vs 7.0%"

    def test_single_agent_is_silent(self) -> None:
        assert agent_gap_rule(_context(agents=[_agent("Dana", 40.0, 61)])) is None

    def test_small_gap_is_silent(self) -> None:
        agents = [_agent("Dana", 40.0, 61), _agent("Lee", 30.0, 50)]
        assert agent_gap_rule(_context(agents=agents)) is None


class TestDimensionRules:
    def test_top_audience_needs_volume(self) -> None:
        small = AggregationBucket(key="Carriers", invited=99, acceptanceRate=60.0)
        enough = AggregationBucket(key="Carriers", invited=100, acceptanceRate=60.0)

        assert top_audience_rule(_context(audiences=[small])) is None
        insight = top_audience_rule(_context(audiences=[enough]))
        assert insight.description == '"Carriers" has the highest acceptance rate at 60.0%.'

    def test_top_campaign(self) -> None:
        campaign = AggregationBucket(key="Q1 Brokers", invited=10, acceptanceRate=33.3)

        insight = top_campaign_rule(_context(campaigns=[campaign]))

        assert insight.type == InsightType.SUCCESS
        assert insight.priority == InsightPriority.LOW

    def test_no_campaigns(self) -> None:
        assert top_campaign_rule(_context()) is None


class TestReplyAndPersonalizationRules:
    def test_reply_below_benchmark(self) -> None:
        insight = reply_rate_rule(_context(reply_rate=4.1))

        assert insight.title == "Reply Rate Optimization Needed"
        assert insight.metric == "-3.1% vs benchmark"

    def test_reply_at_benchmark_is_silent(self) -> None:
        assert reply_rate_rule(_context(reply_rate=7.22)) is None

    def test_personalization_always_present(self) -> None:
        insight = personalization_rule(_context())

        assert insight.metric == "+72% lift"
        assert "9.36%" in insight.description


# =============================================================================
# TEST CLASS: GENERATION AND ORDERING
# =============================================================================


class TestGenerateInsights:
    def test_priority_order(self) -> None:
        insights: List[Insight] = [
            _insight(InsightPriority.LOW, "low"),
            _insight(InsightPriority.HIGH, "high"),
            _insight(InsightPriority.MEDIUM, "medium"),
        ]

        assert [i.title for i in sort_insights(insights)] == ["high", "medium", "low"]

    def test_sort_is_stable(self) -> None:
        insights = [
            _insight(InsightPriority.MEDIUM, "first"),
            _insight(InsightPriority.HIGH, "urgent"),
            _insight(InsightPriority.MEDIUM, "second"),
        ]

        assert [i.title for i in sort_insights(insights)] == ["urgent", "first", "second"]

    def test_neutral_context_only_personalization(self) -> None:
        insights = generate_insights(_context())

        assert [i.title for i in insights] == ["Personalization Opportunity"]

    def test_full_table_is_priority_sorted(self) -> None:
        ctx = _context(
            acceptance_rate=10.0,
            reply_rate=2.0,
            acceptance_trend=TrendModel(slope=2.0, r2=0.9),
            campaigns=[AggregationBucket(key="X", invited=10, acceptanceRate=12.0)],
        )

        insights = generate_insights(ctx)

        ranks = [i.priority.rank for i in insights]
        assert ranks == sorted(ranks)
        assert [i.title for i in insights] == [
            "Acceptance Rate Below Benchmark",
            "Reply Rate Optimization Needed",
            "Personalization Opportunity",
            "Positive Trend Detected",
            "Top Campaign",
        ]

    def test_custom_rule_table(self) -> None:
        insights = generate_insights(_context(), rules=[reply_rate_rule])

        assert insights == []


@pytest.mark.parity
class TestInsightTextParity:
    """Wording shown by the existing dashboard."""

    def test_low_acceptance_description(self) -> None:
        insight = acceptance_benchmark_rule(_context(acceptance_rate=14.8))

        assert insight.description == (
            "Your acceptance rate of 14.8% is 50% below the industry benchmark."
        )
        assert insight.action == (
            "Review targeting criteria and connection request messaging. "
            "Consider adding personalization."
        )


# =============================================================================
# TEST CLASS: RECOMMENDATIONS
# =============================================================================


class TestRecommendations:
    def test_neutral_context_has_none(self) -> None:
        assert generate_recommendations(_context()) == []

    def test_every_rule_in_order(self) -> None:
        ctx = _context(
            acceptance_rate=12.0,
            reply_rate=3.0,
            volume_trend=TrendModel(slope=-40.0, r2=0.9, direction=TrendDirection.DOWN),
            agents=[_agent("Dana", 12.0, 35)],
            locations=[AggregationBucket(key="Texas", invited=500)],
        )

        assert generate_recommendations(ctx) == [
            "Focus on more targeted audience selection to improve acceptance rates.",
            "Test personalized message templates to boost engagement.",
            "Increase weekly outreach volume to maintain pipeline growth.",
            "Provide additional training to underperforming agents.",
            "Consider expanding to additional geographic markets.",
        ]

    def test_thresholds_are_strict(self) -> None:
        ctx = _context(acceptance_rate=20.0, reply_rate=5.0, agents=[_agent("Dana", 20.0, 40)])

        assert generate_recommendations(ctx) == []

    def test_unknown_location_is_not_a_market(self) -> None:
        one_market = [AggregationBucket(key="Texas"), AggregationBucket(key=UNKNOWN_KEY)]
        two_markets = [AggregationBucket(key="Texas"), AggregationBucket(key="Ohio")]

        assert market_recommendation(_context(locations=one_market)) is not None
        assert market_recommendation(_context(locations=two_markets)) is None
        assert market_recommendation(_context()) is None

    def test_stable_volume_is_silent(self) -> None:
        ctx = _context(volume_trend=TrendModel(slope=-40.0, r2=0.1, direction=TrendDirection.STABLE))

        assert volume_recommendation(ctx) is None

    def test_custom_rule_table(self) -> None:
        ctx = _context(acceptance_rate=12.0, reply_rate=3.0)

        assert generate_recommendations(ctx, rules=[template_recommendation]) == [
            "Test personalized message templates to boost engagement.",
        ]
