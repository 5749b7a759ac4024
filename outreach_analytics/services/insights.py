"""
Insight engine: prioritized, human-readable findings for the dashboard.

Insights are produced by an ordered table of rule functions. Each rule
receives the same InsightContext and returns one Insight or None. The
collected insights are then sorted by priority (high, medium, low), keeping
rule order within a priority.

Rules (in evaluation order):
1. Acceptance vs benchmark: >= 1.3x is a success, < 0.7x is a danger
2. Acceptance trend: a strong fit (r2 > 0.5) rising or falling > 0.5/week
3. Agent performance gap: > 15 points between first and last ranked agent
4. Top performing audience with at least 100 invitations
5. Top campaign
6. Reply rate below benchmark
7. Personalization opportunity (always emitted)

Recommendations are plain action strings from a second, shorter table:
acceptance below 20%, reply below 5%, a declining invitation trend, any
agent scoring under 40 and a single named location. They keep rule order.

Insights are regenerated on every computation pass and never persisted.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

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
from outreach_analytics.services.benchmarks import (
    ACCEPTANCE_BENCHMARK,
    PERSONALIZATION_BENCHMARKS,
    REPLY_BENCHMARK,
    personalization_lift,
)


# =============================================================================
# Rule Thresholds
# =============================================================================

EXCEPTIONAL_ACCEPTANCE_RATIO: float = 1.3
LOW_ACCEPTANCE_RATIO: float = 0.7
TREND_SLOPE_THRESHOLD: float = 0.5
TREND_R2_THRESHOLD: float = 0.5
AGENT_GAP_THRESHOLD: float = 15.0
AUDIENCE_MIN_INVITES: float = 100.0

# Recommendation thresholds
TARGETING_ACCEPTANCE_THRESHOLD: float = 20.0
TEMPLATE_REPLY_THRESHOLD: float = 5.0
TRAINING_SCORE_THRESHOLD: int = 40


@dataclass(frozen=True)
class InsightContext:
    """
    Inputs shared by every insight rule.

    Performance lists must already be in consumer order: agents by score,
    campaigns and audiences by acceptance rate.
    """
    acceptance_rate: float
    reply_rate: float
    acceptance_trend: TrendModel
    agents: List[AgentScoreRecord] = field(default_factory=list)
    campaigns: List[AggregationBucket] = field(default_factory=list)
    audiences: List[AggregationBucket] = field(default_factory=list)
    locations: List[AggregationBucket] = field(default_factory=list)
    volume_trend: TrendModel = field(default_factory=TrendModel)
    acceptance_benchmark: float = ACCEPTANCE_BENCHMARK
    reply_benchmark: float = REPLY_BENCHMARK


InsightRule = Callable[[InsightContext], Optional[Insight]]


# =============================================================================
# Rules
# =============================================================================


def acceptance_benchmark_rule(ctx: InsightContext) -> Optional[Insight]:
    rate, benchmark = ctx.acceptance_rate, ctx.acceptance_benchmark
    if rate >= benchmark * EXCEPTIONAL_ACCEPTANCE_RATIO:
        return Insight(
            type=InsightType.SUCCESS,
            title="Exceptional Acceptance Rate",
            description=(
                f"Your acceptance rate of {rate:.1f}% is "
                f"{(rate / benchmark - 1) * 100:.0f}% above the industry benchmark of {benchmark}%."
            ),
            action="Scale up outreach volume while maintaining quality.",
            metric=f"+{rate - benchmark:.1f}% vs benchmark",
            priority=InsightPriority.MEDIUM,
        )
    if rate < benchmark * LOW_ACCEPTANCE_RATIO:
        return Insight(
            type=InsightType.DANGER,
            title="Acceptance Rate Below Benchmark",
            description=(
                f"Your acceptance rate of {rate:.1f}% is "
                f"{(1 - rate / benchmark) * 100:.0f}% below the industry benchmark."
            ),
            action=(
                "Review targeting criteria and connection request messaging. "
                "Consider adding personalization."
            ),
            metric=f"{rate - benchmark:.1f}% vs benchmark",
            priority=InsightPriority.HIGH,
        )
    return None


def acceptance_trend_rule(ctx: InsightContext) -> Optional[Insight]:
    trend = ctx.acceptance_trend
    if trend.r2 <= TREND_R2_THRESHOLD:
        return None
    if trend.slope > TREND_SLOPE_THRESHOLD:
        return Insight(
            type=InsightType.SUCCESS,
            title="Positive Trend Detected",
            description=f"Acceptance rate is trending upward with {trend.r2 * 100:.0f}% confidence.",
            action="Continue current strategy - it's working.",
            metric=f"+{trend.slope:.2f}% per week",
            priority=InsightPriority.LOW,
        )
    if trend.slope < -TREND_SLOPE_THRESHOLD:
        return Insight(
            type=InsightType.WARNING,
            title="Declining Performance Trend",
            description=f"Acceptance rate is declining by {abs(trend.slope):.2f}% per week.",
            action="Audit recent campaigns and messaging. Test new approaches.",
            metric=f"{trend.slope:.2f}% per week",
            priority=InsightPriority.HIGH,
        )
    return None


def agent_gap_rule(ctx: InsightContext) -> Optional[Insight]:
    if len(ctx.agents) <= 1:
        return None
    top, bottom = ctx.agents[0], ctx.agents[-1]
    gap = top.acceptanceRate - bottom.acceptanceRate
    if gap <= AGENT_GAP_THRESHOLD:
        return None
    return Insight(
        type=InsightType.INFO,
        title="Agent Performance Gap",
        description=(
            f"{gap:.0f}% acceptance rate gap between top ({top.agent}) and bottom performers."
        ),
        action=f"Have {top.agent} share best practices with the team. Consider peer mentoring.",
        metric=f"{top.acceptanceRate:.1f}% vs {bottom.acceptanceRate:.1f}%",
        priority=InsightPriority.MEDIUM,
    )


def top_audience_rule(ctx: InsightContext) -> Optional[Insight]:
    if not ctx.audiences:
        return None
    top = ctx.audiences[0]
    if top.invited < AUDIENCE_MIN_INVITES:
        return None
    return Insight(
        type=InsightType.INFO,
        title="Top Performing Audience",
        description=f'"{top.key}" has the highest acceptance rate at {top.acceptanceRate:.1f}%.',
        action="Increase targeting of this audience segment.",
        metric=f"{top.acceptanceRate:.1f}% acceptance",
        priority=InsightPriority.MEDIUM,
    )


def top_campaign_rule(ctx: InsightContext) -> Optional[Insight]:
    if not ctx.campaigns:
        return None
    top = ctx.campaigns[0]
    return Insight(
        type=InsightType.SUCCESS,
        title="Top Campaign",
        description=f'"{top.key}" leads with {top.acceptanceRate:.1f}% acceptance rate.',
        action="Analyze what makes this campaign successful and replicate.",
        metric=f"{top.acceptanceRate:.1f}% acceptance",
        priority=InsightPriority.LOW,
    )


def reply_rate_rule(ctx: InsightContext) -> Optional[Insight]:
    if ctx.reply_rate >= ctx.reply_benchmark:
        return None
    return Insight(
        type=InsightType.WARNING,
        title="Reply Rate Optimization Needed",
        description=(
            f"Reply rate of {ctx.reply_rate:.1f}% is below the {ctx.reply_benchmark}% benchmark."
        ),
        action=(
            "Implement multi-touch follow-up sequences. "
            "Research shows follow-ups increase reply rates by 50%+."
        ),
        metric=f"{ctx.reply_rate - ctx.reply_benchmark:.1f}% vs benchmark",
        priority=InsightPriority.HIGH,
    )


def personalization_rule(ctx: InsightContext) -> Optional[Insight]:
    return Insight(
        type=InsightType.INFO,
        title="Personalization Opportunity",
        description=(
            f"Industry data shows personalized messages get "
            f"{PERSONALIZATION_BENCHMARKS['withMessage']}% reply rate vs "
            f"{PERSONALIZATION_BENCHMARKS['noMessage']}% without."
        ),
        action=(
            "Add at least one personalized element per message. "
            "Multiple personalization points can reach 15-25% response rates."
        ),
        metric=f"+{personalization_lift():.0f}% lift",
        priority=InsightPriority.MEDIUM,
    )


INSIGHT_RULES: List[InsightRule] = [
    acceptance_benchmark_rule,
    acceptance_trend_rule,
    agent_gap_rule,
    top_audience_rule,
    top_campaign_rule,
    reply_rate_rule,
    personalization_rule,
]


# =============================================================================
# Generation
# =============================================================================


def sort_insights(insights: List[Insight]) -> List[Insight]:
    """Stable sort by priority: high, medium, low."""
    return sorted(insights, key=lambda insight: insight.priority.rank)


def generate_insights(
    ctx: InsightContext,
    rules: Optional[List[InsightRule]] = None,
) -> List[Insight]:
    """
    Evaluate the rule table and return priority-ordered insights.

    Args:
        ctx: Shared rule inputs.
        rules: Rule table override (default: INSIGHT_RULES).

    Returns:
        Insights sorted by priority. The personalization insight is always
        present with the default rules.
    """
    produced = []
    for rule in rules if rules is not None else INSIGHT_RULES:
        insight = rule(ctx)
        if insight is not None:
            produced.append(insight)
    return sort_insights(produced)


# =============================================================================
# Recommendations
# =============================================================================

RecommendationRule = Callable[[InsightContext], Optional[str]]


def targeting_recommendation(ctx: InsightContext) -> Optional[str]:
    if ctx.acceptance_rate < TARGETING_ACCEPTANCE_THRESHOLD:
        return "Focus on more targeted audience selection to improve acceptance rates."
    return None


def template_recommendation(ctx: InsightContext) -> Optional[str]:
    if ctx.reply_rate < TEMPLATE_REPLY_THRESHOLD:
        return "Test personalized message templates to boost engagement."
    return None


def volume_recommendation(ctx: InsightContext) -> Optional[str]:
    if ctx.volume_trend.direction == TrendDirection.DOWN:
        return "Increase weekly outreach volume to maintain pipeline growth."
    return None


def training_recommendation(ctx: InsightContext) -> Optional[str]:
    if any(agent.score < TRAINING_SCORE_THRESHOLD for agent in ctx.agents):
        return "Provide additional training to underperforming agents."
    return None


def market_recommendation(ctx: InsightContext) -> Optional[str]:
    # Records without a location are bucketed as UNKNOWN_KEY; they are not a market
    named = [bucket for bucket in ctx.locations if bucket.key != UNKNOWN_KEY]
    if len(named) == 1:
        return "Consider expanding to additional geographic markets."
    return None


RECOMMENDATION_RULES: List[RecommendationRule] = [
    targeting_recommendation,
    template_recommendation,
    volume_recommendation,
    training_recommendation,
    market_recommendation,
]


def generate_recommendations(
    ctx: InsightContext,
    rules: Optional[List[RecommendationRule]] = None,
) -> List[str]:
    """Action strings from the recommendation table, in rule order."""
    recommendations = []
    for rule in rules if rules is not None else RECOMMENDATION_RULES:
        text = rule(ctx)
        if text is not None:
            recommendations.append(text)
    return recommendations
