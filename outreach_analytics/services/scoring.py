"""
Performance scoring engine.

Computes the weighted composite score used to rank agents, assigns
performance tiers from the acceptance-rate ladder, and evaluates personal
goals against a computed result.

Composite Score (0-100, rounded):
- acceptance: min(100, acceptanceRate / 50 * 100) * 0.35
- reply: min(100, replyRate / 30 * 100) * 0.30
- volume: min(100, invited / 1000 * 100) * 0.20
- consistency: min(100, weeksActive / 12 * 100) * 0.15

Tier Assignment:
Tiers are derived from the acceptance rate alone, checked from the highest
rung down; the first rung whose minimum is met wins. The composite score
ranks agents but never changes their tier.
"""

from typing import List, Optional

from outreach_analytics.models import (
    AgentScoreRecord,
    AggregationBucket,
    AnalyticsResult,
    GoalMetric,
    GoalProgress,
    PerformanceTier,
    PersonalGoal,
    TeamComparison,
)
from outreach_analytics.services.benchmarks import ACCEPTANCE_BENCHMARK, PERFORMANCE_TIERS
from outreach_analytics.services.normalizer import safe_percent


# =============================================================================
# Score Weights and Normalizers
# =============================================================================

ACCEPTANCE_WEIGHT: float = 0.35
REPLY_WEIGHT: float = 0.30
VOLUME_WEIGHT: float = 0.20
CONSISTENCY_WEIGHT: float = 0.15

# Values at which each component saturates at 100
ACCEPTANCE_TARGET: float = 50.0
REPLY_TARGET: float = 30.0
VOLUME_TARGET: float = 1000.0
CONSISTENCY_TARGET: float = 12.0


def _component(value: float, target: float) -> float:
    return min(100.0, max(0.0, value / target * 100))


def calculate_agent_score(
    acceptance_rate: float,
    reply_rate: float,
    invited_volume: float,
    weeks_active: float,
) -> int:
    """
    Weighted composite performance score.

    Args:
        acceptance_rate: Acceptance rate percentage.
        reply_rate: Reply rate percentage.
        invited_volume: Total invitations sent.
        weeks_active: Number of weekly records contributed.

    Returns:
        Integer score in [0, 100].

    Example:
        >>> calculate_agent_score(50, 30, 1000, 12)
        100
        >>> calculate_agent_score(25, 15, 500, 6)
        50
    """
    total = (
        _component(acceptance_rate, ACCEPTANCE_TARGET) * ACCEPTANCE_WEIGHT
        + _component(reply_rate, REPLY_TARGET) * REPLY_WEIGHT
        + _component(invited_volume, VOLUME_TARGET) * VOLUME_WEIGHT
        + _component(weeks_active, CONSISTENCY_TARGET) * CONSISTENCY_WEIGHT
    )
    # Half-up rounding, not banker's rounding
    return min(100, int(total + 0.5))


def get_performance_tier(acceptance_rate: float) -> PerformanceTier:
    """Highest tier whose minimum acceptance rate is met."""
    for tier in PERFORMANCE_TIERS:
        if acceptance_rate >= tier.min:
            return tier
    return PERFORMANCE_TIERS[-1]


# =============================================================================
# Agent Ranking
# =============================================================================


def score_agents(agent_buckets: List[AggregationBucket]) -> List[AgentScoreRecord]:
    """
    Score, tier and rank agent buckets.

    Args:
        agent_buckets: Buckets from aggregate(records, Dimension.AGENT).

    Returns:
        AgentScoreRecords sorted by score descending; agents with equal
        scores keep their input order.
    """
    scored = [
        AgentScoreRecord(
            agent=bucket.key,
            invited=bucket.invited,
            accepted=bucket.accepted,
            messaged=bucket.messaged,
            replies=bucket.replies,
            actions=bucket.actions,
            campaigns=bucket.campaigns,
            weeks=bucket.weeks,
            acceptanceRate=bucket.acceptanceRate,
            replyRate=bucket.replyRate,
            engagementRate=bucket.engagementRate,
            score=calculate_agent_score(
                bucket.acceptanceRate, bucket.replyRate, bucket.invited, bucket.weeks
            ),
            tier=get_performance_tier(bucket.acceptanceRate),
            vsBenchmark=bucket.acceptanceRate - ACCEPTANCE_BENCHMARK,
        )
        for bucket in agent_buckets
    ]
    return sorted(scored, key=lambda record: record.score, reverse=True)


# =============================================================================
# Goals and Team Comparison
# =============================================================================


def goal_current_value(metric: str, result: Optional[AnalyticsResult]) -> Optional[float]:
    """Value of a goal metric in a result, or None for an unknown metric."""
    if result is None:
        return 0.0
    try:
        resolved = GoalMetric(metric)
    except ValueError:
        return None
    if resolved is GoalMetric.ACCEPTANCE_RATE:
        return result.rates.acceptance
    if resolved is GoalMetric.REPLY_RATE:
        return result.rates.reply
    if resolved is GoalMetric.INVITED:
        return result.totals.invited
    return result.totals.accepted


def compute_goal_progress(
    goal: PersonalGoal,
    result: Optional[AnalyticsResult],
) -> GoalProgress:
    """
    Progress of a personal goal against a computed result.

    Args:
        goal: Goal owned by the caller.
        result: Result for the goal's agent; None counts as no activity.

    Returns:
        GoalProgress with progress capped at 100. An unknown metric or a
        non-positive target yields zero progress and is never achieved.
    """
    current = goal_current_value(goal.metric, result)
    if current is None or goal.target <= 0:
        return GoalProgress(
            goalId=goal.id,
            agentName=goal.agentName,
            metric=goal.metric,
            target=goal.target,
        )

    return GoalProgress(
        goalId=goal.id,
        agentName=goal.agentName,
        metric=goal.metric,
        target=goal.target,
        currentValue=current,
        progress=min(100.0, max(0.0, safe_percent(current, goal.target))),
        achieved=current >= goal.target,
    )


def compare_to_team(result: AnalyticsResult, team_result: AnalyticsResult) -> TeamComparison:
    """Agent acceptance and reply rates against the whole team's."""
    return TeamComparison(
        agentAcceptanceRate=result.rates.acceptance,
        agentReplyRate=result.rates.reply,
        teamAcceptanceRate=team_result.rates.acceptance,
        teamReplyRate=team_result.rates.reply,
        acceptanceDelta=result.rates.acceptance - team_result.rates.acceptance,
        replyDelta=result.rates.reply - team_result.rates.reply,
    )
