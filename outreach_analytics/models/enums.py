"""
Enumeration definitions for the outreach analytics engine.

All enums inherit from both `str` and `Enum` so they serialize as plain strings
inside Pydantic models and FastAPI responses. The values are the exact strings
the dashboard front end already renders (insight badges, tier chips, goal
metric selectors), so they must not be renamed casually.
"""

from enum import Enum


class Dimension(str, Enum):
    """
    Aggregation dimensions understood by the aggregation engine.

    - week: bucket key is the record's week-end date (YYYY-MM-DD)
    - month: bucket key is the first 7 characters of the week-end date (YYYY-MM)
    - agent / campaign / location / audience: categorical buckets keyed by
      the raw field value
    """
    WEEK = "week"
    MONTH = "month"
    AGENT = "agent"
    CAMPAIGN = "campaign"
    LOCATION = "location"
    AUDIENCE = "audience"

    @property
    def is_time(self) -> bool:
        return self in (Dimension.WEEK, Dimension.MONTH)


class TrendDirection(str, Enum):
    """Direction label attached to a fitted trend model."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class InsightType(str, Enum):
    """
    Visual category of an insight card.

    - success: performance is ahead of benchmark or improving
    - warning: something is slipping and needs attention soon
    - info: neutral observation or opportunity
    - danger: performance is materially below benchmark
    """
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    DANGER = "danger"


class InsightPriority(str, Enum):
    """
    Insight priority. Lists of insights are ordered high, medium, low.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    InsightPriority.HIGH: 0,
    InsightPriority.MEDIUM: 1,
    InsightPriority.LOW: 2,
}


class TierKey(str, Enum):
    """
    Performance tier keys, highest first.

    Tiers are assigned from the acceptance-rate ladder in
    services/benchmarks.py PERFORMANCE_TIERS.
    """
    ELITE = "elite"
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_WORK = "needsWork"


class GoalMetric(str, Enum):
    """Metrics an agent can set a personal goal against."""
    ACCEPTANCE_RATE = "acceptanceRate"
    REPLY_RATE = "replyRate"
    INVITED = "invited"
    ACCEPTED = "accepted"


class ExportTable(str, Enum):
    """Tables of an AnalyticsResult that can be exported as rows."""
    SUMMARY = "summary"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    AGENTS = "agents"
    CAMPAIGNS = "campaigns"
    LOCATIONS = "locations"
    AUDIENCES = "audiences"
