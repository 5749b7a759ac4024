"""
Pydantic models for the outreach analytics engine and its HTTP API.

This module defines the typed data contract between the engine and its
collaborators:
- RawMetricRecord: one weekly outreach row as received from the spreadsheet
- AnalyticsFilters / DateRange: filter parameters chosen in the dashboard
- AggregationBucket, TrendModel, ForecastPoint, AgentScoreRecord, Insight:
  intermediate and per-dimension outputs
- AnalyticsResult: the complete output of one computation pass
- PersonalGoal / GoalProgress: externally owned goals and their progress
- Request/response envelopes for the FastAPI router

Field names are camelCase because the dashboard front end consumes these
objects directly as JSON. All rates are percentages in the 0-100 range.

All models use Pydantic v2 syntax.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict

from outreach_analytics.models.enums import (
    ExportTable,
    InsightPriority,
    InsightType,
    TierKey,
    TrendDirection,
)


# =============================================================================
# Input Models
# =============================================================================


class RawMetricRecord(BaseModel):
    """
    One weekly outreach observation as read from the metrics sheet.

    Every field is free-form text and may be missing, empty, or contain
    '%' and ',' characters. Numeric interpretation happens exclusively in
    services/normalizer.py. The model is frozen: records are owned by the
    external store and only referenced during a computation pass.
    """
    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        json_schema_extra={
            "example": {
                "id": "metric-0",
                "rowIndex": 2,
                "status": "Active",
                "campaign": "Q1 Brokers",
                "audience": "Independent agents",
                "agent": "Dana",
                "weekEnd": "2025-01-10",
                "location": "Texas",
                "totalInvited": "1,200",
                "totalAccepted": "384",
                "totalMessaged": "300",
                "replies": "27",
                "acceptanceRate": "32%",
            }
        }
    )

    id: Optional[str] = Field(default=None, description="Row identifier (metric-N)")
    rowIndex: Optional[int] = Field(default=None, description="1-based sheet row number")

    # Identity / status fields
    status: Optional[str] = None
    campaign: Optional[str] = None
    message: Optional[str] = None
    audience: Optional[str] = None
    agent: Optional[str] = None
    location: Optional[str] = None
    queue: Optional[str] = None
    algoType: Optional[str] = None
    defyLead: Optional[str] = None
    target: Optional[str] = None
    weekEnd: Optional[str] = Field(default=None, description="Week-end date, YYYY-MM-DD")

    # Numeric-text fields
    acceptanceRate: Optional[str] = None
    replies: Optional[str] = None
    replyPercent: Optional[str] = None
    totalInvited: Optional[str] = None
    totalAccepted: Optional[str] = None
    netNewConnects: Optional[str] = None
    startingConnects: Optional[str] = None
    endingConnections: Optional[str] = None
    totalMessaged: Optional[str] = None
    totalActions: Optional[str] = None


class DateRange(BaseModel):
    """
    Inclusive week-end date bounds. Either side may be omitted.

    Dates are ISO strings; comparison against RawMetricRecord.weekEnd is
    lexicographic, which is correct for YYYY-MM-DD values.
    """
    model_config = ConfigDict(frozen=True)

    start: Optional[str] = Field(default=None, description="Inclusive lower bound (YYYY-MM-DD)")
    end: Optional[str] = Field(default=None, description="Inclusive upper bound (YYYY-MM-DD)")

    @property
    def is_active(self) -> bool:
        return bool(self.start) or bool(self.end)

    @classmethod
    def trailing(cls, days: int, as_of: Optional[date] = None) -> "DateRange":
        """
        Build the "last N days" preset used by the dashboard (7d / 30d / 90d).

        Args:
            days: Number of days to look back from as_of.
            as_of: Reference date (default: today).

        Returns:
            DateRange with only a start bound.
        """
        as_of = as_of or date.today()
        return cls(start=(as_of - timedelta(days=days)).isoformat())


class AnalyticsFilters(BaseModel):
    """
    Filter parameters for one computation pass.

    Empty selections mean "no restriction". All supplied criteria are
    combined with AND.
    """
    model_config = ConfigDict(frozen=True)

    dateRange: DateRange = Field(default_factory=DateRange)
    campaigns: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    agents: List[str] = Field(default_factory=list)

    def cache_key(self) -> Tuple:
        """Hashable, order-insensitive identity of these filters."""
        return (
            self.dateRange.start or None,
            self.dateRange.end or None,
            frozenset(self.campaigns),
            frozenset(self.locations),
            frozenset(self.agents),
        )


# =============================================================================
# Aggregation Models
# =============================================================================


class AggregationBucket(BaseModel):
    """
    Summed counters and derived rates for one dimension value.

    Rates are computed once all sums are final and are 0 when their
    denominator is 0.
    """
    key: str = Field(..., description="Week, month, agent, campaign, location or audience")
    invited: float = 0.0
    accepted: float = 0.0
    messaged: float = 0.0
    replies: float = 0.0
    netNew: float = 0.0
    actions: float = 0.0
    weeks: int = Field(default=0, ge=0, description="Number of contributing records")
    campaigns: int = Field(default=0, ge=0, description="Distinct campaigns (agent buckets)")
    agents: int = Field(default=0, ge=0, description="Distinct agents (campaign buckets)")
    latestNetwork: float = Field(default=0.0, description="Largest ending connection count seen")
    acceptanceRate: float = Field(default=0.0, description="accepted / invited * 100")
    replyRate: float = Field(default=0.0, description="replies / messaged * 100")
    engagementRate: float = Field(default=0.0, description="replies / accepted * 100")


class Totals(BaseModel):
    """Overall counters for the filtered record set."""
    invited: float = 0.0
    accepted: float = 0.0
    messaged: float = 0.0
    replies: float = 0.0
    actions: float = 0.0
    netNew: float = 0.0


class Rates(BaseModel):
    """Overall derived rates (percentages)."""
    acceptance: float = 0.0
    reply: float = 0.0
    engagement: float = 0.0
    action: float = 0.0
    avgInvitesPerWeek: float = 0.0


class NetworkSummary(BaseModel):
    """Connection network size and growth over the filtered window."""
    startingConnects: float = 0.0
    endingConnects: float = 0.0
    networkSize: float = Field(default=0.0, description="Sum of each agent's latest ending connections")
    growth: float = Field(default=0.0, description="(ending - starting) / starting * 100")


# =============================================================================
# Trend & Forecast Models
# =============================================================================


class TrendModel(BaseModel):
    """Ordinary-least-squares fit of a series against its index."""
    slope: float = 0.0
    intercept: float = 0.0
    r2: float = 0.0
    direction: TrendDirection = TrendDirection.STABLE


class ConfidenceInterval(BaseModel):
    """Interval around the historical mean; describes history, not forecasts."""
    lower: float = 0.0
    upper: float = 0.0
    mean: float = 0.0


class ForecastPoint(BaseModel):
    """One extrapolated future period."""
    period: int = Field(..., ge=1, description="1-based number of periods after the last observation")
    predictedValue: float = Field(..., ge=0.0)
    lowerBound: float = Field(..., ge=0.0)
    upperBound: float = Field(..., ge=0.0)


class TrendSet(BaseModel):
    acceptance: TrendModel = Field(default_factory=TrendModel)
    reply: TrendModel = Field(default_factory=TrendModel)
    invited: TrendModel = Field(default_factory=TrendModel)


class ForecastSet(BaseModel):
    """Forecast points per weekly series; accepted and netNew are counts, not rates."""
    acceptance: List[ForecastPoint] = Field(default_factory=list)
    reply: List[ForecastPoint] = Field(default_factory=list)
    volume: List[ForecastPoint] = Field(default_factory=list)
    accepted: List[ForecastPoint] = Field(default_factory=list)
    netNew: List[ForecastPoint] = Field(default_factory=list)


class IntervalSet(BaseModel):
    acceptance: ConfidenceInterval = Field(default_factory=ConfidenceInterval)
    reply: ConfidenceInterval = Field(default_factory=ConfidenceInterval)


# =============================================================================
# Scoring Models
# =============================================================================


class PerformanceTier(BaseModel):
    """A rung of the performance tier ladder."""
    model_config = ConfigDict(frozen=True)

    key: TierKey
    label: str
    min: float = Field(..., ge=0.0, description="Inclusive lower acceptance-rate bound")
    color: str


class AgentScoreRecord(BaseModel):
    """
    Per-agent performance row with composite score and tier.

    The tier comes from the agent's acceptance rate; the score is the
    weighted 0-100 composite used for ranking.
    """
    agent: str
    invited: float = 0.0
    accepted: float = 0.0
    messaged: float = 0.0
    replies: float = 0.0
    actions: float = 0.0
    campaigns: int = 0
    weeks: int = 0
    acceptanceRate: float = 0.0
    replyRate: float = 0.0
    engagementRate: float = 0.0
    score: int = Field(..., ge=0, le=100)
    tier: PerformanceTier
    vsBenchmark: float = Field(..., description="Acceptance rate minus industry average")


class BenchmarkComparison(BaseModel):
    acceptanceBenchmark: float
    replyBenchmark: float
    acceptanceVsBenchmark: float
    replyVsBenchmark: float


# =============================================================================
# Insight Models
# =============================================================================


class Insight(BaseModel):
    """
    A prioritized, human-readable finding.

    Generated fresh on every pass and never persisted.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "warning",
                "title": "Reply Rate Optimization Needed",
                "description": "Reply rate of 4.1% is below the 7.22% benchmark.",
                "action": "Implement multi-touch follow-up sequences.",
                "metric": "-3.1% vs benchmark",
                "priority": "high"
            }
        }
    )

    type: InsightType
    title: str
    description: str
    action: Optional[str] = None
    metric: Optional[str] = None
    priority: InsightPriority


class CoercionWarning(BaseModel):
    """A non-empty numeric field that could not be parsed and was read as 0."""
    recordIndex: int = Field(..., ge=0, description="Position in the filtered record list")
    recordId: Optional[str] = None
    field: str
    rawValue: str


# =============================================================================
# Result Model
# =============================================================================


class AnalyticsResult(BaseModel):
    """
    Complete output of one computation pass.

    Recomputed (never patched) whenever records or filters change.
    """
    recordCount: int = Field(..., ge=0)
    totals: Totals
    rates: Rates
    network: NetworkSummary
    benchmarkComparison: BenchmarkComparison
    performanceTier: PerformanceTier
    weeklyTrends: List[AggregationBucket] = Field(default_factory=list)
    monthlyTrends: List[AggregationBucket] = Field(default_factory=list)
    bestMonth: Optional[AggregationBucket] = None
    agentPerformance: List[AgentScoreRecord] = Field(default_factory=list)
    campaignPerformance: List[AggregationBucket] = Field(default_factory=list)
    locationPerformance: List[AggregationBucket] = Field(default_factory=list)
    audiencePerformance: List[AggregationBucket] = Field(default_factory=list)
    trends: TrendSet = Field(default_factory=TrendSet)
    forecasts: ForecastSet = Field(default_factory=ForecastSet)
    confidenceIntervals: IntervalSet = Field(default_factory=IntervalSet)
    insights: List[Insight] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    coercionWarnings: List[CoercionWarning] = Field(default_factory=list)


# =============================================================================
# Goal Models
# =============================================================================


class PersonalGoal(BaseModel):
    """
    A personal target owned and persisted outside the engine.

    `metric` is kept as a plain string: an unrecognised metric yields zero
    progress instead of a validation error.
    """
    id: str
    agentName: str
    metric: str = Field(..., description="acceptanceRate | replyRate | invited | accepted")
    target: float
    createdAt: Optional[str] = None


class GoalProgress(BaseModel):
    goalId: str
    agentName: str
    metric: str
    target: float
    currentValue: float = 0.0
    progress: float = Field(default=0.0, ge=0.0, le=100.0)
    achieved: bool = False


class TeamComparison(BaseModel):
    """Individual agent rates relative to the whole team."""
    agentAcceptanceRate: float
    agentReplyRate: float
    teamAcceptanceRate: float
    teamReplyRate: float
    acceptanceDelta: float
    replyDelta: float


# =============================================================================
# API Envelopes
# =============================================================================


class ComputeRequest(BaseModel):
    records: List[RawMetricRecord] = Field(default_factory=list)
    filters: AnalyticsFilters = Field(default_factory=AnalyticsFilters)


class SeriesRequest(BaseModel):
    series: List[float] = Field(default_factory=list)


class ForecastRequest(BaseModel):
    series: List[float] = Field(default_factory=list)
    periods: Optional[int] = Field(default=None, ge=0, le=52)
    confidence: Optional[float] = Field(default=None, gt=0.0, lt=1.0)


class ForecastResponse(BaseModel):
    trend: TrendModel
    interval: ConfidenceInterval
    points: List[ForecastPoint]


class ScoreRequest(BaseModel):
    acceptanceRate: float = Field(default=0.0, ge=0.0)
    replyRate: float = Field(default=0.0, ge=0.0)
    invitedVolume: float = Field(default=0.0, ge=0.0)
    weeksActive: float = Field(default=0.0, ge=0.0)


class ScoreResponse(BaseModel):
    score: int
    tier: PerformanceTier


class GoalProgressRequest(BaseModel):
    records: List[RawMetricRecord] = Field(default_factory=list)
    filters: AnalyticsFilters = Field(default_factory=AnalyticsFilters)
    goals: List[PersonalGoal] = Field(default_factory=list)


class ExportRequest(BaseModel):
    records: List[RawMetricRecord] = Field(default_factory=list)
    filters: AnalyticsFilters = Field(default_factory=AnalyticsFilters)
    table: ExportTable = ExportTable.SUMMARY
    filenamePrefix: str = "analytics_summary"


class DatasetRequest(BaseModel):
    records: List[RawMetricRecord] = Field(default_factory=list)


class DatasetResponse(BaseModel):
    recordCount: int
    distinctValues: Dict[str, List[str]] = Field(default_factory=dict)
