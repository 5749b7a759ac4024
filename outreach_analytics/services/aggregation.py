"""
Aggregation engine for weekly outreach records.

This module groups normalized records into time buckets (week, month) and
dimension buckets (agent, campaign, location, audience), producing summed
counters and derived rates.

Key Functions:
- aggregate: Build the sparse bucket map for one dimension
- ordered_buckets: Consumer ordering of a bucket map
- calculate_rates: Derived rates with safe division
- compute_totals: Overall counters and rates for a record set
- compute_network: Connection network size and growth
- best_month: Month with the largest invitation volume

Derived Rates (percentages):
- acceptanceRate = accepted / invited * 100
- replyRate = replies / messaged * 100
- engagementRate = replies / accepted * 100
Every rate is 0 when its denominator is 0, never NaN or infinity.

Bucket Keys:
- week: the record's weekEnd; records without one are skipped
- month: weekEnd[:7] (YYYY-MM)
- agent, campaign: the raw value; records with an empty value are skipped
- location, audience: the raw value, or "Unknown" when empty

Ordering:
- time dimensions ascend by key
- campaign and audience descend by acceptance rate
- location descends by invited volume
- agent descends by acceptance rate here; the scoring engine re-ranks
  agents by composite score
Ties keep first-appearance order (stable sorts). Consumers must not rely on
any other order.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from outreach_analytics.models import (
    AggregationBucket,
    Dimension,
    NetworkSummary,
    RawMetricRecord,
    Rates,
    Totals,
)
from outreach_analytics.services.normalizer import normalize_number, safe_percent


logger = logging.getLogger(__name__)


UNKNOWN_KEY: str = "Unknown"

# Metric used to rank categorical buckets, descending
RANKING_METRIC: Dict[Dimension, str] = {
    Dimension.AGENT: 'acceptanceRate',
    Dimension.CAMPAIGN: 'acceptanceRate',
    Dimension.AUDIENCE: 'acceptanceRate',
    Dimension.LOCATION: 'invited',
}


# =============================================================================
# Internal Accumulator
# =============================================================================


@dataclass
class _BucketAccumulator:
    """
    Running sums for one bucket during a single aggregation pass.

    Converted to an immutable-by-convention AggregationBucket once all
    records have been folded in.
    """
    key: str
    invited: float = 0.0
    accepted: float = 0.0
    messaged: float = 0.0
    replies: float = 0.0
    net_new: float = 0.0
    actions: float = 0.0
    weeks: int = 0
    campaigns: Set[str] = field(default_factory=set)
    agents: Set[str] = field(default_factory=set)
    latest_network: float = 0.0

    def add(self, record: RawMetricRecord) -> None:
        self.invited += normalize_number(record.totalInvited)
        self.accepted += normalize_number(record.totalAccepted)
        self.messaged += normalize_number(record.totalMessaged)
        self.replies += normalize_number(record.replies)
        self.net_new += normalize_number(record.netNewConnects)
        self.actions += normalize_number(record.totalActions)
        self.weeks += 1
        if record.campaign:
            self.campaigns.add(record.campaign)
        if record.agent:
            self.agents.add(record.agent)
        network = normalize_number(record.endingConnections)
        if network > self.latest_network:
            self.latest_network = network

    def finalize(self) -> AggregationBucket:
        rates = calculate_rates(self.invited, self.accepted, self.messaged, self.replies)
        return AggregationBucket(
            key=self.key,
            invited=self.invited,
            accepted=self.accepted,
            messaged=self.messaged,
            replies=self.replies,
            netNew=self.net_new,
            actions=self.actions,
            weeks=self.weeks,
            campaigns=len(self.campaigns),
            agents=len(self.agents),
            latestNetwork=self.latest_network,
            **rates,
        )


# =============================================================================
# Derived Rates
# =============================================================================


def calculate_rates(
    invited: float,
    accepted: float,
    messaged: float,
    replies: float,
) -> Dict[str, float]:
    """
    Calculate the derived rates for a set of summed counters.

    Args:
        invited: Connection invitations sent.
        accepted: Invitations accepted.
        messaged: Connections messaged.
        replies: Replies received.

    Returns:
        Dict with acceptanceRate, replyRate and engagementRate (percentages,
        0 when the denominator is 0).
    """
    return {
        'acceptanceRate': safe_percent(accepted, invited),
        'replyRate': safe_percent(replies, messaged),
        'engagementRate': safe_percent(replies, accepted),
    }


# =============================================================================
# Bucket Keys
# =============================================================================


def _week_key(record: RawMetricRecord) -> Optional[str]:
    return record.weekEnd or None


def _month_key(record: RawMetricRecord) -> Optional[str]:
    return record.weekEnd[:7] if record.weekEnd else None


def _required_key(field_name: str) -> Callable[[RawMetricRecord], Optional[str]]:
    def extract(record: RawMetricRecord) -> Optional[str]:
        return getattr(record, field_name) or None
    return extract


def _defaulted_key(field_name: str) -> Callable[[RawMetricRecord], Optional[str]]:
    def extract(record: RawMetricRecord) -> Optional[str]:
        return getattr(record, field_name) or UNKNOWN_KEY
    return extract


_KEY_EXTRACTORS: Dict[Dimension, Callable[[RawMetricRecord], Optional[str]]] = {
    Dimension.WEEK: _week_key,
    Dimension.MONTH: _month_key,
    Dimension.AGENT: _required_key('agent'),
    Dimension.CAMPAIGN: _required_key('campaign'),
    Dimension.LOCATION: _defaulted_key('location'),
    Dimension.AUDIENCE: _defaulted_key('audience'),
}


def _coerce_dimension(dimension: Union[Dimension, str]) -> Optional[Dimension]:
    try:
        return Dimension(dimension)
    except ValueError:
        return None


# =============================================================================
# Aggregation
# =============================================================================


def aggregate(
    records: List[RawMetricRecord],
    dimension: Union[Dimension, str],
) -> Dict[str, AggregationBucket]:
    """
    Group records into buckets for one dimension.

    Buckets are sparse: a key exists only if at least one record
    contributed to it. The returned dict is in first-appearance order; use
    ordered_buckets() for the consumer order.

    Args:
        records: Filtered records.
        dimension: A Dimension or its string value.

    Returns:
        Mapping of bucket key to finalized AggregationBucket. An unknown
        dimension yields an empty mapping.
    """
    resolved = _coerce_dimension(dimension)
    if resolved is None:
        logger.warning(f"Unknown aggregation dimension: {dimension!r}")
        return {}

    extract_key = _KEY_EXTRACTORS[resolved]
    accumulators: Dict[str, _BucketAccumulator] = {}

    for record in records:
        key = extract_key(record)
        if key is None:
            continue
        accumulator = accumulators.get(key)
        if accumulator is None:
            accumulator = _BucketAccumulator(key=key)
            accumulators[key] = accumulator
        accumulator.add(record)

    return {key: acc.finalize() for key, acc in accumulators.items()}


def ordered_buckets(
    buckets: Dict[str, AggregationBucket],
    dimension: Union[Dimension, str],
) -> List[AggregationBucket]:
    """
    Return buckets in the documented consumer order for their dimension.

    Args:
        buckets: Output of aggregate().
        dimension: The dimension the buckets were built for.

    Returns:
        Ascending by key for week/month; descending by the dimension's
        ranking metric otherwise. Unknown dimensions return insertion order.
    """
    resolved = _coerce_dimension(dimension)
    values = list(buckets.values())
    if resolved is None:
        return values
    if resolved.is_time:
        return sorted(values, key=lambda bucket: bucket.key)
    metric = RANKING_METRIC[resolved]
    return sorted(values, key=lambda bucket: getattr(bucket, metric), reverse=True)


def aggregate_ordered(
    records: List[RawMetricRecord],
    dimension: Union[Dimension, str],
) -> List[AggregationBucket]:
    """aggregate() followed by ordered_buckets()."""
    return ordered_buckets(aggregate(records, dimension), dimension)


# =============================================================================
# Totals and Network
# =============================================================================


def compute_totals(records: List[RawMetricRecord]) -> Tuple[Totals, Rates]:
    """
    Overall counters and rates for a record set.

    avgInvitesPerWeek divides invitations by the number of distinct
    week-end dates (at least 1).
    """
    overall = _BucketAccumulator(key="total")
    weeks: Set[str] = set()
    for record in records:
        overall.add(record)
        if record.weekEnd:
            weeks.add(record.weekEnd)

    totals = Totals(
        invited=overall.invited,
        accepted=overall.accepted,
        messaged=overall.messaged,
        replies=overall.replies,
        actions=overall.actions,
        netNew=overall.net_new,
    )
    rates = Rates(
        acceptance=safe_percent(overall.accepted, overall.invited),
        reply=safe_percent(overall.replies, overall.messaged),
        engagement=safe_percent(overall.replies, overall.accepted),
        action=safe_percent(overall.actions, overall.invited),
        avgInvitesPerWeek=overall.invited / max(len(weeks), 1),
    )
    return totals, rates


def compute_network(records: List[RawMetricRecord]) -> NetworkSummary:
    """
    Connection network summary.

    - startingConnects: from the first record, endingConnects: from the last
    - growth: (ending - starting) / starting * 100, 0 when starting is 0
    - networkSize: sum over agents of the endingConnections reported in
      each agent's most recent week
    """
    if not records:
        return NetworkSummary()

    starting = normalize_number(records[0].startingConnects)
    ending = normalize_number(records[-1].endingConnections)

    latest_by_agent: Dict[str, RawMetricRecord] = {}
    for record in records:
        if not (record.agent and record.endingConnections):
            continue
        existing = latest_by_agent.get(record.agent)
        if existing is None or (record.weekEnd or '') > (existing.weekEnd or ''):
            latest_by_agent[record.agent] = record

    network_size = sum(
        normalize_number(record.endingConnections) for record in latest_by_agent.values()
    )

    return NetworkSummary(
        startingConnects=starting,
        endingConnects=ending,
        networkSize=network_size,
        growth=safe_percent(ending - starting, starting),
    )


def best_month(monthly: List[AggregationBucket]) -> Optional[AggregationBucket]:
    """Month bucket with the largest invited volume (earliest wins ties)."""
    if not monthly:
        return None
    return max(monthly, key=lambda bucket: bucket.invited)
