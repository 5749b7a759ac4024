"""
Filter pipeline narrowing the record collection before aggregation.

A record passes only if every supplied criterion passes. Empty selections
are "no restriction", never "reject all", and the input order is preserved.
"""

from typing import Dict, Iterable, List, Optional

from outreach_analytics.models import AnalyticsFilters, DateRange, RawMetricRecord


def _in_date_range(record: RawMetricRecord, date_range: DateRange) -> bool:
    if not date_range.is_active:
        return True
    week_end = record.weekEnd
    # A record without a week-end date cannot satisfy any date bound
    if not week_end:
        return False
    if date_range.start and week_end < date_range.start:
        return False
    if date_range.end and week_end > date_range.end:
        return False
    return True


def _in_selection(value: Optional[str], selection: Iterable[str]) -> bool:
    selected = set(selection)
    if not selected:
        return True
    return value in selected


def record_matches(record: RawMetricRecord, filters: AnalyticsFilters) -> bool:
    """Evaluate all filter criteria for one record (AND semantics)."""
    return (
        _in_date_range(record, filters.dateRange)
        and _in_selection(record.campaign, filters.campaigns)
        and _in_selection(record.location, filters.locations)
        and _in_selection(record.agent, filters.agents)
    )


def filter_records(
    records: List[RawMetricRecord],
    filters: Optional[AnalyticsFilters] = None,
) -> List[RawMetricRecord]:
    """
    Narrow records by date range and by selected agents, campaigns and locations.

    Args:
        records: Records in source order.
        filters: Filter parameters; None means no filtering.

    Returns:
        New list with the matching records, in input order.

    Raises:
        TypeError: If records is not iterable.
    """
    if filters is None:
        return list(records)
    return [record for record in records if record_matches(record, filters)]


def distinct_values(records: Iterable[RawMetricRecord]) -> Dict[str, List[str]]:
    """
    Sorted unique non-empty values used to populate the filter selectors.

    Returns:
        Dict with 'agents', 'campaigns', 'locations', 'audiences' and 'weeks'.
    """
    agents, campaigns, locations, audiences, weeks = set(), set(), set(), set(), set()
    for record in records:
        if record.agent:
            agents.add(record.agent)
        if record.campaign:
            campaigns.add(record.campaign)
        if record.location:
            locations.add(record.location)
        if record.audience:
            audiences.add(record.audience)
        if record.weekEnd:
            weeks.add(record.weekEnd)
    return {
        'agents': sorted(agents),
        'campaigns': sorted(campaigns),
        'locations': sorted(locations),
        'audiences': sorted(audiences),
        'weeks': sorted(weeks),
    }
