"""
CSV export of computed analytics.

export_rows() flattens one table of an AnalyticsResult into row dicts and
to_csv() serializes rows with pandas. The summary table is a two-column
Metric/Value sheet, matching the dashboard's "Summary" download.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from outreach_analytics.models import AnalyticsResult, ExportTable


Row = Dict[str, Any]


def _format_count(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


def _format_percent(value: float, signed: bool = False) -> str:
    sign = '+' if signed and value >= 0 else ''
    return f"{sign}{value:.1f}%"


def summary_rows(result: AnalyticsResult) -> List[Row]:
    """Metric/Value pairs for the headline numbers of a result."""
    pairs = [
        ('Total Invited', _format_count(result.totals.invited)),
        ('Total Accepted', _format_count(result.totals.accepted)),
        ('Acceptance Rate', _format_percent(result.rates.acceptance)),
        ('Total Messaged', _format_count(result.totals.messaged)),
        ('Total Replies', _format_count(result.totals.replies)),
        ('Reply Rate', _format_percent(result.rates.reply)),
        ('Net New Connects', _format_count(result.totals.netNew)),
        ('Performance Tier', result.performanceTier.label),
        ('vs Benchmark', _format_percent(result.benchmarkComparison.acceptanceVsBenchmark, signed=True)),
    ]
    return [{'Metric': metric, 'Value': value} for metric, value in pairs]


def _agent_rows(result: AnalyticsResult) -> List[Row]:
    rows = []
    for record in result.agentPerformance:
        row = record.model_dump(exclude={'tier'})
        row['tier'] = record.tier.label
        rows.append(row)
    return rows


_BUCKET_TABLES = {
    ExportTable.WEEKLY: 'weeklyTrends',
    ExportTable.MONTHLY: 'monthlyTrends',
    ExportTable.CAMPAIGNS: 'campaignPerformance',
    ExportTable.LOCATIONS: 'locationPerformance',
    ExportTable.AUDIENCES: 'audiencePerformance',
}


def export_rows(result: Optional[AnalyticsResult], table: Union[ExportTable, str]) -> List[Row]:
    """
    Row dicts for one table of a result.

    Args:
        result: Computed result; None exports nothing.
        table: ExportTable or its string value.

    Returns:
        Rows in the table's consumer order. An unknown table or a missing
        result yields an empty list.
    """
    if result is None:
        return []
    try:
        resolved = ExportTable(table)
    except ValueError:
        return []

    if resolved is ExportTable.SUMMARY:
        return summary_rows(result)
    if resolved is ExportTable.AGENTS:
        return _agent_rows(result)
    buckets = getattr(result, _BUCKET_TABLES[resolved])
    return [bucket.model_dump() for bucket in buckets]


def to_csv(rows: List[Row]) -> str:
    """
    Serialize rows to CSV text with a header row.

    Columns follow the key order of the first row; values containing commas
    or quotes are quoted. No rows gives an empty string.
    """
    if not rows:
        return ''
    df = pd.DataFrame(rows, columns=list(rows[0].keys()))
    return df.to_csv(index=False, lineterminator='\n')


def export_filename(prefix: str, today: Optional[date] = None) -> str:
    """File name of an export: {prefix}_{YYYY-MM-DD}.csv."""
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.csv"
