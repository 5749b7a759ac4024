"""
Metrics sheet ingestion.

Turns rows of the outreach metrics spreadsheet into RawMetricRecords. The
sheet has 21 columns (A-U) in a fixed order and a single header row. Every
cell is kept as text; numeric interpretation is left to the normalizer.

Sources:
- records_from_rows: row lists as returned by a spreadsheet values API
  (header row already removed)
- records_from_dataframe: a pandas DataFrame, matched by column name when
  the headers are record field names, by position otherwise
- load_records_csv: a CSV export of the sheet, read with pandas as text

Record identity follows the sheet: id is "metric-{i}" and rowIndex is
i + 2 (1-based, after the header), where i is the data row position.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

import pandas as pd

from outreach_analytics.models import RawMetricRecord

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS - Sheet Layout
# =============================================================================

# Columns A-U of the metrics sheet, in order
SHEET_COLUMNS: List[str] = [
    'status',
    'campaign',
    'message',
    'audience',
    'agent',
    'acceptanceRate',
    'replies',
    'replyPercent',
    'defyLead',
    'target',
    'algoType',
    'weekEnd',
    'location',
    'queue',
    'totalInvited',
    'totalAccepted',
    'netNewConnects',
    'startingConnects',
    'endingConnections',
    'totalMessaged',
    'totalActions',
]

# Header row offset: data row i lives on sheet row i + 2
FIRST_DATA_ROW: int = 2


def _cell_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    return str(value)


def _build_record(index: int, cells: Sequence[Any]) -> RawMetricRecord:
    values = {
        column: _cell_text(cells[position]) if position < len(cells) else None
        for position, column in enumerate(SHEET_COLUMNS)
    }
    return RawMetricRecord(id=f"metric-{index}", rowIndex=index + FIRST_DATA_ROW, **values)


# =============================================================================
# Public API
# =============================================================================


def records_from_rows(rows: Iterable[Sequence[Any]]) -> List[RawMetricRecord]:
    """
    Map sheet rows to records by column position.

    Args:
        rows: Data rows (header excluded). Short rows are padded with None;
            cells past column U are ignored.

    Returns:
        Records in row order.

    Example:
        >>> records = records_from_rows([["Active", "Q1 Brokers"]])
        >>> records[0].campaign, records[0].agent, records[0].rowIndex
        ('Q1 Brokers', None, 2)
    """
    return [_build_record(index, list(row)) for index, row in enumerate(rows)]


def records_from_dataframe(df: pd.DataFrame) -> List[RawMetricRecord]:
    """
    Map a DataFrame to records.

    When any column header is a record field name, columns are matched by
    name and missing fields become None. Otherwise the first 21 columns are
    taken positionally as sheet columns A-U.

    Args:
        df: Sheet data, one row per weekly record.

    Returns:
        Records in DataFrame row order.
    """
    if df.empty:
        return []

    named = [column for column in SHEET_COLUMNS if column in df.columns]
    if named:
        aligned = df.reindex(columns=SHEET_COLUMNS)
    else:
        aligned = df.iloc[:, :len(SHEET_COLUMNS)]

    # object dtype so missing values come back as None instead of NaN
    aligned = aligned.astype(object).where(aligned.notna(), None)
    return records_from_rows(aligned.itertuples(index=False, name=None))


def load_records_csv(path_or_buffer: Union[str, Any]) -> List[RawMetricRecord]:
    """
    Load a CSV export of the metrics sheet.

    Every column is read as text and empty cells stay empty strings, so
    values like "1,234" or "32%" reach the normalizer unchanged.

    Args:
        path_or_buffer: File path or file-like object accepted by pandas.

    Returns:
        Records in file order.

    Raises:
        FileNotFoundError: If a path is given and does not exist.
        pandas.errors.ParserError: If the CSV is malformed.
    """
    df = pd.read_csv(path_or_buffer, dtype=str, keep_default_na=False)
    logger.info(f"Parsed metrics CSV with {len(df)} rows and {len(df.columns)} columns")
    records = records_from_dataframe(df)
    logger.info(f"Loaded {len(records)} metric records")
    return records
