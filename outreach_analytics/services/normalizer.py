"""
Numeric normalization of raw spreadsheet text.

The metrics sheet is edited by hand, so numeric columns arrive as text such as
"1,234", "32%", " 17 ", "" or "n/a". normalize_number() turns any of these
into a finite float and never raises: malformed input silently becomes 0.
That coercion is intentional and tested.

For callers that want to monitor round-trip fidelity, find_coercion_failures()
and collect_coercion_warnings() report the values that were coerced because
they could not be parsed. normalize_number() itself keeps no record.
"""

import math
import re
from typing import Iterable, List, Optional

from outreach_analytics.models import CoercionWarning, RawMetricRecord


# Numeric-text fields of RawMetricRecord
NUMERIC_FIELDS: List[str] = [
    'acceptanceRate',
    'replies',
    'replyPercent',
    'totalInvited',
    'totalAccepted',
    'netNewConnects',
    'startingConnects',
    'endingConnections',
    'totalMessaged',
    'totalActions',
]

# Largest magnitude read as a number. Weekly sums and regression sums of
# squares over larger values can overflow to infinity.
MAX_MAGNITUDE: float = 1e15

# Leading decimal number, parseFloat-style: "12abc" -> 12, "abc" -> no match
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_STRIP_CHARS = re.compile(r'[%,]')


def _parse(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    cleaned = _STRIP_CHARS.sub('', str(raw)).strip()
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value) or abs(value) > MAX_MAGNITUDE:
        return None
    return value


def normalize_number(raw: Optional[str]) -> float:
    """
    Convert raw field text to a number.

    Strips '%' and ',' characters, trims whitespace and parses the leading
    decimal number. Anything unparseable (None, empty string, non-numeric
    text, values beyond MAX_MAGNITUDE or that overflow to infinity) yields 0.0.

    Args:
        raw: Field text as read from the sheet, or None when absent.

    Returns:
        A finite float.

    Example:
        >>> normalize_number("1,234")
        1234.0
        >>> normalize_number("12%")
        12.0
        >>> normalize_number("abc")
        0.0
    """
    value = _parse(raw)
    return 0.0 if value is None else value


def find_coercion_failures(raw: Optional[str]) -> bool:
    """True when raw is non-empty text that normalize_number() reads as 0 by coercion."""
    if raw is None or not str(raw).strip():
        return False
    return _parse(raw) is None


def collect_coercion_warnings(records: Iterable[RawMetricRecord]) -> List[CoercionWarning]:
    """
    List every non-empty numeric field that could not be parsed.

    Args:
        records: Records in the order they are analyzed.

    Returns:
        One CoercionWarning per offending field, in record then field order.
    """
    warnings: List[CoercionWarning] = []
    for index, record in enumerate(records):
        for field_name in NUMERIC_FIELDS:
            raw = getattr(record, field_name)
            if find_coercion_failures(raw):
                warnings.append(
                    CoercionWarning(
                        recordIndex=index,
                        recordId=record.id,
                        field=field_name,
                        rawValue=str(raw),
                    )
                )
    return warnings


def safe_percent(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0 when the denominator is 0 or the ratio overflows."""
    if denominator == 0:
        return 0.0
    value = (numerator / denominator) * 100
    return value if math.isfinite(value) else 0.0
