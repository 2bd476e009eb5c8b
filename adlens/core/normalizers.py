"""ADLENS — Field & Date Normalizers.

Raw rows come from tables nobody here controls: the same concept shows up under
different column names, numbers arrive as strings, dates in several shapes.
Everything in this module is total: it never raises on a bad row.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from dateutil import parser as date_parser

RawRecord = Mapping[str, Any]

UNKNOWN_DATE = "unknown"

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_YEAR_FIRST = re.compile(r"^\d{4}\D")
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Two fill-in dates differing in year, month and day: a component the string
# leaves out shows up as a disagreement between the two parses.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


# ── Numbers ──


def safe_float(value: Any) -> float:
    """Parse the leading number of a value, 0.0 when there is none.

    Strings are read up to the first character that cannot continue a number,
    so "12.5 BRL" gives 12.5 and "1,5" gives 1.0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMERIC_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


# ── Field lookup ──


def resolve_raw(row: RawRecord, keys: Sequence[str]) -> Any:
    """Return the value of the first key present with a non-None value."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def resolve_field(row: RawRecord, keys: Sequence[str]) -> float:
    """Resolve a numeric field by trying candidate keys in order.

    The first key holding a non-None value decides: its parsed number is
    returned, or 0.0 if it does not parse. Missing keys also give 0.0.
    """
    return safe_float(resolve_raw(row, keys))


def resolve_text(row: RawRecord, keys: Sequence[str], default: str = "") -> str:
    """Resolve a string field, skipping None and empty values."""
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return str(value)
    return default


# ── Dates ──


def normalize_date(value: Any) -> str:
    """Produce a canonical YYYY-MM-DD grouping key for a raw date value.

    Unparseable values come back stringified so they still form a bucket;
    empty values map to the "unknown" bucket.
    """
    if value is None:
        return UNKNOWN_DATE
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if not text:
        return UNKNOWN_DATE

    if _ISO_PREFIX.match(text):
        return text[:10]

    dmy = _DMY_DATE.match(text)
    if dmy:
        day, month, year = dmy.groups()
        return f"{year}-{month}-{day}"

    # Local formats put the day first; year-first strings keep month before day
    dayfirst = not _YEAR_FIRST.match(text)
    try:
        first, second = (
            date_parser.parse(text, dayfirst=dayfirst, default=default).date()
            for default in _PARSE_DEFAULTS
        )
    except (ValueError, OverflowError):
        return str(value)
    if first != second:
        return str(value)
    return first.isoformat()


def parse_iso_date(value: str) -> Optional[date]:
    """Return the calendar date of a normalized key, or None."""
    if not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_iso_date(value: str) -> bool:
    return parse_iso_date(value) is not None


def date_sort_key(value: str) -> tuple:
    """Sort key: calendar dates first, other buckets by string, unknown last."""
    if value == UNKNOWN_DATE:
        return (2, value)
    if is_iso_date(value):
        return (0, value)
    return (1, value)
