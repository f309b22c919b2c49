"""
Date bucketing.

Maps a transaction timestamp to a coarser period key:

  day      2023-06-15
  week     2023-06-12   (Monday on/before the date)
  month    2023-06-01
  quarter  2023-Q2
  year     2023

Keys of one granularity sort lexically in calendar order. Aware timestamps
are bucketed by their own calendar date (no conversion to local time).
Everything here is a pure function; callers memoize if they need to.
"""

# txn_summary/controllers/bucketing.py
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Dict, Final, Iterable, List, Tuple, TypeVar

from txn_summary.data_model.group_spec import Granularity
from txn_summary.data_model.transaction import record_value
from txn_summary.exceptions import InvalidDateError

T = TypeVar("T")


def parse_txn_date(value: Any) -> date:
    """
    Parse a transaction date into a calendar date.

    Accepts:
      • date / datetime → date part
      • ISO 8601 text   → "2023-06-15", "2023-06-15T10:00:00", trailing "Z" or
                          an explicit offset (time and offset are ignored)

    Raises
    ------
    InvalidDateError
        For None, blank text, other types, or text that is not ISO 8601.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)

    s = value.strip()
    if not s:
        raise InvalidDateError(value)
    # allow trailing 'Z' as UTC
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        raise InvalidDateError(value) from None


def to_bucket(value: Any, granularity: "Granularity | str") -> str:
    """Bucket key of `value` at `granularity`. Raises InvalidDateError."""
    return bucket_of_date(parse_txn_date(value), Granularity.from_str(granularity))


def bucket_of_date(d: date, granularity: Granularity) -> str:
    if granularity is Granularity.DAY:
        return d.isoformat()
    if granularity is Granularity.WEEK:
        return (d - timedelta(days=d.weekday())).isoformat()
    if granularity is Granularity.MONTH:
        return f"{d.year:04d}-{d.month:02d}-01"
    if granularity is Granularity.QUARTER:
        return f"{d.year:04d}-Q{(d.month - 1) // 3 + 1}"
    return f"{d.year:04d}"


def bucket_range(key: str, granularity: "Granularity | str") -> Tuple[date, date]:
    """Inclusive first and last calendar day covered by a bucket key."""
    g = Granularity.from_str(granularity)
    if g is Granularity.QUARTER:
        m = _QUARTER_RE.match(key)
        if not m:
            raise InvalidDateError(key)
        year, quarter = int(m.group(1)), int(m.group(2))
        start = date(year, 3 * (quarter - 1) + 1, 1)
        return start, _month_end(date(year, 3 * quarter, 1))
    if g is Granularity.YEAR:
        if not _YEAR_RE.match(key):
            raise InvalidDateError(key)
        year = int(key)
        return date(year, 1, 1), date(year, 12, 31)

    start = parse_txn_date(key)
    if g is Granularity.DAY:
        return start, start
    if g is Granularity.WEEK:
        start = start - timedelta(days=start.weekday())
        return start, start + timedelta(days=6)
    start = start.replace(day=1)
    return start, _month_end(start)


def format_bucket(key: str, granularity: "Granularity | str") -> str:
    """
    Display label for a bucket key.

      day      "Jun 15, 2023"
      week     "Jun 12 - Jun 18, 2023"
      month    "Jun 2023"
      quarter  "Q2 2023"
      year     "2023"
    """
    g = Granularity.from_str(granularity)
    start, end = bucket_range(key, g)
    if g is Granularity.DAY:
        return f"{_mon(start)} {start.day:02d}, {start.year}"
    if g is Granularity.WEEK:
        return (
            f"{_mon(start)} {start.day:02d} - {_mon(end)} {end.day:02d}, {end.year}"
        )
    if g is Granularity.MONTH:
        return f"{_mon(start)} {start.year}"
    if g is Granularity.QUARTER:
        return f"Q{(start.month - 1) // 3 + 1} {start.year}"
    return str(start.year)


def is_same_bucket(a: Any, b: Any, granularity: "Granularity | str") -> bool:
    return to_bucket(a, granularity) == to_bucket(b, granularity)


def buckets_in_range(
    start: Any, end: Any, granularity: "Granularity | str"
) -> List[str]:
    """Every bucket key touching the inclusive range [start, end], in order."""
    g = Granularity.from_str(granularity)
    first = parse_txn_date(start)
    last = parse_txn_date(end)
    keys: List[str] = []
    current = first
    while current <= last:
        key = bucket_of_date(current, g)
        keys.append(key)
        current = bucket_range(key, g)[1] + timedelta(days=1)
    return keys


def group_by_date_bucket(
    items: Iterable[T], granularity: "Granularity | str", date_key: str = "date"
) -> Dict[str, List[T]]:
    """
    Group items by the bucket of their `date_key` field, in first-seen order.
    Items whose date does not parse are left out.
    """
    g = Granularity.from_str(granularity)
    groups: Dict[str, List[T]] = {}
    for item in items:
        try:
            d = parse_txn_date(record_value(item, date_key))
        except InvalidDateError:
            continue
        groups.setdefault(bucket_of_date(d, g), []).append(item)
    return groups


def _month_end(d: date) -> date:
    nxt = date(d.year + 1, 1, 1) if d.month == 12 else date(d.year, d.month + 1, 1)
    return nxt - timedelta(days=1)


def _mon(d: date) -> str:
    return _MONTH_ABBR[d.month - 1]


# locale-independent month names
_MONTH_ABBR: Final[Tuple[str, ...]] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_QUARTER_RE: Final[re.Pattern[str]] = re.compile(r"^(\d{4})-Q([1-4])$")
_YEAR_RE: Final[re.Pattern[str]] = re.compile(r"^\d{4}$")
