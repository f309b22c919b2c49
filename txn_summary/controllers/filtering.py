# txn_summary/controllers/filtering.py
from __future__ import annotations

import fnmatch
import logging
import re
from datetime import date
from typing import Any, Iterable, List, Optional, TypeVar

from txn_summary.data_model.group_spec import ReportFilters
from txn_summary.data_model.transaction import record_value
from txn_summary.exceptions import ConfigurationError, InvalidDateError
from txn_summary.utilities.converters_scalar import to_str

from .bucketing import parse_txn_date
from .report_warnings import AggregationWarnings

log = logging.getLogger(__name__)

R = TypeVar("R")


def matches_text(
    value: str, query: str, mode: str = "contains", case_sensitive: bool = False
) -> bool:
    """Test one field value against the text filter."""
    if mode == "regex":
        flags = 0 if case_sensitive else re.IGNORECASE
        try:
            return re.search(query, value, flags) is not None
        except re.error as e:
            raise ConfigurationError(f"Invalid text filter pattern {query!r}: {e}") from e

    if not case_sensitive:
        value_cmp = value.lower()
        query_cmp = query.lower()
    else:
        value_cmp = value
        query_cmp = query

    if mode == "contains":
        return query_cmp in value_cmp
    if mode == "exact":
        return value_cmp == query_cmp
    if mode == "startswith":
        return value_cmp.startswith(query_cmp)
    if mode == "endswith":
        return value_cmp.endswith(query_cmp)
    if mode == "glob":
        return fnmatch.fnmatchcase(value_cmp, query_cmp)
    raise ConfigurationError(f"Unknown text match mode: {mode}")


def _bound(value: Any, name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    try:
        return parse_txn_date(value)
    except InvalidDateError as e:
        # A bad bound is a caller error, not a data error
        raise ConfigurationError(f"Invalid {name}: {value!r}") from e


def apply_filters(
    records: Iterable[R],
    filters: Optional[ReportFilters] = None,
    warnings: Optional[AggregationWarnings] = None,
) -> List[R]:
    """
    Keep the records that pass every configured predicate, in input order.

    • from_date/to_date: inclusive, compared as calendar dates of the raw
      `date` field. Records whose date does not parse cannot satisfy a bound
      and are dropped (counted in `warnings`); without bounds they pass.
    • text_filter: `mode` match (substring by default) against any of
      `text_fields`; missing field values count as "".

    Filtering is idempotent: filtering the output again returns it unchanged.
    """
    if filters is None:
        return list(records)

    lo = _bound(filters.from_date, "from_date")
    hi = _bound(filters.to_date, "to_date")
    query = filters.text_filter or ""
    fields = filters.text_fields
    mode = filters.text_mode
    case_sensitive = filters.case_sensitive
    pattern = filters.pattern
    if mode == "contains" and not case_sensitive:
        query = query.lower()

    out: List[R] = []
    for rec in records:
        if lo is not None or hi is not None:
            try:
                d = parse_txn_date(record_value(rec, "date"))
            except InvalidDateError:
                if warnings is not None:
                    warnings.note_skipped_date(record_value(rec, "date"))
                continue
            if lo is not None and d < lo:
                continue
            if hi is not None and d > hi:
                continue
        if query:
            values = [to_str(record_value(rec, f)) for f in fields]
            if mode == "contains" and not case_sensitive:
                # fast path for the interactive search box
                hit = any(query in v.lower() for v in values)
            elif pattern is not None:
                hit = any(pattern.search(v) is not None for v in values)
            else:
                hit = any(matches_text(v, query, mode, case_sensitive) for v in values)
            if not hit:
                continue
        out.append(rec)

    log.debug("Filtered %d records using %s", len(out), filters)
    return out
