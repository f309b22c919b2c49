"""
Key extraction and partitioning.

Each filtered record is turned into an `EnhancedTransaction` (coerced numbers,
parsed date, date bucket, unit rate) and keyed by the active `GroupSpec`:

  customer  → record.customer
  stockitem → record.stockitem
  date      → record.date_bucket

Partitions keep the first-occurrence order of their keys unless the GroupSpec asks
for sorted keys.
"""

# txn_summary/controllers/grouping.py
from __future__ import annotations

from collections.abc import Hashable
from decimal import Decimal
from typing import (
    Any,
    Callable,
    Dict,
    Final,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from txn_summary.data_model.group_spec import (
    Dimension,
    Granularity,
    GroupOrder,
    GroupSpec,
)
from txn_summary.data_model.transaction import (
    EnhancedTransaction,
    Transaction,
    record_value,
)
from txn_summary.exceptions import InvalidDateError
from txn_summary.utilities.converters_scalar import coerce_decimal, to_str

from .bucketing import bucket_of_date, parse_txn_date
from .report_warnings import AggregationWarnings

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)

_ZERO: Final[Decimal] = Decimal(0)
# memo of raw date → (parsed date, bucket key) for a single pass
BucketCache = Dict[Any, Tuple[Any, Optional[str]]]


def enhance(
    record: Any,
    granularity: Optional[Granularity],
    warnings: AggregationWarnings,
    bucket_cache: Optional[BucketCache] = None,
) -> EnhancedTransaction:
    """
    Derive the per-pass fields of one record. Never raises on bad data:

    • an unparseable date leaves parsed_date/date_bucket as None
    • a non-numeric qty/rate/amount reads as 0 and is counted in `warnings`
    """
    raw_date = record_value(record, "date")
    cached = None
    if bucket_cache is not None and isinstance(raw_date, Hashable):
        cached = bucket_cache.get(raw_date)
    if cached is None:
        try:
            parsed = parse_txn_date(raw_date)
            bucket = bucket_of_date(parsed, granularity) if granularity else None
        except InvalidDateError:
            parsed, bucket = None, None
        cached = (parsed, bucket)
        if bucket_cache is not None and isinstance(raw_date, Hashable):
            bucket_cache[raw_date] = cached
    parsed, bucket = cached

    raw_numbers = [record_value(record, name) for name in ("qty", "rate", "amount")]
    numbers: List[Decimal] = []
    for name, raw in zip(("qty", "rate", "amount"), raw_numbers):
        value, coerced = coerce_decimal(raw)
        if coerced:
            warnings.note_coerced(name, raw)
        numbers.append(value)
    qty, rate, amount = numbers
    customer = to_str(record_value(record, "customer"))
    stockitem = to_str(record_value(record, "stockitem"))

    # keep an immutable snapshot, never the caller's (possibly mutable) record
    source = (
        record
        if isinstance(record, Transaction)
        else Transaction(raw_date, customer, stockitem, *raw_numbers)
    )

    return EnhancedTransaction(
        date=raw_date,
        customer=customer,
        stockitem=stockitem,
        qty=qty,
        rate=rate,
        amount=amount,
        parsed_date=parsed,
        date_bucket=bucket,
        unit_rate=amount / qty if qty != 0 else _ZERO,
        source=source,
    )


def key_for(txn: EnhancedTransaction, dimension: Dimension) -> str:
    if dimension is Dimension.CUSTOMER:
        return txn.customer
    if dimension is Dimension.STOCKITEM:
        return txn.stockitem
    return txn.date_bucket or ""


def extract_keys(txn: EnhancedTransaction, spec: GroupSpec) -> Tuple[str, ...]:
    """Primary (and secondary, when configured) grouping key of a row."""
    return tuple(key_for(txn, d) for d in spec.dimensions)


def partition(rows: Iterable[R], key_fn: Callable[[R], K]) -> Dict[K, List[R]]:
    """Split rows by key. Dict order is the first-occurrence order of keys."""
    out: Dict[K, List[R]] = {}
    for r in rows:
        k = key_fn(r)
        bucket = out.get(k)
        if bucket is None:
            out[k] = [r]
        else:
            bucket.append(r)
    return out


def ordered_keys(parts: Dict[K, List[R]], order: GroupOrder) -> List[K]:
    if order is GroupOrder.SORTED:
        return sorted(parts.keys())  # type: ignore[type-var]
    return list(parts.keys())
