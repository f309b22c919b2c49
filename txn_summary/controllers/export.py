"""
CSV export of the currently visible report rows.

Columns: Date, Customer, Stock Item, Qty, Rate, Amount.

  • group rows  → the key of every grouping level on the node's path in its
                  column (date bucket key for date), blanks elsewhere;
                  Qty = sum_qty, Rate = weighted_rate, Amount = sum_amount
  • leaf rows   → the source record's values verbatim

The text is meant for machine re-import: fixed-point numbers, no thousands
separators, standard CSV quoting for commas/quotes/newlines, "\n" line endings.
"""

# txn_summary/controllers/export.py
from __future__ import annotations

import csv
import io
import math
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Final, Iterable, List, Tuple

import pandas as pd

from txn_summary.data_model.group_spec import Dimension
from txn_summary.data_model.visible_row import GroupSummary, LeafRow, VisibleRow
from txn_summary.utilities.converters_scalar import format_decimal

CSV_HEADER: Final[Tuple[str, ...]] = (
    "Date",
    "Customer",
    "Stock Item",
    "Qty",
    "Rate",
    "Amount",
)
DEFAULT_RATE_PLACES: Final[int] = 2


def _cell(value: Any) -> str:
    """Stringify one source value; never raises."""
    if value is None:
        return ""
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        # str() keeps the shortest round-trip digits; "f" avoids 1e-05 style
        return format(Decimal(str(value)), "f")
    if isinstance(value, Decimal):
        return format(value, "f") if value.is_finite() else ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _group_cells(row: GroupSummary, rate_places: int) -> List[str]:
    node = row.node
    keys = node.keys_by_dimension()
    agg = node.aggregate
    return [
        keys.get(Dimension.DATE, ""),
        keys.get(Dimension.CUSTOMER, ""),
        keys.get(Dimension.STOCKITEM, ""),
        format_decimal(agg.sum_qty),
        format_decimal(agg.weighted_rate, rate_places),
        format_decimal(agg.sum_amount),
    ]


def _leaf_cells(row: LeafRow) -> List[str]:
    src = row.txn.source if row.txn.source is not None else row.txn
    return [
        _cell(getattr(src, "date", None)),
        _cell(getattr(src, "customer", None)),
        _cell(getattr(src, "stockitem", None)),
        _cell(getattr(src, "qty", None)),
        _cell(getattr(src, "rate", None)),
        _cell(getattr(src, "amount", None)),
    ]


def row_cells(row: VisibleRow, rate_places: int = DEFAULT_RATE_PLACES) -> List[str]:
    if isinstance(row, GroupSummary):
        return _group_cells(row, rate_places)
    return _leaf_cells(row)


def export_csv(
    visible_rows: Iterable[VisibleRow], rate_places: int = DEFAULT_RATE_PLACES
) -> str:
    """
    Serialize visible rows (header + one line per row) to CSV text.

    `rate_places` bounds the digits of a group's weighted rate, which is a
    quotient and otherwise carries far more precision than its inputs.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for row in visible_rows:
        writer.writerow(row_cells(row, rate_places))
    return buf.getvalue()


def visible_rows_to_frame(visible_rows: Iterable[VisibleRow]) -> pd.DataFrame:
    """
    Tabular view of the visible rows for notebook/spreadsheet use.

    Same columns as the CSV plus Kind ("group"/"leaf") and Depth; numbers stay
    Decimal (group sums, coerced leaf values) rather than text.
    """
    records: List[Dict[str, Any]] = []
    for row in visible_rows:
        if isinstance(row, GroupSummary):
            keys = row.node.keys_by_dimension()
            agg = row.node.aggregate
            records.append(
                {
                    "Kind": row.kind,
                    "Depth": row.depth,
                    "Date": keys.get(Dimension.DATE, ""),
                    "Customer": keys.get(Dimension.CUSTOMER, ""),
                    "Stock Item": keys.get(Dimension.STOCKITEM, ""),
                    "Qty": agg.sum_qty,
                    "Rate": agg.weighted_rate,
                    "Amount": agg.sum_amount,
                }
            )
        else:
            txn = row.txn
            records.append(
                {
                    "Kind": row.kind,
                    "Depth": row.depth,
                    "Date": _cell(txn.date),
                    "Customer": txn.customer,
                    "Stock Item": txn.stockitem,
                    "Qty": txn.qty,
                    "Rate": txn.rate,
                    "Amount": txn.amount,
                }
            )
    return pd.DataFrame.from_records(
        records, columns=["Kind", "Depth", *CSV_HEADER]
    )
