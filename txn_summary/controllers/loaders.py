"""
Adapters from caller-side batches to `Transaction` records.

The enclosing app owns all I/O; these helpers only reshape data it has already
loaded (a list of dicts from the ERP layer, or a pandas DataFrame).
"""

# txn_summary/controllers/loaders.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping

import pandas as pd

from txn_summary.data_model.transaction import TXN_FIELDS, Transaction

log = logging.getLogger(__name__)


def transactions_from_records(records: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    """One `Transaction` per mapping; values are kept as given."""
    return [Transaction.from_dict(r) for r in records]


def _cell_value(value: Any) -> Any:
    """NaN/NaT → None; numpy scalars → their Python equivalent."""
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # list-like cells: pd.isna returns an array
        return value
    if pd.api.types.is_number(value) and hasattr(value, "item"):
        return value.item()
    return value


def transactions_from_frame(df: pd.DataFrame) -> List[Transaction]:
    """
    Convert a DataFrame with columns date, customer, stockitem, qty, rate,
    amount (extra columns ignored) into Transactions, in row order.

    Raises
    ------
    ValueError
        If any required column is missing.

    Notes
    -----
    - Column names are matched case-insensitively after trimming.
    - Timestamp cells become calendar dates; NaN/NaT cells become None, which
      the engine later reports as bad data rather than failing.
    """
    rename = {c: str(c).strip().lower() for c in df.columns}
    frame = df.rename(columns=rename)
    missing = [c for c in TXN_FIELDS if c not in frame.columns]
    if missing:
        raise ValueError(f"Transaction frame is missing columns: {missing}")

    out: List[Transaction] = []
    for _, r in frame.iterrows():
        d = _cell_value(r["date"])
        if isinstance(d, datetime):
            d = d.date()
        out.append(
            Transaction(
                date=d,
                customer=str(_cell_value(r["customer"]) or "").strip(),
                stockitem=str(_cell_value(r["stockitem"]) or "").strip(),
                qty=_cell_value(r["qty"]),
                rate=_cell_value(r["rate"]),
                amount=_cell_value(r["amount"]),
            )
        )
    log.debug("Loaded %d transactions from frame", len(out))
    return out
