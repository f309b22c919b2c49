# txn_summary/data_model/transaction.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final, Mapping, Optional, Tuple

from txn_summary.utilities.converters_scalar import to_str

from .interfaces import IToDict, ITransaction, RecursiveDict

TXN_FIELDS: Final[Tuple[str, ...]] = (
    "date",
    "customer",
    "stockitem",
    "qty",
    "rate",
    "amount",
)


def record_value(record: object, name: str, default: Any = None) -> Any:
    """Read a field from either a Mapping record or an attribute-style record."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


@dataclass(frozen=True)
class Transaction:
    """
    One sale/purchase line as delivered by the ERP layer.

    Values are trusted as given: `amount` is nominally qty * rate but is never
    recomputed here, and numeric fields are only coerced later, per pass.
    """

    date: Any
    customer: str
    stockitem: str
    qty: Any
    rate: Any
    amount: Any

    @classmethod
    def from_dict(cls, src: Mapping[str, Any]) -> "Transaction":
        return cls(
            date=src.get("date"),
            customer=to_str(src.get("customer")),
            stockitem=to_str(src.get("stockitem")),
            qty=src.get("qty"),
            rate=src.get("rate"),
            amount=src.get("amount"),
        )

    def to_dict(self) -> RecursiveDict:
        return {name: to_str(getattr(self, name)) for name in TXN_FIELDS}


@dataclass(frozen=True)
class EnhancedTransaction:
    """
    A transaction plus the values derived for one aggregation pass.

    • qty/rate/amount  ← coerced Decimals (bad cells become 0)
    • parsed_date      ← calendar date, None when the raw date does not parse
    • date_bucket      ← bucket key at the active granularity (None if unparsed
                         or no granularity is active)
    • unit_rate        ← amount / qty, 0 when qty == 0
    • source           ← the caller's record, untouched
    """

    date: Any
    customer: str
    stockitem: str
    qty: Decimal
    rate: Decimal
    amount: Decimal
    parsed_date: Optional[Date]
    date_bucket: Optional[str]
    unit_rate: Decimal
    source: Any = None

    def to_dict(self) -> RecursiveDict:
        return {
            "date": to_str(self.date),
            "customer": self.customer,
            "stockitem": self.stockitem,
            "qty": str(self.qty),
            "rate": str(self.rate),
            "amount": str(self.amount),
            "date_bucket": to_str(self.date_bucket),
            "unit_rate": str(self.unit_rate),
        }


if TYPE_CHECKING:
    _is_i_transaction: type[ITransaction] = Transaction
    _is_enhanced_i_transaction: type[ITransaction] = EnhancedTransaction
    _is_idict: type[IToDict] = Transaction
