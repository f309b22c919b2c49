# txn_summary/data_model/interfaces/i_transaction.py
from __future__ import annotations

from typing import Any, runtime_checkable

from typing_extensions import Protocol


@runtime_checkable
class ITransaction(Protocol):
    """Structural shape of a sale/purchase line the engine can aggregate.

    Values are read as given; `qty`/`rate`/`amount` may be any numeric-like
    object and `date` may be ISO text, a `date` or a `datetime`.
    """

    date: Any
    customer: str
    stockitem: str
    qty: Any
    rate: Any
    amount: Any
