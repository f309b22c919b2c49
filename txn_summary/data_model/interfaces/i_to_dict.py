# txn_summary/data_model/interfaces/i_to_dict.py
from __future__ import annotations

from typing import Any, runtime_checkable

from typing_extensions import Protocol, TypeAlias

RecursiveDict: TypeAlias = dict[str, Any]


@runtime_checkable
class IToDict(Protocol):
    def to_dict(self) -> RecursiveDict: ...
