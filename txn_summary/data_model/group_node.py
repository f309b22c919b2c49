# txn_summary/data_model/group_node.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Final, Iterable, Iterator, Optional, Tuple

from .group_spec import Dimension
from .interfaces import IToDict, RecursiveDict
from .transaction import EnhancedTransaction

ALL_KEY: Final[str] = "All"
_ZERO: Final[Decimal] = Decimal(0)

NodePath = Tuple[str, ...]


@dataclass(frozen=True)
class Aggregate:
    """
    Roll-up statistics for one group.

    `weighted_rate` is always derived from the rolled-up sums
    (sum_amount / sum_qty, 0 when sum_qty == 0), never averaged from the
    constituents' rates.
    """

    count: int = 0
    sum_qty: Decimal = _ZERO
    sum_amount: Decimal = _ZERO

    @property
    def weighted_rate(self) -> Decimal:
        if self.sum_qty == 0:
            return _ZERO
        return self.sum_amount / self.sum_qty

    @classmethod
    def of_rows(cls, rows: Iterable[EnhancedTransaction]) -> "Aggregate":
        count = 0
        qty = _ZERO
        amount = _ZERO
        for r in rows:
            count += 1
            qty += r.qty
            amount += r.amount
        return cls(count, qty, amount)

    @classmethod
    def combine(cls, parts: Iterable["Aggregate"]) -> "Aggregate":
        """Elementwise sum of child aggregates."""
        total = cls()
        for p in parts:
            total = total + p
        return total

    def __add__(self, other: object) -> "Aggregate":
        if not isinstance(other, Aggregate):
            return NotImplemented
        return Aggregate(
            self.count + other.count,
            self.sum_qty + other.sum_qty,
            self.sum_amount + other.sum_amount,
        )

    def to_dict(self) -> RecursiveDict:
        return {
            "count": self.count,
            "sum_qty": str(self.sum_qty),
            "sum_amount": str(self.sum_amount),
            "weighted_rate": str(self.weighted_rate),
        }


@dataclass(frozen=True)
class GroupNode:
    """
    One node of the aggregation tree.

    The synthetic root has key=None, depth=-1 and path=(). Top-level groups sit
    at depth 0 and nested groups at depth 1. `path` (the keys from the root
    down to this node) is the node's identity for expand/collapse state, and
    `dimensions` names the grouping dimension of each key on that path.
    Only the deepest grouped level carries `rows`; upper levels carry
    `children`.
    """

    key: Optional[str]
    depth: int
    dimensions: Tuple[Dimension, ...]
    path: NodePath
    children: Tuple["GroupNode", ...]
    rows: Tuple[EnhancedTransaction, ...]
    aggregate: Aggregate

    @property
    def dimension(self) -> Optional[Dimension]:
        """The dimension this node groups by (None for the root and "All")."""
        return self.dimensions[-1] if self.dimensions else None

    def keys_by_dimension(self) -> Dict[Dimension, str]:
        """Key of every grouping level on this node's path."""
        return dict(zip(self.dimensions, self.path))

    @property
    def is_root(self) -> bool:
        return self.depth < 0

    @property
    def is_leaf_group(self) -> bool:
        """True for nodes that hold detail rows rather than child groups."""
        return not self.children

    def iter_nodes(self) -> Iterator["GroupNode"]:
        """Pre-order walk of the non-root nodes below (and including) self."""
        if not self.is_root:
            yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, path: Iterable[str]) -> Optional["GroupNode"]:
        node: GroupNode = self
        for key in path:
            for child in node.children:
                if child.key == key:
                    node = child
                    break
            else:
                return None
        return node

    def to_dict(self) -> RecursiveDict:
        return {
            "key": self.key,
            "depth": self.depth,
            "dimensions": [d.value for d in self.dimensions],
            "path": list(self.path),
            "aggregate": self.aggregate.to_dict(),
            "children": [c.to_dict() for c in self.children],
            "rows": [r.to_dict() for r in self.rows],
        }


if TYPE_CHECKING:
    _is_idict_agg: type[IToDict] = Aggregate
    _is_idict_node: type[IToDict] = GroupNode
