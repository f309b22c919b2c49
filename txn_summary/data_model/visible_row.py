# txn_summary/data_model/visible_row.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from typing_extensions import TypeAlias

from .group_node import GroupNode, NodePath
from .transaction import EnhancedTransaction


@dataclass(frozen=True)
class GroupSummary:
    """A group's roll-up row, expanded or not."""

    node: GroupNode
    expanded: bool = False
    kind: Literal["group"] = "group"

    @property
    def depth(self) -> int:
        return self.node.depth

    @property
    def path(self) -> NodePath:
        return self.node.path


@dataclass(frozen=True)
class LeafRow:
    """A detail row shown beneath its deepest enclosing (expanded) group."""

    txn: EnhancedTransaction
    depth: int
    path: NodePath
    kind: Literal["leaf"] = "leaf"


VisibleRow: TypeAlias = Union[GroupSummary, LeafRow]
