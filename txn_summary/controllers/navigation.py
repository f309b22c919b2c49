# txn_summary/controllers/navigation.py
from __future__ import annotations

from typing import AbstractSet, FrozenSet, Iterable, List, Sequence

from txn_summary.data_model.group_node import GroupNode, NodePath
from txn_summary.data_model.visible_row import GroupSummary, LeafRow, VisibleRow

ExpandedPaths = FrozenSet[NodePath]


def _normalize(expanded: Iterable[Sequence[str]] | None) -> AbstractSet[NodePath]:
    if expanded is None:
        return frozenset()
    if isinstance(expanded, (set, frozenset)):
        return expanded  # type: ignore[return-value]
    return frozenset(tuple(p) for p in expanded)


def visible_rows(
    tree: GroupNode, expanded: Iterable[Sequence[str]] | None = None
) -> List[VisibleRow]:
    """
    Flatten the tree into the rows a reader currently sees, in tree order.

    Every top-level group is visible. An expanded group is followed by its
    child groups or, at the deepest level, its detail rows. A group is only
    visible when all its ancestors are expanded; the expansion state of hidden
    descendants is kept and takes effect again once the ancestor reopens.
    """
    open_paths = _normalize(expanded)
    out: List[VisibleRow] = []

    def walk(node: GroupNode) -> None:
        for child in node.children:
            is_open = child.path in open_paths
            out.append(GroupSummary(child, is_open))
            if not is_open:
                continue
            if child.children:
                walk(child)
            else:
                for txn in child.rows:
                    out.append(LeafRow(txn, child.depth + 1, child.path))

    walk(tree)
    return out


def toggle_expanded(
    expanded: Iterable[Sequence[str]] | None, path: Sequence[str]
) -> ExpandedPaths:
    """Flip one node's expansion flag. Never re-runs aggregation."""
    current = set(_normalize(expanded))
    key = tuple(path)
    if key in current:
        current.discard(key)
    else:
        current.add(key)
    return frozenset(current)


def expand_path(
    expanded: Iterable[Sequence[str]] | None, path: Sequence[str]
) -> ExpandedPaths:
    """Expand a node and every ancestor so the node's content becomes visible."""
    current = set(_normalize(expanded))
    key = tuple(path)
    for i in range(1, len(key) + 1):
        current.add(key[:i])
    return frozenset(current)


def collapse_path(
    expanded: Iterable[Sequence[str]] | None, path: Sequence[str]
) -> ExpandedPaths:
    """Collapse one node; descendants keep their own flags."""
    return frozenset(_normalize(expanded) - {tuple(path)})


def expand_all(tree: GroupNode) -> ExpandedPaths:
    return frozenset(n.path for n in tree.iter_nodes())


def collapse_all() -> ExpandedPaths:
    return frozenset()
