# tests/controllers/test_navigation.py
from __future__ import annotations

import pytest

from txn_summary.controllers.aggregation import aggregate
from txn_summary.controllers.navigation import (
    collapse_all,
    collapse_path,
    expand_all,
    expand_path,
    toggle_expanded,
    visible_rows,
)
from txn_summary.data_model import GroupSpec, GroupSummary, LeafRow


@pytest.fixture
def tree(mixed):
    return aggregate(mixed, None, GroupSpec.of("customer", "stockitem"))


def _shape(rows):
    return [(r.kind, r.depth, r.path) for r in rows]


def test_collapsed_tree_shows_only_top_level(tree):
    rows = visible_rows(tree, frozenset())

    assert _shape(rows) == [("group", 0, ("A",)), ("group", 0, ("B",))]
    assert all(isinstance(r, GroupSummary) and not r.expanded for r in rows)


def test_expanding_top_level_shows_child_groups(tree):
    rows = visible_rows(tree, {("A",)})

    assert _shape(rows) == [
        ("group", 0, ("A",)),
        ("group", 1, ("A", "X")),
        ("group", 1, ("A", "Y")),
        ("group", 0, ("B",)),
    ]
    assert rows[0].expanded and not rows[1].expanded


def test_expanding_deepest_group_shows_leaf_rows(tree):
    rows = visible_rows(tree, [["A"], ["A", "X"]])

    leaves = [r for r in rows if isinstance(r, LeafRow)]
    assert [r.txn.date for r in leaves] == ["2023-06-15", "2023-07-15"]
    assert all(r.depth == 2 and r.path == ("A", "X") for r in leaves)
    # leaves sit directly after their group and before its next sibling
    assert _shape(rows)[1:5] == [
        ("group", 1, ("A", "X")),
        ("leaf", 2, ("A", "X")),
        ("leaf", 2, ("A", "X")),
        ("group", 1, ("A", "Y")),
    ]


def test_collapsed_ancestor_hides_but_keeps_descendant_state(tree):
    expanded = expand_path(frozenset(), ("A", "X"))
    assert expanded == {("A",), ("A", "X")}

    collapsed = collapse_path(expanded, ("A",))
    assert collapsed == {("A", "X")}
    assert _shape(visible_rows(tree, collapsed)) == [
        ("group", 0, ("A",)),
        ("group", 0, ("B",)),
    ]

    reopened = toggle_expanded(collapsed, ("A",))
    assert len([r for r in visible_rows(tree, reopened) if r.kind == "leaf"]) == 2


def test_toggle_is_its_own_inverse(tree):
    once = toggle_expanded(frozenset(), ("B",))
    twice = toggle_expanded(once, ("B",))

    assert once == {("B",)}
    assert twice == frozenset()


def test_expand_all_and_collapse_all(tree, mixed):
    everything = expand_all(tree)
    rows = visible_rows(tree, everything)

    assert len([r for r in rows if r.kind == "leaf"]) == len(mixed)
    assert len([r for r in rows if r.kind == "group"]) == len(list(tree.iter_nodes()))
    assert visible_rows(tree, collapse_all()) == visible_rows(tree)


def test_navigation_does_not_touch_the_tree(tree):
    before = tree.to_dict()

    visible_rows(tree, expand_all(tree))
    toggle_expanded(expand_all(tree), ("A", "X"))

    assert tree.to_dict() == before


def test_unknown_paths_are_ignored(tree):
    rows = visible_rows(tree, {("Z",), ("A", "nope")})

    assert _shape(rows) == [("group", 0, ("A",)), ("group", 0, ("B",))]


def test_implicit_all_group(mixed):
    root = aggregate(mixed)

    rows = visible_rows(root, {("All",)})

    assert rows[0].kind == "group" and rows[0].path == ("All",)
    assert [r.depth for r in rows[1:]] == [1] * len(mixed)
