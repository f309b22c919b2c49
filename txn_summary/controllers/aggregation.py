"""
Aggregation engine.

    raw records → filter → enhance/bucket → partition → GroupNode tree

Leaf groups (the deepest configured level) compute their aggregate from their
rows; every ancestor's aggregate is the elementwise sum of its children's, and
`weighted_rate` is derived from the rolled-up sums at every level. The whole
tree is built eagerly, so expanding and collapsing never needs another pass.

A pass is a pure function of its arguments: no I/O, no cross-call cache and no
reference kept to caller-owned mutable records.
"""

# txn_summary/controllers/aggregation.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from txn_summary.data_model.group_node import ALL_KEY, Aggregate, GroupNode, NodePath
from txn_summary.data_model.group_spec import Dimension, GroupSpec, ReportFilters
from txn_summary.data_model.transaction import EnhancedTransaction

from .filtering import apply_filters
from .grouping import BucketCache, enhance, key_for, ordered_keys, partition
from .report_warnings import AggregationWarnings

log = logging.getLogger(__name__)

GroupSpecLike = Union[GroupSpec, Mapping[str, Any], None]
FiltersLike = Union[ReportFilters, Mapping[str, Any], None]


@dataclass(frozen=True)
class AggregationResult:
    """Tree plus the data warnings collected while building it."""

    root: GroupNode
    warnings: AggregationWarnings = field(default_factory=AggregationWarnings)
    group_spec: GroupSpec = field(default_factory=GroupSpec)
    filters: ReportFilters = field(default_factory=ReportFilters)

    @property
    def row_count(self) -> int:
        return self.root.aggregate.count


def as_group_spec(spec: GroupSpecLike) -> GroupSpec:
    """Normalize a GroupSpec/dict/None. Raises ConfigurationError."""
    if spec is None:
        return GroupSpec()
    if isinstance(spec, GroupSpec):
        spec.validate()
        return spec
    return GroupSpec.from_dict(spec)


def as_filters(filters: FiltersLike) -> ReportFilters:
    if filters is None:
        return ReportFilters()
    if isinstance(filters, ReportFilters):
        return filters
    return ReportFilters.from_dict(filters)


def run_report(
    records: Iterable[Any],
    filters: FiltersLike = None,
    group_spec: GroupSpecLike = None,
) -> AggregationResult:
    """
    Filter, group and aggregate `records`.

    Raises
    ------
    ConfigurationError
        Before any work, for an invalid group spec, filter mode or date bound.

    Data problems never raise: rows with an unparseable date are excluded from
    date-bounded and date-grouped views (but kept in non-date groupings), and
    non-numeric qty/rate/amount read as 0. Both are counted in
    `result.warnings`.
    """
    spec = as_group_spec(group_spec)
    filt = as_filters(filters)
    started = time.perf_counter()

    warnings = AggregationWarnings()
    filtered = apply_filters(records, filt, warnings)

    cache: BucketCache = {}
    rows: List[EnhancedTransaction] = [
        enhance(r, spec.granularity, warnings, cache) for r in filtered
    ]
    if spec.groups_by_date:
        kept: List[EnhancedTransaction] = []
        for r in rows:
            if r.date_bucket is None:
                warnings.note_skipped_date(r.date)
            else:
                kept.append(r)
        rows = kept

    root = build_tree(rows, spec)

    if warnings.has_warnings:
        warnings.log_summary(log)
    log.debug(
        "Aggregated %d rows into %d top-level groups by %s in %.1f ms",
        len(rows),
        len(root.children),
        [d.value for d in spec.dimensions] or "(none)",
        (time.perf_counter() - started) * 1000,
    )
    return AggregationResult(root, warnings, spec, filt)


def aggregate(
    records: Iterable[Any],
    filters: FiltersLike = None,
    group_spec: GroupSpecLike = None,
) -> GroupNode:
    """
    Primary entry point: the synthetic root of the aggregation tree.

    The root's children are the top-level groups; with no grouping dimensions
    the root has a single implicit group (key "All") holding every row.
    Use `run_report` to also get the collected data warnings.
    """
    return run_report(records, filters, group_spec).root


def build_tree(rows: Sequence[EnhancedTransaction], spec: GroupSpec) -> GroupNode:
    """Build the full tree (all depths) for already-enhanced rows."""
    if not spec.dimensions:
        children: Tuple[GroupNode, ...] = (
            _leaf_group(ALL_KEY, 0, (), (ALL_KEY,), rows),
        )
    else:
        children = _build_level(rows, spec, 0, ())
    return GroupNode(
        key=None,
        depth=-1,
        dimensions=(),
        path=(),
        children=children,
        rows=(),
        aggregate=Aggregate.combine(c.aggregate for c in children),
    )


def _build_level(
    rows: Sequence[EnhancedTransaction],
    spec: GroupSpec,
    level: int,
    prefix: NodePath,
) -> Tuple[GroupNode, ...]:
    dimension: Dimension = spec.dimensions[level]
    parts = partition(rows, lambda t: key_for(t, dimension))
    is_last = level == len(spec.dimensions) - 1
    dims = spec.dimensions[: level + 1]

    nodes: List[GroupNode] = []
    for key in ordered_keys(parts, spec.order):
        path = prefix + (key,)
        if is_last:
            nodes.append(_leaf_group(key, level, dims, path, parts[key]))
            continue
        children = _build_level(parts[key], spec, level + 1, path)
        nodes.append(
            GroupNode(
                key=key,
                depth=level,
                dimensions=dims,
                path=path,
                children=children,
                rows=(),
                aggregate=Aggregate.combine(c.aggregate for c in children),
            )
        )
    return tuple(nodes)


def _leaf_group(
    key: str,
    depth: int,
    dimensions: Tuple[Dimension, ...],
    path: NodePath,
    rows: Sequence[EnhancedTransaction],
) -> GroupNode:
    return GroupNode(
        key=key,
        depth=depth,
        dimensions=dimensions,
        path=path,
        children=(),
        rows=tuple(rows),
        aggregate=Aggregate.of_rows(rows),
    )
