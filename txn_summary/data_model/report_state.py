# txn_summary/data_model/report_state.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, FrozenSet, Iterable, Mapping

from .group_node import NodePath
from .group_spec import GroupSpec, ReportFilters
from .interfaces import IToDict, RecursiveDict


@dataclass(frozen=True)
class ReportState:
    """
    Everything the user has chosen for one summary report, as plain data.

    Changing filters or grouping invalidates the tree shape, so the
    `with_filters`/`with_group_spec` helpers also clear `expanded_paths`.
    """

    filters: ReportFilters = field(default_factory=ReportFilters)
    group_spec: GroupSpec = field(default_factory=GroupSpec)
    expanded_paths: FrozenSet[NodePath] = frozenset()

    def with_filters(self, filters: ReportFilters) -> "ReportState":
        return replace(self, filters=filters, expanded_paths=frozenset())

    def with_group_spec(self, group_spec: GroupSpec) -> "ReportState":
        return replace(self, group_spec=group_spec, expanded_paths=frozenset())

    def with_expanded(self, expanded: Iterable[NodePath]) -> "ReportState":
        return replace(self, expanded_paths=frozenset(tuple(p) for p in expanded))

    @classmethod
    def from_dict(cls, src: Mapping[str, Any]) -> "ReportState":
        return cls(
            filters=ReportFilters.from_dict(src.get("filters") or {}),
            group_spec=GroupSpec.from_dict(src.get("group_spec") or {}),
            expanded_paths=frozenset(
                tuple(str(k) for k in p) for p in src.get("expanded_paths") or ()
            ),
        )

    def to_dict(self) -> RecursiveDict:
        return {
            "filters": self.filters.to_dict(),
            "group_spec": self.group_spec.to_dict(),
            # sorted for a stable serialized form
            "expanded_paths": [list(p) for p in sorted(self.expanded_paths)],
        }


if TYPE_CHECKING:
    _is_idict: type[IToDict] = ReportState
