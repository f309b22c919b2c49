# txn_summary/controllers/report_session.py
from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from txn_summary.data_model.group_spec import GroupSpec, ReportFilters
from txn_summary.data_model.report_state import ReportState
from txn_summary.data_model.visible_row import VisibleRow

from . import navigation as nav
from .aggregation import AggregationResult, run_report
from .export import DEFAULT_RATE_PLACES, export_csv

log = logging.getLogger(__name__)

MemoKey = Tuple[int, ReportFilters, GroupSpec]


@dataclass
class ReportSession:
    """
    Caller-side holder for one summary report.

    Responsibilities:
    • Keep the loaded transaction batch and the current `ReportState`.
    • Memoize the last aggregation on (records identity, filters, group spec);
      expand/collapse changes never trigger a new pass.
    • Apply last-request-wins when passes run on a worker: a result is only
      accepted if no newer request was issued after it started.
    """

    records: Tuple[Any, ...] = ()
    state: ReportState = field(default_factory=ReportState)

    # (key, result) swapped as one unit so readers never see a mixed pair
    _memo: Optional[Tuple[MemoKey, AggregationResult]] = field(
        default=None, init=False, repr=False
    )
    _ticket: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.records = tuple(self.records)

    # region Inputs

    def load(self, records: Iterable[Any]) -> None:
        """Replace the batch (snapshotted) and reset expansion state."""
        with self._lock:
            self.records = tuple(records)
            self._memo = None
        self.state = self.state.with_expanded(())
        log.info("Loaded %d transactions", len(self.records))

    def set_filters(self, filters: ReportFilters) -> None:
        self.state = self.state.with_filters(filters)

    def set_group_spec(self, group_spec: GroupSpec) -> None:
        self.state = self.state.with_group_spec(group_spec)

    def toggle(self, path: Sequence[str]) -> None:
        self.state = self.state.with_expanded(
            nav.toggle_expanded(self.state.expanded_paths, path)
        )

    def expand_all(self) -> None:
        self.state = self.state.with_expanded(nav.expand_all(self.result().root))

    def collapse_all(self) -> None:
        self.state = self.state.with_expanded(nav.collapse_all())

    # endregion Inputs

    # region Results

    def _key(self) -> MemoKey:
        return (id(self.records), self.state.filters, self.state.group_spec)

    def result(self) -> AggregationResult:
        """Current aggregation, recomputed only when its inputs changed."""
        key = self._key()
        with self._lock:
            memo = self._memo
        if memo is not None and memo[0] == key:
            log.debug("Reusing cached aggregation (%d rows)", memo[1].row_count)
            return memo[1]
        result = run_report(self.records, self.state.filters, self.state.group_spec)
        with self._lock:
            self._memo = (key, result)
        return result

    def visible_rows(self) -> List[VisibleRow]:
        return nav.visible_rows(self.result().root, self.state.expanded_paths)

    def export_csv(self, rate_places: int = DEFAULT_RATE_PLACES) -> str:
        return export_csv(self.visible_rows(), rate_places)

    # endregion Results

    # region Last-request-wins

    def begin_request(self) -> int:
        """Issue a ticket for a new computation; older tickets become stale."""
        with self._lock:
            self._ticket += 1
            return self._ticket

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._ticket

    def complete(self, ticket: int, key: MemoKey, result: AggregationResult) -> bool:
        """Accept `result` only when `ticket` is still the newest request."""
        with self._lock:
            if ticket != self._ticket:
                log.debug("Discarding stale result for request %d", ticket)
                return False
            self._memo = (key, result)
            return True

    def submit(self, executor: Executor) -> "Future[AggregationResult]":
        """
        Run the current pass on `executor`. The returned future always holds
        that pass's result, but the session only adopts it if it is still the
        newest request when it finishes.
        """
        ticket = self.begin_request()
        key = self._key()
        records, filters, spec = self.records, self.state.filters, self.state.group_spec
        future = executor.submit(run_report, records, filters, spec)

        def _adopt(f: "Future[AggregationResult]") -> None:
            if f.cancelled() or f.exception() is not None:
                return
            self.complete(ticket, key, f.result())

        future.add_done_callback(_adopt)
        return future

    # endregion Last-request-wins
