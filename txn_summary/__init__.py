# txn_summary/__init__.py
"""
Transaction summary engine: filter, group and roll up sale/purchase lines
into an expandable tree, and export the visible rows as CSV.
"""

from .controllers import (
    AggregationResult,
    AggregationWarnings,
    ReportSession,
    aggregate,
    apply_filters,
    export_csv,
    run_report,
    to_bucket,
    toggle_expanded,
    visible_rows,
)
from .data_model import (
    Aggregate,
    Dimension,
    EnhancedTransaction,
    Granularity,
    GroupNode,
    GroupOrder,
    GroupSpec,
    GroupSummary,
    LeafRow,
    ReportFilters,
    ReportState,
    Transaction,
)
from .exceptions import ConfigurationError, InvalidDateError, TxnSummaryError

__all__ = [
    "AggregationResult", "AggregationWarnings", "ReportSession", "aggregate",
    "apply_filters", "export_csv", "run_report", "to_bucket", "toggle_expanded",
    "visible_rows", "Aggregate", "Dimension", "EnhancedTransaction",
    "Granularity", "GroupNode", "GroupOrder", "GroupSpec", "GroupSummary",
    "LeafRow", "ReportFilters", "ReportState", "Transaction",
    "ConfigurationError", "InvalidDateError", "TxnSummaryError"]
