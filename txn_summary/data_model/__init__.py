# txn_summary/data_model/__init__.py
from .group_node import ALL_KEY, Aggregate, GroupNode, NodePath
from .group_spec import (
    DEFAULT_TEXT_FIELDS,
    Dimension,
    Granularity,
    GroupOrder,
    GroupSpec,
    ReportFilters,
)
from .interfaces import IToDict, ITransaction, RecursiveDict
from .report_state import ReportState
from .transaction import TXN_FIELDS, EnhancedTransaction, Transaction, record_value
from .visible_row import GroupSummary, LeafRow, VisibleRow

__all__ = [
    "ALL_KEY", "Aggregate", "GroupNode", "NodePath", "DEFAULT_TEXT_FIELDS",
    "Dimension", "Granularity", "GroupOrder", "GroupSpec", "ReportFilters",
    "IToDict", "ITransaction", "RecursiveDict", "ReportState", "TXN_FIELDS",
    "EnhancedTransaction", "Transaction", "record_value", "GroupSummary",
    "LeafRow", "VisibleRow"]
