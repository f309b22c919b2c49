# txn_summary/controllers/__init__.py
from .aggregation import AggregationResult, aggregate, build_tree, run_report
from .bucketing import (
    bucket_range,
    buckets_in_range,
    format_bucket,
    group_by_date_bucket,
    is_same_bucket,
    parse_txn_date,
    to_bucket,
)
from .export import CSV_HEADER, export_csv, visible_rows_to_frame
from .filtering import apply_filters, matches_text
from .grouping import enhance, extract_keys, partition
from .loaders import transactions_from_frame, transactions_from_records
from .navigation import (
    collapse_all,
    collapse_path,
    expand_all,
    expand_path,
    toggle_expanded,
    visible_rows,
)
from .report_session import ReportSession
from .report_warnings import AggregationWarnings

__all__ = [
    "AggregationResult", "aggregate", "build_tree", "run_report",
    "bucket_range", "buckets_in_range", "format_bucket", "group_by_date_bucket",
    "is_same_bucket", "parse_txn_date", "to_bucket", "CSV_HEADER", "export_csv",
    "visible_rows_to_frame", "apply_filters", "matches_text", "enhance",
    "extract_keys", "partition", "transactions_from_frame",
    "transactions_from_records", "collapse_all", "collapse_path", "expand_all",
    "expand_path", "toggle_expanded", "visible_rows", "ReportSession",
    "AggregationWarnings"]
