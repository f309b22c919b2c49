"""
Exception hierarchy for the summary engine.

Two kinds of failure exist:
  • caller errors (an impossible grouping request) raise `ConfigurationError`
    before any work is done;
  • data errors (a date that does not parse) raise `InvalidDateError` from the
    bucketing helpers, and are collected as warnings by the aggregation pass.

Both derive from `ValueError` so callers that already guard conversions with
`except ValueError` keep working.
"""

# txn_summary/exceptions.py
from __future__ import annotations

from typing import Any


class TxnSummaryError(Exception):
    """Base class for all summary-engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidDateError(TxnSummaryError, ValueError):
    """A transaction date could not be parsed into a calendar date."""

    def __init__(self, value: object):
        super().__init__(
            f"Unrecognized transaction date: {value!r}", {"value": repr(value)}
        )
        self.value = value


class ConfigurationError(TxnSummaryError, ValueError):
    """The requested grouping/filter configuration is invalid."""
