# txn_summary/controllers/report_warnings.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Final, List

log = logging.getLogger(__name__)

# Only the first few offending values are kept verbatim
MAX_SAMPLES: Final[int] = 5


@dataclass
class AggregationWarnings:
    """
    Data problems met during one aggregation pass.

    Bad data never aborts a pass: rows with an unparseable date are left out of
    date-bounded/date-grouped views, and non-numeric qty/rate/amount cells are
    read as 0. Each occurrence is counted here for the caller to surface.
    """

    skipped_dates: int = 0
    coerced_numbers: int = 0
    samples: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.skipped_dates or self.coerced_numbers)

    @property
    def messages(self) -> List[str]:
        out: List[str] = []
        if self.skipped_dates:
            out.append(
                f"{self.skipped_dates} record(s) skipped: date could not be parsed"
            )
        if self.coerced_numbers:
            out.append(
                f"{self.coerced_numbers} numeric value(s) could not be parsed "
                "and were read as 0"
            )
        return out

    def note_skipped_date(self, value: Any) -> None:
        self.skipped_dates += 1
        self._sample(f"date={value!r}")

    def note_coerced(self, name: str, value: Any) -> None:
        self.coerced_numbers += 1
        self._sample(f"{name}={value!r}")

    def _sample(self, text: str) -> None:
        if len(self.samples) < MAX_SAMPLES:
            self.samples.append(text)

    def log_summary(self, logger: logging.Logger = log) -> None:
        for msg in self.messages:
            logger.warning("%s (e.g. %s)", msg, ", ".join(self.samples))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skipped_dates": self.skipped_dates,
            "coerced_numbers": self.coerced_numbers,
            "messages": self.messages,
            "samples": list(self.samples),
        }
