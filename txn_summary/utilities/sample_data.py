"""
Synthetic transaction batches for demos, tests and the performance check.

All generators are deterministic for a given seed so test expectations and
timings are reproducible.
"""

# txn_summary/utilities/sample_data.py
from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from txn_summary.data_model.transaction import Transaction

DEFAULT_CUSTOMERS: Tuple[str, ...] = (
    "Acme Corporation",
    "Beta Industries",
    "Gamma Solutions",
    "Delta Enterprises",
    "Epsilon Systems",
    "Zeta Technologies",
    "Eta Services",
    "Theta Consulting",
    "Iota Solutions",
    "Kappa Industries",
)

DEFAULT_STOCK_ITEMS: Tuple[str, ...] = (
    "Laptop Computer",
    "Desktop Monitor",
    "Wireless Mouse",
    "Keyboard",
    "USB Cable",
    "Power Adapter",
    "Network Switch",
    "Router",
    "Hard Drive",
    "Memory Stick",
    "Printer",
    "Scanner",
    "Tablet",
    "Smartphone",
    "Headphones",
    "Speaker",
    "Camera",
    "Tripod",
    "Software License",
    "Cloud Storage",
)


def generate_mock_transactions(
    count: int = 1000,
    *,
    seed: Optional[int] = 0,
    start: date = date(2023, 1, 1),
    end: date = date(2023, 12, 31),
    customers: Sequence[str] = DEFAULT_CUSTOMERS,
    stock_items: Sequence[str] = DEFAULT_STOCK_ITEMS,
    qty_range: Tuple[int, int] = (1, 100),
    rate_range: Tuple[int, int] = (10, 1000),
) -> List[Transaction]:
    """Random sales lines with `amount = qty * rate` and ISO day dates."""
    rng = random.Random(seed)
    span = (end - start).days
    out: List[Transaction] = []
    for _ in range(count):
        d = start + timedelta(days=rng.randint(0, span))
        qty = rng.randint(qty_range[0], qty_range[1])
        rate = Decimal(rng.randint(rate_range[0] * 100, rate_range[1] * 100)) / 100
        out.append(
            Transaction(
                date=d.isoformat(),
                customer=rng.choice(customers),
                stockitem=rng.choice(stock_items),
                qty=Decimal(qty),
                rate=rate,
                amount=qty * rate,
            )
        )
    return out


def generate_patterned_dataset() -> List[Transaction]:
    """3 customers x 3 items x 5 timestamps with predictable qty/rate."""
    customers = ("Customer A", "Customer B", "Customer C")
    items = ("Item 1", "Item 2", "Item 3")
    stamps = (
        "2023-06-15T10:00:00Z",
        "2023-06-15T11:00:00Z",
        "2023-06-16T10:00:00Z",
        "2023-06-16T11:00:00Z",
        "2023-07-15T10:00:00Z",
    )
    out: List[Transaction] = []
    for ci, customer in enumerate(customers):
        for ii, item in enumerate(items):
            for di, stamp in enumerate(stamps):
                qty = Decimal((ci + 1) * (ii + 1))
                rate = Decimal(100 + di * 10)
                out.append(Transaction(stamp, customer, item, qty, rate, qty * rate))
    return out


def generate_edge_case_dataset() -> List[Transaction]:
    """Zero qty, zero rate, very large, very small and negative lines."""
    return [
        Transaction("2023-06-15T10:00:00Z", "Customer A", "Item 1", 0, 100, 0),
        Transaction("2023-06-15T11:00:00Z", "Customer B", "Item 2", 10, 0, 0),
        Transaction(
            "2023-06-16T10:00:00Z",
            "Customer C",
            "Item 3",
            1_000_000,
            1_000_000,
            1_000_000_000_000,
        ),
        Transaction(
            "2023-06-16T11:00:00Z",
            "Customer D",
            "Item 4",
            1,
            Decimal("0.01"),
            Decimal("0.01"),
        ),
        Transaction("2023-06-17T10:00:00Z", "Customer E", "Item 5", -5, 100, -500),
    ]
