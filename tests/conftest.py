# tests/conftest.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

import pytest

from txn_summary.data_model import Transaction


def mk_txn(
    date: object = "2023-06-15",
    customer: str = "A",
    stockitem: str = "X",
    qty: object = 1,
    rate: object = 1,
    amount: object = None,
) -> Transaction:
    """Small helper to create a Transaction quickly for tests."""
    if amount is None:
        amount = Decimal(str(qty)) * Decimal(str(rate))
    return Transaction(date, customer, stockitem, qty, rate, amount)


@pytest.fixture
def two_months() -> List[Transaction]:
    """Same customer/item in June and July 2023."""
    return [
        mk_txn("2023-06-15", "A", "X", 10, 100, 1000),
        mk_txn("2023-07-15", "A", "X", 12, 110, 1320),
    ]


@pytest.fixture
def mixed() -> List[Transaction]:
    """Two customers, two items, spread over June/July."""
    return [
        mk_txn("2023-06-15", "A", "X", 10, 100, 1000),
        mk_txn("2023-06-20", "B", "Y", 5, 200, 1000),
        mk_txn("2023-07-01", "A", "Y", 2, 50, 100),
        mk_txn("2023-07-15", "A", "X", 12, 110, 1320),
        mk_txn("2023-07-20", "B", "X", 3, 90, 270),
    ]


@pytest.fixture
def make_txn():
    return mk_txn


@pytest.fixture
def restore_logger():
    """Undo configure_logging() changes to the package logger after a test."""
    logger = logging.getLogger("txn_summary")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
