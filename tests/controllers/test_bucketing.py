# tests/controllers/test_bucketing.py
from __future__ import annotations

from datetime import date, datetime

import pytest

from txn_summary.controllers.bucketing import (
    bucket_range,
    buckets_in_range,
    format_bucket,
    group_by_date_bucket,
    is_same_bucket,
    parse_txn_date,
    to_bucket,
)
from txn_summary.data_model import Granularity
from txn_summary.exceptions import ConfigurationError, InvalidDateError

THURSDAY = "2023-06-15T10:30:00Z"
FRIDAY = "2023-06-16T14:45:00Z"

# ----------------------------- to_bucket -----------------------------------


@pytest.mark.parametrize(
    "granularity, expected",
    [
        ("day", "2023-06-15"),
        ("week", "2023-06-12"),  # Thursday → Monday of the same week
        ("month", "2023-06-01"),
        ("quarter", "2023-Q2"),
        ("year", "2023"),
    ],
)
def test_to_bucket_each_granularity(granularity, expected):
    assert to_bucket(THURSDAY, granularity) == expected


def test_to_bucket_accepts_enum_and_date_objects():
    assert to_bucket(date(2023, 6, 15), Granularity.WEEK) == "2023-06-12"
    assert to_bucket(datetime(2023, 6, 15, 23, 59), Granularity.DAY) == "2023-06-15"


def test_week_bucket_is_monday_start():
    """Monday..Sunday share a key; the next Monday starts a new week."""
    monday = to_bucket("2023-06-12T00:00:00Z", "week")
    sunday = to_bucket("2023-06-18T23:59:00Z", "week")
    next_monday = to_bucket("2023-06-19T23:59:00Z", "week")

    assert monday == sunday == to_bucket("2023-06-15", "week") == "2023-06-12"
    assert next_monday == "2023-06-19"


def test_week_bucket_crosses_year_boundary():
    # 2023-01-01 is a Sunday; its week began on Monday 2022-12-26
    assert to_bucket("2023-01-01", "week") == "2022-12-26"
    assert to_bucket("2024-12-31", "week") == "2024-12-30"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2023-01-01", "2023-Q1"),
        ("2023-03-31", "2023-Q1"),
        ("2023-04-01", "2023-Q2"),
        ("2023-06-15", "2023-Q2"),
        ("2023-09-30", "2023-Q3"),
        ("2023-10-01", "2023-Q4"),
        ("2023-12-31", "2023-Q4"),
    ],
)
def test_quarter_boundaries(raw, expected):
    assert to_bucket(raw, "quarter") == expected


def test_aware_timestamp_uses_its_own_calendar_date():
    assert to_bucket("2023-06-15T23:30:00-05:00", "day") == "2023-06-15"
    assert to_bucket("2023-06-15T00:30:00+09:00", "day") == "2023-06-15"


@pytest.mark.parametrize("bad", ["invalid-date", "", "   ", None, 12345, "2023-13-01"])
def test_to_bucket_raises_invalid_date(bad):
    with pytest.raises(InvalidDateError):
        to_bucket(bad, "day")


def test_invalid_date_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_txn_date("not a date")


def test_unknown_granularity_is_configuration_error():
    with pytest.raises(ConfigurationError):
        to_bucket("2023-06-15", "fortnight")


# ----------------------------- format_bucket --------------------------------


@pytest.mark.parametrize(
    "key, granularity, expected",
    [
        ("2023-06-15", "day", "Jun 15, 2023"),
        ("2023-06-12", "week", "Jun 12 - Jun 18, 2023"),
        ("2023-06-01", "month", "Jun 2023"),
        ("2023-Q2", "quarter", "Q2 2023"),
        ("2023", "year", "2023"),
    ],
)
def test_format_bucket(key, granularity, expected):
    assert format_bucket(key, granularity) == expected


def test_format_week_spanning_years_uses_end_year():
    assert format_bucket("2024-12-30", "week") == "Dec 30 - Jan 05, 2025"


# ----------------------------- bucket_range ---------------------------------


@pytest.mark.parametrize(
    "key, granularity, start, end",
    [
        ("2023-06-15", "day", date(2023, 6, 15), date(2023, 6, 15)),
        ("2023-06-12", "week", date(2023, 6, 12), date(2023, 6, 18)),
        ("2023-06-01", "month", date(2023, 6, 1), date(2023, 6, 30)),
        ("2024-02-01", "month", date(2024, 2, 1), date(2024, 2, 29)),
        ("2023-Q4", "quarter", date(2023, 10, 1), date(2023, 12, 31)),
        ("2023-Q1", "quarter", date(2023, 1, 1), date(2023, 3, 31)),
        ("2023", "year", date(2023, 1, 1), date(2023, 12, 31)),
    ],
)
def test_bucket_range(key, granularity, start, end):
    assert bucket_range(key, granularity) == (start, end)


@pytest.mark.parametrize("key, granularity", [("2023-Q5", "quarter"), ("23", "year")])
def test_bucket_range_rejects_malformed_keys(key, granularity):
    with pytest.raises(InvalidDateError):
        bucket_range(key, granularity)


# ----------------------------- is_same_bucket -------------------------------


def test_is_same_bucket():
    assert is_same_bucket(THURSDAY, THURSDAY, "day")
    assert not is_same_bucket(THURSDAY, FRIDAY, "day")
    for g in ("week", "month", "quarter", "year"):
        assert is_same_bucket(THURSDAY, FRIDAY, g)


# ----------------------------- buckets_in_range -----------------------------


def test_buckets_in_range():
    assert buckets_in_range("2023-06-15", "2023-06-17", "day") == [
        "2023-06-15",
        "2023-06-16",
        "2023-06-17",
    ]
    assert buckets_in_range("2023-06-12", "2023-06-25", "week") == [
        "2023-06-12",
        "2023-06-19",
    ]
    assert buckets_in_range("2023-06-01", "2023-08-01", "month") == [
        "2023-06-01",
        "2023-07-01",
        "2023-08-01",
    ]
    assert buckets_in_range("2023-02-10", "2023-11-01", "quarter") == [
        "2023-Q1",
        "2023-Q2",
        "2023-Q3",
        "2023-Q4",
    ]


def test_buckets_in_range_empty_when_reversed():
    assert buckets_in_range("2023-06-17", "2023-06-15", "day") == []


# ----------------------------- group_by_date_bucket -------------------------


def test_group_by_date_bucket_counts_and_order():
    data = [
        {"id": 1, "date": "2023-06-15", "value": 100},
        {"id": 2, "date": "2023-06-15", "value": 200},
        {"id": 3, "date": "2023-06-16", "value": 300},
        {"id": 4, "date": "2023-06-17", "value": 400},
    ]

    by_day = group_by_date_bucket(data, "day")
    by_week = group_by_date_bucket(data, "week")

    assert [len(v) for v in by_day.values()] == [2, 1, 1]
    assert list(by_day) == ["2023-06-15", "2023-06-16", "2023-06-17"]
    assert by_week == {"2023-06-12": data}


def test_group_by_date_bucket_skips_bad_dates_and_handles_empty():
    data = [{"date": "oops"}, {"date": THURSDAY}, {"other": 1}]

    grouped = group_by_date_bucket(data, "day")

    assert grouped == {"2023-06-15": [data[1]]}
    assert group_by_date_bucket([], "day") == {}
