# tests/data_model/test_group_spec.py
from __future__ import annotations

from datetime import date

import pytest

from txn_summary.data_model import (
    Dimension,
    Granularity,
    GroupOrder,
    GroupSpec,
    ReportFilters,
)
from txn_summary.exceptions import ConfigurationError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("customer", Dimension.CUSTOMER),
        ("Stock Item", Dimension.STOCKITEM),
        ("stock_item", Dimension.STOCKITEM),
        (" DATE ", Dimension.DATE),
        (Dimension.DATE, Dimension.DATE),
    ],
)
def test_dimension_from_str(text, expected):
    assert Dimension.from_str(text) is expected


def test_dimension_titles_match_csv_columns():
    assert [d.title for d in (Dimension.DATE, Dimension.CUSTOMER, Dimension.STOCKITEM)] == [
        "Date",
        "Customer",
        "Stock Item",
    ]


def test_unknown_enum_values_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        Dimension.from_str("region")
    with pytest.raises(ConfigurationError):
        Granularity.from_str("fortnight")
    with pytest.raises(ConfigurationError):
        GroupOrder.from_str("random")


def test_group_spec_normalizes_strings():
    spec = GroupSpec(("customer", "date"), "Month", "sorted")  # type: ignore[arg-type]

    assert spec.dimensions == (Dimension.CUSTOMER, Dimension.DATE)
    assert spec.granularity is Granularity.MONTH
    assert spec.order is GroupOrder.SORTED
    assert spec.groups_by_date


@pytest.mark.parametrize(
    "dims, granularity, fragment",
    [
        (("customer", "stockitem", "date"), "day", "At most 2"),
        (("customer", "customer"), None, "distinct"),
        (("date",), None, "granularity"),
    ],
)
def test_invalid_group_specs(dims, granularity, fragment):
    with pytest.raises(ConfigurationError) as exc:
        GroupSpec.of(*dims, granularity=granularity)

    assert fragment in str(exc.value)
    assert isinstance(exc.value, ValueError)


def test_granularity_without_date_is_allowed():
    spec = GroupSpec.of("customer", granularity="week")

    assert not spec.groups_by_date
    assert spec.granularity is Granularity.WEEK


def test_group_spec_dict_round_trip():
    spec = GroupSpec.of("date", "stockitem", granularity="quarter")

    data = spec.to_dict()

    assert data == {
        "dimensions": ["date", "stockitem"],
        "granularity": "quarter",
        "order": "first_seen",
    }
    assert GroupSpec.from_dict(data) == spec
    assert GroupSpec.from_dict({}) == GroupSpec()
    assert GroupSpec.from_dict({"dimensions": "customer"}).dimensions == (Dimension.CUSTOMER,)


def test_group_spec_is_hashable():
    assert hash(GroupSpec.of("customer")) == hash(GroupSpec(("customer",)))  # type: ignore[arg-type]


def test_report_filters_defaults_impose_nothing():
    f = ReportFilters()

    assert not f.has_date_bounds
    assert not f.has_text
    assert f.text_fields == ("customer", "stockitem")
    assert f.text_mode == "contains"


def test_report_filters_validation():
    with pytest.raises(ConfigurationError):
        ReportFilters(text_mode="fuzzy")
    with pytest.raises(ConfigurationError):
        ReportFilters(text_fields=())


def test_report_filters_dict_round_trip():
    f = ReportFilters(
        from_date=date(2023, 6, 1),
        to_date="2023-06-30",
        text_filter="acme",
        text_fields=["customer"],  # type: ignore[arg-type]
        case_sensitive=True,
    )

    data = f.to_dict()

    assert data["from_date"] == "2023-06-01"
    assert data["text_fields"] == ["customer"]
    again = ReportFilters.from_dict(data)
    assert again.from_date == "2023-06-01"
    assert again.text_fields == ("customer",)
    assert again.case_sensitive is True
    assert ReportFilters.from_dict({"text_filter": ""}) == ReportFilters()
