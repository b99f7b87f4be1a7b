"""Unit tests for month key arithmetic"""

import pytest
from datetime import date
from credit_tracker.utils.date_utils import Month, month_range, months_between


def test_parse_month_key():
    assert Month.parse("2024-03") == Month(2024, 3)
    assert str(Month.parse("2024-03")) == "2024-03"


def test_parse_full_date_discards_day():
    assert Month.parse("2024-03-28") == Month(2024, 3)


@pytest.mark.parametrize("value", ["", "2024", "2024-13", "2024-00", "24-03", "March 2024", None])
def test_parse_rejects_malformed(value):
    with pytest.raises(ValueError):
        Month.parse(value)


def test_add_crosses_year_boundary():
    assert Month(2024, 11).add(3) == Month(2025, 2)
    assert Month(2024, 1).add(-1) == Month(2023, 12)


def test_months_between():
    assert months_between(Month(2024, 1), Month(2024, 10)) == 9
    assert months_between(Month.of(date(2024, 5, 1)), Month(2024, 2)) == -3


def test_month_range_inclusive():
    months = month_range(Month(2024, 11), Month(2025, 2))
    assert [str(m) for m in months] == ["2024-11", "2024-12", "2025-01", "2025-02"]


def test_ordering_and_label():
    assert Month(2023, 12) < Month(2024, 1)
    assert Month(2024, 1).label == "January 2024"
