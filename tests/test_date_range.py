from datetime import date

import pytest

from purchase_insights.foundation import DateRange, ValidationError, parse_date_range


def test_no_bounds_means_no_filter():
    assert parse_date_range(None, None) is None
    assert parse_date_range("", "") is None


@pytest.mark.parametrize(
    "from_value, to_value",
    [("2024-01-01", None), (None, "2024-01-31"), ("2024-01-01", "")],
)
def test_single_bound_is_rejected(from_value, to_value):
    with pytest.raises(ValidationError) as excinfo:
        parse_date_range(from_value, to_value)
    assert excinfo.value.reason == "both or neither"


@pytest.mark.parametrize(
    "from_value, to_value",
    [
        ("not-a-date", "2024-01-31"),
        ("2024-01-01", "31/01/2024"),
        ("2024-13-01", "2024-12-31"),
    ],
)
def test_unparseable_bound_is_rejected(from_value, to_value):
    with pytest.raises(ValidationError) as excinfo:
        parse_date_range(from_value, to_value)
    assert excinfo.value.reason == "invalid date format"


def test_from_after_to_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        parse_date_range("2024-02-01", "2024-01-31")
    assert excinfo.value.reason == "from after to"


def test_same_day_datetimes_in_wrong_order_are_rejected():
    with pytest.raises(ValidationError):
        parse_date_range("2024-01-01T10:00:00", "2024-01-01T09:00:00")


def test_valid_dates_give_inclusive_interval():
    date_range = parse_date_range("2024-01-01", "2024-01-31")
    assert date_range == DateRange(date(2024, 1, 1), date(2024, 1, 31))
    assert date_range.contains(date(2024, 1, 1))
    assert date_range.contains(date(2024, 1, 31))
    assert not date_range.contains(date(2024, 2, 1))
    assert not date_range.contains(date(2023, 12, 31))


def test_equal_bounds_are_accepted():
    date_range = parse_date_range("2024-03-05", "2024-03-05")
    assert date_range.start == date_range.end == date(2024, 3, 5)


def test_datetimes_are_reduced_to_dates():
    date_range = parse_date_range("2024-01-01T00:00:00Z", "2024-01-31T23:59:59Z")
    assert date_range == DateRange(date(2024, 1, 1), date(2024, 1, 31))


def test_offsets_keep_their_own_calendar_day():
    # 2024-01-01T08:00+09:00 is still 2024-01-01 at its own offset.
    date_range = parse_date_range("2024-01-01T08:00:00+09:00", "2024-01-02")
    assert date_range.start == date(2024, 1, 1)


def test_bounds_are_ordered_as_instants():
    # 10:00+09:00 is 01:00 UTC, earlier than 09:00 UTC on the same day.
    date_range = parse_date_range("2024-01-01T10:00:00+09:00", "2024-01-01T09:00:00Z")
    assert date_range == DateRange(date(2024, 1, 1), date(2024, 1, 1))

    with pytest.raises(ValidationError) as excinfo:
        parse_date_range("2024-01-01T10:00:00Z", "2024-01-01T10:00:00+09:00")
    assert excinfo.value.reason == "from after to"


def test_inverted_calendar_days_are_rejected():
    # Ordered as instants, but the local days run backwards.
    with pytest.raises(ValidationError) as excinfo:
        parse_date_range("2024-01-02T01:00:00+09:00", "2024-01-01T17:00:00Z")
    assert excinfo.value.reason == "from after to"



def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_date_range("2024-01-01", None)
