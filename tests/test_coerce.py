"""
Tests for value coercion and date/time layouts.
"""

from datetime import datetime, timedelta, timezone

import pytest

from esfilter.filters import DATETIME_LAYOUT, Filter
from esfilter.query import Text, Timestamp, ValueCoercionError, coerce_value, parse_timestamp
from esfilter.query.coerce import strptime_layout

UTC = timezone.utc


@pytest.mark.parametrize(
    "layout,expected",
    [
        ("2006-01-02", "%Y-%m-%d"),
        ("01/02/2006 15:04:05 MST", "%m/%d/%Y %H:%M:%S %Z"),
        ("2006-01-02T15:04:05Z07:00", "%Y-%m-%dT%H:%M:%S%z"),
        ("%d.%m.%Y", "%d.%m.%Y"),
    ],
)
def test_strptime_layout(layout, expected):
    """Test Go reference layouts translate to strptime formats."""
    assert strptime_layout(layout) == expected


def test_parse_date_is_utc_midnight():
    assert parse_timestamp("2017-01-27", "%Y-%m-%d") == datetime(2017, 1, 27, tzinfo=UTC)
    assert parse_timestamp("2017-01-27", "2006-01-02") == datetime(2017, 1, 27, tzinfo=UTC)


def test_parse_datetime_with_zone_abbreviation():
    """Test known abbreviations shift to UTC."""
    got = parse_timestamp("01/27/2017 10:30:00 MST", DATETIME_LAYOUT)
    assert got == datetime(2017, 1, 27, 17, 30, tzinfo=UTC)
    assert got.utcoffset() == timedelta(0)


def test_parse_datetime_unknown_zone_reads_as_utc(caplog):
    got = parse_timestamp("01/27/2017 10:30:00 XYZ", DATETIME_LAYOUT)
    assert got == datetime(2017, 1, 27, 10, 30, tzinfo=UTC)
    assert "Unknown zone abbreviation" in caplog.text


def test_parse_numeric_offset():
    got = parse_timestamp("2017-01-27T10:00:00+0200", "%Y-%m-%dT%H:%M:%S%z")
    assert got == datetime(2017, 1, 27, 8, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "raw,layout",
    [
        ("nope", "%Y-%m-%d"),
        ("27/01/2017", "2006-01-02"),
        ("01/27/2017 10:30:00", DATETIME_LAYOUT),
    ],
)
def test_parse_failure_raises(raw, layout):
    with pytest.raises(ValueCoercionError) as exc:
        parse_timestamp(raw, layout)
    assert exc.value.value == raw
    assert exc.value.layout == layout


def test_coerce_blank_values_are_skipped():
    """Test blank values never reach the parser."""
    f = Filter(field="end_date", selection="date", format="%Y-%m-%d")
    assert coerce_value("", f) is None
    assert coerce_value("   ", f) is None


def test_coerce_text_is_trimmed():
    assert coerce_value("  run ", Filter(field="w", selection="multi")) == Text("run")


def test_coerce_date_selection_without_format():
    got = coerce_value("2017-01-27", Filter(field="d", selection="date"))
    assert got == Timestamp(datetime(2017, 1, 27, tzinfo=UTC))


def test_timestamp_render_and_shift():
    ts = Timestamp(datetime(2017, 1, 27, tzinfo=UTC))
    assert ts.render() == "2017-01-27T00:00:00Z"
    assert ts.shifted(timedelta(hours=24)).render() == "2017-01-28T00:00:00Z"
    assert Timestamp(datetime(2017, 1, 27, 0, 0, 0, 500000, tzinfo=UTC)).render() == "2017-01-27T00:00:00.500000Z"
