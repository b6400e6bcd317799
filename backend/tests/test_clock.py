from datetime import date, datetime, time

import pytest

from app.scheduling.clock import (
    combine,
    day_bounds,
    format_interval,
    intervals_overlap,
    parse_clock_time,
    parse_interval_label,
)
from app.scheduling.errors import FormatError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("09:00", time(9, 0)),
        ("9:05", time(9, 5)),
        ("00:00", time(0, 0)),
        ("23:59", time(23, 59)),
        ("19:30", time(19, 30)),
    ],
)
def test_parse_clock_time_accepts_24h_times(text, expected):
    assert parse_clock_time(text) == expected


@pytest.mark.parametrize("text", ["24:00", "9:60", "0900", "", "12:00 ", "ab:cd", "12:5", "12:00\n"])
def test_parse_clock_time_rejects_malformed_values(text):
    with pytest.raises(FormatError):
        parse_clock_time(text)


def test_parse_clock_time_rejects_non_strings():
    with pytest.raises(FormatError):
        parse_clock_time(None)


def test_combine_anchors_clock_time_to_day_with_zero_seconds():
    moment = datetime(2026, 3, 2, 17, 45, 33, 120)
    assert combine(moment, time(9, 30)) == datetime(2026, 3, 2, 9, 30, 0)
    assert combine(date(2026, 3, 2), time(23, 59)) == datetime(2026, 3, 2, 23, 59)


def test_day_bounds_cover_one_calendar_day():
    start, end = day_bounds(datetime(2026, 3, 2, 15, 0))
    assert start == datetime(2026, 3, 2, 0, 0)
    assert end == datetime(2026, 3, 3, 0, 0)


def test_touching_intervals_do_not_overlap():
    nine = datetime(2026, 3, 2, 9, 0)
    ten = datetime(2026, 3, 2, 10, 0)
    eleven = datetime(2026, 3, 2, 11, 0)
    assert intervals_overlap(nine, ten, ten, eleven) is False
    assert intervals_overlap(ten, eleven, nine, ten) is False


def test_partial_and_nested_intervals_overlap():
    at = lambda h, m=0: datetime(2026, 3, 2, h, m)
    assert intervals_overlap(at(9), at(10), at(9, 30), at(10, 30))
    assert intervals_overlap(at(10), at(11), at(9, 30), at(10, 30))
    assert intervals_overlap(at(9), at(12), at(10), at(11))
    assert intervals_overlap(at(10), at(11), at(9), at(12))


def test_interval_label_formats_and_parses():
    start = datetime(2026, 3, 2, 9, 0)
    end = datetime(2026, 3, 2, 10, 30)
    assert format_interval(start, end) == "09:00 - 10:30"
    assert parse_interval_label(date(2026, 3, 2), "09:00 - 10:30") == (start, end)


@pytest.mark.parametrize("label", ["09:00-10:00", "09:00 - ", "nine - ten", "09:00 - 10:00 - 11:00", ""])
def test_parse_interval_label_rejects_bad_labels(label):
    with pytest.raises(FormatError):
        parse_interval_label(date(2026, 3, 2), label)
