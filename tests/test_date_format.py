from datetime import datetime, timedelta, timezone

import pytest

from catalog.services.custom_id.date_format import format_datetime
from catalog.services.custom_id.errors import CorruptTemplate


@pytest.mark.parametrize("pattern,expected", [
    ("yyyyMMdd", "20240305"),
    ("yy-M-d", "24-3-5"),
    ("HHmmss", "140709"),
    ("hh:mm tt", "02:07 PM"),
    ("h t", "2 P"),
    ("ddd dd MMM", "Tue 05 Mar"),
    ("dddd, MMMM", "Tuesday, March"),
    ("HH'h'mm", "14h07"),
    ("\\yyyyy", "y2024"),
    ("%d", "5"),
    ("ss.fff", "09.123"),
    ("ss.FFFFFFF", "09.123456"),
    ("zzz", "+00:00"),
])
def test_custom_patterns(fixed_now, pattern, expected):
    assert format_datetime(fixed_now, pattern) == expected


@pytest.mark.parametrize("pattern,expected", [
    ("d", "03/05/2024"),
    ("D", "Tuesday, 05 March 2024"),
    ("o", "2024-03-05T14:07:09.1234560Z"),
    ("R", "Tue, 05 Mar 2024 14:07:09 GMT"),
    ("s", "2024-03-05T14:07:09"),
    ("u", "2024-03-05 14:07:09Z"),
    ("t", "14:07"),
    ("Y", "2024 March"),
])
def test_standard_patterns(fixed_now, pattern, expected):
    assert format_datetime(fixed_now, pattern) == expected


@pytest.mark.parametrize("pattern", [None, ""])
def test_missing_pattern_uses_general_format(fixed_now, pattern):
    assert format_datetime(fixed_now, pattern) == "03/05/2024 14:07:09"


def test_trailing_zero_fraction_drops_separator(fixed_now):
    assert format_datetime(fixed_now.replace(microsecond=0), "ss.FFF") == "09"


def test_aware_datetimes_are_converted_to_utc():
    moment = datetime(2024, 3, 5, 16, 7, tzinfo=timezone(timedelta(hours=2)))

    assert format_datetime(moment, "HH:mm") == "14:07"


def test_naive_datetimes_are_treated_as_utc():
    assert format_datetime(datetime(2024, 3, 5, 9, 30), "HH:mm K") == "09:30 Z"


@pytest.mark.parametrize("pattern", ["Z", "q", "ffffffff", "'open", "HH\\"])
def test_unusable_patterns_raise(fixed_now, pattern):
    with pytest.raises(CorruptTemplate):
        format_datetime(fixed_now, pattern)
