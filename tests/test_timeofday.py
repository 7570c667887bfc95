import pytest

from Timetable.timeofday import format_time, parse_time


@pytest.mark.parametrize("text, minutes", [
    ("5:45", 345),
    ("05:45", 345),
    ("  06:25 ", 385),
    ("23:59", 1439),
    ("0:00", 0),
    ("06:25:00", 385),
    ("24:00", 1440),
])
def test_parse_time_accepts(text, minutes):
    assert parse_time(text) == minutes


@pytest.mark.parametrize("text", ["abc", "6", "6:5", "24:01", "25:00", "12:60", "12:00:60", "06:25:59", "5:45:30", "6.30", "-1:00"])
def test_parse_time_rejects(text):
    with pytest.raises(ValueError):
        parse_time(text)


def test_blank_is_empty_not_an_error():
    assert parse_time("") is None
    assert parse_time("   ") is None
    assert parse_time(None) is None


def test_format_time():
    assert format_time(345) == "5:45"
    assert format_time(345, zero_pad_hours=True) == "05:45"
    assert format_time(1440) == "24:00"
    assert format_time(None) == ""
