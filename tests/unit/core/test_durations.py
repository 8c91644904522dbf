from datetime import timedelta

import pytest

from inkpress.core.durations import parse_duration


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("7d", timedelta(days=7)),
        ("15m", timedelta(minutes=15)),
        ("12h", timedelta(hours=12)),
        ("2w", timedelta(weeks=2)),
        ("30s", timedelta(seconds=30)),
        ("500ms", timedelta(milliseconds=500)),
        ("7D", timedelta(days=7)),
        (" 90m ", timedelta(minutes=90)),
        ("3600", timedelta(hours=1)),
        (60, timedelta(minutes=1)),
    ],
)
def test_parse_duration_accepts_known_units(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "d", "7x", "-1d", "1.5h", "7 days", "0d", 0, -5, True])
def test_parse_duration_rejects_bad_values(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_parse_duration_rejects_overflowing_amount():
    with pytest.raises(ValueError, match="too large"):
        parse_duration("99999999999999d")
