import time
from datetime import datetime, timedelta, timezone

import pytest

from stationkit.time import Stopwatch, format_timestamp, unix_timestamp


def test_stopwatch_starts_near_zero_and_grows():
    sw = Stopwatch()
    first = sw.microseconds("a")
    assert 0 <= first < 1_000_000
    time.sleep(0.01)
    assert sw.microseconds("a") >= 10_000
    assert sw.milliseconds("a") >= 10


def test_stopwatch_reset():
    sw = Stopwatch()
    sw.microseconds("t")
    time.sleep(0.02)
    sw.reset("t")
    assert sw.milliseconds("t") < 20


def test_independent_timers():
    sw = Stopwatch()
    sw.microseconds("x")
    time.sleep(0.01)
    assert sw.microseconds("y") < sw.microseconds("x")


def test_unix_timestamp():
    text = unix_timestamp()
    assert len(text.split(".")[1]) == 6
    assert abs(float(text) - time.time()) < 5


def test_offset_formatting():
    expected = (datetime.now(timezone.utc) + timedelta(hours=3)).strftime("%Y-%m-%d")
    assert format_timestamp("%Y-%m-%d", "3") == expected


@pytest.mark.parametrize("offset", ["abc", "24", "-30"])
def test_bad_offset(offset):
    with pytest.raises(ValueError):
        format_timestamp("%Y", offset)