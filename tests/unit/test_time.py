"""
Unit tests for time utilities.
"""

from deltahound.utils.time import (
    LatencyTimer,
    format_duration_us,
    format_timestamp_ms,
    get_timestamp_ms,
    get_timestamp_us,
)


def test_timestamps_consistent() -> None:
    ms = get_timestamp_ms()
    us = get_timestamp_us()
    assert abs(us // 1000 - ms) < 1000


def test_format_timestamp_ms() -> None:
    assert format_timestamp_ms(1704067200123) == "2024-01-01T00:00:00.123Z"
    assert format_timestamp_ms(1704067200000) == "2024-01-01T00:00:00.000Z"


def test_latency_timer() -> None:
    with LatencyTimer() as timer:
        sum(range(1000))

    assert timer.latency_us >= 0
    assert timer.end_us >= timer.start_us


def test_format_duration_us() -> None:
    assert format_duration_us(500) == "500μs"
    assert format_duration_us(1500) == "1.50ms"
    assert format_duration_us(1_500_000) == "1.50s"
