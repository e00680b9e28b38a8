"""Utility functions for the arbitrage scanner."""

from deltahound.utils.math import midpoint, percent_change, spread_percent
from deltahound.utils.time import (
    LatencyTimer,
    format_duration_us,
    format_timestamp_ms,
    get_timestamp_ms,
    get_timestamp_us,
)


__all__ = [
    "LatencyTimer",
    "format_duration_us",
    "format_timestamp_ms",
    "get_timestamp_ms",
    "get_timestamp_us",
    "midpoint",
    "percent_change",
    "spread_percent",
]
