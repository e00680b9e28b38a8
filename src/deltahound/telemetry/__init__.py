"""Telemetry module for logging, metrics, and reporting."""

from deltahound.telemetry.logger import AsyncLogger, setup_logging
from deltahound.telemetry.metrics import MetricsCollector
from deltahound.telemetry.reporter import OpportunityReporter, SummaryReporter


__all__ = [
    "AsyncLogger",
    "MetricsCollector",
    "OpportunityReporter",
    "SummaryReporter",
    "setup_logging",
]
