"""
Metrics collection for scan monitoring.

Tracks scan latencies, counters, and opportunity statistics
with efficient in-memory storage.
"""

import time
from collections import deque
from dataclasses import dataclass

from deltahound.config.constants import LATENCY_WINDOW_SIZE
from deltahound.core.types import Opportunity


@dataclass
class LatencyStats:
    """Aggregated latency statistics."""

    min_us: int = 0
    max_us: int = 0
    avg_us: float = 0.0
    p50_us: int = 0
    p95_us: int = 0
    p99_us: int = 0
    count: int = 0


@dataclass
class ScanStats:
    """Polling and detection statistics."""

    cycles: int = 0
    batches_scanned: int = 0
    batches_skipped: int = 0
    venue_failures: int = 0
    quotes_received: int = 0
    quotes_rejected: int = 0
    opportunities_found: int = 0
    stablecoin_opportunities: int = 0
    best_profit_percent: float = 0.0

    @property
    def rejection_rate(self) -> float:
        """Share of received quotes that failed validation."""
        return self.quotes_rejected / self.quotes_received if self.quotes_received > 0 else 0.0


class MetricsCollector:
    """
    Collects and aggregates scan metrics.

    Features:
    - Rolling window latency tracking
    - Counter-based event tracking
    - Per-pair opportunity counts
    """

    def __init__(
        self,
        latency_window_size: int = LATENCY_WINDOW_SIZE,
    ) -> None:
        """
        Initialize metrics collector.

        Args:
            latency_window_size: Number of samples to keep for latency stats.
        """
        self._window_size = latency_window_size
        self._latencies: dict[str, deque[int]] = {}
        self._counters: dict[str, int] = {}
        self._by_pair: dict[str, int] = {}
        self._scan_stats = ScanStats()
        self._start_time = time.time()

    def record_latency(self, name: str, latency_us: int) -> None:
        """
        Record a latency measurement.

        Args:
            name: Metric name (e.g., "scan_pair").
            latency_us: Latency in microseconds.
        """
        if name not in self._latencies:
            self._latencies[name] = deque(maxlen=self._window_size)

        self._latencies[name].append(latency_us)

    def increment_counter(self, name: str, value: int = 1) -> None:
        """
        Increment a counter.

        Args:
            name: Counter name.
            value: Amount to increment.
        """
        self._counters[name] = self._counters.get(name, 0) + value

    def get_counter(self, name: str) -> int:
        """Get counter value."""
        return self._counters.get(name, 0)

    def record_cycle(self) -> None:
        self._scan_stats.cycles += 1

    def record_venue_failure(self) -> None:
        self._scan_stats.venue_failures += 1

    def record_batch(self, received: int, rejected: int, scanned: bool = True) -> None:
        """
        Record one pair's quote batch.

        Args:
            received: Quotes returned by venues.
            rejected: Quotes that failed validation.
            scanned: Whether the batch reached the detector.
        """
        self._scan_stats.quotes_received += received
        self._scan_stats.quotes_rejected += rejected
        if scanned:
            self._scan_stats.batches_scanned += 1
        else:
            self._scan_stats.batches_skipped += 1

    def record_opportunity(self, opportunity: Opportunity) -> None:
        """Record a reported opportunity."""
        self._scan_stats.opportunities_found += 1
        if opportunity.is_stablecoin:
            self._scan_stats.stablecoin_opportunities += 1
        if opportunity.profit_percent > self._scan_stats.best_profit_percent:
            self._scan_stats.best_profit_percent = opportunity.profit_percent
        self._by_pair[opportunity.pair] = self._by_pair.get(opportunity.pair, 0) + 1

    def get_latency_stats(self, name: str) -> LatencyStats:
        """
        Get aggregated latency statistics.

        Args:
            name: Metric name.

        Returns:
            Latency statistics.
        """
        samples = self._latencies.get(name)
        if not samples:
            return LatencyStats()

        sorted_samples = sorted(samples)
        n = len(sorted_samples)

        return LatencyStats(
            min_us=sorted_samples[0],
            max_us=sorted_samples[-1],
            avg_us=sum(sorted_samples) / n,
            p50_us=sorted_samples[n // 2],
            p95_us=sorted_samples[int(n * 0.95)] if n > 1 else sorted_samples[-1],
            p99_us=sorted_samples[int(n * 0.99)] if n > 1 else sorted_samples[-1],
            count=n,
        )

    @property
    def scan_stats(self) -> ScanStats:
        """Get scan statistics."""
        return self._scan_stats

    @property
    def opportunities_by_pair(self) -> dict[str, int]:
        """Get opportunity counts keyed by pair label."""
        return dict(self._by_pair)

    @property
    def uptime_seconds(self) -> float:
        """Get uptime in seconds."""
        return time.time() - self._start_time

    def reset(self) -> None:
        """Reset all metrics."""
        self._latencies.clear()
        self._counters.clear()
        self._by_pair.clear()
        self._scan_stats = ScanStats()
        self._start_time = time.time()
