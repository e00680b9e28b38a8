#!/usr/bin/env python3
"""
Detection Benchmark Script.

Measures normalization and detection latency for growing quote batches.
Run after installing the package (``pip install -e .``).
"""

import random
import statistics
import sys

from deltahound.core.types import Quote
from deltahound.market.normalizer import PriceNormalizer
from deltahound.strategy.detector import ArbitrageDetector, DetectorConfig
from deltahound.telemetry.reporter import OpportunityReporter
from deltahound.utils.time import format_duration_us, get_timestamp_us


PAIRS = ("ETH/USDT", "ETH/USDC", "ETH/DAI")


def make_batch(size: int, rng: random.Random) -> list[Quote]:
    """Build a batch of quotes spread over a few stable quote assets."""
    quotes = []
    for i in range(size):
        mid = 3500.0 * (1 + rng.gauss(0, 0.002))
        half_spread = mid * 0.0002
        quotes.append(
            Quote.create(
                venue=f"Venue{i}",
                pair=PAIRS[i % len(PAIRS)],
                bid=mid - half_spread,
                ask=mid + half_spread,
            )
        )
    return quotes


def collect(latencies: list[int]) -> dict[str, float]:
    return {
        "min": min(latencies),
        "max": max(latencies),
        "avg": statistics.mean(latencies),
        "p50": statistics.median(latencies),
        "p99": sorted(latencies)[int(len(latencies) * 0.99)],
    }


def benchmark_normalize(batch_size: int, iterations: int = 1000) -> dict[str, float]:
    """Benchmark normalization of one batch."""
    rng = random.Random(1)
    batch = make_batch(batch_size, rng)
    latencies: list[int] = []

    for _ in range(iterations):
        start = get_timestamp_us()
        PriceNormalizer.normalize(batch)
        latencies.append(get_timestamp_us() - start)

    return collect(latencies)


def benchmark_detect(batch_size: int, iterations: int = 1000) -> tuple[dict[str, float], int]:
    """Benchmark detection over fresh batches; returns stats and opportunity count."""
    rng = random.Random(2)
    detector = ArbitrageDetector(DetectorConfig(min_profit_threshold=0.0), sink=OpportunityReporter())
    latencies: list[int] = []
    found = 0

    for _ in range(iterations):
        batch = PriceNormalizer.normalize(make_batch(batch_size, rng))
        start = get_timestamp_us()
        found += len(detector.detect(batch))
        latencies.append(get_timestamp_us() - start)

    return collect(latencies), found


def format_stats(stats: dict[str, float]) -> str:
    """Format stats for display."""
    return (
        f"min={format_duration_us(int(stats['min']))}, "
        f"avg={format_duration_us(int(stats['avg']))}, "
        f"p50={format_duration_us(int(stats['p50']))}, "
        f"p99={format_duration_us(int(stats['p99']))}, "
        f"max={format_duration_us(int(stats['max']))}"
    )


def main() -> int:
    """Run all benchmarks."""
    print("=" * 70)
    print("  DETECTION BENCHMARK")
    print("=" * 70)
    print()

    for size in (4, 12, 48):
        print(f"Batch of {size} quotes")
        print(f"   normalize: {format_stats(benchmark_normalize(size))}")
        stats, found = benchmark_detect(size)
        print(f"   detect:    {format_stats(stats)}  ({found} opportunities)")
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
