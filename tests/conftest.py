"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

import pytest

from deltahound.config.settings import Settings
from deltahound.core.types import FeeSchedule, Quote
from deltahound.strategy.detector import ArbitrageDetector, DetectorConfig
from tests.mocks.sink import QuoteFactory, RecordingSink


# 2024-01-01T00:00:00Z
FIXED_TIMESTAMP_MS = 1704067200000


# =============================================================================
# Quote Fixtures
# =============================================================================


@pytest.fixture
def make_quote() -> QuoteFactory:
    """Factory for quotes with a consistent spread and fixed timestamp."""

    def _make(venue: str, pair: str, bid: float, ask: float) -> Quote:
        return Quote.create(venue=venue, pair=pair, bid=bid, ask=ask, timestamp=FIXED_TIMESTAMP_MS)

    return _make


@pytest.fixture
def quote_binance_ethusdt(make_quote: QuoteFactory) -> Quote:
    """ETH/USDT on Binance."""
    return make_quote("Binance", "ETH/USDT", 3000.0, 3001.0)


@pytest.fixture
def quote_kraken_ethusdt(make_quote: QuoteFactory) -> Quote:
    """ETH/USDT on Kraken, bid above Binance's ask."""
    return make_quote("Kraken", "ETH/USDT", 3010.0, 3011.0)


# =============================================================================
# Detector Fixtures
# =============================================================================


@pytest.fixture
def zero_cost_config() -> DetectorConfig:
    """No fees, no slippage, no general threshold."""
    return DetectorConfig(
        min_profit_threshold=0.0,
        max_slippage_percent=0.0,
        fees=FeeSchedule(fees={}, default_fee_percent=0.0),
        synthetic_fee_percent=0.0,
    )


@pytest.fixture
def zero_cost_detector(zero_cost_config: DetectorConfig) -> ArbitrageDetector:
    """Detector with zero costs and a silent sink."""
    return ArbitrageDetector(zero_cost_config, sink=RecordingSink())


@pytest.fixture
def default_fees() -> FeeSchedule:
    """Fee table matching the default settings."""
    return FeeSchedule(
        fees={"Binance": 0.1, "Uniswap V3": 0.3, "Coinbase Pro": 0.5, "Kraken": 0.26},
        default_fee_percent=0.1,
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        trading_pairs=["ETH/USDT", "ETH/USDC", "USDC/USDT"],
        polling_interval_ms=100,
    )

