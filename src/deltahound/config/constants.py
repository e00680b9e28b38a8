"""
Detection constants and configuration defaults.

This module contains all hardcoded values used throughout the scanner.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Venue Names
# =============================================================================

VENUE_BINANCE: Final[str] = "Binance"
VENUE_UNISWAP: Final[str] = "Uniswap V3"
VENUE_COINBASE: Final[str] = "Coinbase Pro"
VENUE_KRAKEN: Final[str] = "Kraken"


# =============================================================================
# Trading Fees (percent)
# =============================================================================

# Charged to any venue missing from the fee table
DEFAULT_FEE_PERCENT: Final[float] = 0.1

BINANCE_FEE_PERCENT: Final[float] = 0.1
UNISWAP_FEE_PERCENT: Final[float] = 0.3
COINBASE_FEE_PERCENT: Final[float] = 0.5
KRAKEN_FEE_PERCENT: Final[float] = 0.26

# Flat per-leg fee for synthetic cross-stablecoin opportunities
SYNTHETIC_FEE_PERCENT: Final[float] = 0.1


# =============================================================================
# Profitability
# =============================================================================

# Minimum net profit for ordinary opportunities (0.1%)
DEFAULT_MIN_PROFIT_THRESHOLD: Final[float] = 0.1

# Stablecoin pairs are reported at a much smaller deviation (0.01%)
STABLECOIN_PROFIT_THRESHOLD: Final[float] = 0.01

# Flat slippage estimate applied once per candidate (0.5%)
DEFAULT_MAX_SLIPPAGE_PERCENT: Final[float] = 0.5


# =============================================================================
# Quote Validation
# =============================================================================

MAX_SPREAD_PERCENT: Final[float] = 10.0
SPREAD_TOLERANCE: Final[float] = 0.01
SPREAD_EPSILON: Final[float] = 1e-9

PRICE_SIGNIFICANT_DIGITS: Final[int] = 6
SPREAD_SIGNIFICANT_DIGITS: Final[int] = 4


# =============================================================================
# Assets & Pairs
# =============================================================================

STABLECOINS: Final[frozenset[str]] = frozenset(
    {
        "USDT",
        "USDC",
        "DAI",
        "BUSD",
        "TUSD",
        "USDP",
        "FDUSD",
        "GUSD",
        "FRAX",
        "LUSD",
        "PYUSD",
    }
)

DEFAULT_TRADING_PAIRS: Final[tuple[str, ...]] = (
    "ETH/USDT",
    "ETH/USDC",
    "USDC/USDT",
    "USDT/DAI",
)

PAIR_SEPARATOR: Final[str] = "/"
SYNTHETIC_PAIR_SEPARATOR: Final[str] = " -> "


# =============================================================================
# Polling
# =============================================================================

DEFAULT_POLLING_INTERVAL_MS: Final[int] = 5000
MIN_POLLING_INTERVAL_MS: Final[int] = 100


# =============================================================================
# Reporting Precision
# =============================================================================

STABLECOIN_PRICE_DECIMALS: Final[int] = 6
CRYPTO_PRICE_DECIMALS: Final[int] = 2
PROFIT_PERCENT_DECIMALS: Final[int] = 3


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000

# Samples kept for scan latency statistics
LATENCY_WINDOW_SIZE: Final[int] = 1000
