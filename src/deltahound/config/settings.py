"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deltahound.config.constants import (
    BINANCE_FEE_PERCENT,
    COINBASE_FEE_PERCENT,
    DEFAULT_FEE_PERCENT,
    DEFAULT_MAX_SLIPPAGE_PERCENT,
    DEFAULT_MIN_PROFIT_THRESHOLD,
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_TRADING_PAIRS,
    KRAKEN_FEE_PERCENT,
    MIN_POLLING_INTERVAL_MS,
    PAIR_SEPARATOR,
    UNISWAP_FEE_PERCENT,
    VENUE_BINANCE,
    VENUE_COINBASE,
    VENUE_KRAKEN,
    VENUE_UNISWAP,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    List values are given as JSON arrays, e.g.
    ``TRADING_PAIRS='["ETH/USDT", "ETH/USDC"]'``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Detection
    # =========================================================================

    min_profit_threshold: float = Field(
        default=DEFAULT_MIN_PROFIT_THRESHOLD,
        ge=0.0,
        le=100.0,
        description="Minimum net profit percent to report (e.g., 0.1 = 0.1%)",
    )

    max_slippage_percent: float = Field(
        default=DEFAULT_MAX_SLIPPAGE_PERCENT,
        ge=0.0,
        le=10.0,
        description="Flat slippage estimate applied once per opportunity",
    )

    # =========================================================================
    # Venue Fees (percent)
    # =========================================================================

    binance_fee_percent: float = Field(
        default=BINANCE_FEE_PERCENT,
        ge=0.0,
        le=5.0,
        description="Binance taker fee percent",
    )

    uniswap_fee_percent: float = Field(
        default=UNISWAP_FEE_PERCENT,
        ge=0.0,
        le=5.0,
        description="Uniswap V3 pool fee percent",
    )

    default_fee_percent: float = Field(
        default=DEFAULT_FEE_PERCENT,
        ge=0.0,
        le=5.0,
        description="Fee charged to venues missing from the fee table",
    )

    # =========================================================================
    # Scanning
    # =========================================================================

    trading_pairs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRADING_PAIRS),
        description="Pairs to poll each cycle, as BASE/QUOTE labels",
    )

    simulated_venues: list[str] = Field(
        default_factory=lambda: [VENUE_BINANCE, VENUE_UNISWAP, VENUE_KRAKEN],
        description="Venues served by the simulated connector",
    )

    polling_interval_ms: int = Field(
        default=DEFAULT_POLLING_INTERVAL_MS,
        ge=MIN_POLLING_INTERVAL_MS,
        description="Delay between scan cycles in milliseconds",
    )

    max_cycles: int | None = Field(
        default=None,
        ge=1,
        description="Stop after this many scan cycles (run forever if unset)",
    )

    simulation_seed: int | None = Field(
        default=None,
        description="Seed for the simulated venues",
    )

    # =========================================================================
    # Operation Mode
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    log_json: bool = Field(
        default=False,
        description="Emit log records as JSON lines",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    use_uvloop: bool = Field(
        default=True,
        description="Use uvloop for the polling event loop",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("trading_pairs", mode="after")
    @classmethod
    def validate_trading_pairs(cls, v: list[str]) -> list[str]:
        """Ensure every pair is a BASE/QUOTE label."""
        pairs = []
        for label in v:
            parts = label.strip().upper().split(PAIR_SEPARATOR)
            if len(parts) != 2 or not all(parts):
                raise ValueError(f"Invalid trading pair {label!r}, expected BASE/QUOTE")
            pairs.append(PAIR_SEPARATOR.join(parts))
        if not pairs:
            raise ValueError("At least one trading pair is required")
        return pairs

    @field_validator("min_profit_threshold", mode="after")
    @classmethod
    def validate_profit_threshold(cls, v: float) -> float:
        """Warn if profit threshold is zero."""
        if v == 0.0:
            import warnings

            warnings.warn(
                "Profit threshold is zero, every net-positive spread will be reported",
                stacklevel=2,
            )
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def venue_fees(self) -> dict[str, float]:
        """Fee table keyed by venue name."""
        return {
            VENUE_BINANCE: self.binance_fee_percent,
            VENUE_UNISWAP: self.uniswap_fee_percent,
            VENUE_COINBASE: COINBASE_FEE_PERCENT,
            VENUE_KRAKEN: KRAKEN_FEE_PERCENT,
        }

    @property
    def polling_interval_seconds(self) -> float:
        """Polling interval in seconds."""
        return self.polling_interval_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once.
    Clear cache with `get_settings.cache_clear()` if needed.
    """
    return Settings()
