"""Configuration module for the arbitrage scanner."""

from deltahound.config.constants import (
    DEFAULT_FEE_PERCENT,
    STABLECOIN_PROFIT_THRESHOLD,
    STABLECOINS,
    SYNTHETIC_FEE_PERCENT,
)
from deltahound.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_FEE_PERCENT",
    "STABLECOINS",
    "STABLECOIN_PROFIT_THRESHOLD",
    "SYNTHETIC_FEE_PERCENT",
]
