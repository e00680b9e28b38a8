"""
Venue symbol mapping.

Translates canonical ``BASE/QUOTE`` labels into the symbol each venue
uses. A ``None`` entry marks a pair the venue does not list.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from deltahound.config.constants import (
    VENUE_BINANCE,
    VENUE_COINBASE,
    VENUE_KRAKEN,
    VENUE_UNISWAP,
)


VENUE_PAIR_SYMBOLS: Final[Mapping[str, Mapping[str, str | None]]] = MappingProxyType(
    {
        VENUE_BINANCE: MappingProxyType(
            {
                "ETH/USDT": "ETHUSDT",
                "ETH/USDC": "ETHUSDC",
                "USDC/USDT": "USDCUSDT",
                "USDT/DAI": "USDTDAI",
                "BTC/USDT": "BTCUSDT",
                "BTC/USDC": "BTCUSDC",
            }
        ),
        VENUE_COINBASE: MappingProxyType(
            {
                "ETH/USDT": "ETH-USD",  # quoted in USD
                "ETH/USDC": None,
                "USDC/USDT": None,
                "USDT/DAI": None,
                "BTC/USDT": "BTC-USD",
                "BTC/USDC": None,
            }
        ),
        VENUE_KRAKEN: MappingProxyType(
            {
                "ETH/USDT": "XETHZUSD",
                "ETH/USDC": "ETHUSDC",
                "USDC/USDT": "USDCUSDT",
                "USDT/DAI": None,
                "BTC/USDT": "XXBTZUSD",
                "BTC/USDC": "XBTUSDC",
            }
        ),
        VENUE_UNISWAP: MappingProxyType(
            {
                "ETH/USDT": "WETH/USDT",
                "ETH/USDC": "WETH/USDC",
                "USDC/USDT": "USDC/USDT",
                "USDT/DAI": "USDT/DAI",
                "BTC/USDT": "WBTC/USDT",
                "BTC/USDC": "WBTC/USDC",
            }
        ),
    }
)


class PairMapper:
    """
    Looks up venue-specific symbols for canonical pairs.

    Venues absent from the table are unknown rather than unsupported;
    ``is_known_venue`` lets callers tell the two apart.
    """

    __slots__ = ("_mappings",)

    def __init__(
        self,
        mappings: Mapping[str, Mapping[str, str | None]] = VENUE_PAIR_SYMBOLS,
    ) -> None:
        self._mappings = mappings

    def is_known_venue(self, venue: str) -> bool:
        return venue in self._mappings

    def venue_symbol(self, venue: str, pair: str) -> str | None:
        """Get the venue's symbol for a pair, or None if not listed."""
        venue_mapping = self._mappings.get(venue)
        if not venue_mapping:
            return None
        return venue_mapping.get(pair)

    def is_supported(self, venue: str, pair: str) -> bool:
        """Check if the venue lists the pair."""
        return self.venue_symbol(venue, pair) is not None
