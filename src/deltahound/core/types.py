"""
Type definitions for the arbitrage scanner.

This module contains all dataclasses, enums and Protocol definitions
used throughout the application. Using slots=True for memory efficiency
and frozen=True so quotes and opportunities cannot change after a
detection pass has seen them.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Protocol

from deltahound.config.constants import (
    DEFAULT_FEE_PERCENT,
    PAIR_SEPARATOR,
    STABLECOINS,
    SYNTHETIC_PAIR_SEPARATOR,
)
from deltahound.utils.math import midpoint, spread_percent
from deltahound.utils.time import get_timestamp_ms


# =============================================================================
# Enums
# =============================================================================


class OpportunityKind(str, Enum):
    """How an opportunity was found."""

    DIRECT = "DIRECT"
    SYNTHETIC = "SYNTHETIC"


# =============================================================================
# Pair Helpers
# =============================================================================


def split_pair(pair: str) -> tuple[str, str]:
    """
    Split a ``BASE/QUOTE`` label into its assets.

    Labels without a separator yield the whole label as base and an
    empty quote asset.
    """
    base, _, quote = pair.partition(PAIR_SEPARATOR)
    return base, quote


def is_stablecoin_pair(pair: str, stablecoins: Iterable[str] = STABLECOINS) -> bool:
    """
    Check whether a pair label trades one stablecoin against another.

    Composite labels (``"ETH/USDT -> ETH/USDC"``) are classified on their
    first segment.
    """
    first = pair.split(SYNTHETIC_PAIR_SEPARATOR, 1)[0]
    symbols = [s.strip().upper() for s in first.split(PAIR_SEPARATOR)]
    if len(symbols) != 2:
        return False
    known = {s.upper() for s in stablecoins}
    return symbols[0] in known and symbols[1] in known


# =============================================================================
# Market Data Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class TradingPair:
    """Base/quote asset combination polled each cycle."""

    base_symbol: str
    quote_symbol: str

    @classmethod
    def from_label(cls, label: str) -> "TradingPair":
        """Build from a ``BASE/QUOTE`` label."""
        base, quote = split_pair(label)
        return cls(base_symbol=base, quote_symbol=quote)

    @property
    def label(self) -> str:
        """Pair label, e.g. ``ETH/USDT``."""
        return f"{self.base_symbol}{PAIR_SEPARATOR}{self.quote_symbol}"

    def __str__(self) -> str:
        return self.label


@dataclass(slots=True, frozen=True)
class Quote:
    """
    Best bid/ask snapshot from one venue.

    ``spread`` is the bid-ask spread in percent of the bid and
    ``timestamp`` is the capture time in milliseconds.
    """

    venue: str
    pair: str
    bid: float
    ask: float
    spread: float
    timestamp: int

    @classmethod
    def create(
        cls,
        venue: str,
        pair: str,
        bid: float,
        ask: float,
        timestamp: int | None = None,
    ) -> "Quote":
        """Build a quote with its spread computed from bid and ask."""
        spread = spread_percent(bid, ask) if bid > 0 else 0.0
        return cls(
            venue=venue,
            pair=pair,
            bid=bid,
            ask=ask,
            spread=spread,
            timestamp=timestamp if timestamp is not None else get_timestamp_ms(),
        )

    @property
    def base_asset(self) -> str:
        return split_pair(self.pair)[0]

    @property
    def quote_asset(self) -> str:
        return split_pair(self.pair)[1]

    @property
    def mid(self) -> float:
        """Midpoint between bid and ask."""
        return midpoint(self.bid, self.ask)


# =============================================================================
# Opportunity Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class Opportunity:
    """
    Detected arbitrage opportunity.

    For synthetic cross-stablecoin opportunities ``pair`` is the composite
    ``"PAIR_A -> PAIR_B"`` label rather than a single instrument.
    ``is_stablecoin`` is the classification the detector applied when it
    chose the threshold, so reporting always agrees with detection.
    """

    buy_venue: str
    sell_venue: str
    pair: str
    buy_price: float
    sell_price: float
    gross_profit: float
    net_profit: float
    profit_percent: float
    timestamp: int
    kind: OpportunityKind = OpportunityKind.DIRECT
    is_stablecoin: bool = False

    @property
    def is_synthetic(self) -> bool:
        return self.kind == OpportunityKind.SYNTHETIC


# =============================================================================
# Cost Configuration
# =============================================================================


@dataclass(slots=True, frozen=True)
class FeeSchedule:
    """
    Per-venue trading fees in percent.

    Lookups are case-insensitive; venues missing from the table are
    charged ``default_fee_percent``.
    """

    fees: Mapping[str, float] = field(default_factory=dict)
    default_fee_percent: float = DEFAULT_FEE_PERCENT

    def __post_init__(self) -> None:
        normalized = {venue.lower(): fee for venue, fee in self.fees.items()}
        object.__setattr__(self, "fees", MappingProxyType(normalized))

    def fee_for(self, venue: str) -> float:
        """Get fee percent for a venue."""
        return self.fees.get(venue.lower(), self.default_fee_percent)

    def __contains__(self, venue: object) -> bool:
        return isinstance(venue, str) and venue.lower() in self.fees


# =============================================================================
# Exceptions
# =============================================================================


class VenueError(Exception):
    """Raised by a connector that cannot produce a quote."""

    def __init__(self, venue: str, message: str) -> None:
        super().__init__(f"{venue}: {message}")
        self.venue = venue


class UnsupportedPairError(VenueError):
    """Raised when a venue does not list the requested pair."""

    pass


# =============================================================================
# Protocols (Interfaces)
# =============================================================================


class VenueConnector(Protocol):
    """Protocol for venue quote sources."""

    name: str

    def is_connected(self) -> bool:
        """Check if the venue can be polled."""
        ...

    async def get_quote(self, base_symbol: str, quote_symbol: str) -> Quote:
        """Fetch the current best bid/ask for a pair."""
        ...


class OpportunitySink(Protocol):
    """Protocol for opportunity consumers."""

    def log_opportunity(self, opportunity: Opportunity) -> None:
        """Report a detected opportunity."""
        ...
