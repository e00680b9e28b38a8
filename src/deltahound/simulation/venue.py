"""
Simulated venue connector.

Generates random-walk quotes with occasional price dislocations so the
scanner can run end to end without any venue connectivity.
"""

import asyncio
import random
from dataclasses import dataclass, field
from typing import Final

from deltahound.core.types import Quote, UnsupportedPairError, VenueError


@dataclass
class SimulatedPair:
    """Configuration for a simulated trading pair."""

    pair: str
    reference_price: float
    volatility: float = 0.0005  # Price change per poll (0.05%)
    spread_pct: float = 0.0004  # Bid-ask spread (0.04%)
    current_price: float = field(init=False)

    def __post_init__(self) -> None:
        self.current_price = self.reference_price


DEFAULT_PAIRS: Final[tuple[tuple[str, float, float, float], ...]] = (
    ("ETH/USDT", 3500.0, 0.0005, 0.0004),
    ("ETH/USDC", 3500.0, 0.0005, 0.0004),
    ("USDC/USDT", 1.0, 0.00005, 0.0001),
    ("USDT/DAI", 1.0, 0.00005, 0.0001),
    ("BTC/USDT", 65000.0, 0.0004, 0.0002),
    ("BTC/USDC", 65000.0, 0.0004, 0.0002),
)


class SimulatedVenue:
    """
    Simulated venue producing best bid/ask quotes.

    Features:
    - Gaussian random walk around a reference price
    - Reversion toward the reference price
    - Occasional dislocations (configurable) large enough to arbitrage
    - Optional random failures to exercise partial batches
    """

    def __init__(
        self,
        name: str,
        pairs: list[SimulatedPair] | None = None,
        dislocation_frequency: float = 0.05,
        dislocation_range: tuple[float, float] = (0.002, 0.01),
        failure_rate: float = 0.0,
        latency_ms: int = 0,
        seed: int | None = None,
    ) -> None:
        """
        Initialize simulated venue.

        Args:
            name: Venue name reported on quotes.
            pairs: Pairs the venue lists (default: common stable pairs).
            dislocation_frequency: Probability of a dislocation per poll.
            dislocation_range: Min/max relative size of a dislocation.
            failure_rate: Probability that a poll raises VenueError.
            latency_ms: Simulated response latency.
            seed: Random seed for reproducible quotes.
        """
        self.name = name
        if pairs is None:
            pairs = [SimulatedPair(p, price, vol, spread) for p, price, vol, spread in DEFAULT_PAIRS]
        self._pairs = {p.pair: p for p in pairs}
        self._dislocation_frequency = dislocation_frequency
        self._dislocation_range = dislocation_range
        self._failure_rate = failure_rate
        self._latency_ms = latency_ms
        self._random = random.Random(seed)
        self._connected = True
        self._poll_count = 0

    def is_connected(self) -> bool:
        return self._connected

    def disconnect(self) -> None:
        self._connected = False

    def _next_price(self, pair: SimulatedPair) -> float:
        """Advance the random walk one step."""
        shock = self._random.gauss(0, pair.volatility)
        reversion = (pair.reference_price - pair.current_price) * 0.05
        price = pair.current_price * (1 + shock) + reversion

        if self._random.random() < self._dislocation_frequency:
            size = self._random.uniform(*self._dislocation_range)
            direction = 1 if self._random.random() < 0.5 else -1
            price *= 1 + direction * size

        pair.current_price = price
        return price

    async def get_quote(self, base_symbol: str, quote_symbol: str) -> Quote:
        """
        Fetch the current best bid/ask for a pair.

        Raises:
            VenueError: If the venue is disconnected or the poll fails.
            UnsupportedPairError: If the venue does not list the pair.
        """
        label = f"{base_symbol}/{quote_symbol}"

        if self._latency_ms:
            await asyncio.sleep(self._latency_ms / 1000)

        if not self._connected:
            raise VenueError(self.name, "not connected")

        simulated = self._pairs.get(label)
        if simulated is None:
            raise UnsupportedPairError(self.name, f"pair {label} not listed")

        if self._random.random() < self._failure_rate:
            raise VenueError(self.name, f"simulated failure polling {label}")

        self._poll_count += 1

        price = self._next_price(simulated)
        half_spread = price * simulated.spread_pct / 2 * self._random.uniform(0.8, 1.2)

        return Quote.create(
            venue=self.name,
            pair=label,
            bid=price - half_spread,
            ask=price + half_spread,
        )

    @property
    def pairs(self) -> list[str]:
        """Get all simulated pair labels."""
        return list(self._pairs)

    @property
    def poll_count(self) -> int:
        """Get number of successful polls."""
        return self._poll_count


def build_simulated_venues(names: list[str], seed: int | None = None) -> list[SimulatedVenue]:
    """
    Create one simulated venue per name.

    Each venue gets its own random stream; with a seed the whole set is
    reproducible.
    """
    return [
        SimulatedVenue(name, seed=None if seed is None else seed + index)
        for index, name in enumerate(names)
    ]
