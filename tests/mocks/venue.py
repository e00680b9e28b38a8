"""
Mock venue connector for testing.

Returns fixed quotes without any randomness or latency.
"""

from deltahound.core.types import Quote, UnsupportedPairError, VenueError


class MockVenue:
    """
    Mock venue for testing.

    Serves configured bid/ask prices per pair and records every poll.
    """

    def __init__(
        self,
        name: str,
        prices: dict[str, tuple[float, float]] | None = None,
        fail_with: Exception | None = None,
        connected: bool = True,
    ) -> None:
        """
        Initialize mock venue.

        Args:
            name: Venue name.
            prices: Bid/ask per pair label.
            fail_with: Exception raised on every poll.
            connected: Connection state reported to the scanner.
        """
        self.name = name
        self._prices = prices or {}
        self._fail_with = fail_with
        self._connected = connected
        self.requests: list[str] = []

    def is_connected(self) -> bool:
        return self._connected

    def set_price(self, pair: str, bid: float, ask: float) -> None:
        """Change the quote served for a pair."""
        self._prices[pair] = (bid, ask)

    async def get_quote(self, base_symbol: str, quote_symbol: str) -> Quote:
        """Serve the configured quote or raise."""
        pair = f"{base_symbol}/{quote_symbol}"
        self.requests.append(pair)

        if self._fail_with is not None:
            raise self._fail_with

        if pair not in self._prices:
            raise UnsupportedPairError(self.name, f"pair {pair} not listed")

        bid, ask = self._prices[pair]
        return Quote.create(venue=self.name, pair=pair, bid=bid, ask=ask)


def failing_venue(name: str, message: str = "connection refused") -> MockVenue:
    """Mock venue whose every poll raises VenueError."""
    return MockVenue(name, fail_with=VenueError(name, message))
