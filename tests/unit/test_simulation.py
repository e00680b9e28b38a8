"""
Unit tests for the simulated venue.
"""

import pytest

from deltahound.core.types import UnsupportedPairError, VenueError
from deltahound.market.normalizer import PriceNormalizer
from deltahound.simulation.venue import SimulatedPair, SimulatedVenue, build_simulated_venues


class TestSimulatedVenue:
    """Tests for simulated quote generation."""

    @pytest.mark.asyncio
    async def test_quotes_are_valid(self) -> None:
        venue = SimulatedVenue("Binance", seed=7)

        for _ in range(50):
            quote = await venue.get_quote("ETH", "USDT")
            assert quote.venue == "Binance"
            assert quote.pair == "ETH/USDT"
            assert PriceNormalizer.validate(quote)
            assert PriceNormalizer.validate(PriceNormalizer.normalize([quote])[0])

        assert venue.poll_count == 50

    @pytest.mark.asyncio
    async def test_seed_reproducible(self) -> None:
        first = SimulatedVenue("Kraken", seed=42)
        second = SimulatedVenue("Kraken", seed=42)

        for _ in range(5):
            a = await first.get_quote("USDC", "USDT")
            b = await second.get_quote("USDC", "USDT")
            assert (a.bid, a.ask) == (b.bid, b.ask)

    @pytest.mark.asyncio
    async def test_unlisted_pair(self) -> None:
        venue = SimulatedVenue("Kraken", pairs=[SimulatedPair("ETH/USDT", 3500.0)])

        with pytest.raises(UnsupportedPairError):
            await venue.get_quote("USDT", "DAI")

    @pytest.mark.asyncio
    async def test_disconnected(self) -> None:
        venue = SimulatedVenue("Kraken")
        venue.disconnect()

        assert venue.is_connected() is False
        with pytest.raises(VenueError):
            await venue.get_quote("ETH", "USDT")

    @pytest.mark.asyncio
    async def test_failure_rate(self) -> None:
        venue = SimulatedVenue("Kraken", failure_rate=1.0, seed=1)

        with pytest.raises(VenueError, match="simulated failure"):
            await venue.get_quote("ETH", "USDT")
        assert venue.poll_count == 0

    def test_pairs(self) -> None:
        venue = SimulatedVenue("Binance")
        assert "ETH/USDC" in venue.pairs


class TestBuildSimulatedVenues:
    def test_one_venue_per_name(self) -> None:
        venues = build_simulated_venues(["Binance", "Kraken"], seed=3)
        assert [v.name for v in venues] == ["Binance", "Kraken"]

    @pytest.mark.asyncio
    async def test_independent_streams(self) -> None:
        a, b = build_simulated_venues(["Binance", "Kraken"], seed=3)

        qa = await a.get_quote("ETH", "USDT")
        qb = await b.get_quote("ETH", "USDT")

        assert (qa.bid, qa.ask) != (qb.bid, qb.ask)
