"""
Unit tests for PriceNormalizer.

Tests quote validation boundaries and significant-digit rounding.
"""

import math

import pytest

from deltahound.core.types import Quote
from deltahound.market.normalizer import PriceNormalizer


TS = 1704067200000


def quote(bid: float, ask: float, spread: float) -> Quote:
    return Quote(venue="Binance", pair="ETH/USDT", bid=bid, ask=ask, spread=spread, timestamp=TS)


class TestValidate:
    """Tests for quote validation."""

    def test_valid_quote(self) -> None:
        """Test that a consistent quote passes."""
        q = Quote.create("Binance", "ETH/USDT", 3000.0, 3001.0, timestamp=TS)
        assert PriceNormalizer.validate(q) is True

    def test_none_rejected(self) -> None:
        assert PriceNormalizer.validate(None) is False

    @pytest.mark.parametrize(
        ("bid", "ask"),
        [
            (0.0, 1.0),
            (-1.0, 1.0),
            (1.0, 0.0),
            (1.0, -2.0),
        ],
    )
    def test_non_positive_prices_rejected(self, bid: float, ask: float) -> None:
        """Test that zero or negative prices fail."""
        assert PriceNormalizer.validate(quote(bid, ask, 0.0)) is False

    def test_locked_book_rejected(self) -> None:
        """Test that ask equal to bid fails."""
        assert PriceNormalizer.validate(quote(100.0, 100.0, 0.0)) is False

    def test_crossed_book_rejected(self) -> None:
        """Test that ask below bid fails."""
        assert PriceNormalizer.validate(quote(101.0, 100.0, 0.0)) is False

    def test_spread_above_ten_percent_rejected(self) -> None:
        """Test that spreads over 10% fail even when consistent."""
        assert PriceNormalizer.validate(quote(100.0, 111.0, 11.0)) is False

    def test_spread_of_ten_percent_accepted(self) -> None:
        """Test the upper spread bound is inclusive."""
        assert PriceNormalizer.validate(quote(100.0, 110.0, 10.0)) is True

    def test_negative_spread_rejected(self) -> None:
        assert PriceNormalizer.validate(quote(100.0, 100.005, -0.001)) is False

    @pytest.mark.parametrize("declared", [1.01, 0.99])
    def test_spread_deviation_at_tolerance_accepted(self, declared: float) -> None:
        """Test that a deviation of exactly 0.01 passes."""
        # Recomputed spread for 100/101 is 1.0
        assert PriceNormalizer.validate(quote(100.0, 101.0, declared)) is True

    @pytest.mark.parametrize("declared", [1.0101, 0.9899])
    def test_spread_deviation_beyond_tolerance_rejected(self, declared: float) -> None:
        """Test that a deviation of 0.0101 fails."""
        assert PriceNormalizer.validate(quote(100.0, 101.0, declared)) is False

    def test_stale_spread_rejected(self) -> None:
        """Test that a spread copied from an older quote fails."""
        assert PriceNormalizer.validate(quote(3000.0, 3003.0, 0.0333)) is False

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_rejected(self, bad: float) -> None:
        assert PriceNormalizer.validate(quote(bad, 101.0, 1.0)) is False
        assert PriceNormalizer.validate(quote(100.0, 101.0, bad)) is False

    def test_malformed_fields_never_raise(self) -> None:
        """Test that garbage input returns False instead of raising."""
        q = Quote(venue="X", pair="ETH/USDT", bid="abc", ask=None, spread=1.0, timestamp=TS)  # type: ignore[arg-type]
        assert PriceNormalizer.validate(q) is False
        assert PriceNormalizer.validate(object()) is False  # type: ignore[arg-type]


class TestRoundSignificant:
    """Tests for significant-digit rounding."""

    def test_zero(self) -> None:
        """Test that zero is returned unchanged."""
        assert PriceNormalizer.round_significant(0.0, 6) == 0.0

    def test_large_magnitude(self) -> None:
        assert PriceNormalizer.round_significant(65012.345, 6) == pytest.approx(65012.3)
        assert PriceNormalizer.round_significant(1234567.0, 6) == pytest.approx(1234570.0)

    def test_small_magnitude(self) -> None:
        assert PriceNormalizer.round_significant(0.99987654, 6) == pytest.approx(0.999877)
        assert PriceNormalizer.round_significant(0.000123456789, 4) == pytest.approx(0.0001235)

    def test_negative_value(self) -> None:
        assert PriceNormalizer.round_significant(-3001.98765, 6) == pytest.approx(-3001.99)

    def test_keeps_digits_not_decimal_places(self) -> None:
        """Test that both a stablecoin and a BTC price keep 6 digits."""
        stable = PriceNormalizer.round_significant(0.9999123, 6)
        btc = PriceNormalizer.round_significant(65000.123, 6)

        assert stable == pytest.approx(0.999912)
        assert btc == pytest.approx(65000.1)


class TestNormalize:
    """Tests for batch normalization."""

    def test_rounds_prices_and_spread(self) -> None:
        """Test that bid/ask keep 6 and spread keeps 4 significant digits."""
        q = quote(3000.123456, 3001.987654, 0.062138)

        (normalized,) = PriceNormalizer.normalize([q])

        assert normalized.bid == pytest.approx(3000.12)
        assert normalized.ask == pytest.approx(3001.99)
        assert normalized.spread == pytest.approx(0.06214)
        assert normalized.venue == q.venue
        assert normalized.pair == q.pair
        assert normalized.timestamp == q.timestamp

    def test_input_untouched(self) -> None:
        """Test that normalization returns new quotes."""
        q = quote(3000.123456, 3001.987654, 0.062138)
        PriceNormalizer.normalize([q])
        assert q.bid == 3000.123456

    def test_idempotent(self) -> None:
        """Test that normalizing twice changes nothing."""
        batch = [
            quote(3000.123456, 3001.987654, 0.062138),
            quote(0.99987654, 1.00012345, 0.02469),
            quote(64999.98765, 65010.12345, 0.01559),
        ]

        once = PriceNormalizer.normalize(batch)
        twice = PriceNormalizer.normalize(once)

        assert twice == once

    def test_empty_batch(self) -> None:
        assert PriceNormalizer.normalize([]) == []


class TestHelpers:
    """Tests for pure price helpers."""

    def test_spread_of(self) -> None:
        assert PriceNormalizer.spread_of(3000.0, 3001.0) == pytest.approx(0.033333, rel=1e-4)

    def test_midpoint(self) -> None:
        assert PriceNormalizer.midpoint(3000.0, 3002.0) == 3001.0

    def test_price_impact(self) -> None:
        assert PriceNormalizer.price_impact(101.0, 100.0) == pytest.approx(1.0)
        assert PriceNormalizer.price_impact(99.0, 100.0) == pytest.approx(-1.0)

    def test_quote_create_uses_spread_of(self) -> None:
        q = Quote.create("Kraken", "ETH/USDT", 3000.0, 3001.0, timestamp=TS)
        assert q.spread == PriceNormalizer.spread_of(3000.0, 3001.0)
        assert q.mid == 3000.5
