"""
Quote validation and canonicalization.

Every quote passes through here before it reaches detection. Validation
decides what a usable quote is; normalization rounds prices to a fixed
number of significant digits so quotes from venues with very different
tick sizes compare on equal terms.
"""

import math
from collections.abc import Iterable
from dataclasses import replace

from deltahound.config.constants import (
    MAX_SPREAD_PERCENT,
    PRICE_SIGNIFICANT_DIGITS,
    SPREAD_EPSILON,
    SPREAD_SIGNIFICANT_DIGITS,
    SPREAD_TOLERANCE,
)
from deltahound.core.types import Quote
from deltahound.utils.math import midpoint, percent_change, spread_percent


class PriceNormalizer:
    """Stateless quote validation and rounding helpers."""

    @staticmethod
    def spread_of(bid: float, ask: float) -> float:
        """Bid-ask spread as a percentage of the bid."""
        return spread_percent(bid, ask)

    @staticmethod
    def midpoint(bid: float, ask: float) -> float:
        """Midpoint between bid and ask."""
        return midpoint(bid, ask)

    @staticmethod
    def price_impact(price: float, reference_price: float) -> float:
        """Deviation of ``price`` from ``reference_price`` in percent."""
        return percent_change(price, reference_price)

    @staticmethod
    def round_significant(value: float, digits: int) -> float:
        """
        Round to a number of significant digits.

        Example:
            >>> PriceNormalizer.round_significant(65012.345, 6)
            65012.3
            >>> PriceNormalizer.round_significant(0.99987654, 6)
            0.999877
        """
        if value == 0 or not math.isfinite(value):
            return value
        magnitude = math.floor(math.log10(abs(value)))
        return round(value, digits - magnitude - 1)

    @classmethod
    def validate(cls, quote: Quote | None) -> bool:
        """
        Check whether a quote is usable for detection.

        Rejects missing quotes, non-positive prices, crossed or locked
        books, spreads outside [0, 10] percent and quotes whose declared
        spread deviates from the recomputed one by more than 0.01.
        Never raises.
        """
        if quote is None:
            return False

        try:
            bid = float(quote.bid)
            ask = float(quote.ask)
            spread = float(quote.spread)
        except (AttributeError, TypeError, ValueError):
            return False

        if not (math.isfinite(bid) and math.isfinite(ask) and math.isfinite(spread)):
            return False

        if bid <= 0 or ask <= 0:
            return False

        if ask <= bid:
            return False

        if spread < 0 or spread > MAX_SPREAD_PERCENT:
            return False

        if abs(cls.spread_of(bid, ask) - spread) > SPREAD_TOLERANCE + SPREAD_EPSILON:
            return False

        return True

    @classmethod
    def normalize(cls, quotes: Iterable[Quote]) -> list[Quote]:
        """Round bid/ask to 6 and spread to 4 significant digits."""
        return [
            replace(
                quote,
                bid=cls.round_significant(quote.bid, PRICE_SIGNIFICANT_DIGITS),
                ask=cls.round_significant(quote.ask, PRICE_SIGNIFICANT_DIGITS),
                spread=cls.round_significant(quote.spread, SPREAD_SIGNIFICANT_DIGITS),
            )
            for quote in quotes
        ]
