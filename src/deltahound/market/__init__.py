"""Market data module for quote validation and venue symbol mapping."""

from deltahound.market.normalizer import PriceNormalizer
from deltahound.market.pairs import PairMapper


__all__ = [
    "PairMapper",
    "PriceNormalizer",
]
