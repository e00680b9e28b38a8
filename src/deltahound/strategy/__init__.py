"""Strategy module for arbitrage detection and cost calculation."""

from deltahound.strategy.calculator import CostBreakdown, CostModel
from deltahound.strategy.detector import ArbitrageDetector, DetectorConfig


__all__ = [
    "ArbitrageDetector",
    "CostBreakdown",
    "CostModel",
    "DetectorConfig",
]
