"""
Arbitrage opportunity detection.

Turns one batch of quotes for a nominal instrument into the list of
opportunities that clear the profitability bar. Two strategies run over
every batch:

- Synthetic cross-stablecoin arbitrage: the same base asset quoted in two
  different stable quote assets (``ETH/USDT`` vs ``ETH/USDC``).
- Direct arbitrage: buy on one venue's ask, sell on another venue's bid
  for an identical pair.

Results keep discovery order (synthetic first, then direct) and are never
sorted by profit.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import combinations

from deltahound.config.constants import (
    DEFAULT_MAX_SLIPPAGE_PERCENT,
    DEFAULT_MIN_PROFIT_THRESHOLD,
    STABLECOIN_PROFIT_THRESHOLD,
    STABLECOINS,
    SYNTHETIC_FEE_PERCENT,
    SYNTHETIC_PAIR_SEPARATOR,
)
from deltahound.config.settings import Settings
from deltahound.core.types import (
    FeeSchedule,
    Opportunity,
    OpportunityKind,
    OpportunitySink,
    Quote,
    is_stablecoin_pair,
)
from deltahound.market.normalizer import PriceNormalizer
from deltahound.strategy.calculator import CostBreakdown, CostModel
from deltahound.utils.time import get_timestamp_ms


logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DetectorConfig:
    """
    Read-only detection parameters.

    Thresholds are percentages: 0.1 means 0.1%.
    """

    min_profit_threshold: float = DEFAULT_MIN_PROFIT_THRESHOLD
    max_slippage_percent: float = DEFAULT_MAX_SLIPPAGE_PERCENT
    fees: FeeSchedule = field(default_factory=FeeSchedule)
    stablecoin_threshold: float = STABLECOIN_PROFIT_THRESHOLD
    stablecoins: frozenset[str] = STABLECOINS
    synthetic_fee_percent: float = SYNTHETIC_FEE_PERCENT

    @classmethod
    def from_settings(cls, settings: Settings) -> "DetectorConfig":
        """Build detector configuration from application settings."""
        return cls(
            min_profit_threshold=settings.min_profit_threshold,
            max_slippage_percent=settings.max_slippage_percent,
            fees=FeeSchedule(
                fees=settings.venue_fees,
                default_fee_percent=settings.default_fee_percent,
            ),
        )


class ArbitrageDetector:
    """
    Detects arbitrage opportunities in a batch of quotes.

    Holds only immutable configuration, so a single instance can serve
    concurrent batches.
    """

    __slots__ = ("_config", "_cost_model", "_sink")

    def __init__(
        self,
        config: DetectorConfig | None = None,
        *,
        sink: OpportunitySink,
    ) -> None:
        """
        Initialize detector.

        Args:
            config: Detection parameters (defaults when omitted).
            sink: Reporter used by ``log_opportunity``.
        """
        self._config = config or DetectorConfig()
        self._cost_model = CostModel(
            fees=self._config.fees,
            max_slippage_percent=self._config.max_slippage_percent,
        )
        self._sink = sink

    # =========================================================================
    # Public API
    # =========================================================================

    def detect(self, quotes: Sequence[Quote | None]) -> list[Opportunity]:
        """
        Find all opportunities in a batch of quotes.

        Invalid quotes are dropped first. Fewer than two valid quotes is
        a normal outcome and yields an empty list.

        Args:
            quotes: Quotes for one nominal instrument, in venue order.

        Returns:
            Opportunities in discovery order.
        """
        valid = [q for q in quotes if PriceNormalizer.validate(q)]

        if len(valid) < 2:
            logger.warning(
                f"Not enough valid quotes to detect arbitrage "
                f"({len(valid)} of {len(quotes)} valid)"
            )
            return []

        timestamp = get_timestamp_ms()

        candidates = self._detect_synthetic(valid, timestamp)
        candidates.extend(self._detect_direct(valid, timestamp))

        return [opp for opp in candidates if self._clears_threshold(opp)]

    def log_opportunity(self, opportunity: Opportunity) -> None:
        """Report an opportunity through the configured sink."""
        self._sink.log_opportunity(opportunity)

    def is_stablecoin_pair(self, pair: str) -> bool:
        """Classify a (possibly composite) pair label."""
        return is_stablecoin_pair(pair, self._config.stablecoins)

    def threshold_for(self, pair: str) -> float:
        """
        Profit threshold in percent for a pair label.

        The single source for both the per-candidate check and the final
        batch filter.
        """
        if self.is_stablecoin_pair(pair):
            return self._config.stablecoin_threshold
        return self._config.min_profit_threshold

    # =========================================================================
    # Direct (same pair, cross venue)
    # =========================================================================

    def _detect_direct(self, quotes: list[Quote], timestamp: int) -> list[Opportunity]:
        """Evaluate both directions for every pair of same-instrument quotes."""
        opportunities: list[Opportunity] = []

        for first, second in combinations(quotes, 2):
            if first.pair != second.pair:
                continue

            forward = self._evaluate_direct(first, second, timestamp)
            if forward:
                opportunities.append(forward)

            reverse = self._evaluate_direct(second, first, timestamp)
            if reverse:
                opportunities.append(reverse)

        return opportunities

    def _evaluate_direct(
        self,
        buy: Quote,
        sell: Quote,
        timestamp: int,
    ) -> Opportunity | None:
        """Buy at ``buy``'s ask, sell at ``sell``'s bid."""
        buy_price = buy.ask
        sell_price = sell.bid

        if sell_price <= buy_price:
            return None

        costs = self._cost_model.breakdown(buy.venue, buy_price, sell.venue, sell_price)
        return self._build(
            buy_venue=buy.venue,
            sell_venue=sell.venue,
            pair=buy.pair,
            buy_price=buy_price,
            sell_price=sell_price,
            costs=costs,
            timestamp=timestamp,
            kind=OpportunityKind.DIRECT,
        )

    # =========================================================================
    # Synthetic (same base, different stable quote assets)
    # =========================================================================

    def _detect_synthetic(self, quotes: list[Quote], timestamp: int) -> list[Opportunity]:
        """Compare each base asset's price across its stablecoin quote assets."""
        opportunities: list[Opportunity] = []
        stablecoins = {s.upper() for s in self._config.stablecoins}

        for by_quote in self._group_by_assets(quotes).values():
            stable_groups = [
                group for quote_asset, group in by_quote.items() if quote_asset.upper() in stablecoins
            ]
            for group_a, group_b in combinations(stable_groups, 2):
                for first in group_a:
                    for second in group_b:
                        forward = self._evaluate_synthetic(first, second, timestamp)
                        if forward:
                            opportunities.append(forward)

                        reverse = self._evaluate_synthetic(second, first, timestamp)
                        if reverse:
                            opportunities.append(reverse)

        return opportunities

    @staticmethod
    def _group_by_assets(quotes: Iterable[Quote]) -> dict[str, dict[str, list[Quote]]]:
        """Group quotes by base asset, then quote asset, in first-seen order."""
        groups: dict[str, dict[str, list[Quote]]] = {}
        for quote in quotes:
            by_quote = groups.setdefault(quote.base_asset, {})
            by_quote.setdefault(quote.quote_asset, []).append(quote)
        return groups

    def _evaluate_synthetic(
        self,
        buy: Quote,
        sell: Quote,
        timestamp: int,
    ) -> Opportunity | None:
        """Buy the base asset with ``buy``'s quote asset, sell it for ``sell``'s."""
        if not buy.ask < sell.bid:
            return None

        costs = CostModel.flat_breakdown(buy.ask, sell.bid, self._config.synthetic_fee_percent)
        return self._build(
            buy_venue=buy.venue,
            sell_venue=sell.venue,
            pair=f"{buy.pair}{SYNTHETIC_PAIR_SEPARATOR}{sell.pair}",
            buy_price=buy.ask,
            sell_price=sell.bid,
            costs=costs,
            timestamp=timestamp,
            kind=OpportunityKind.SYNTHETIC,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _build(
        self,
        *,
        buy_venue: str,
        sell_venue: str,
        pair: str,
        buy_price: float,
        sell_price: float,
        costs: CostBreakdown,
        timestamp: int,
        kind: OpportunityKind,
    ) -> Opportunity | None:
        """Create an opportunity if it is net profitable and above threshold."""
        net_profit = costs.net_profit
        if net_profit <= 0:
            return None

        profit_percent = CostModel.profit_percent(net_profit, buy_price)
        if profit_percent < self.threshold_for(pair):
            return None

        return Opportunity(
            buy_venue=buy_venue,
            sell_venue=sell_venue,
            pair=pair,
            buy_price=buy_price,
            sell_price=sell_price,
            gross_profit=costs.gross_profit,
            net_profit=net_profit,
            profit_percent=profit_percent,
            timestamp=timestamp,
            kind=kind,
            is_stablecoin=self.is_stablecoin_pair(pair),
        )

    def _clears_threshold(self, opportunity: Opportunity) -> bool:
        return opportunity.profit_percent >= self.threshold_for(opportunity.pair)

    @property
    def config(self) -> DetectorConfig:
        """Get detection parameters."""
        return self._config

    @property
    def cost_model(self) -> CostModel:
        """Get cost model."""
        return self._cost_model
