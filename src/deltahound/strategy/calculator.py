"""
Arbitrage cost calculation.

Computes net profit for a buy/sell price pair after venue fees and
a flat slippage estimate.
"""

from dataclasses import dataclass

from deltahound.core.types import FeeSchedule


@dataclass(slots=True, frozen=True)
class CostBreakdown:
    """Gross profit, individual costs and resulting net profit."""

    gross_profit: float
    buy_fee: float
    sell_fee: float
    slippage_cost: float

    @property
    def total_costs(self) -> float:
        return self.buy_fee + self.sell_fee + self.slippage_cost

    @property
    def net_profit(self) -> float:
        return self.gross_profit - self.total_costs


class CostModel:
    """
    Applies trading fees and slippage to a candidate trade.

    Slippage is a single flat estimate on the average of the two prices,
    charged once per candidate and independent of trade size or
    direction.
    """

    __slots__ = ("_fees", "_max_slippage_percent", "_slippage_rate")

    def __init__(
        self,
        fees: FeeSchedule,
        max_slippage_percent: float = 0.5,
    ) -> None:
        """
        Initialize cost model.

        Args:
            fees: Per-venue fee table in percent.
            max_slippage_percent: Flat slippage estimate in percent.
        """
        self._fees = fees
        self._max_slippage_percent = max_slippage_percent
        self._slippage_rate = max_slippage_percent / 100

    def buy_fee(self, venue: str, price: float) -> float:
        """Fee paid buying one unit at ``price`` on ``venue``."""
        return self._fees.fee_for(venue) * price / 100

    def sell_fee(self, venue: str, price: float) -> float:
        """Fee paid selling one unit at ``price`` on ``venue``."""
        return self._fees.fee_for(venue) * price / 100

    def slippage_cost(self, buy_price: float, sell_price: float) -> float:
        """Flat slippage estimate on the average price."""
        average_price = (buy_price + sell_price) / 2
        return average_price * self._slippage_rate

    def breakdown(
        self,
        buy_venue: str,
        buy_price: float,
        sell_venue: str,
        sell_price: float,
    ) -> CostBreakdown:
        """
        Calculate all costs for buying on one venue and selling on another.

        Args:
            buy_venue: Venue the asset is bought on (at its ask).
            buy_price: Buy price.
            sell_venue: Venue the asset is sold on (at its bid).
            sell_price: Sell price.

        Returns:
            Cost breakdown with net profit per unit.
        """
        return CostBreakdown(
            gross_profit=sell_price - buy_price,
            buy_fee=self.buy_fee(buy_venue, buy_price),
            sell_fee=self.sell_fee(sell_venue, sell_price),
            slippage_cost=self.slippage_cost(buy_price, sell_price),
        )

    @staticmethod
    def flat_breakdown(
        buy_price: float,
        sell_price: float,
        fee_percent: float,
    ) -> CostBreakdown:
        """
        Calculate costs with the same fee on both legs and no slippage.

        Used for synthetic opportunities, which model a triangulation
        rather than a literal route between two venues.
        """
        return CostBreakdown(
            gross_profit=sell_price - buy_price,
            buy_fee=buy_price * fee_percent / 100,
            sell_fee=sell_price * fee_percent / 100,
            slippage_cost=0.0,
        )

    @staticmethod
    def profit_percent(net_profit: float, buy_price: float) -> float:
        """Net profit as a percentage of the buy price."""
        return (net_profit / buy_price) * 100

    @property
    def fees(self) -> FeeSchedule:
        """Get fee schedule."""
        return self._fees

    @property
    def max_slippage_percent(self) -> float:
        """Get slippage estimate in percent."""
        return self._max_slippage_percent
