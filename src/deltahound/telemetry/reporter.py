"""
Opportunity reporting and scan summaries.

Turns detected opportunities into structured log records and renders
an end-of-run summary of scan metrics.
"""

import logging
import sys
from datetime import timedelta
from typing import Any, TextIO

from deltahound.config.constants import (
    CRYPTO_PRICE_DECIMALS,
    PROFIT_PERCENT_DECIMALS,
    STABLECOIN_PRICE_DECIMALS,
)
from deltahound.core.types import Opportunity
from deltahound.telemetry.metrics import MetricsCollector
from deltahound.utils.time import format_timestamp_ms


logger = logging.getLogger(__name__)


STABLECOIN_TYPE = "STABLECOIN_ARBITRAGE"
CRYPTO_TYPE = "CRYPTO_ARBITRAGE"


class OpportunityReporter:
    """
    Emits one structured log record per opportunity.

    Stablecoin opportunities signal a depeg: they are tagged
    ``STABLECOIN_ARBITRAGE``, logged at WARNING and formatted with
    6 decimals. Everything else is ``CRYPTO_ARBITRAGE`` at INFO with
    2 decimals.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    @staticmethod
    def format_fields(opportunity: Opportunity) -> dict[str, Any]:
        """Build the structured fields for an opportunity."""
        if opportunity.is_stablecoin:
            decimals = STABLECOIN_PRICE_DECIMALS
            kind = STABLECOIN_TYPE
        else:
            decimals = CRYPTO_PRICE_DECIMALS
            kind = CRYPTO_TYPE

        return {
            "type": kind,
            "buy_venue": opportunity.buy_venue,
            "sell_venue": opportunity.sell_venue,
            "pair": opportunity.pair,
            "buy_price": f"{opportunity.buy_price:.{decimals}f}",
            "sell_price": f"{opportunity.sell_price:.{decimals}f}",
            "gross_profit": f"{opportunity.gross_profit:.{decimals}f}",
            "net_profit": f"{opportunity.net_profit:.{decimals}f}",
            "profit_percent": f"{opportunity.profit_percent:.{PROFIT_PERCENT_DECIMALS}f}",
            "timestamp": format_timestamp_ms(opportunity.timestamp),
        }

    def log_opportunity(self, opportunity: Opportunity) -> None:
        """Log a detected opportunity."""
        fields = self.format_fields(opportunity)

        if opportunity.is_stablecoin:
            self._logger.warning(
                "Stablecoin arbitrage opportunity detected",
                extra={"fields": fields},
            )
        else:
            self._logger.info(
                "Arbitrage opportunity detected",
                extra={"fields": fields},
            )


class SummaryReporter:
    """Renders a boxed summary of scan metrics."""

    # Box drawing characters
    BOX_TL = "\u2554"  # ╔
    BOX_TR = "\u2557"  # ╗
    BOX_BL = "\u255a"  # ╚
    BOX_BR = "\u255d"  # ╝
    BOX_H = "\u2550"  # ═
    BOX_V = "\u2551"  # ║
    BOX_LT = "\u2560"  # ╠
    BOX_RT = "\u2563"  # ╣

    def __init__(
        self,
        metrics: MetricsCollector,
        width: int = 64,
        output: TextIO | None = None,
    ) -> None:
        """
        Initialize summary reporter.

        Args:
            metrics: Metrics collector instance.
            width: Box width in characters.
            output: Output stream (default: stdout).
        """
        self._metrics = metrics
        self._width = width
        self._output = output or sys.stdout

    def _format_uptime(self, seconds: float) -> str:
        """Format uptime as HH:MM:SS."""
        td = timedelta(seconds=int(seconds))
        hours, remainder = divmod(int(td.total_seconds()), 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"

    def _line(self, content: str) -> str:
        inner_width = self._width - 2
        return f"{self.BOX_V}{content.ljust(inner_width)[:inner_width]}{self.BOX_V}"

    def _divider(self) -> str:
        return f"{self.BOX_LT}{self.BOX_H * (self._width - 2)}{self.BOX_RT}"

    def render(self) -> str:
        """
        Render the summary.

        Returns:
            Formatted summary string.
        """
        stats = self._metrics.scan_stats
        latency = self._metrics.get_latency_stats("scan_pair")

        lines = [f"{self.BOX_TL}{self.BOX_H * (self._width - 2)}{self.BOX_TR}"]
        lines.append(self._line("  DELTAHOUND SCAN SUMMARY"))
        lines.append(self._divider())
        lines.append(self._line(f"  Uptime:              {self._format_uptime(self._metrics.uptime_seconds)}"))
        lines.append(self._line(f"  Cycles:              {stats.cycles}"))
        lines.append(self._line(f"  Batches scanned:     {stats.batches_scanned}"))
        lines.append(self._line(f"  Batches skipped:     {stats.batches_skipped}"))
        lines.append(self._line(f"  Venue failures:      {stats.venue_failures}"))
        lines.append(self._line(f"  Quotes rejected:     {stats.quotes_rejected}"))
        lines.append(self._line(f"  Opportunities:       {stats.opportunities_found}"))
        lines.append(self._line(f"    stablecoin:        {stats.stablecoin_opportunities}"))
        lines.append(self._line(f"  Best profit:         {stats.best_profit_percent:.4f}%"))
        if latency.count > 0:
            lines.append(self._line(f"  Scan latency avg:    {latency.avg_us:.0f}μs (p99 {latency.p99_us}μs)"))

        by_pair = self._metrics.opportunities_by_pair
        if by_pair:
            lines.append(self._divider())
            for pair, count in by_pair.items():
                lines.append(self._line(f"  {pair:<40}{count:>8}"))

        lines.append(f"{self.BOX_BL}{self.BOX_H * (self._width - 2)}{self.BOX_BR}")
        return "\n".join(lines)

    def print_summary(self) -> None:
        """Write the summary to the output stream."""
        self._output.write(self.render() + "\n")
        self._output.flush()
