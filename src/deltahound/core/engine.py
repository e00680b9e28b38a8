"""
Polling scanner orchestrator.

Polls every venue for each configured instrument, hands the gathered
quotes to the detector and reports what it finds.
"""

import asyncio
import logging
import signal
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from deltahound.config.settings import Settings
from deltahound.core.types import Opportunity, Quote, TradingPair, VenueConnector
from deltahound.market.normalizer import PriceNormalizer
from deltahound.market.pairs import PairMapper
from deltahound.strategy.detector import ArbitrageDetector, DetectorConfig
from deltahound.telemetry.metrics import MetricsCollector
from deltahound.telemetry.reporter import OpportunityReporter
from deltahound.utils.time import LatencyTimer


logger = logging.getLogger(__name__)


def group_instruments(pairs: Sequence[TradingPair]) -> dict[str, list[TradingPair]]:
    """
    Group pairs into nominal instruments by base asset.

    ``ETH/USDT`` and ``ETH/USDC`` form one instrument so the detector can
    compare them across quote assets.
    """
    instruments: dict[str, list[TradingPair]] = {}
    for pair in pairs:
        instruments.setdefault(pair.base_symbol, []).append(pair)
    return instruments


class ScannerEngine:
    """
    Main scanning loop.

    Manages:
    - Concurrent quote collection per instrument
    - Tolerance of individual venue failures
    - Normalization and detection
    - Opportunity reporting and metrics
    """

    def __init__(
        self,
        settings: Settings,
        connectors: Sequence[VenueConnector],
        detector: ArbitrageDetector | None = None,
        metrics: MetricsCollector | None = None,
        pair_mapper: PairMapper | None = None,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            settings: Application settings.
            connectors: Venue quote sources.
            detector: Arbitrage detector (built from settings and reporting
                through OpportunityReporter when omitted).
            metrics: Metrics collector.
            pair_mapper: Venue symbol table used to skip unlisted pairs.

        Raises:
            ValueError: If no connectors are given.
        """
        if not connectors:
            raise ValueError("No venue connectors configured")

        self._settings = settings
        self._connectors = list(connectors)
        self._detector = detector or ArbitrageDetector(
            DetectorConfig.from_settings(settings),
            sink=OpportunityReporter(),
        )
        self._metrics = metrics or MetricsCollector()
        self._pair_mapper = pair_mapper or PairMapper()

        self._pairs = [TradingPair.from_label(label) for label in settings.trading_pairs]
        self._instruments = group_instruments(self._pairs)

        self._running = False
        self._stopped = False
        self._shutdown_event = asyncio.Event()

    # =========================================================================
    # Quote Collection
    # =========================================================================

    def _eligible_connectors(self, pair: TradingPair) -> list[VenueConnector]:
        """Connectors that are up and list the pair (unknown venues are polled)."""
        eligible = []
        for connector in self._connectors:
            if not connector.is_connected():
                continue
            if self._pair_mapper.is_known_venue(connector.name) and not self._pair_mapper.is_supported(
                connector.name, pair.label
            ):
                continue
            eligible.append(connector)
        return eligible

    async def _fetch_quote(self, connector: VenueConnector, pair: TradingPair) -> Quote | None:
        """Fetch one quote, logging and absorbing any venue failure."""
        try:
            return await connector.get_quote(pair.base_symbol, pair.quote_symbol)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Failed to get quote from {connector.name} for {pair.label}: {e}")
            self._metrics.record_venue_failure()
            self._metrics.increment_counter(f"venue_failures.{connector.name}")
            return None

    async def collect_quotes(self, pairs: Sequence[TradingPair]) -> list[Quote]:
        """
        Poll all eligible venues for the given pairs concurrently.

        Failed polls are dropped; the order of the result follows pair
        order, then connector order.
        """
        requests = [
            self._fetch_quote(connector, pair)
            for pair in pairs
            for connector in self._eligible_connectors(pair)
        ]
        results = await asyncio.gather(*requests)
        return [quote for quote in results if quote is not None]

    # =========================================================================
    # Scanning
    # =========================================================================

    async def scan_instrument(self, pairs: Sequence[TradingPair]) -> list[Opportunity]:
        """
        Scan one nominal instrument.

        Args:
            pairs: Pairs sharing a base asset.

        Returns:
            Reported opportunities.
        """
        label = ", ".join(p.label for p in pairs)

        with LatencyTimer() as timer:
            quotes = await self.collect_quotes(pairs)

            if len(quotes) < 2:
                logger.warning(f"Insufficient price data for {label} ({len(quotes)} quotes)")
                self._metrics.record_batch(received=len(quotes), rejected=0, scanned=False)
                return []

            normalized = PriceNormalizer.normalize(quotes)
            rejected = sum(1 for q in normalized if not PriceNormalizer.validate(q))

            logger.debug(
                f"Price data collected for {label}: "
                + ", ".join(f"{q.venue} {q.pair} {q.bid}/{q.ask}" for q in normalized)
            )

            opportunities = self._detector.detect(normalized)

        self._metrics.record_latency("scan_pair", timer.latency_us)
        self._metrics.record_batch(received=len(quotes), rejected=rejected)

        if opportunities:
            logger.info(f"Found {len(opportunities)} arbitrage opportunities for {label}")
            for opportunity in opportunities:
                self._detector.log_opportunity(opportunity)
                self._metrics.record_opportunity(opportunity)
        else:
            logger.debug(f"No arbitrage opportunities found for {label}")

        return opportunities

    async def scan_pair(self, pair: TradingPair) -> list[Opportunity]:
        """Scan a single pair on its own."""
        return await self.scan_instrument([pair])

    async def scan_cycle(self) -> list[Opportunity]:
        """
        Scan every configured instrument once.

        An error on one instrument is logged and does not stop the cycle.
        """
        self._metrics.record_cycle()
        found: list[Opportunity] = []

        for base, pairs in self._instruments.items():
            try:
                found.extend(await self.scan_instrument(pairs))
            except Exception as e:
                logger.error(f"Error scanning {base}: {e}")

        return found

    async def run(self, install_signal_handlers: bool = True) -> None:
        """
        Run scan cycles until shutdown or the configured cycle limit.

        Raises:
            RuntimeError: If the scanner is already running.
        """
        if self.is_running:
            raise RuntimeError("Scanner is already running")

        self._running = True

        if install_signal_handlers:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, self._handle_shutdown)

        logger.info(
            f"Scanner started: venues={[c.name for c in self._connectors]} "
            f"pairs={[p.label for p in self._pairs]} "
            f"interval={self._settings.polling_interval_ms}ms"
        )

        cycles = 0
        try:
            while not self._shutdown_event.is_set():
                await self.scan_cycle()
                cycles += 1

                if self._settings.max_cycles is not None and cycles >= self._settings.max_cycles:
                    logger.info(f"Reached cycle limit ({cycles})")
                    break

                try:
                    await asyncio.wait_for(
                        self._shutdown_event.wait(),
                        timeout=self._settings.polling_interval_seconds,
                    )
                except TimeoutError:
                    pass

        finally:
            await self.shutdown()

    def _handle_shutdown(self) -> None:
        """Handle shutdown signal."""
        logger.info("Shutdown signal received")
        self.stop()

    def stop(self) -> None:
        """Ask the run loop to exit after the current cycle."""
        self._running = False
        self._shutdown_event.set()

    async def shutdown(self) -> None:
        """Gracefully shut down the scanner."""
        if self._stopped:
            return

        self._stopped = True
        self._running = False
        self._shutdown_event.set()
        logger.info("Scanner stopped")

    @property
    def is_running(self) -> bool:
        """Check if scanner is running."""
        return self._running

    @property
    def metrics(self) -> MetricsCollector:
        """Get metrics collector."""
        return self._metrics

    @property
    def detector(self) -> ArbitrageDetector:
        """Get arbitrage detector."""
        return self._detector

    @property
    def instruments(self) -> dict[str, list[TradingPair]]:
        """Get configured instruments keyed by base asset."""
        return dict(self._instruments)


@asynccontextmanager
async def create_engine(
    settings: Settings,
    connectors: Sequence[VenueConnector],
) -> AsyncIterator[ScannerEngine]:
    """
    Create and manage scanner lifecycle.

    Usage:
        async with create_engine(settings, connectors) as engine:
            await engine.run()
    """
    engine = ScannerEngine(settings, connectors)

    try:
        yield engine
    finally:
        await engine.shutdown()
