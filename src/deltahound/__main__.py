"""
Entry point for the arbitrage scanner.

Usage:
    python -m deltahound
    deltahound  # if installed via pip
"""

import asyncio
import sys

from pydantic import ValidationError


def install_uvloop() -> bool:
    """Install uvloop as the event loop policy if it is available."""
    try:
        import uvloop
    except ImportError:
        return False

    uvloop.install()
    return True


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    from deltahound import __version__
    from deltahound.config.settings import get_settings
    from deltahound.core.engine import ScannerEngine
    from deltahound.simulation.venue import build_simulated_venues
    from deltahound.telemetry.logger import setup_logging
    from deltahound.telemetry.reporter import SummaryReporter

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║     DELTAHOUND ARBITRAGE SCANNER v{__version__:<22}      ║
║                                                               ║
║     Cross-venue and cross-stablecoin opportunity detection    ║
╚═══════════════════════════════════════════════════════════════╝
    """
    )

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}")
        return 1

    uvloop_enabled = install_uvloop() if settings.use_uvloop else False

    print("Configuration:")
    print(f"  Pairs:          {', '.join(settings.trading_pairs)}")
    print(f"  Venues:         {', '.join(settings.simulated_venues)} (simulated)")
    print(f"  Min profit:     {settings.min_profit_threshold:.3f}%")
    print(f"  Max slippage:   {settings.max_slippage_percent:.3f}%")
    print(f"  Poll interval:  {settings.polling_interval_ms}ms")
    print(f"  uvloop:         {'Enabled' if uvloop_enabled else 'Disabled'}")
    print()

    async_logger = setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json=settings.log_json,
    )

    async def run_scanner() -> int:
        connectors = build_simulated_venues(settings.simulated_venues, seed=settings.simulation_seed)
        engine = ScannerEngine(settings, connectors)

        try:
            await engine.run()
            return 0

        except Exception as e:
            print(f"\nFatal error: {e}")
            import traceback

            traceback.print_exc()
            return 1

        finally:
            await engine.shutdown()
            SummaryReporter(engine.metrics).print_summary()

    try:
        return asyncio.run(run_scanner())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0
    finally:
        async_logger.stop()


if __name__ == "__main__":
    sys.exit(main())
