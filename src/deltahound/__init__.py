"""
DeltaHound arbitrage scanner.

Polls best bid/ask quotes from several venues and reports cross-venue
and cross-stablecoin arbitrage opportunities after fees and slippage.
"""

__version__ = "1.0.0"
