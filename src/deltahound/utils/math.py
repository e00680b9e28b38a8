"""
Mathematical utilities for price calculations.

Plain float helpers shared by the core types and the quote normalizer.
"""


def spread_percent(bid: float, ask: float) -> float:
    """
    Bid-ask spread as a percentage of the bid.

    Args:
        bid: Best bid price (must be non-zero).
        ask: Best ask price.

    Returns:
        Spread in percent.

    Example:
        >>> spread_percent(100.0, 101.0)
        1.0
    """
    return ((ask - bid) / bid) * 100


def midpoint(bid: float, ask: float) -> float:
    """Midpoint between bid and ask."""
    return (bid + ask) / 2


def percent_change(value: float, reference: float) -> float:
    """Deviation of ``value`` from ``reference`` in percent."""
    return ((value - reference) / reference) * 100
