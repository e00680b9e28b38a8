"""Core module containing type definitions and the polling scanner."""

from deltahound.core.types import (
    FeeSchedule,
    Opportunity,
    OpportunityKind,
    Quote,
    TradingPair,
    VenueConnector,
)


__all__ = [
    "FeeSchedule",
    "Opportunity",
    "OpportunityKind",
    "Quote",
    "TradingPair",
    "VenueConnector",
]
