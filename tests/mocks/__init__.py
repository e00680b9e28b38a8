"""Mock implementations for testing."""

from tests.mocks.sink import QuoteFactory, RecordingSink
from tests.mocks.venue import MockVenue, failing_venue


__all__ = [
    "MockVenue",
    "QuoteFactory",
    "RecordingSink",
    "failing_venue",
]
