"""
Recording opportunity sink for testing.

Collects reported opportunities instead of logging them.
"""

from collections.abc import Callable

from deltahound.core.types import Opportunity, Quote


QuoteFactory = Callable[..., Quote]


class RecordingSink:
    """Opportunity sink that keeps every reported opportunity."""

    def __init__(self) -> None:
        self.reported: list[Opportunity] = []

    def log_opportunity(self, opportunity: Opportunity) -> None:
        self.reported.append(opportunity)
