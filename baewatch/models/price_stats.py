# baewatch/models/price_stats.py

"""Summary statistics model for a set of prices."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceStats:
    """Average, median, and range of a price sample.

    A ``count`` of zero is the "no data" sentinel: every numeric field
    is then ``0.0``.
    """

    average: float = 0.0
    median: float = 0.0
    lowest: float = 0.0
    highest: float = 0.0
    count: int = 0

    @property
    def has_data(self) -> bool:
        """True when the summary was built from at least one price."""
        return self.count > 0
