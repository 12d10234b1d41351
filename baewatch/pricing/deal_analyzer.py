# baewatch/pricing/deal_analyzer.py

"""Cheapest-offer selection and asking-price comparison."""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from baewatch.models.listing import ActiveListing
from baewatch.models.price_stats import PriceStats
from baewatch.pricing.stats import round_percent


class DealRating(str, Enum):
    """Where an asking price sits relative to the market average."""

    BELOW_AVERAGE = "below"
    ABOVE_AVERAGE = "above"
    AT_AVERAGE = "at"


@dataclass(frozen=True)
class DealVerdict:
    """Comparison of one asking price against a :class:`PriceStats`."""

    rating: DealRating
    percent: int
    asking_price: float
    average: float


def find_cheapest(listings: Sequence[ActiveListing]) -> ActiveListing:
    """Return the listing with the lowest price plus shipping.

    Unknown shipping counts as zero. Ties keep the earliest listing.

    Raises:
        ValueError: If *listings* is empty.
    """
    if not listings:
        msg = "find_cheapest() requires at least one listing"
        raise ValueError(msg)

    best = listings[0]
    for listing in listings[1:]:
        if listing.total_cost < best.total_cost:
            best = listing
    return best


def compare_to_market(
    stats: PriceStats,
    asking_price: float | None,
) -> DealVerdict | None:
    """Classify *asking_price* against ``stats.average``.

    Returns ``None`` when there is nothing to compare: no asking price,
    or an average of zero (the no-data sentinel).
    """
    if asking_price is None or stats.average == 0:
        return None

    average = Decimal(str(stats.average))
    asking = Decimal(str(asking_price))
    percent_diff = (average - asking) / average * 100

    if percent_diff > 0:
        rating = DealRating.BELOW_AVERAGE
    elif percent_diff < 0:
        rating = DealRating.ABOVE_AVERAGE
    else:
        rating = DealRating.AT_AVERAGE

    return DealVerdict(
        rating=rating,
        percent=round_percent(abs(percent_diff)),
        asking_price=asking_price,
        average=stats.average,
    )
