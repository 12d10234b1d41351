# baewatch/models/listing.py

"""Listing data models for inter-module data flow."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ItemCondition(str, Enum):
    """Condition filter accepted by the search tools."""

    NEW = "New"
    USED = "Used"
    FOR_PARTS = "For Parts"
    ALL = "All"

    @property
    def codes(self) -> list[str]:
        """eBay condition IDs for this filter (empty means unfiltered)."""
        return list(_CONDITION_CODES[self])


_CONDITION_CODES: dict[ItemCondition, tuple[str, ...]] = {
    ItemCondition.NEW: ("1000",),
    ItemCondition.USED: ("3000", "4000", "5000", "6000"),
    ItemCondition.FOR_PARTS: ("7000",),
    ItemCondition.ALL: (),
}


class ListingType(str, Enum):
    """How an active listing is sold."""

    BUY_IT_NOW = "Buy It Now"
    AUCTION = "Auction"


@dataclass(frozen=True)
class SoldListing:
    """A completed eBay sale."""

    title: str
    price: float
    currency: str = "USD"
    condition: str = "Unknown"
    link: str = ""
    date_sold: datetime | None = None


@dataclass(frozen=True)
class ActiveListing:
    """A live eBay offer.

    ``shipping_cost`` is ``None`` when eBay did not quote shipping.
    """

    title: str
    price: float
    currency: str = "USD"
    condition: str = "Unknown"
    link: str = ""
    shipping_cost: float | None = None
    listing_type: ListingType = ListingType.BUY_IT_NOW

    @property
    def total_cost(self) -> float:
        """Price plus shipping, counting unknown shipping as free."""
        return self.price + (self.shipping_cost or 0.0)
