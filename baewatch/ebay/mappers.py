# baewatch/ebay/mappers.py

"""Convert raw eBay API payloads into listing models.

This is the only module that knows the shape of eBay responses. The
Finding API wraps every scalar in a one-element list; the Browse API
uses plain nested objects. Missing fields fall back to neutral
defaults instead of raising.
"""

import logging
from datetime import datetime
from typing import Any

from baewatch.config.settings import Settings
from baewatch.models.listing import ActiveListing, ListingType, SoldListing

logger = logging.getLogger("baewatch.mappers")

_UNKNOWN = "Unknown"


def _first(value: Any) -> Any:
    """Unwrap Finding API ``[x]`` arrays; pass anything else through."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _dig(data: Any, *path: str) -> Any:
    """Walk *path* through nested dicts, unwrapping lists at each step."""
    current = _first(data)
    for key in path:
        if not isinstance(current, dict):
            return None
        current = _first(current.get(key))
    return current


def parse_price(value: Any) -> float:
    """Parse an eBay price string, returning ``0.0`` when unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        logger.debug("Unparseable price value: %r", value)
        return 0.0
    return price if price >= 0 else 0.0


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp such as ``2024-03-01T18:22:01.000Z``."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable timestamp: %r", value)
        return None


def map_sold_item(item: dict[str, Any]) -> SoldListing:
    """Map one Finding API ``findCompletedItems`` item."""
    price = _dig(item, "sellingStatus", "currentPrice")
    return SoldListing(
        title=_dig(item, "title") or _UNKNOWN,
        price=parse_price(_dig(price, "__value__")),
        currency=_dig(price, "@currencyId") or Settings.DEFAULT_CURRENCY,
        condition=(
            _dig(item, "condition", "conditionDisplayName") or _UNKNOWN
        ),
        link=_dig(item, "viewItemURL") or "",
        date_sold=parse_timestamp(_dig(item, "listingInfo", "endTime")),
    )


def map_active_item(item: dict[str, Any]) -> ActiveListing:
    """Map one Browse API ``itemSummaries`` entry."""
    shipping_value = _dig(item, "shippingOptions", "shippingCost", "value")
    buying_options = item.get("buyingOptions") or []

    return ActiveListing(
        title=item.get("title") or _UNKNOWN,
        price=parse_price(_dig(item, "price", "value")),
        currency=_dig(item, "price", "currency") or Settings.DEFAULT_CURRENCY,
        condition=item.get("condition") or _UNKNOWN,
        link=item.get("itemWebUrl") or "",
        shipping_cost=(
            parse_price(shipping_value)
            if shipping_value not in (None, "")
            else None
        ),
        listing_type=(
            ListingType.BUY_IT_NOW
            if "FIXED_PRICE" in buying_options
            else ListingType.AUCTION
        ),
    )


def extract_sold_items(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Pull the item array out of a ``findCompletedItems`` response."""
    items = _dig(
        payload, "findCompletedItemsResponse", "searchResult"
    )
    if not isinstance(items, dict):
        return []
    raw = items.get("item") or []
    return [i for i in raw if isinstance(i, dict)]


def extract_active_items(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Pull the item array out of an ``item_summary/search`` response."""
    raw = payload.get("itemSummaries") or []
    return [i for i in raw if isinstance(i, dict)]


def map_sold_response(payload: dict[str, Any]) -> list[SoldListing]:
    """Map a full ``findCompletedItems`` response."""
    return [map_sold_item(i) for i in extract_sold_items(payload)]


def map_active_response(payload: dict[str, Any]) -> list[ActiveListing]:
    """Map a full ``item_summary/search`` response."""
    return [map_active_item(i) for i in extract_active_items(payload)]
