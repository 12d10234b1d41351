# tests/test_mappers.py

"""Tests for the eBay response mapping boundary."""

import unittest
from datetime import datetime, timezone
from typing import Any
from unittest.mock import patch

from baewatch.config.settings import Settings
from baewatch.ebay.mappers import (
    map_active_item,
    map_active_response,
    map_sold_item,
    map_sold_response,
    parse_price,
    parse_timestamp,
)
from baewatch.models.listing import ListingType


def _finding_item(**overrides: Any) -> dict[str, Any]:
    """A findCompletedItems item in eBay's JSON (list-wrapped) shape."""
    item: dict[str, Any] = {
        "itemId": ["123456789"],
        "title": ["Dell Latitude 7420 i5 16GB"],
        "viewItemURL": ["https://www.ebay.com/itm/123456789"],
        "sellingStatus": [
            {
                "currentPrice": [
                    {"@currencyId": "USD", "__value__": "349.99"}
                ],
                "sellingState": ["EndedWithSales"],
            }
        ],
        "condition": [
            {"conditionId": ["3000"], "conditionDisplayName": ["Used"]}
        ],
        "listingInfo": [{"endTime": ["2024-03-01T18:22:01.000Z"]}],
    }
    item.update(overrides)
    return item


def _browse_item(**overrides: Any) -> dict[str, Any]:
    """A Browse API itemSummaries entry."""
    item: dict[str, Any] = {
        "itemId": "v1|1234|0",
        "title": "Nintendo Switch OLED White",
        "price": {"value": "289.00", "currency": "USD"},
        "condition": "New",
        "itemWebUrl": "https://www.ebay.com/itm/1234",
        "shippingOptions": [
            {
                "shippingCostType": "FIXED",
                "shippingCost": {"value": "9.95", "currency": "USD"},
            }
        ],
        "buyingOptions": ["FIXED_PRICE", "BEST_OFFER"],
    }
    item.update(overrides)
    return item


class TestParsers(unittest.TestCase):
    """Scalar parsing helpers."""

    def test_parse_price_string(self) -> None:
        self.assertEqual(parse_price("12.50"), 12.5)

    def test_parse_price_bad_values(self) -> None:
        for value in (None, "", "abc", True, {}, "-5"):
            with self.subTest(value=value):
                self.assertEqual(parse_price(value), 0.0)

    def test_parse_timestamp_zulu(self) -> None:
        self.assertEqual(
            parse_timestamp("2024-03-01T18:22:01.000Z"),
            datetime(2024, 3, 1, 18, 22, 1, tzinfo=timezone.utc),
        )

    def test_parse_timestamp_bad_values(self) -> None:
        for value in (None, "", "Unknown", 123):
            with self.subTest(value=value):
                self.assertIsNone(parse_timestamp(value))


class TestMapSoldItem(unittest.TestCase):
    """Finding API item mapping."""

    def test_full_item(self) -> None:
        listing = map_sold_item(_finding_item())
        self.assertEqual(listing.title, "Dell Latitude 7420 i5 16GB")
        self.assertEqual(listing.price, 349.99)
        self.assertEqual(listing.currency, "USD")
        self.assertEqual(listing.condition, "Used")
        self.assertEqual(listing.link, "https://www.ebay.com/itm/123456789")
        assert listing.date_sold is not None
        self.assertEqual(listing.date_sold.year, 2024)

    def test_sparse_item_uses_defaults(self) -> None:
        listing = map_sold_item({})
        self.assertEqual(listing.title, "Unknown")
        self.assertEqual(listing.price, 0.0)
        self.assertEqual(listing.currency, "USD")
        self.assertEqual(listing.condition, "Unknown")
        self.assertEqual(listing.link, "")
        self.assertIsNone(listing.date_sold)

    def test_foreign_currency(self) -> None:
        item = _finding_item(
            sellingStatus=[
                {"currentPrice": [{"@currencyId": "GBP", "__value__": "20"}]}
            ]
        )
        listing = map_sold_item(item)
        self.assertEqual(listing.currency, "GBP")
        self.assertEqual(listing.price, 20.0)

    def test_empty_lists(self) -> None:
        listing = map_sold_item(_finding_item(title=[], condition=[]))
        self.assertEqual(listing.title, "Unknown")
        self.assertEqual(listing.condition, "Unknown")


class TestMapActiveItem(unittest.TestCase):
    """Browse API item mapping."""

    def test_full_item(self) -> None:
        listing = map_active_item(_browse_item())
        self.assertEqual(listing.title, "Nintendo Switch OLED White")
        self.assertEqual(listing.price, 289.0)
        self.assertEqual(listing.condition, "New")
        self.assertEqual(listing.shipping_cost, 9.95)
        self.assertIs(listing.listing_type, ListingType.BUY_IT_NOW)

    def test_free_shipping_is_zero_not_unknown(self) -> None:
        item = _browse_item(
            shippingOptions=[{"shippingCost": {"value": "0.00"}}]
        )
        self.assertEqual(map_active_item(item).shipping_cost, 0.0)

    def test_missing_shipping_is_unknown(self) -> None:
        item = _browse_item()
        del item["shippingOptions"]
        self.assertIsNone(map_active_item(item).shipping_cost)

    def test_auction(self) -> None:
        item = _browse_item(buyingOptions=["AUCTION"])
        self.assertIs(map_active_item(item).listing_type, ListingType.AUCTION)

    def test_sparse_item(self) -> None:
        listing = map_active_item({})
        self.assertEqual(listing.title, "Unknown")
        self.assertEqual(listing.price, 0.0)
        self.assertEqual(listing.currency, "USD")
        self.assertIsNone(listing.shipping_cost)
        self.assertIs(listing.listing_type, ListingType.AUCTION)

    def test_missing_currency_follows_settings_default(self) -> None:
        with patch.object(Settings, "DEFAULT_CURRENCY", "EUR"):
            self.assertEqual(map_active_item({}).currency, "EUR")
            self.assertEqual(map_sold_item({}).currency, "EUR")


class TestMapResponses(unittest.TestCase):
    """Whole-response extraction."""

    def test_sold_response(self) -> None:
        payload = {
            "findCompletedItemsResponse": [
                {
                    "ack": ["Success"],
                    "searchResult": [
                        {
                            "@count": "2",
                            "item": [
                                _finding_item(),
                                _finding_item(title=["Second"]),
                            ],
                        }
                    ],
                }
            ]
        }
        listings = map_sold_response(payload)
        self.assertEqual(listings[1].title, "Second")
        self.assertEqual(len(listings), 2)

    def test_sold_response_without_items(self) -> None:
        payload = {
            "findCompletedItemsResponse": [
                {"ack": ["Success"], "searchResult": [{"@count": "0"}]}
            ]
        }
        self.assertEqual(map_sold_response(payload), [])

    def test_sold_response_empty_payload(self) -> None:
        self.assertEqual(map_sold_response({}), [])

    def test_active_response(self) -> None:
        payload = {"total": 1, "itemSummaries": [_browse_item()]}
        self.assertEqual(len(map_active_response(payload)), 1)

    def test_active_response_without_items(self) -> None:
        self.assertEqual(map_active_response({"total": 0}), [])

    def test_active_response_skips_non_objects(self) -> None:
        payload = {"itemSummaries": [_browse_item(), "junk", None]}
        self.assertEqual(len(map_active_response(payload)), 1)


if __name__ == "__main__":
    unittest.main()
