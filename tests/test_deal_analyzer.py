# tests/test_deal_analyzer.py

"""Tests for cheapest-listing selection and deal comparison."""

import itertools
import unittest

from baewatch.models.listing import ActiveListing
from baewatch.models.price_stats import PriceStats
from baewatch.pricing.deal_analyzer import (
    DealRating,
    compare_to_market,
    find_cheapest,
)


def _listing(
    title: str, price: float, shipping: float | None = None
) -> ActiveListing:
    return ActiveListing(title=title, price=price, shipping_cost=shipping)


class TestFindCheapest(unittest.TestCase):
    """find_cheapest picks the lowest price plus shipping."""

    def test_includes_shipping(self) -> None:
        listings = [
            _listing("cheap item, pricey shipping", 10.0, 20.0),
            _listing("mid item, free shipping", 25.0, 0.0),
        ]
        self.assertEqual(find_cheapest(listings).title, "mid item, free shipping")

    def test_unknown_shipping_is_zero(self) -> None:
        listings = [_listing("known", 10.0, 1.0), _listing("unknown", 10.5)]
        self.assertEqual(find_cheapest(listings).title, "unknown")

    def test_tie_keeps_first(self) -> None:
        listings = [
            _listing("first", 10.0, 5.0),
            _listing("second", 15.0),
            _listing("third", 12.0, 3.0),
        ]
        self.assertEqual(find_cheapest(listings).title, "first")

    def test_order_invariant_without_ties(self) -> None:
        listings = [
            _listing("a", 30.0, 2.0),
            _listing("b", 12.0, 9.0),
            _listing("c", 18.0),
            _listing("d", 19.0, 0.5),
        ]
        for perm in itertools.permutations(listings):
            self.assertEqual(find_cheapest(list(perm)).title, "c")

    def test_single(self) -> None:
        only = _listing("only", 1.0)
        self.assertIs(find_cheapest([only]), only)

    def test_empty_raises(self) -> None:
        with self.assertRaises(ValueError):
            find_cheapest([])


class TestCompareToMarket(unittest.TestCase):
    """Asking-price classification against the market average."""

    def setUp(self) -> None:
        self.stats = PriceStats(
            average=100.0, median=100.0, lowest=50.0, highest=150.0, count=4
        )

    def test_below_average(self) -> None:
        verdict = compare_to_market(self.stats, 80.0)
        assert verdict is not None
        self.assertIs(verdict.rating, DealRating.BELOW_AVERAGE)
        self.assertEqual(verdict.percent, 20)

    def test_above_average(self) -> None:
        verdict = compare_to_market(self.stats, 120.0)
        assert verdict is not None
        self.assertIs(verdict.rating, DealRating.ABOVE_AVERAGE)
        self.assertEqual(verdict.percent, 20)

    def test_at_average(self) -> None:
        verdict = compare_to_market(self.stats, 100.0)
        assert verdict is not None
        self.assertIs(verdict.rating, DealRating.AT_AVERAGE)
        self.assertEqual(verdict.percent, 0)

    def test_no_asking_price(self) -> None:
        self.assertIsNone(compare_to_market(self.stats, None))

    def test_zero_average_never_classifies(self) -> None:
        for asking in (0.0, 1.0, 100.0, 1e6):
            with self.subTest(asking=asking):
                self.assertIsNone(compare_to_market(PriceStats(), asking))

    def test_percent_half_rounds_away_from_zero(self) -> None:
        """12.5% below rounds to 13, 12.5% above rounds to 13."""
        below = compare_to_market(self.stats, 87.5)
        above = compare_to_market(self.stats, 112.5)
        assert below is not None and above is not None
        self.assertEqual(below.percent, 13)
        self.assertEqual(above.percent, 13)

    def test_free_item_is_full_discount(self) -> None:
        verdict = compare_to_market(self.stats, 0.0)
        assert verdict is not None
        self.assertEqual(verdict.percent, 100)

    def test_verdict_carries_inputs(self) -> None:
        verdict = compare_to_market(self.stats, 80.0)
        assert verdict is not None
        self.assertEqual(verdict.asking_price, 80.0)
        self.assertEqual(verdict.average, 100.0)


if __name__ == "__main__":
    unittest.main()
