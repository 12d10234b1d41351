# baewatch/services/search_service.py

"""Marketplace search facade over the eBay client."""

import asyncio
import logging

from baewatch.config.settings import Settings
from baewatch.ebay.client import EbayClientHandle
from baewatch.ebay.mappers import map_active_response, map_sold_response
from baewatch.errors import EbayApiError, SearchError
from baewatch.models.listing import ActiveListing, ItemCondition, SoldListing

logger = logging.getLogger("baewatch.search")


class MarketplaceSearch:
    """Runs sold and active eBay searches and returns listing models."""

    def __init__(self, handle: EbayClientHandle) -> None:
        self.handle = handle

    async def search_sold(
        self,
        query: str,
        condition: ItemCondition = ItemCondition.ALL,
        limit: int = Settings.DEFAULT_RESULTS_LIMIT,
    ) -> list[SoldListing]:
        """Recently completed sales matching *query*.

        Raises:
            ConfigError: If credentials are not configured.
            SearchError: If the eBay call fails.
        """
        client = self.handle.get()
        try:
            payload = await client.find_completed_items(
                query, condition.codes, limit
            )
        except EbayApiError as exc:
            raise SearchError(f"eBay sold search failed: {exc}") from exc

        listings = map_sold_response(payload)
        logger.info(
            "Sold search '%s' (%s) returned %d listings",
            query,
            condition.value,
            len(listings),
        )
        return listings

    async def search_active(
        self,
        query: str,
        condition: ItemCondition = ItemCondition.ALL,
        max_price: float | None = None,
        limit: int = Settings.DEFAULT_RESULTS_LIMIT,
    ) -> list[ActiveListing]:
        """Current Buy It Now listings matching *query*, cheapest first.

        Raises:
            ConfigError: If credentials are not configured.
            SearchError: If the eBay call fails.
        """
        client = self.handle.get()
        try:
            payload = await client.search_item_summaries(
                query, condition.codes, max_price, limit
            )
        except EbayApiError as exc:
            raise SearchError(
                f"eBay active search failed: {exc}"
            ) from exc

        listings = map_active_response(payload)
        logger.info(
            "Active search '%s' (%s, max=%s) returned %d listings",
            query,
            condition.value,
            max_price,
            len(listings),
        )
        return listings

    async def search_market(
        self,
        query: str,
        limit: int = Settings.PRICE_CHECK_LIMIT,
    ) -> tuple[list[SoldListing], list[ActiveListing]]:
        """Run the sold and active searches concurrently.

        Both must succeed: the first failure cancels the other search and
        propagates, so no partial result is returned.
        """
        # Resolve the client up front so a ConfigError surfaces once
        self.handle.get()

        try:
            async with asyncio.TaskGroup() as group:
                sold_task = group.create_task(
                    self.search_sold(query, ItemCondition.ALL, limit)
                )
                active_task = group.create_task(
                    self.search_active(query, ItemCondition.ALL, None, limit)
                )
        except ExceptionGroup as failures:
            raise failures.exceptions[0]
        return sold_task.result(), active_task.result()
