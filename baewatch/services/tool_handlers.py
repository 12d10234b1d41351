# baewatch/services/tool_handlers.py

"""Transport-independent implementations of the baewatch tools.

Every handler returns a :class:`ToolResponse`; nothing raised below this
layer escapes to the protocol server.
"""

import logging
from dataclasses import dataclass

from baewatch.config.credentials import check_config_status
from baewatch.ebay.client import EbayClientHandle
from baewatch.models.tool_inputs import (
    PriceCheckInput,
    SearchActiveInput,
    SearchSoldInput,
)
from baewatch.output.formatters import (
    format_active_listings,
    format_config_status,
    format_connection_result,
    format_price_check,
    format_sold_listings,
)
from baewatch.pricing.deal_analyzer import compare_to_market, find_cheapest
from baewatch.pricing.stats import calculate_stats
from baewatch.services.connection_checker import check_connection
from baewatch.services.search_service import MarketplaceSearch

logger = logging.getLogger("baewatch.tools")


@dataclass(frozen=True)
class ToolResponse:
    """Text payload for one tool call, flagged when it reports a failure."""

    text: str
    is_error: bool = False


def _failure(prefix: str, exc: Exception) -> ToolResponse:
    logger.error("%s: %s", prefix, exc, exc_info=exc)
    return ToolResponse(text=f"{prefix}: {exc}", is_error=True)


class ToolHandlers:
    """Composes search, statistics, and formatting for each tool."""

    def __init__(
        self,
        handle: EbayClientHandle,
        search: MarketplaceSearch | None = None,
    ) -> None:
        self.handle = handle
        self.search = search or MarketplaceSearch(handle)

    async def ebay_status(self) -> ToolResponse:
        """Report whether credentials are configured; no network call."""
        status = check_config_status(self.handle.config_path)
        return ToolResponse(text=format_config_status(status))

    async def ebay_test_connection(self) -> ToolResponse:
        """Acquire a live token and report the classified outcome."""
        try:
            # Pick up credential edits made since the last call
            await self.handle.rebuild()
            result = await check_connection(self.handle)
        except Exception as exc:
            return _failure("Error testing eBay connection", exc)
        return ToolResponse(
            text=format_connection_result(result),
            is_error=not result.success,
        )

    async def search_sold(self, args: SearchSoldInput) -> ToolResponse:
        try:
            listings = await self.search.search_sold(
                args.query, args.condition, args.limit
            )
            stats = calculate_stats(item.price for item in listings)
            return ToolResponse(text=format_sold_listings(listings, stats))
        except Exception as exc:
            return _failure("Error searching sold listings", exc)

    async def search_active(self, args: SearchActiveInput) -> ToolResponse:
        try:
            listings = await self.search.search_active(
                args.query, args.condition, args.max_price, args.limit
            )
            return ToolResponse(text=format_active_listings(listings))
        except Exception as exc:
            return _failure("Error searching active listings", exc)

    async def price_check(self, args: PriceCheckInput) -> ToolResponse:
        """Sold-price summary, cheapest live offer, and deal verdict."""
        try:
            sold, active = await self.search.search_market(args.query)
            if not sold and not active:
                return ToolResponse(
                    text=(
                        f'No sold or active listings found for "{args.query}". '
                        "Try simpler or broader search terms."
                    )
                )
            stats = calculate_stats(item.price for item in sold)
            cheapest = find_cheapest(active) if active else None
            verdict = compare_to_market(stats, args.asking_price)
            return ToolResponse(
                text=format_price_check(stats, cheapest, verdict)
            )
        except Exception as exc:
            return _failure("Error during price check", exc)
