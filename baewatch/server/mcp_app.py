# baewatch/server/mcp_app.py

"""FastMCP server exposing the baewatch tools over stdio."""

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field, ValidationError

from baewatch.config.settings import Settings
from baewatch.ebay.client import EbayClientHandle
from baewatch.models.listing import ItemCondition
from baewatch.models.tool_inputs import (
    PriceCheckInput,
    SearchActiveInput,
    SearchSoldInput,
)
from baewatch.services.tool_handlers import ToolHandlers, ToolResponse

logger = logging.getLogger("baewatch.server")

_INSTRUCTIONS = (
    "eBay market research for resellers: recent sold prices, current "
    "Buy It Now listings, and quick deal checks against an asking price."
)

Query = Annotated[str, Field(description="Search term, e.g. 'iPhone 13 128GB'")]
Condition = Annotated[
    ItemCondition, Field(description="Filter by item condition")
]
Limit = Annotated[
    int,
    Field(
        ge=1,
        le=Settings.MAX_RESULTS_LIMIT,
        description="Number of results to return (max 50)",
    ),
]


def _unwrap(response: ToolResponse) -> str:
    """Return the text, or raise so the client sees ``isError``."""
    if response.is_error:
        raise ToolError(response.text)
    return response.text


async def _invoke(
    handler: Callable[[Any], Awaitable[ToolResponse]],
    input_cls: type[BaseModel],
    **kwargs: Any,
) -> str:
    try:
        args = input_cls(**kwargs)
    except ValidationError as exc:
        logger.warning("Rejected %s arguments: %s", input_cls.__name__, exc)
        raise ToolError(f"Invalid arguments: {exc}") from exc
    return _unwrap(await handler(args))


def create_server(handlers: ToolHandlers) -> FastMCP:
    """Build the MCP server with every tool bound to *handlers*."""
    mcp = FastMCP(
        Settings.SERVER_NAME,
        instructions=_INSTRUCTIONS,
        version=Settings.SERVER_VERSION,
    )

    @mcp.tool(
        name="ebay_status",
        description=(
            "Check whether eBay API credentials are configured. Reports "
            "which fields are missing without contacting eBay."
        ),
    )
    async def ebay_status() -> str:
        return _unwrap(await handlers.ebay_status())

    @mcp.tool(
        name="ebay_test_connection",
        description=(
            "Test the eBay API connection by requesting an access token "
            "with the configured credentials."
        ),
    )
    async def ebay_test_connection() -> str:
        return _unwrap(await handlers.ebay_test_connection())

    @mcp.tool(
        name="search_sold",
        description=(
            "Search eBay for recently sold/completed listings to research "
            "fair market prices. Returns sold items with prices, "
            "conditions, dates, and summary statistics."
        ),
    )
    async def search_sold(
        query: Query,
        condition: Condition = ItemCondition.ALL,
        limit: Limit = Settings.DEFAULT_RESULTS_LIMIT,
    ) -> str:
        return await _invoke(
            handlers.search_sold,
            SearchSoldInput,
            query=query,
            condition=condition,
            limit=limit,
        )

    @mcp.tool(
        name="search_active",
        description=(
            "Search eBay for current active listings. Focuses on Buy It "
            "Now listings and includes shipping costs. Great for finding "
            "deals to flip."
        ),
    )
    async def search_active(
        query: Query,
        condition: Condition = ItemCondition.ALL,
        max_price: Annotated[
            float | None,
            Field(ge=0, description="Maximum price filter in USD"),
        ] = None,
        limit: Limit = Settings.DEFAULT_RESULTS_LIMIT,
    ) -> str:
        return await _invoke(
            handlers.search_active,
            SearchActiveInput,
            query=query,
            condition=condition,
            max_price=max_price,
            limit=limit,
        )

    @mcp.tool(
        name="price_check",
        description=(
            "Quick price check for flipping decisions. Summarises recent "
            "sold prices (avg, median, range), finds the cheapest active "
            "listing, and optionally compares a seller's asking price "
            "against the market."
        ),
    )
    async def price_check(
        query: Annotated[
            str,
            Field(description="The item to research, e.g. 'Nintendo Switch OLED'"),
        ],
        asking_price: Annotated[
            float | None,
            Field(
                ge=0,
                description=(
                    "What the seller is asking, for comparison against "
                    "market value"
                ),
            ),
        ] = None,
    ) -> str:
        return await _invoke(
            handlers.price_check,
            PriceCheckInput,
            query=query,
            asking_price=asking_price,
        )

    return mcp


async def serve(handle: EbayClientHandle | None = None) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    handle = handle or EbayClientHandle()
    mcp = create_server(ToolHandlers(handle))
    logger.info("%s MCP server starting on stdio", Settings.SERVER_NAME)
    try:
        await mcp.run_async(transport="stdio")
    finally:
        await handle.aclose()
        logger.info("%s MCP server stopped", Settings.SERVER_NAME)
