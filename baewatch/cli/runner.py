# baewatch/cli/runner.py

"""Headless CLI: run one tool from the terminal and render the Markdown."""

import logging

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from baewatch.ebay.client import EbayClientHandle
from baewatch.models.listing import ItemCondition
from baewatch.models.tool_inputs import (
    PriceCheckInput,
    SearchActiveInput,
    SearchSoldInput,
)
from baewatch.services.tool_handlers import ToolHandlers, ToolResponse

logger = logging.getLogger("baewatch.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)

MODES: tuple[str, ...] = ("sold", "active", "price")


def _render(response: ToolResponse, console: Console | None = None) -> int:
    """Print *response* and return the process exit code."""
    if response.is_error:
        _err.print(f"[red]{escape(response.text)}[/red]")
        return 1
    (console or Console()).print(Markdown(response.text))
    return 0


async def _call(handle: EbayClientHandle, call: str, **kwargs: object) -> int:
    handlers = ToolHandlers(handle)
    try:
        if call == "status":
            response = await handlers.ebay_status()
        elif call == "connection":
            response = await handlers.ebay_test_connection()
        elif call == "sold":
            response = await handlers.search_sold(SearchSoldInput(**kwargs))
        elif call == "active":
            response = await handlers.search_active(
                SearchActiveInput(**kwargs)
            )
        elif call == "price":
            response = await handlers.price_check(PriceCheckInput(**kwargs))
        else:
            msg = f"Unknown command: {call}"
            raise ValueError(msg)
    except ValidationError as exc:
        _err.print(f"[red]Invalid arguments:[/red] {escape(str(exc))}")
        return 2
    finally:
        await handle.aclose()
    return _render(response)


async def run_status(handle: EbayClientHandle | None = None) -> int:
    """Print the credentials status report."""
    return await _call(handle or EbayClientHandle(), "status")


async def run_connection_test(handle: EbayClientHandle | None = None) -> int:
    """Print the outcome of a live token request."""
    _err.print("[dim]Contacting eBay...[/dim]")
    return await _call(handle or EbayClientHandle(), "connection")


async def cli_search(
    query: str,
    mode: str = "sold",
    condition: str = ItemCondition.ALL.value,
    limit: int | None = None,
    max_price: float | None = None,
    asking_price: float | None = None,
    handle: EbayClientHandle | None = None,
) -> int:
    """Run one search tool and return an exit code (0=ok, 1=fail)."""
    handle = handle or EbayClientHandle()
    _err.print(f"[bold]Searching ({mode}):[/bold] {escape(query)}")
    logger.info("CLI %s search for '%s'", mode, query)

    if mode == "price":
        return await _call(
            handle, "price", query=query, asking_price=asking_price
        )

    kwargs: dict[str, object] = {"query": query, "condition": condition}
    if limit is not None:
        kwargs["limit"] = limit
    if mode == "active":
        kwargs["max_price"] = max_price
    return await _call(handle, mode, **kwargs)
