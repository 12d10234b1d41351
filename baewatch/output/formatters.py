# baewatch/output/formatters.py

"""Markdown text reports returned by the MCP tools."""

from baewatch.config.credentials import ConfigStatus
from baewatch.models.listing import ActiveListing, SoldListing
from baewatch.models.price_stats import PriceStats
from baewatch.pricing.deal_analyzer import DealRating, DealVerdict
from baewatch.services.connection_checker import ConnectionResult

NO_SOLD_LISTINGS = "No sold listings found for this search."
NO_ACTIVE_LISTINGS = "No active listings found for this search."


def format_price(amount: float, currency: str = "USD") -> str:
    """Render ``$12.50`` for USD, ``12.50 EUR`` otherwise."""
    if currency == "USD":
        return f"${amount:.2f}"
    return f"{amount:.2f} {currency}"


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _sold_date(listing: SoldListing) -> str:
    if listing.date_sold is None:
        return "Unknown date"
    return listing.date_sold.strftime("%m/%d/%Y")


def _shipping_label(listing: ActiveListing) -> str:
    if listing.shipping_cost is None:
        return "shipping TBD"
    if listing.shipping_cost == 0:
        return "free shipping"
    return f"+ {format_price(listing.shipping_cost, listing.currency)} shipping"


def format_sold_listings(
    listings: list[SoldListing],
    stats: PriceStats,
) -> str:
    """Sold listings with a price summary header."""
    if not listings:
        return NO_SOLD_LISTINGS

    lines = [
        f"## Sold Listings ({stats.count} results)",
        "",
        "**Price Summary:**",
        f"- Average: {format_price(stats.average)}",
        f"- Median: {format_price(stats.median)}",
        f"- Lowest: {format_price(stats.lowest)}",
        f"- Highest: {format_price(stats.highest)}",
        "",
        "**Recent Sales:**",
    ]
    for item in listings:
        lines.append(
            f"- **{format_price(item.price, item.currency)}** | "
            f"{item.title} ({item.condition}) | Sold {_sold_date(item)}"
        )
        lines.append(f"  {item.link}")
    return "\n".join(lines) + "\n"


def format_active_listings(listings: list[ActiveListing]) -> str:
    """Active listings with shipping and total cost."""
    if not listings:
        return NO_ACTIVE_LISTINGS

    lines = [f"## Active Listings ({len(listings)} results)", ""]
    for item in listings:
        total = (
            f" ({format_price(item.total_cost, item.currency)} total)"
            if item.shipping_cost is not None
            else ""
        )
        lines.append(
            f"- **{format_price(item.price, item.currency)}** "
            f"{_shipping_label(item)}{total} | {item.title} "
            f"({item.condition}) [{item.listing_type.value}]"
        )
        lines.append(f"  {item.link}")
    return "\n".join(lines) + "\n"


def format_deal_line(verdict: DealVerdict) -> str:
    """One-line deal analysis for an asking price."""
    asking = format_price(verdict.asking_price)
    if verdict.rating is DealRating.BELOW_AVERAGE:
        return (
            f"**Deal Analysis:** Asking price of {asking} is "
            f"**{verdict.percent}% below** the average sold price. "
            "Looks like a good deal!"
        )
    if verdict.rating is DealRating.ABOVE_AVERAGE:
        return (
            f"**Deal Analysis:** Asking price of {asking} is "
            f"**{verdict.percent}% above** the average sold price. "
            "May want to negotiate."
        )
    return (
        f"**Deal Analysis:** Asking price of {asking} is right at the "
        "average sold price."
    )


def format_price_check(
    stats: PriceStats,
    cheapest: ActiveListing | None,
    verdict: DealVerdict | None = None,
) -> str:
    """Market summary, cheapest live offer, and optional deal verdict."""
    lines = ["## Price Check Summary", "", "**Sold Price Data (recent):**"]
    if stats.has_data:
        lines += [
            f"- Average sold price: {format_price(stats.average)}",
            f"- Median sold price: {format_price(stats.median)}",
            (
                f"- Range: {format_price(stats.lowest)} to "
                f"{format_price(stats.highest)}"
            ),
            f"- Total recent sales: {stats.count}",
        ]
    else:
        lines.append("- No recent sales found.")
    lines.append("")

    if cheapest is not None:
        shipping = cheapest.shipping_cost or 0.0
        currency = cheapest.currency
        lines += [
            "**Cheapest Active Listing:**",
            (
                f"- {format_price(cheapest.price, currency)} + "
                f"{format_price(shipping, currency)} shipping = "
                f"{format_price(cheapest.total_cost, currency)} total"
            ),
            f"- {cheapest.title}",
            f"- {cheapest.link}",
            "",
        ]

    if verdict is not None:
        lines.append(format_deal_line(verdict))

    return "\n".join(lines) + "\n"


def format_config_status(status: ConfigStatus) -> str:
    """Credentials status with per-field presence flags."""
    details = status.details
    lines = [
        "## eBay Configuration Status",
        "",
        status.message,
        "",
        f"- Config file found: {_yes_no(details.config_file_exists)}",
        f"- App ID: {_yes_no(details.has_app_id)}",
        f"- Cert ID: {_yes_no(details.has_cert_id)}",
        f"- Dev ID: {_yes_no(details.has_dev_id)}",
        f"- Refresh token: {_yes_no(details.has_refresh_token)}",
        f"- Environment: {details.environment or 'not set'}",
    ]
    return "\n".join(lines) + "\n"


def format_connection_result(result: ConnectionResult) -> str:
    """Outcome of a live connectivity test."""
    heading = "Connected" if result.success else "Connection failed"
    lines = [f"## eBay Connection Test: {heading}", "", result.message]
    if result.latency_ms:
        lines.append(f"\nResponse time: {result.latency_ms:.0f}ms")
    return "\n".join(lines) + "\n"
