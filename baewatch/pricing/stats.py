# baewatch/pricing/stats.py

"""Descriptive statistics over listing prices.

All rounding is half-away-from-zero, performed in :mod:`decimal` on the
shortest decimal representation of each float (``10.125`` -> ``10.13``,
``2.675`` -> ``2.68``).
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from baewatch.models.price_stats import PriceStats

_CENT = Decimal("0.01")
_UNIT = Decimal("1")


def _to_decimal(value: float | int | Decimal) -> Decimal:
    """Convert via ``str`` so ``19.99`` stays ``19.99``."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: float | int | Decimal) -> float:
    """Round to two decimal places, halves away from zero."""
    return float(
        _to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    )


def round_percent(value: float | int | Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(
        _to_decimal(value).quantize(_UNIT, rounding=ROUND_HALF_UP)
    )


def calculate_stats(prices: Iterable[float]) -> PriceStats:
    """Summarise *prices* into a :class:`PriceStats`.

    An empty input yields the all-zero "no data" record rather than
    raising. The result does not depend on input order.
    """
    ordered = sorted(_to_decimal(p) for p in prices)
    if not ordered:
        return PriceStats()

    count = len(ordered)
    average = sum(ordered, Decimal(0)) / count

    mid = count // 2
    if count % 2 == 0:
        median = (ordered[mid - 1] + ordered[mid]) / 2
    else:
        median = ordered[mid]

    return PriceStats(
        average=round_money(average),
        median=round_money(median),
        lowest=round_money(ordered[0]),
        highest=round_money(ordered[-1]),
        count=count,
    )
