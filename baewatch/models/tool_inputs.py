# baewatch/models/tool_inputs.py

"""Validated arguments for each MCP tool."""

from pydantic import BaseModel, ConfigDict, Field

from baewatch.config.settings import Settings
from baewatch.models.listing import ItemCondition


class _ToolInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class SearchSoldInput(_ToolInput):
    """Arguments for ``search_sold``."""

    query: str = Field(
        min_length=1,
        description="Search term, e.g. 'Dell Latitude 7420'",
    )
    condition: ItemCondition = Field(
        default=ItemCondition.ALL,
        description="Filter by item condition",
    )
    limit: int = Field(
        default=Settings.DEFAULT_RESULTS_LIMIT,
        ge=1,
        le=Settings.MAX_RESULTS_LIMIT,
        description="Number of results to return (max 50)",
    )


class SearchActiveInput(SearchSoldInput):
    """Arguments for ``search_active``."""

    max_price: float | None = Field(
        default=None,
        ge=0,
        description="Maximum price filter in USD",
    )


class PriceCheckInput(_ToolInput):
    """Arguments for ``price_check``."""

    query: str = Field(
        min_length=1,
        description="The item to research, e.g. 'Nintendo Switch OLED'",
    )
    asking_price: float | None = Field(
        default=None,
        ge=0,
        description=(
            "What the seller is asking, for comparison against market value"
        ),
    )
