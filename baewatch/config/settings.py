# baewatch/config/settings.py

"""Central configuration for the baewatch MCP server."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the baewatch MCP server."""

    # --- Server ---
    SERVER_NAME: str = "baewatch"
    SERVER_VERSION: str = "1.0.0"

    # --- Search limits ---
    DEFAULT_RESULTS_LIMIT: int = 10
    MAX_RESULTS_LIMIT: int = 50         # eBay page-size ceiling
    PRICE_CHECK_LIMIT: int = 25         # Page size for each price_check query

    # --- Marketplace ---
    DEFAULT_MARKETPLACE: str = "EBAY_US"
    FINDING_GLOBAL_ID: str = "EBAY-US"
    DEFAULT_CURRENCY: str = "USD"

    # --- OAuth ---
    OAUTH_SCOPE: str = "https://api.ebay.com/oauth/api_scope"
    TOKEN_EXPIRY_MARGIN: int = 60       # Seconds shaved off expires_in

    # --- Endpoints (per environment) ---
    API_HOSTS: dict[str, dict[str, str]] = {
        "production": {
            "identity": "https://api.ebay.com/identity/v1/oauth2/token",
            "browse": "https://api.ebay.com/buy/browse/v1",
            "finding": (
                "https://svcs.ebay.com/services/search/FindingService/v1"
            ),
        },
        "sandbox": {
            "identity": (
                "https://api.sandbox.ebay.com/identity/v1/oauth2/token"
            ),
            "browse": "https://api.sandbox.ebay.com/buy/browse/v1",
            "finding": (
                "https://svcs.sandbox.ebay.com/services/search/"
                "FindingService/v1"
            ),
        },
    }
    FINDING_SERVICE_VERSION: str = "1.13.0"

    # --- Credentials ---
    PLACEHOLDER_PREFIX: str = "YOUR_"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CONFIG_PATH: Path = Path(
        os.environ.get(
            "BAEWATCH_CONFIG",
            str(BASE_DIR / "config" / "config.json"),
        )
    )
    EXAMPLE_CONFIG_PATH: Path = BASE_DIR / "config" / "config.example.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    LOG_RETENTION: int = 20             # Run logs kept in LOGS_DIR
    LOG_LEVEL_ENV: str = "BAEWATCH_LOG_LEVEL"
