# baewatch/config/credentials.py

"""Loading and validation of the eBay credentials file."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from baewatch.config.settings import Settings
from baewatch.errors import ConfigError

logger = logging.getLogger("baewatch.config")

# Config keys in the order they are reported when missing
_REQUIRED_FIELDS: list[tuple[str, str]] = [
    ("appId", "has_app_id"),
    ("certId", "has_cert_id"),
    ("devId", "has_dev_id"),
    ("refreshToken", "has_refresh_token"),
]


@dataclass(frozen=True)
class EbayCredentials:
    """API keys for one eBay developer application."""

    app_id: str
    cert_id: str
    dev_id: str
    refresh_token: str
    environment: str = "production"

    @property
    def is_sandbox(self) -> bool:
        """True when requests should target the eBay sandbox."""
        return self.environment == "sandbox"


@dataclass(frozen=True)
class AppConfig:
    """Full contents of ``config/config.json``."""

    ebay: EbayCredentials
    marketplace: str = Settings.DEFAULT_MARKETPLACE


@dataclass
class ConfigDetails:
    """Field-presence flags reported by :func:`check_config_status`."""

    config_file_exists: bool = False
    has_app_id: bool = False
    has_cert_id: bool = False
    has_dev_id: bool = False
    has_refresh_token: bool = False
    environment: str | None = None
    missing_fields: list[str] = field(default_factory=list)


@dataclass
class ConfigStatus:
    """Outcome of a non-throwing credentials check."""

    configured: bool
    message: str
    details: ConfigDetails


def is_placeholder(value: Any) -> bool:
    """Return True for absent, blank, or ``YOUR_...`` template values."""
    if not isinstance(value, str):
        return True
    stripped = value.strip()
    return not stripped or stripped.startswith(
        Settings.PLACEHOLDER_PREFIX
    )


def _read_raw(path: Path) -> dict[str, Any]:
    """Parse the config file, raising ``ValueError`` on bad content."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        msg = "top-level JSON value must be an object"
        raise ValueError(msg)
    return raw


def check_config_status(path: Path | None = None) -> ConfigStatus:
    """Inspect the credentials file without ever raising.

    Distinguishes a missing file, malformed JSON, placeholder or
    incomplete fields, and a fully configured file.
    """
    config_path = path or Settings.CONFIG_PATH
    details = ConfigDetails()

    if not config_path.exists():
        return ConfigStatus(
            configured=False,
            message=(
                "Config file not found. Copy config/config.example.json "
                "to config/config.json and fill in your eBay API "
                "credentials."
            ),
            details=details,
        )

    details.config_file_exists = True

    try:
        raw = _read_raw(config_path)
    except (OSError, ValueError) as exc:
        logger.warning(
            "Could not parse config file %s: %s", config_path, exc
        )
        return ConfigStatus(
            configured=False,
            message=(
                "config/config.json contains invalid JSON. "
                "Please check the format."
            ),
            details=details,
        )

    ebay = raw.get("ebay")
    if not isinstance(ebay, dict):
        ebay = {}

    for key, flag in _REQUIRED_FIELDS:
        present = not is_placeholder(ebay.get(key))
        setattr(details, flag, present)
        if not present:
            details.missing_fields.append(key)

    environment = ebay.get("environment")
    details.environment = (
        environment if isinstance(environment, str) and environment
        else None
    )

    if details.missing_fields:
        return ConfigStatus(
            configured=False,
            message=(
                "eBay credentials incomplete. Missing: "
                f"{', '.join(details.missing_fields)}. Edit "
                "config/config.json with your real API keys."
            ),
            details=details,
        )

    return ConfigStatus(
        configured=True,
        message="eBay credentials are configured and ready.",
        details=details,
    )


def load_config(path: Path | None = None) -> AppConfig:
    """Load the credentials file.

    Raises:
        ConfigError: If :func:`check_config_status` reports the file as
            not configured.
    """
    config_path = path or Settings.CONFIG_PATH
    status = check_config_status(config_path)
    if not status.configured:
        raise ConfigError(status.message)

    raw = _read_raw(config_path)
    ebay: dict[str, Any] = raw["ebay"]
    defaults = raw.get("defaults")
    if not isinstance(defaults, dict):
        defaults = {}

    credentials = EbayCredentials(
        app_id=ebay["appId"].strip(),
        cert_id=ebay["certId"].strip(),
        dev_id=ebay["devId"].strip(),
        refresh_token=ebay["refreshToken"].strip(),
        environment=status.details.environment or "production",
    )
    logger.debug(
        "Loaded eBay config from %s (environment=%s)",
        config_path,
        credentials.environment,
    )
    return AppConfig(
        ebay=credentials,
        marketplace=str(
            defaults.get("marketplace") or Settings.DEFAULT_MARKETPLACE
        ),
    )
