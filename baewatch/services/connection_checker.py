# baewatch/services/connection_checker.py

"""Live eBay connectivity check."""

import logging
import time
from dataclasses import dataclass

from baewatch.config.credentials import check_config_status
from baewatch.ebay.client import EbayClientHandle

logger = logging.getLogger("baewatch.health")

INVALID_CREDENTIALS_MESSAGE = (
    "Invalid credentials. Double-check your appId (Client ID) and certId "
    "(Client Secret) in config/config.json."
)
UNREACHABLE_MESSAGE = (
    "Cannot reach eBay servers. Check your internet connection or try "
    "again later."
)
EMPTY_TOKEN_MESSAGE = (
    "eBay returned an empty token. Double-check your appId and certId."
)
SUCCESS_MESSAGE = (
    "Connected to eBay API successfully! Your credentials are valid."
)

_AUTH_MARKERS: tuple[str, ...] = ("invalid_client", "Unauthorized", "HTTP 401")
_NETWORK_MARKERS: tuple[str, ...] = (
    "Could not resolve host",
    "Couldn't resolve host",
    "Failed to connect",
    "Couldn't connect",
    "Connection refused",
    "ENOTFOUND",
    "ECONNREFUSED",
)


@dataclass
class ConnectionResult:
    """Outcome of a connectivity test."""

    success: bool
    message: str
    latency_ms: float = 0.0


def classify_connection_error(detail: str) -> str:
    """Map a raw error message to a user-facing remediation message."""
    if any(marker in detail for marker in _AUTH_MARKERS):
        return INVALID_CREDENTIALS_MESSAGE
    if any(marker in detail for marker in _NETWORK_MARKERS):
        return UNREACHABLE_MESSAGE
    return f"Connection failed: {detail}"


async def check_connection(handle: EbayClientHandle) -> ConnectionResult:
    """Request an application token to prove the credentials work.

    Never raises: configuration problems and API errors are reported
    through the returned :class:`ConnectionResult`.
    """
    status = check_config_status(handle.config_path)
    if not status.configured:
        return ConnectionResult(success=False, message=status.message)

    start = time.monotonic()
    try:
        client = handle.get()
        token = await client.get_application_token()
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        logger.warning(
            "eBay connection test failed: %s", exc, exc_info=True
        )
        return ConnectionResult(
            success=False,
            message=classify_connection_error(str(exc) or repr(exc)),
            latency_ms=elapsed_ms,
        )

    elapsed_ms = (time.monotonic() - start) * 1000
    if not token:
        return ConnectionResult(
            success=False,
            message=EMPTY_TOKEN_MESSAGE,
            latency_ms=elapsed_ms,
        )

    logger.info("eBay connection test ok (%.0fms)", elapsed_ms)
    return ConnectionResult(
        success=True,
        message=SUCCESS_MESSAGE,
        latency_ms=elapsed_ms,
    )
