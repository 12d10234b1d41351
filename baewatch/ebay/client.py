# baewatch/ebay/client.py

"""Async HTTP client for the eBay Identity, Finding, and Browse APIs."""

import logging
import time
from decimal import Decimal
from pathlib import Path
from typing import Any

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession, Response

from baewatch.config.credentials import AppConfig, load_config
from baewatch.config.settings import Settings
from baewatch.errors import EbayApiError


def clamp_page_size(limit: int) -> int:
    """Clamp *limit* to the eBay page-size window ``[1, 50]``."""
    return max(1, min(limit, Settings.MAX_RESULTS_LIMIT))


def _plain_number(value: float) -> str:
    """Full-precision decimal text with no exponent (``1500000``, ``99.5``)."""
    return format(Decimal(str(value)).normalize(), "f")


def build_browse_filter(
    condition_codes: list[str],
    max_price: float | None = None,
    currency: str = Settings.DEFAULT_CURRENCY,
) -> str:
    """Build the Browse API ``filter`` parameter.

    Only fixed-price (Buy It Now) listings are requested.
    """
    parts: list[str] = []
    if condition_codes:
        parts.append(f"conditionIds:{{{'|'.join(condition_codes)}}}")
    if max_price is not None:
        parts.append(f"price:[..{_plain_number(max_price)}]")
        parts.append(f"priceCurrency:{currency}")
    parts.append("buyingOptions:{FIXED_PRICE}")
    return ",".join(parts)


def build_finding_params(
    app_id: str,
    keywords: str,
    condition_codes: list[str],
    entries_per_page: int,
) -> dict[str, str]:
    """Build query parameters for a ``findCompletedItems`` call."""
    params: dict[str, str] = {
        "OPERATION-NAME": "findCompletedItems",
        "SERVICE-VERSION": Settings.FINDING_SERVICE_VERSION,
        "SECURITY-APPNAME": app_id,
        "GLOBAL-ID": Settings.FINDING_GLOBAL_ID,
        "RESPONSE-DATA-FORMAT": "JSON",
        "REST-PAYLOAD": "",
        "keywords": keywords,
        "itemFilter(0).name": "SoldItemsOnly",
        "itemFilter(0).value": "true",
        "paginationInput.entriesPerPage": str(
            clamp_page_size(entries_per_page)
        ),
        "paginationInput.pageNumber": "1",
        "sortOrder": "EndTimeSoonest",
    }
    if condition_codes:
        params["itemFilter(1).name"] = "Condition"
        for idx, code in enumerate(condition_codes):
            params[f"itemFilter(1).value({idx})"] = code
    return params


def _finding_error_message(payload: dict[str, Any]) -> str | None:
    """Return eBay's error text if a Finding response reports failure."""
    body = payload.get("findCompletedItemsResponse")
    if isinstance(body, list) and body:
        body = body[0]
    if not isinstance(body, dict):
        return None
    ack = body.get("ack")
    ack = ack[0] if isinstance(ack, list) and ack else ack
    if ack not in ("Failure", "PartialFailure"):
        return None
    try:
        return str(body["errorMessage"][0]["error"][0]["message"][0])
    except (KeyError, IndexError, TypeError):
        return f"Finding API returned ack={ack}"


class _CachedToken:
    """An OAuth access token and its local expiry time."""

    def __init__(self, value: str, expires_at: float) -> None:
        self.value = value
        self.expires_at = expires_at

    def is_valid(self) -> bool:
        return time.monotonic() < self.expires_at


class EbayClient:
    """Authenticated eBay API client bound to one :class:`AppConfig`.

    The HTTP session is created on first use. Application tokens
    (client-credentials grant) and user tokens (refresh-token grant) are
    cached separately until shortly before they expire.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.logger = logging.getLogger("baewatch.ebay")
        env = "sandbox" if config.ebay.is_sandbox else "production"
        self.endpoints: dict[str, str] = Settings.API_HOSTS[env]
        self._session: AsyncSession | None = None
        self._tokens: dict[str, _CachedToken] = {}

    # ── Session ──────────────────────────────────────────

    def _get_session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession()
        return self._session

    async def aclose(self) -> None:
        """Close the HTTP session and forget cached tokens."""
        self._tokens.clear()
        if self._session is not None:
            session, self._session = self._session, None
            await session.close()

    async def _send(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> Response:
        """Issue one request, turning transport failures into EbayApiError."""
        session = self._get_session()
        try:
            if method == "POST":
                return await session.post(url, **kwargs)
            return await session.get(url, **kwargs)
        except CurlError as exc:
            self.logger.warning(
                "Transport error on %s %s: %s", method, url, exc
            )
            raise EbayApiError(str(exc)) from exc

    @staticmethod
    def _json(resp: Response) -> dict[str, Any]:
        try:
            payload = resp.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    def _raise_for_status(self, resp: Response, api: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        payload = self._json(resp)
        detail = (
            payload.get("error_description")
            or _extract_rest_error(payload)
            or resp.text[:200]
        )
        error = payload.get("error")
        prefix = f"{error}: " if isinstance(error, str) else ""
        message = f"{api} HTTP {resp.status_code}: {prefix}{detail}"
        if resp.status_code == 401:
            message += " (Unauthorized)"
        self.logger.error(message)
        raise EbayApiError(message, status=resp.status_code)

    # ── OAuth ────────────────────────────────────────────

    async def _request_token(self, grant: dict[str, str]) -> _CachedToken:
        creds = self.config.ebay
        resp = await self._send(
            "POST",
            self.endpoints["identity"],
            data={**grant, "scope": Settings.OAUTH_SCOPE},
            auth=(creds.app_id, creds.cert_id),
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )
        self._raise_for_status(resp, "OAuth")
        payload = self._json(resp)
        value = payload.get("access_token") or ""
        expires_in = int(payload.get("expires_in") or 0)
        lifetime = max(0, expires_in - Settings.TOKEN_EXPIRY_MARGIN)
        self.logger.debug(
            "Obtained %s token (expires in %ss)",
            grant["grant_type"],
            expires_in,
        )
        return _CachedToken(value, time.monotonic() + lifetime)

    async def _token(self, grant: dict[str, str]) -> str:
        kind = grant["grant_type"]
        cached = self._tokens.get(kind)
        if cached is not None and cached.value and cached.is_valid():
            return cached.value
        token = await self._request_token(grant)
        if token.value:
            self._tokens[kind] = token
        return token.value

    async def get_application_token(self) -> str:
        """Client-credentials token; proves the app ID and cert ID work."""
        return await self._token({"grant_type": "client_credentials"})

    async def get_access_token(self) -> str:
        """Token used for API calls.

        Refreshed from the configured refresh token, or falls back to an
        application token when none is configured.
        """
        refresh_token = self.config.ebay.refresh_token
        if not refresh_token:
            return await self.get_application_token()
        return await self._token(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )

    # ── Search endpoints ─────────────────────────────────

    async def find_completed_items(
        self,
        keywords: str,
        condition_codes: list[str],
        entries_per_page: int,
    ) -> dict[str, Any]:
        """Call the Finding API ``findCompletedItems`` (sold items only)."""
        params = build_finding_params(
            self.config.ebay.app_id,
            keywords,
            condition_codes,
            entries_per_page,
        )
        self.logger.info(
            "findCompletedItems keywords='%s' conditions=%s size=%s",
            keywords,
            condition_codes,
            params["paginationInput.entriesPerPage"],
        )
        resp = await self._send(
            "GET",
            self.endpoints["finding"],
            params=params,
            headers={"X-EBAY-SOA-GLOBAL-ID": Settings.FINDING_GLOBAL_ID},
        )
        payload = self._json(resp)
        failure = _finding_error_message(payload)
        if failure is not None:
            raise EbayApiError(failure, status=resp.status_code)
        self._raise_for_status(resp, "Finding API")
        return payload

    async def search_item_summaries(
        self,
        q: str,
        condition_codes: list[str],
        max_price: float | None,
        limit: int,
        sort: str = "price",
    ) -> dict[str, Any]:
        """Call the Browse API ``item_summary/search``."""
        token = await self.get_access_token()
        params: dict[str, str] = {
            "q": q,
            "limit": str(clamp_page_size(limit)),
            "sort": sort,
            "filter": build_browse_filter(condition_codes, max_price),
        }
        self.logger.info(
            "item_summary/search q='%s' filter='%s' limit=%s",
            q,
            params["filter"],
            params["limit"],
        )
        resp = await self._send(
            "GET",
            f"{self.endpoints['browse']}/item_summary/search",
            params=params,
            headers={
                "Authorization": f"Bearer {token}",
                "X-EBAY-C-MARKETPLACE-ID": self.config.marketplace,
                "Accept": "application/json",
            },
        )
        self._raise_for_status(resp, "Browse API")
        return self._json(resp)


def _extract_rest_error(payload: dict[str, Any]) -> str | None:
    """First ``errors[].message`` from a REST error body."""
    errors = payload.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        message = errors[0].get("message")
        return str(message) if message else None
    return None


class EbayClientHandle:
    """Owns the process-wide :class:`EbayClient`.

    The client is built from the config file on first :meth:`get`.
    :meth:`rebuild` discards it so the next :meth:`get` re-reads
    credentials.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path
        self._client: EbayClient | None = None
        self.logger = logging.getLogger("baewatch.ebay")

    def get(self) -> EbayClient:
        """Return the client, loading the config on first use.

        Raises:
            ConfigError: If credentials are missing or incomplete.
        """
        if self._client is None:
            config = load_config(self.config_path)
            self._client = EbayClient(config)
            self.logger.info(
                "eBay client created (environment=%s)",
                config.ebay.environment,
            )
        return self._client

    @property
    def is_built(self) -> bool:
        return self._client is not None

    async def rebuild(self) -> None:
        """Close the current client so the next ``get()`` starts fresh."""
        await self.aclose()
        self.logger.info("eBay client will be rebuilt on next use")

    async def aclose(self) -> None:
        """Release the HTTP session held by the client, if any."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
