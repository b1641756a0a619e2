"""
Helius enhanced transactions API as a paged source.

GET {base}/v0/addresses/{address}/transactions?api-key=...&before=<signature>

Helius returns parsed transactions newest first; passing the last signature of
a page as `before` yields the next older page, and an empty array means the
history is exhausted. Every failure is raised as UpstreamFetchFailed with the
API key masked out of the message.
"""

from __future__ import annotations

from typing import Any

import httpx

from backend_seeker.activity.models import Record
from backend_seeker.activity.source import PagedSource
from backend_seeker.config.env import (
    DEFAULT_HELIUS_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    HELIUS_MAX_PAGE_LIMIT,
    mask_api_key,
)
from backend_seeker.core.exceptions import UpstreamFetchFailed
from backend_seeker.seeker_logging import get_logger, short_wallet

logger = get_logger(__name__)

__all__ = ["HeliusPagedSource", "PagedSource", "parse_page"]


def parse_page(payload: Any) -> list[Record]:
    """Convert a decoded Helius response body to Records; raise UpstreamFetchFailed if malformed."""
    if not isinstance(payload, list):
        if isinstance(payload, dict) and payload.get("error"):
            raise UpstreamFetchFailed(f"Helius error: {payload['error']}")
        raise UpstreamFetchFailed(
            f"Helius returned {type(payload).__name__}, expected a transaction array"
        )
    records: list[Record] = []
    for item in payload:
        try:
            records.append(Record.from_helius_item(item))
        except ValueError as e:
            raise UpstreamFetchFailed(f"malformed transaction in Helius page: {e}") from e
    return records


class HeliusPagedSource:
    """
    Paged reader over one address's Helius transaction history.

    Pass an httpx.AsyncClient to share a connection pool across requests; otherwise
    the source owns a client and closes it in aclose() / `async with`.
    """

    def __init__(
        self,
        address: str,
        api_key: str,
        *,
        base_url: str = DEFAULT_HELIUS_API_BASE_URL,
        page_limit: int | None = None,
        timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not address.strip():
            raise ValueError("address must be non-empty")
        if not api_key.strip():
            raise ValueError("api_key must be non-empty")
        if page_limit is not None and not (1 <= page_limit <= HELIUS_MAX_PAGE_LIMIT):
            raise ValueError(f"page_limit must be between 1 and {HELIUS_MAX_PAGE_LIMIT}")

        self._address = address.strip()
        self._api_key = api_key.strip()
        self._url = f"{base_url.rstrip('/')}/v0/addresses/{self._address}/transactions"
        self._page_limit = page_limit
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))

    async def __aenter__(self) -> "HeliusPagedSource":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _params(self, before: str | None) -> dict[str, Any]:
        params: dict[str, Any] = {"api-key": self._api_key}
        if before:
            params["before"] = before
        if self._page_limit is not None:
            params["limit"] = self._page_limit
        return params

    async def fetch(self, before: str | None = None) -> list[Record]:
        """Fetch the page of transactions older than `before` (newest page when None)."""
        try:
            resp = await self._client.get(
                self._url,
                params=self._params(before),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise UpstreamFetchFailed(
                f"Helius request failed: {mask_api_key(str(e), self._api_key)}"
            ) from e

        if not resp.is_success:
            raise UpstreamFetchFailed(f"Helius request failed with HTTP {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError as e:
            raise UpstreamFetchFailed("Helius returned a non-JSON body") from e

        records = parse_page(payload)
        logger.debug(
            "helius_page_fetched",
            wallet_id=short_wallet(self._address),
            size=len(records),
            before=before[:16] if before else None,
        )
        return records
