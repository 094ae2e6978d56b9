"""ApifyClient: web search through the Apify RAG web browser actor."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from editorfinder.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

RAG_BROWSER_URL = (
    "https://api.apify.com/v2/acts/apify/rag-web-browser/run-sync-get-dataset-items"
)
TIMEOUT = 120.0


class ApifyClient:
    """Runs one synchronous actor call per query and returns the dataset items."""

    def __init__(
        self,
        token: str,
        *,
        url: str = RAG_BROWSER_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._url = url
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._token)

    async def search(self, query: str, max_results: int = 3) -> list[dict[str, Any]]:
        if not self._token:
            raise UpstreamServiceError("Apify token not configured")

        payload = {
            "query": query,
            "maxResults": max_results,
            "formats": ["markdown"],
            "onlyMainContent": True,
        }
        async with httpx.AsyncClient(timeout=TIMEOUT, transport=self._transport) as client:
            try:
                resp = await client.post(
                    self._url, params={"token": self._token}, json=payload,
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise UpstreamServiceError(
                    f"Apify search failed: {exc.response.status_code}",
                ) from exc
            except httpx.HTTPError as exc:
                raise UpstreamServiceError(f"Apify request failed: {exc}") from exc

        try:
            items = resp.json()
        except ValueError as exc:
            raise UpstreamServiceError("Apify returned invalid JSON") from exc
        return items if isinstance(items, list) else []
