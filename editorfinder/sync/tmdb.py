"""TMDbClient: The Movie Database v3 API for TV shows and their editing crew.

Only the endpoints the sync needs: popular and top-rated listings, show
details (with external IDs) and show credits. Crew members are filtered to
editors and mapped onto the ``Credit`` model.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from editorfinder.errors import UpstreamServiceError
from editorfinder.models.common import CreditPosition, ShowType
from editorfinder.models.editor import Credit, RecordMetadata, Role, Show, Timeline

logger = logging.getLogger(__name__)

BASE_URL = "https://api.themoviedb.org/3"
TIMEOUT = 30.0

EDITOR_JOBS = frozenset({
    "Editor",
    "Supervising Editor",
    "Additional Editor",
    "Assistant Editor",
    "Associate Editor",
    "Online Editor",
    "Offline Editor",
})

_CURRENT_STATUSES = frozenset({"Returning Series", "In Production"})


def _year(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10]).year
    except ValueError:
        return None


def determine_show_type(show: dict[str, Any]) -> ShowType:
    episodes = show.get("number_of_episodes") or 0
    if show.get("number_of_seasons") == 1 and episodes <= 10:
        return ShowType.MINISERIES
    genres = [g.get("name", "").lower() for g in show.get("genres", [])]
    if any("documentary" in g for g in genres):
        return ShowType.DOCUMENTARY
    return ShowType.SERIES


def job_to_position(job: str) -> CreditPosition:
    job_lower = job.lower()
    if "supervising" in job_lower:
        return CreditPosition.SUPERVISING_EDITOR
    if "assistant" in job_lower:
        return CreditPosition.ASSISTANT_EDITOR
    if "associate" in job_lower:
        return CreditPosition.ASSOCIATE_EDITOR
    return CreditPosition.EDITOR


def job_to_specialty(job: str) -> str:
    job_lower = job.lower()
    for keyword, specialty in (
        ("supervising", "Supervising Editor"),
        ("assistant", "Assistant Editor"),
        ("associate", "Associate Editor"),
        ("additional", "Additional Editor"),
        ("online", "Online Editor"),
        ("offline", "Offline Editor"),
    ):
        if keyword in job_lower:
            return specialty
    return "Editor"


def extract_editors(credits: dict[str, Any]) -> list[dict[str, Any]]:
    """Crew members with an editing job or in the Editing department."""
    return [
        member for member in credits.get("crew", [])
        if member.get("job") in EDITOR_JOBS or member.get("department") == "Editing"
    ]


def map_show_to_credit(show: dict[str, Any], member: dict[str, Any]) -> Credit:
    """Build a credit for one crew member on one show."""
    networks = show.get("networks") or []
    return Credit(
        show=Show(
            title=show.get("name", ""),
            type=determine_show_type(show),
            network=networks[0].get("name", "Unknown") if networks else "Unknown",
            genre=[g.get("name", "") for g in show.get("genres", [])],
            imdb_id=(show.get("external_ids") or {}).get("imdb_id"),
        ),
        role=Role(
            position=job_to_position(member.get("job", "")),
            episode_count=member.get("episode_count") or show.get("number_of_episodes"),
            season_count=show.get("number_of_seasons"),
        ),
        timeline=Timeline(
            start_year=_year(show.get("first_air_date")),
            end_year=_year(show.get("last_air_date")),
            current=show.get("status") in _CURRENT_STATUSES,
        ),
        metadata=RecordMetadata(data_source="tmdb", verified=True),
    )


class TMDbClient:
    """Async TMDb client.

    Every call opens a short-lived ``httpx.AsyncClient``. ``transport`` is
    passed through to it so tests can mount an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        if not api_key:
            logger.warning("TMDb API key not found. Set TMDB_API_KEY.")

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def _get(self, endpoint: str, **params: str) -> dict[str, Any]:
        if not self._api_key:
            raise UpstreamServiceError("TMDb API key not configured")

        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=TIMEOUT, transport=self._transport,
        ) as client:
            try:
                resp = await client.get(
                    endpoint, params={"api_key": self._api_key, **params},
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise UpstreamServiceError(
                    f"TMDb API error: {exc.response.status_code} {endpoint}",
                ) from exc
            except httpx.HTTPError as exc:
                raise UpstreamServiceError(f"TMDb request failed: {exc}") from exc
            try:
                data = resp.json()
            except ValueError as exc:
                raise UpstreamServiceError(f"TMDb returned invalid JSON: {endpoint}") from exc
        if not isinstance(data, dict):
            raise UpstreamServiceError(f"TMDb returned unexpected payload: {endpoint}")
        return data

    async def popular_shows(self, page: int = 1) -> list[dict[str, Any]]:
        data = await self._get("/tv/popular", page=str(page))
        return data.get("results", [])

    async def top_rated_shows(self, page: int = 1) -> list[dict[str, Any]]:
        data = await self._get("/tv/top_rated", page=str(page))
        return data.get("results", [])

    async def search_shows(self, query: str, page: int = 1) -> list[dict[str, Any]]:
        data = await self._get(
            "/search/tv", query=query, page=str(page), include_adult="false",
        )
        return data.get("results", [])

    async def show(self, tv_id: int) -> dict[str, Any]:
        return await self._get(f"/tv/{tv_id}", append_to_response="external_ids")

    async def credits(self, tv_id: int) -> dict[str, Any]:
        return await self._get(f"/tv/{tv_id}/credits")
