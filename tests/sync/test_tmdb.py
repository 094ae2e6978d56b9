"""Tests for the TMDb client and crew-to-credit mapping."""

import httpx
import pytest

from editorfinder.errors import UpstreamServiceError
from editorfinder.models.common import CreditPosition, ShowType
from editorfinder.sync.tmdb import (
    TMDbClient,
    determine_show_type,
    extract_editors,
    job_to_position,
    job_to_specialty,
    map_show_to_credit,
)


class TestMapping:
    def test_extract_editors_by_job_or_department(self) -> None:
        credits = {"crew": [
            {"name": "A", "job": "Editor", "department": "Editing"},
            {"name": "B", "job": "Colorist", "department": "Editing"},
            {"name": "C", "job": "Online Editor", "department": "Post"},
            {"name": "D", "job": "Director", "department": "Directing"},
        ]}
        assert [m["name"] for m in extract_editors(credits)] == ["A", "B", "C"]

    def test_extract_editors_without_crew(self) -> None:
        assert extract_editors({}) == []

    @pytest.mark.parametrize(("job", "position"), [
        ("Supervising Editor", CreditPosition.SUPERVISING_EDITOR),
        ("Assistant Editor", CreditPosition.ASSISTANT_EDITOR),
        ("Associate Editor", CreditPosition.ASSOCIATE_EDITOR),
        ("Online Editor", CreditPosition.EDITOR),
    ])
    def test_job_to_position(self, job: str, position: CreditPosition) -> None:
        assert job_to_position(job) == position

    def test_job_to_specialty(self) -> None:
        assert job_to_specialty("Additional Editor") == "Additional Editor"
        assert job_to_specialty("Editor") == "Editor"

    def test_show_type(self) -> None:
        assert determine_show_type({"number_of_seasons": 1, "number_of_episodes": 8}) == (
            ShowType.MINISERIES
        )
        assert determine_show_type({
            "number_of_seasons": 3, "genres": [{"name": "Documentary"}],
        }) == ShowType.DOCUMENTARY
        assert determine_show_type({"number_of_seasons": 4}) == ShowType.SERIES

    def test_map_show_to_credit(self) -> None:
        show = {
            "name": "The Bear",
            "genres": [{"name": "Comedy"}],
            "networks": [{"name": "FX"}],
            "number_of_seasons": 3,
            "number_of_episodes": 28,
            "first_air_date": "2022-06-23",
            "last_air_date": "2024-06-26",
            "status": "Returning Series",
            "external_ids": {"imdb_id": "tt14452776"},
        }
        credit = map_show_to_credit(show, {"name": "Joanna Naugle", "job": "Editor"})

        assert credit.show.title == "The Bear"
        assert credit.show.network == "FX"
        assert credit.show.imdb_id == "tt14452776"
        assert credit.role.position == CreditPosition.EDITOR
        assert credit.role.episode_count == 28
        assert credit.timeline.start_year == 2022
        assert credit.timeline.end_year == 2024
        assert credit.timeline.current is True
        assert credit.metadata.data_source == "tmdb"
        assert credit.metadata.verified is True

    def test_map_show_without_network_or_dates(self) -> None:
        credit = map_show_to_credit({"name": "X", "first_air_date": ""}, {"job": "Editor"})
        assert credit.show.network == "Unknown"
        assert credit.timeline.start_year is None
        assert credit.timeline.current is False


class TestClient:
    @pytest.mark.anyio
    async def test_listings(self, tmdb_client: TMDbClient) -> None:
        assert [s["id"] for s in await tmdb_client.popular_shows()] == [1, 2]
        assert [s["id"] for s in await tmdb_client.top_rated_shows()] == [2, 3]

    @pytest.mark.anyio
    async def test_show_and_credits(self, tmdb_client: TMDbClient) -> None:
        show = await tmdb_client.show(1)
        credits = await tmdb_client.credits(1)
        assert show["name"] == "The Bear"
        assert len(credits["crew"]) == 2

    @pytest.mark.anyio
    async def test_search(self, tmdb_client: TMDbClient) -> None:
        results = await tmdb_client.search_shows("beef")
        assert [s["name"] for s in results] == ["Beef"]

    @pytest.mark.anyio
    async def test_missing_key_raises(self) -> None:
        client = TMDbClient("")
        assert client.configured is False
        with pytest.raises(UpstreamServiceError):
            await client.popular_shows()

    @pytest.mark.anyio
    async def test_http_error_raises(self, make_tmdb_client) -> None:
        client = make_tmdb_client(failing=frozenset({1}))
        with pytest.raises(UpstreamServiceError, match="500"):
            await client.show(1)

    @pytest.mark.anyio
    async def test_non_json_body_raises(self, make_tmdb_client) -> None:
        client = make_tmdb_client(html=frozenset({1}))
        with pytest.raises(UpstreamServiceError, match="invalid JSON"):
            await client.show(1)

    @pytest.mark.anyio
    async def test_non_object_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "an", "object"])

        client = TMDbClient("test-key", transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamServiceError, match="unexpected payload"):
            await client.popular_shows()

    @pytest.mark.anyio
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = TMDbClient("test-key", transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamServiceError):
            await client.popular_shows()
