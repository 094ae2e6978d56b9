"""TMDb fixtures: a canned API served through httpx.MockTransport."""

import httpx
import pytest

from editorfinder.sync.tmdb import TMDbClient

SHOWS = {
    1: {
        "id": 1,
        "name": "The Bear",
        "genres": [{"name": "Comedy"}, {"name": "Drama"}],
        "networks": [{"name": "FX"}],
        "number_of_seasons": 3,
        "number_of_episodes": 28,
        "first_air_date": "2022-06-23",
        "last_air_date": "2024-06-26",
        "status": "Returning Series",
        "external_ids": {"imdb_id": "tt14452776"},
    },
    2: {
        "id": 2,
        "name": "Beef",
        "genres": [{"name": "Drama"}],
        "networks": [{"name": "Netflix"}],
        "number_of_seasons": 1,
        "number_of_episodes": 10,
        "first_air_date": "2023-04-06",
        "last_air_date": "2023-04-06",
        "status": "Ended",
        "external_ids": {"imdb_id": "tt14403178"},
    },
    3: {
        "id": 3,
        "name": "Free Solo Stories",
        "genres": [{"name": "Documentary"}],
        "networks": [],
        "number_of_seasons": 2,
        "number_of_episodes": 16,
        "first_air_date": "",
        "status": "Ended",
    },
}

CREW = {
    1: [
        {"name": "Joanna Naugle", "job": "Editor", "department": "Editing", "episode_count": 12},
        {"name": "Christopher Storer", "job": "Director", "department": "Directing"},
    ],
    2: [
        {"name": "Nat Fuller", "job": "Supervising Editor", "department": "Editing"},
    ],
    3: [
        {"name": "Sound Person", "job": "Sound Mixer", "department": "Sound"},
    ],
}


def tmdb_handler(
    popular: list[int] = (1, 2),
    top_rated: list[int] = (2, 3),
    failing: frozenset[int] = frozenset(),
    html: frozenset[int] = frozenset(),
):
    """Build a request handler serving the canned shows.

    Shows in ``failing`` answer 500; shows in ``html`` answer 200 with an HTML page.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params.get("api_key") == "test-key"
        path = request.url.path
        if path.endswith("/tv/popular"):
            return httpx.Response(200, json={"results": [{"id": i} for i in popular]})
        if path.endswith("/tv/top_rated"):
            return httpx.Response(200, json={"results": [{"id": i} for i in top_rated]})
        if path.endswith("/search/tv"):
            query = request.url.params.get("query", "").lower()
            hits = [s for s in SHOWS.values() if query in s["name"].lower()]
            return httpx.Response(200, json={"results": hits})

        parts = path.rstrip("/").split("/")
        if parts[-1] == "credits":
            tv_id = int(parts[-2])
            if tv_id in failing:
                return httpx.Response(500, json={"status_message": "boom"})
            return httpx.Response(200, json={"id": tv_id, "crew": CREW.get(tv_id, [])})
        tv_id = int(parts[-1])
        if tv_id in failing:
            return httpx.Response(500, json={"status_message": "boom"})
        if tv_id in html:
            return httpx.Response(200, text="<html>Service busy</html>")
        return httpx.Response(200, json=SHOWS[tv_id])

    return handler


@pytest.fixture
def make_tmdb_client():
    """Factory for clients over the canned API; kwargs go to ``tmdb_handler``."""

    def factory(**kwargs) -> TMDbClient:
        return TMDbClient("test-key", transport=httpx.MockTransport(tmdb_handler(**kwargs)))

    return factory


@pytest.fixture
def tmdb_client(make_tmdb_client) -> TMDbClient:
    return make_tmdb_client()
