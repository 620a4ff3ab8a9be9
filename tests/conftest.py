"""Shared pytest fixtures for the movie catalog tests."""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from movie_catalog.database.connection import DatabaseConnection, set_database
from movie_catalog.etl.extractors.moviesdatabase import MoviesDatabaseClient
from movie_catalog.settings import MoviesDatabaseSettings

# =============================================================================
# SOURCE PAYLOADS
# =============================================================================


@pytest.fixture
def raw_actors() -> list[dict[str, Any]]:
    """Three actors as returned by /actors."""
    return [
        {
            "_id": "64b0",
            "nconst": "nm0000001",
            "primaryName": "Fred Astaire",
            "birthYear": 1899,
            "deathYear": 1987,
            "primaryProfession": "soundtrack,actor,miscellaneous",
            "knownForTitles": "tt0050419,tt0053137",
        },
        {
            "_id": "64b1",
            "nconst": "nm0000002",
            "primaryName": "Lauren Bacall",
            "birthYear": 1924,
            "deathYear": 2014,
            "primaryProfession": "actress,soundtrack",
            "knownForTitles": "tt0053137,tt0037382,\\N",
        },
        {
            "_id": "64b2",
            "nconst": "nm0000003",
            "primaryName": "Brigitte  Bardot",
            "birthYear": None,
            "deathYear": None,
            "primaryProfession": "actress",
            "knownForTitles": "tt9999999",
        },
    ]


@pytest.fixture
def actors_page(raw_actors: list[dict[str, Any]]) -> dict[str, Any]:
    """Paginated /actors response."""
    return {"page": 1, "next": "/actors?page=2", "entries": len(raw_actors), "results": raw_actors}


@pytest.fixture
def raw_titles() -> dict[str, dict[str, Any] | None]:
    """/titles/{id} results by id; None for ids the source does not know."""
    return {
        "tt0050419": {
            "_id": "61e5",
            "id": "tt0050419",
            "primaryImage": {"id": "rm1", "width": 800, "height": 1200, "url": "https://img.example/funny-face.jpg"},
            "titleText": {"text": "Funny Face"},
            "releaseDate": {"year": 1957, "month": 2, "day": 13},
        },
        "tt0053137": {
            "_id": "61e6",
            "id": "tt0053137",
            "primaryImage": None,
            "titleText": {"text": "On the Beach"},
            "releaseDate": {"year": 1959, "month": 12, "day": None},
        },
        "tt0037382": {
            "_id": "61e7",
            "id": "tt0037382",
            "primaryImage": {"url": "https://img.example/to-have.jpg"},
            "titleText": {"text": "To Have and Have Not"},
            "releaseDate": None,
        },
        "tt9999999": None,
    }


# =============================================================================
# SOURCE CLIENT
# =============================================================================


@pytest.fixture
def source_settings() -> MoviesDatabaseSettings:
    """Source settings with a test key and no effective rate limit."""
    return MoviesDatabaseSettings(
        RAPID_API_KEY="test-rapid-key",
        RAPID_API_HOST="moviesdatabase.p.rapidapi.com",
        SOURCE_BASE_URL="https://moviesdatabase.test",
        SOURCE_REQUESTS_PER_PERIOD=10_000,
        SOURCE_MIN_REQUEST_DELAY=0.0,
    )


@pytest.fixture
def source_handler(
    actors_page: dict[str, Any],
    raw_titles: dict[str, dict[str, Any] | None],
) -> Callable[[httpx.Request], httpx.Response]:
    """MockTransport handler serving the sample payloads."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/actors":
            return httpx.Response(200, json=actors_page)
        if path.startswith("/titles/"):
            title_id = path.rsplit("/", 1)[-1]
            return httpx.Response(200, json={"results": raw_titles.get(title_id)})
        return httpx.Response(404, json={"message": "not found"})

    return handler


@pytest.fixture
def client_factory(
    source_settings: MoviesDatabaseSettings,
    source_handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[], MoviesDatabaseClient]:
    """Factory of clients wired to the mock transport."""

    def factory() -> MoviesDatabaseClient:
        return MoviesDatabaseClient(
            config=source_settings,
            transport=httpx.MockTransport(source_handler),
        )

    return factory


# =============================================================================
# DATABASE
# =============================================================================


@pytest.fixture
def db() -> Generator[DatabaseConnection, None, None]:
    """In-memory SQLite store installed as the shared connection."""
    connection = DatabaseConnection("sqlite://")
    connection.create_tables()
    set_database(connection)
    yield connection
    set_database(None)
    connection.drop_tables()
    connection.dispose()
