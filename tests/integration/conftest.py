"""Shared fixtures for integration tests.

Uses the module-level ``app`` from ``movie_catalog.api.main`` with the
store replaced by an in-memory SQLite connection and the source API
served by an httpx MockTransport.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from movie_catalog.api.cache import get_response_cache
from movie_catalog.database.connection import DatabaseConnection
from movie_catalog.etl.extractors.moviesdatabase import MoviesDatabaseClient
from movie_catalog.etl.pipeline import IngestionPipeline
from movie_catalog.etl.types import IngestionResult

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pipeline(
    db: DatabaseConnection,
    client_factory: Callable[[], MoviesDatabaseClient],
) -> IngestionPipeline:
    """Pipeline over the SQLite store and mocked source."""
    return IngestionPipeline(db=db, client_factory=client_factory, max_workers=1)


@pytest.fixture
def loaded_catalog(pipeline: IngestionPipeline) -> IngestionResult:
    """Catalog populated by one successful run."""
    result = pipeline.run()
    assert result.success, result.error
    return result


@pytest.fixture
async def client(db: DatabaseConnection) -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the real app.

    The lifespan is not run by ``ASGITransport``; the ``db`` fixture
    has already installed the shared connection.
    """
    from movie_catalog.api.main import app

    cache = get_response_cache()
    cache.clear()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    cache.clear()
