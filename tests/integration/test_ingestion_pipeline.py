"""Integration tests for the ingestion pipeline.

Tests cover:
- A full run: counts, stored rows and associations
- Duplicate titles across actors
- Sentinel release dates
- Failure at the actors page and at title fetching
- Clear and relink as standalone operations
- The LOAD_ON_START hook
"""

from collections.abc import Callable
from datetime import date
from typing import Any

import httpx
import pytest

from movie_catalog.database import ActorRepository, DatabaseConnection, MovieRepository
from movie_catalog.database.models import SENTINEL_RELEASE_DATE, Actor, Movie
from movie_catalog.etl.extractors.moviesdatabase import MoviesDatabaseClient
from movie_catalog.etl.pipeline import IngestionPipeline, run_startup_load
from movie_catalog.etl.types import IngestionResult, IngestionStage
from movie_catalog.settings import MoviesDatabaseSettings, settings


def _linked_titles(db: DatabaseConnection) -> dict[str, list[str]]:
    """Actor source id to linked movie source ids."""
    with db.session() as session:
        movies = {m.id: m.source_id for m in MovieRepository(session).find_many()}
        repo = ActorRepository(session)
        return {
            actor.source_id: [movies[movie_id] for movie_id in repo.get_linked_movie_ids(actor.id)]
            for actor in repo.find_many()
        }


def _factory_with(
    source_settings: MoviesDatabaseSettings,
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[], MoviesDatabaseClient]:
    return lambda: MoviesDatabaseClient(
        config=source_settings,
        transport=httpx.MockTransport(handler),
    )


# ============================================================================
# Full run
# ============================================================================


class TestFullRun:
    @staticmethod
    def test_result_counts(loaded_catalog: IngestionResult) -> None:
        assert loaded_catalog.stages_completed == list(IngestionStage)
        assert loaded_catalog.failed_stage is None
        assert loaded_catalog.actors_inserted == 3
        assert loaded_catalog.movies_inserted == 4
        assert loaded_catalog.titles_skipped == 1
        assert loaded_catalog.links_created == 6
        assert loaded_catalog.finished_at is not None

    @staticmethod
    def test_actor_linked_to_its_known_titles(
        db: DatabaseConnection,
        loaded_catalog: IngestionResult,
    ) -> None:
        links = _linked_titles(db)

        assert links["nm0000001"] == ["tt0050419", "tt0053137", "tt0053137"]
        assert links["nm0000002"] == ["tt0053137", "tt0053137", "tt0037382"]
        assert links["nm0000003"] == []

    @staticmethod
    def test_duplicate_titles_are_kept(
        db: DatabaseConnection,
        loaded_catalog: IngestionResult,
    ) -> None:
        with db.session() as session:
            rows = MovieRepository(session).find_many(Movie.source_id == "tt0053137")

        assert len(rows) == 2
        assert {r.title for r in rows} == {"On the Beach"}

    @staticmethod
    def test_stored_values(db: DatabaseConnection, loaded_catalog: IngestionResult) -> None:
        with db.session() as session:
            movies = {m.source_id: m for m in MovieRepository(session).find_many()}
            actors = {a.source_id: a for a in ActorRepository(session).find_many()}

        assert movies["tt0050419"].release_date == date(1957, 2, 13)
        assert movies["tt0053137"].release_date == date(1959, 12, 1)
        assert movies["tt0053137"].image == ""
        assert movies["tt0037382"].release_date == SENTINEL_RELEASE_DATE
        assert movies["tt0037382"].source_metadata["id"] == "tt0037382"
        assert actors["nm0000001"].birthdate == date(1899, 1, 1)
        assert actors["nm0000003"].birthdate is None
        assert actors["nm0000003"].name == "Brigitte Bardot"

    @staticmethod
    def test_rerun_replaces_catalog(db: DatabaseConnection, pipeline: IngestionPipeline) -> None:
        pipeline.run()
        result = pipeline.run()

        assert result.success
        with db.session() as session:
            assert ActorRepository(session).count() == 3
            assert MovieRepository(session).count() == 4
            assert ActorRepository(session).count_links() == 6

    @staticmethod
    def test_pool_matches_sequential(
        db: DatabaseConnection,
        client_factory: Callable[[], MoviesDatabaseClient],
    ) -> None:
        IngestionPipeline(db=db, client_factory=client_factory, max_workers=1).run()
        sequential = _linked_titles(db)

        result = IngestionPipeline(db=db, client_factory=client_factory, max_workers=4).run()

        assert result.success
        assert _linked_titles(db) == sequential

    @staticmethod
    def test_result_to_dict(loaded_catalog: IngestionResult) -> None:
        data = loaded_catalog.to_dict()
        assert data["success"] is True
        assert data["stages_completed"] == ["clear", "fetch_actors", "fetch_movies", "insert", "link"]
        assert data["failed_stage"] is None
        assert data["duration_seconds"] >= 0


# ============================================================================
# Failures
# ============================================================================


class TestFailures:
    @staticmethod
    def test_unusable_actors_page_aborts(
        db: DatabaseConnection,
        source_settings: MoviesDatabaseSettings,
        loaded_catalog: IngestionResult,
    ) -> None:
        factory = _factory_with(source_settings, lambda r: httpx.Response(503))

        result = IngestionPipeline(db=db, client_factory=factory).run()

        assert result.success is False
        assert result.failed_stage == IngestionStage.FETCH_ACTORS
        assert result.stages_completed == [IngestionStage.CLEAR]
        assert "Actors page" in (result.error or "")
        with db.session() as session:
            assert ActorRepository(session).count() == 0

    @staticmethod
    def test_title_fetch_failure_stops_later_stages(
        db: DatabaseConnection,
        source_settings: MoviesDatabaseSettings,
        actors_page: dict[str, Any],
        loaded_catalog: IngestionResult,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/actors":
                return httpx.Response(200, json=actors_page)
            raise httpx.ConnectError("connection reset", request=request)

        result = IngestionPipeline(
            db=db,
            client_factory=_factory_with(source_settings, handler),
        ).run()

        assert result.success is False
        assert result.failed_stage == IngestionStage.FETCH_MOVIES
        assert result.stages_completed == [IngestionStage.CLEAR, IngestionStage.FETCH_ACTORS]
        assert result.actors_inserted == 0
        assert result.links_created == 0
        assert "ConnectError" in (result.error or "")
        # Clear committed; nothing was inserted afterwards
        with db.session() as session:
            assert ActorRepository(session).count() == 0
            assert MovieRepository(session).count() == 0

    @staticmethod
    def test_missing_api_key_fails_at_fetch_actors(
        db: DatabaseConnection,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings.source, "api_key", "")

        result = IngestionPipeline(db=db).run()

        assert result.success is False
        assert result.failed_stage == IngestionStage.FETCH_ACTORS
        assert "RAPID_API_KEY" in (result.error or "")


# ============================================================================
# Standalone operations
# ============================================================================


class TestStandaloneOperations:
    @staticmethod
    def test_clear_then_empty(
        db: DatabaseConnection,
        pipeline: IngestionPipeline,
        loaded_catalog: IngestionResult,
    ) -> None:
        assert pipeline.clear_catalog() == 3 + 4 + 6
        with db.session() as session:
            assert MovieRepository(session).search() == []

    @staticmethod
    def test_relink_reproduces_pipeline_links(
        db: DatabaseConnection,
        pipeline: IngestionPipeline,
        loaded_catalog: IngestionResult,
    ) -> None:
        before = _linked_titles(db)
        with db.session() as session:
            ActorRepository(session).delete_all_links()

        assert pipeline.relink_from_metadata() == loaded_catalog.links_created
        assert _linked_titles(db) == before

    @staticmethod
    def test_known_for_titles_read_from_metadata(
        db: DatabaseConnection,
        loaded_catalog: IngestionResult,
    ) -> None:
        with db.session() as session:
            actor = ActorRepository(session).find_many(Actor.source_id == "nm0000002")[0]
            assert actor.known_for_titles == ["tt0053137", "tt0037382"]


# ============================================================================
# Startup hook
# ============================================================================


class TestStartupLoad:
    @staticmethod
    def test_disabled_returns_none(
        pipeline: IngestionPipeline,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings.ingestion, "load_on_start", False)
        assert run_startup_load(pipeline) is None

    @staticmethod
    def test_enabled_runs_pipeline(
        db: DatabaseConnection,
        pipeline: IngestionPipeline,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings.ingestion, "load_on_start", True)

        result = run_startup_load(pipeline)

        assert result is not None
        assert result.success
        with db.session() as session:
            assert MovieRepository(session).count() == 4
