"""Ingestion pipeline orchestration.

Runs the five ingestion stages in order:
    1. clear: empty the catalog
    2. fetch_actors: one page of actors from the source
    3. fetch_movies: every known-for title of every actor
    4. insert: bulk insert actors, then movies
    5. link: connect actors to their movies

Each store stage commits in its own transaction. A failing stage
ends the run; completed stages are not rolled back.
"""

import time
from collections.abc import Callable, Generator
from contextlib import ExitStack, contextmanager
from datetime import datetime

from movie_catalog.database.connection import DatabaseConnection, get_database
from movie_catalog.etl.extractors.moviesdatabase import (
    MoviesDatabaseClient,
    MoviesDatabaseExtractor,
    SourceClientError,
)
from movie_catalog.etl.loaders import AssociationLoader, CatalogLoader
from movie_catalog.etl.types import IngestionResult, IngestionStage
from movie_catalog.etl.utils import setup_logger
from movie_catalog.settings import settings

logger = setup_logger("etl.pipeline.orchestrator")

ClientFactory = Callable[[], MoviesDatabaseClient]


class IngestionAbortedError(Exception):
    """Raised when a stage cannot produce usable data."""

    pass


def _default_client_factory() -> MoviesDatabaseClient:
    """Build a client from settings.

    Returns:
        Unopened MoviesDatabaseClient.

    Raises:
        SourceClientError: If RAPID_API_KEY is not set.
    """
    if not settings.source.is_configured:
        raise SourceClientError("RAPID_API_KEY is not set")
    return MoviesDatabaseClient()


class IngestionPipeline:
    """Clear, fetch, insert and link the catalog.

    Attributes:
        db: Store connection (shared connection if not given).
        max_workers: Concurrent title fetches.

    Example:
        ```python
        result = IngestionPipeline().run()
        if not result.success:
            print(result.failed_stage, result.error)
        ```
    """

    def __init__(
        self,
        db: DatabaseConnection | None = None,
        client_factory: ClientFactory | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            db: Store connection. Resolved lazily when None.
            client_factory: Callable returning an unopened source client.
            max_workers: Pool size for title fetches.
        """
        self._db = db
        self._client_factory = client_factory or _default_client_factory
        self._max_workers = max_workers

    @property
    def db(self) -> DatabaseConnection:
        """Get the store connection."""
        return self._db or get_database()

    # -------------------------------------------------------------------------
    # Full run
    # -------------------------------------------------------------------------

    def run(self) -> IngestionResult:
        """Execute all stages.

        Returns:
            IngestionResult describing the run. Never raises for a
            stage failure; the failure is reported on the result.
        """
        result = IngestionResult()
        logger.info("=" * 60)
        logger.info("🚀 STARTING CATALOG INGESTION")
        logger.info("=" * 60)

        try:
            self._execute(result)
            result.success = True
        except Exception as e:
            result.error = f"{type(e).__name__}: {e}"
            stage = result.failed_stage.value if result.failed_stage else "startup"
            logger.error(f"❌ Ingestion aborted at {stage}: {result.error}")

        result.finished_at = datetime.now()
        self._log_result(result)
        return result

    def _execute(self, result: IngestionResult) -> None:
        """Run the stages, filling the result as they complete.

        Args:
            result: Result to update in place.
        """
        with self._stage(result, IngestionStage.CLEAR):
            self.clear_catalog()

        with ExitStack() as stack:
            with self._stage(result, IngestionStage.FETCH_ACTORS):
                client = stack.enter_context(self._client_factory())
                extractor = MoviesDatabaseExtractor(client, max_workers=self._max_workers)
                actors = extractor.fetch_actors()
                if actors is None:
                    raise IngestionAbortedError("Actors page could not be fetched")
                logger.info(f"Fetched {len(actors)} actors")

            with self._stage(result, IngestionStage.FETCH_MOVIES):
                fetched = extractor.fetch_movies(actors)
                result.titles_skipped = fetched.titles_skipped
                logger.info(
                    f"Fetched {len(fetched.movies)} titles "
                    f"({fetched.titles_skipped} unknown to the source)"
                )

        with self._stage(result, IngestionStage.INSERT):
            with self.db.session() as session:
                inserted = CatalogLoader(session).load(fetched)
            result.actors_inserted = inserted.actor_count
            result.movies_inserted = inserted.movie_count

        with self._stage(result, IngestionStage.LINK):
            with self.db.session() as session:
                result.links_created = AssociationLoader(session).load(inserted)

    # -------------------------------------------------------------------------
    # Standalone operations
    # -------------------------------------------------------------------------

    def clear_catalog(self) -> int:
        """Delete associations, actors and movies in one transaction.

        Returns:
            Number of deleted rows.
        """
        with self.db.session() as session:
            return CatalogLoader(session).clear()

    def relink_from_metadata(self) -> int:
        """Recompute every association from the stored source records.

        Returns:
            Number of association rows created.
        """
        logger.info("🔗 Relinking catalog from stored metadata")
        with self.db.session() as session:
            created = AssociationLoader(session).relink_from_metadata()
        logger.info(f"✅ Relink complete: {created} links")
        return created

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    @contextmanager
    def _stage(
        result: IngestionResult,
        stage: IngestionStage,
    ) -> Generator[None, None, None]:
        """Log entry and exit of a stage and record its outcome.

        Args:
            result: Result to update.
            stage: Stage being executed.

        Yields:
            None while the stage body runs.
        """
        logger.info(f"▶ Stage {stage.value}: start")
        start = time.perf_counter()
        try:
            yield
        except Exception:
            result.failed_stage = stage
            logger.error(f"Stage {stage.value}: failed")
            raise
        result.stages_completed.append(stage)
        logger.info(f"Stage {stage.value}: done in {time.perf_counter() - start:.2f}s")

    @staticmethod
    def _log_result(result: IngestionResult) -> None:
        """Log final run summary.

        Args:
            result: Finished run result.
        """
        status = "✅ SUCCESS" if result.success else "❌ FAILED"
        logger.info("=" * 60)
        logger.info(f"INGESTION {status} in {result.duration_seconds:.2f}s")
        logger.info(
            f"actors={result.actors_inserted}, movies={result.movies_inserted}, "
            f"links={result.links_created}, titles_skipped={result.titles_skipped}"
        )
        logger.info("=" * 60)


# =============================================================================
# MODULE-LEVEL ENTRY POINTS
# =============================================================================


def run_ingestion(max_workers: int | None = None) -> IngestionResult:
    """Run a full ingestion with the shared store connection.

    Args:
        max_workers: Pool size for title fetches.

    Returns:
        IngestionResult of the run.
    """
    return IngestionPipeline(max_workers=max_workers).run()


def run_startup_load(pipeline: IngestionPipeline | None = None) -> IngestionResult | None:
    """Startup hook: ingest when LOAD_ON_START is enabled.

    Args:
        pipeline: Pipeline to run (default pipeline if None).

    Returns:
        IngestionResult, or None when startup loading is disabled.
    """
    if not settings.ingestion.load_on_start:
        logger.info("LOAD_ON_START disabled, skipping startup ingestion")
        return None
    logger.info("LOAD_ON_START enabled, running startup ingestion")
    return (pipeline or IngestionPipeline()).run()
