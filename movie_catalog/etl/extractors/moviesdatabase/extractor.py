"""Movies database extractor.

Drives the client through the fetch stages of ingestion:
one actors page, then every known-for title of every actor.
"""

from concurrent.futures import ThreadPoolExecutor

from movie_catalog.etl.extractors.base import BaseExtractor
from movie_catalog.etl.extractors.moviesdatabase.client import MoviesDatabaseClient
from movie_catalog.etl.extractors.moviesdatabase.normalizer import MoviesDatabaseNormalizer
from movie_catalog.etl.types import FetchedCatalog, SourceActor, SourceTitle
from movie_catalog.settings import settings


class MoviesDatabaseExtractor(BaseExtractor):
    """Fetches actors and their known-for titles.

    Titles are fetched once per (actor, title) pair, without
    deduplication across actors. With ``max_workers`` above 1 the
    fetches run in a bounded thread pool; results keep pair order.

    Attributes:
        client: Open MoviesDatabaseClient.
        normalizer: Record normalizer.
        max_workers: Concurrent title fetches.
    """

    name = "moviesdatabase"

    PROGRESS_INTERVAL = 25

    def __init__(
        self,
        client: MoviesDatabaseClient,
        normalizer: MoviesDatabaseNormalizer | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize extractor.

        Args:
            client: Client already entered as a context manager.
            normalizer: Normalizer (default instance if None).
            max_workers: Pool size. Defaults to ``INGEST_MAX_WORKERS``.
        """
        super().__init__()
        self._client = client
        self._normalizer = normalizer or MoviesDatabaseNormalizer()
        self._max_workers = max_workers or settings.ingestion.max_workers

    @property
    def max_workers(self) -> int:
        """Concurrent title fetches."""
        return self._max_workers

    def extract(self, **kwargs: object) -> FetchedCatalog | None:
        """Fetch actors, then their titles.

        Args:
            **kwargs: Unused.

        Returns:
            FetchedCatalog, or None if the actors page was unusable.
        """
        actors = self.fetch_actors()
        if actors is None:
            return None
        return self.fetch_movies(actors)

    def fetch_actors(self) -> list[SourceActor] | None:
        """Fetch one page of actors.

        Returns:
            Actors, or None if the source response was unusable.
        """
        self._start_extraction()
        actors = self._client.fetch_actors_page()
        if actors is None:
            self._log_error("Actors page could not be fetched")
            return None
        self._extracted_count = len(actors)
        self._end_extraction()
        return actors

    def fetch_movies(self, actors: list[SourceActor]) -> FetchedCatalog:
        """Fetch every known-for title of every actor.

        Args:
            actors: Actors from ``fetch_actors``.

        Returns:
            Normalized actors and movies, in actor then title order.
        """
        self._start_extraction()
        catalog = FetchedCatalog(
            actors=[self._normalizer.normalize_actor(actor) for actor in actors],
        )
        title_ids = [title_id for actor in actors for title_id in actor["known_for_titles"]]
        self._logger.info(
            f"Fetching {len(title_ids)} titles for {len(actors)} actors "
            f"(workers={self._max_workers})"
        )

        for title in self._fetch_titles(title_ids):
            if title is None:
                catalog.titles_skipped += 1
                continue
            catalog.movies.append(self._normalizer.normalize_movie(title))
            self._extracted_count += 1

        self._end_extraction()
        return catalog

    def _fetch_titles(self, title_ids: list[str]) -> list[SourceTitle | None]:
        """Fetch titles sequentially or through the bounded pool.

        Args:
            title_ids: Title ids in fetch order.

        Returns:
            One entry per id, None where the source had no title.
        """
        if self._max_workers <= 1:
            titles = []
            for index, title_id in enumerate(title_ids, start=1):
                titles.append(self._client.fetch_movie_by_title_id(title_id))
                if index % self.PROGRESS_INTERVAL == 0:
                    self._log_progress(index, len(title_ids))
            return titles

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            return list(pool.map(self._client.fetch_movie_by_title_id, title_ids))
