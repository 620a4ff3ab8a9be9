"""Catalog loader.

Clears the catalog and bulk-inserts actors and movies,
capturing the identities the store assigns.
"""

from sqlalchemy.orm import Session

from movie_catalog.database.repositories import ActorRepository, MovieRepository
from movie_catalog.database.models import parse_known_for_titles
from movie_catalog.etl.loaders.base import BaseLoader
from movie_catalog.etl.types import FetchedCatalog, InsertedCatalog


class CatalogLoader(BaseLoader):
    """Loader for the actors and movies tables.

    ``load`` runs two bulk inserts (actors, then movies) and returns
    the assigned ids, so linking never has to re-read the tables.
    """

    name = "catalog"

    def __init__(self, session: Session) -> None:
        """Initialize with session and repositories.

        Args:
            session: SQLAlchemy session.
        """
        super().__init__(session)
        self._actors = ActorRepository(self._session)
        self._movies = MovieRepository(self._session)

    def clear(self) -> int:
        """Delete associations, actors and movies.

        Returns:
            Total number of deleted rows.
        """
        links = self._actors.delete_all_links()
        actors = self._actors.delete_many()
        movies = self._movies.delete_many()
        self._stats.deleted += links + actors + movies
        self._logger.info(f"Cleared catalog: actors={actors}, movies={movies}, links={links}")
        return links + actors + movies

    def load(self, data: FetchedCatalog) -> InsertedCatalog:
        """Bulk insert fetched actors and movies.

        Args:
            data: Normalized rows from the fetch stages.

        Returns:
            Identities assigned to the inserted rows.
        """
        actor_rows = self._actors.bulk_insert([dict(actor) for actor in data.actors])
        self._logger.info(f"Inserted {len(actor_rows)} actors")

        movie_rows = self._movies.bulk_insert([dict(movie) for movie in data.movies])
        self._logger.info(f"Inserted {len(movie_rows)} movies")

        inserted = InsertedCatalog()
        for row, actor in zip(actor_rows, data.actors, strict=True):
            titles = parse_known_for_titles(actor["source_metadata"].get("knownForTitles"))
            inserted.actor_ids.append((row.id, titles))
        for row in movie_rows:
            inserted.movie_ids_by_source.setdefault(row.source_id, []).append(row.id)

        self._stats.inserted += len(actor_rows) + len(movie_rows)
        self._stats.skipped += data.titles_skipped
        self._log_summary()
        return inserted

