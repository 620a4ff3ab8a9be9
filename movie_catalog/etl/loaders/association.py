"""Actor-movie association loader.

Connects each actor to every movie row whose source title id
is among the actor's known-for titles.
"""

from sqlalchemy.orm import Session

from movie_catalog.database.repositories import ActorRepository, MovieRepository
from movie_catalog.etl.loaders.base import BaseLoader
from movie_catalog.etl.types import InsertedCatalog


class AssociationLoader(BaseLoader):
    """Loader for the actor_movies table.

    ``load`` links from the identities returned by the bulk inserts.
    ``relink_from_metadata`` rebuilds every association from the
    source records stored on the rows, for catalogs whose link
    stage did not complete.
    """

    name = "association"

    def __init__(self, session: Session) -> None:
        """Initialize with session and repositories.

        Args:
            session: SQLAlchemy session.
        """
        super().__init__(session)
        self._actors = ActorRepository(self._session)
        self._movies = MovieRepository(self._session)

    def load(self, data: InsertedCatalog) -> int:
        """Link inserted actors to inserted movies.

        Args:
            data: Identities from the insert stage.

        Returns:
            Number of association rows created.
        """
        created = self._link_all(data.actor_ids, data.movie_ids_by_source)
        self._log_summary()
        return created

    def relink_from_metadata(self) -> int:
        """Recompute all associations from stored source records.

        Existing associations are removed first.

        Returns:
            Number of association rows created.
        """
        removed = self._actors.delete_all_links()
        self._stats.deleted += removed

        movie_ids_by_source = self._movies.get_source_id_map()
        actor_ids = [(actor.id, actor.known_for_titles) for actor in self._actors.find_many()]
        self._logger.info(
            f"Relinking {len(actor_ids)} actors against {len(movie_ids_by_source)} titles "
            f"({removed} previous links removed)"
        )

        created = self._link_all(actor_ids, movie_ids_by_source)
        self._log_summary()
        return created

    def _link_all(
        self,
        actor_ids: list[tuple[int, list[str]]],
        movie_ids_by_source: dict[str, list[int]],
    ) -> int:
        """Link every actor, one update per actor.

        Args:
            actor_ids: Actor id with its known-for title ids.
            movie_ids_by_source: Source title id to movie ids.

        Returns:
            Number of association rows created.
        """
        created = 0
        for actor_id, titles in actor_ids:
            movie_ids = [
                movie_id for title_id in titles for movie_id in movie_ids_by_source.get(title_id, [])
            ]
            if not movie_ids:
                self._stats.skipped += 1
                continue
            created += self._actors.link_movies(actor_id, movie_ids)

        self._stats.linked += created
        return created
