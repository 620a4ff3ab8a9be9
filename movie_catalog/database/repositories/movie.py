"""Movie repository with specialized query methods."""

from sqlalchemy import ColumnElement, select
from sqlalchemy.orm import Session, selectinload

from movie_catalog.database.models import Movie
from movie_catalog.database.repositories.base import BaseRepository


class MovieRepository(BaseRepository[Movie]):
    """Repository for Movie entity operations.

    Provides filtered listing with actors eagerly loaded
    for the query endpoint.
    """

    model = Movie

    def __init__(self, session: Session) -> None:
        """Initialize movie repository.

        Args:
            session: SQLAlchemy session instance.
        """
        super().__init__(session)

    def search(self, *criteria: ColumnElement[bool]) -> list[Movie]:
        """Retrieve movies matching all criteria with their actors.

        Args:
            *criteria: SQLAlchemy boolean expressions (none = all rows).

        Returns:
            Matching movies ordered by id.
        """
        stmt = (
            select(Movie)
            .options(selectinload(Movie.actors))
            .where(*criteria)
            .order_by(Movie.id)
        )
        return list(self._session.scalars(stmt).all())

    def get_source_id_map(self) -> dict[str, list[int]]:
        """Map each source title id to the movie rows carrying it.

        The id is read from the stored source record, falling back
        to the ``source_id`` column when the record has none.

        Returns:
            Dictionary of source id to movie ids (ascending).
        """
        stmt = select(Movie.id, Movie.source_id, Movie.source_metadata).order_by(Movie.id)
        id_map: dict[str, list[int]] = {}
        for movie_id, source_id, metadata in self._session.execute(stmt):
            key = str((metadata or {}).get("id") or source_id)
            id_map.setdefault(key, []).append(movie_id)
        return id_map
