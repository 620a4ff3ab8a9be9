"""Actor repository with association helpers.

Provides bulk operations on actors and the actor_movies
association used by the ingestion linker.
"""

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from movie_catalog.database.models import Actor, ActorMovie
from movie_catalog.database.repositories.base import BaseRepository


class ActorRepository(BaseRepository[Actor]):
    """Repository for Actor entity operations."""

    model = Actor

    def __init__(self, session: Session) -> None:
        """Initialize actor repository.

        Args:
            session: SQLAlchemy session instance.
        """
        super().__init__(session)

    def link_movies(self, actor_id: int, movie_ids: list[int]) -> int:
        """Connect an actor to movies.

        Duplicate ids are collapsed; an empty list is a no-op.

        Args:
            actor_id: Actor primary key.
            movie_ids: Movie primary keys.

        Returns:
            Number of association rows created.
        """
        unique_ids = list(dict.fromkeys(movie_ids))
        if not unique_ids:
            return 0

        self._session.execute(
            insert(ActorMovie),
            [{"actor_id": actor_id, "movie_id": movie_id} for movie_id in unique_ids],
        )
        self._session.flush()
        return len(unique_ids)

    def get_linked_movie_ids(self, actor_id: int) -> list[int]:
        """Get ids of movies linked to an actor.

        Args:
            actor_id: Actor primary key.

        Returns:
            Movie ids in ascending order.
        """
        stmt = (
            select(ActorMovie.movie_id)
            .where(ActorMovie.actor_id == actor_id)
            .order_by(ActorMovie.movie_id)
        )
        return list(self._session.scalars(stmt).all())

    def count_links(self) -> int:
        """Count actor-movie associations.

        Returns:
            Number of association rows.
        """
        stmt = select(func.count()).select_from(ActorMovie)
        return self._session.execute(stmt).scalar() or 0

    def delete_all_links(self) -> int:
        """Remove every actor-movie association.

        Returns:
            Number of deleted association rows.
        """
        result = self._session.execute(delete(ActorMovie))
        self._session.flush()
        return result.rowcount or 0
