"""ActorMovie association table.

Many-to-many relationship between Actor and Movie.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.database.models.base import Base


class ActorMovie(Base):
    """Association table for Actor-Movie relationship.

    Attributes:
        actor_id: Foreign key to actors.
        movie_id: Foreign key to movies.
    """

    __tablename__ = "actor_movies"

    actor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("actors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("movies.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
