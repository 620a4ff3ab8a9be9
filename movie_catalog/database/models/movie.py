"""Movie model - main catalog entity.

Movies are fetched per actor from the source API, so the same
source title may appear in several rows.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.database.models.base import Base, SourceMetadataMixin, TimestampMixin

if TYPE_CHECKING:
    from movie_catalog.database.models.actor import Actor

# Assigned when the source gives no usable release date
SENTINEL_RELEASE_DATE = date(1970, 1, 1)


class Movie(Base, TimestampMixin, SourceMetadataMixin):
    """Catalog movie.

    Attributes:
        id: Internal primary key.
        source_id: Source title identifier (e.g. 'tt0111161').
        title: Movie title.
        release_date: Release date or the sentinel date.
        image: Poster URL, empty string when absent.
        source_metadata: Full source title record.
        actors: Actors known for this movie.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    release_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=SENTINEL_RELEASE_DATE,
        index=True,
    )
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")

    actors: Mapped[list["Actor"]] = relationship(
        secondary="actor_movies",
        back_populates="movies",
        order_by="Actor.id",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Movie(id={self.id}, source_id='{self.source_id}', title='{self.title}')>"
