"""Actor model.

Stores people from the source actors listing; the raw record
(including ``knownForTitles``) is kept for relinking.
"""

from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.database.models.base import Base, SourceMetadataMixin, TimestampMixin

if TYPE_CHECKING:
    from movie_catalog.database.models.movie import Movie


# Placeholder the source uses for "no value" in list fields
_NULL_MARKER = "\\N"


def parse_known_for_titles(value: Any) -> list[str]:
    """Split a comma-separated known-for titles field.

    Args:
        value: Raw field (string, list, or None).

    Returns:
        Title ids in source order, blanks and placeholders removed.
    """
    if value is None:
        return []
    items = value if isinstance(value, list) else str(value).split(",")
    titles = [str(item).strip() for item in items]
    return [t for t in titles if t and t != _NULL_MARKER]


class Actor(Base, TimestampMixin, SourceMetadataMixin):
    """Catalog actor.

    Attributes:
        id: Internal primary key.
        source_id: Source person identifier (e.g. 'nm0000001').
        name: Display name.
        birthdate: January 1 of the birth year, None when unknown.
        source_metadata: Full source actor record.
        movies: Movies this actor is known for.
    """

    __tablename__ = "actors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    birthdate: Mapped[date | None] = mapped_column(Date)

    movies: Mapped[list["Movie"]] = relationship(
        secondary="actor_movies",
        back_populates="actors",
        order_by="Movie.id",
    )

    @property
    def known_for_titles(self) -> list[str]:
        """Source title ids parsed from the stored metadata."""
        return parse_known_for_titles(self.source_metadata.get("knownForTitles"))

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Actor(id={self.id}, source_id='{self.source_id}', name='{self.name}')>"
