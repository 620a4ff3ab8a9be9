"""SQLAlchemy ORM models for the movie catalog.

Usage:
    from movie_catalog.database.models import Base, Actor, Movie

Tables:
    - actors: People from the source actors listing
    - movies: Titles fetched per actor
    - actor_movies: Actor-Movie association
"""

from movie_catalog.database.models.actor import Actor, parse_known_for_titles
from movie_catalog.database.models.actor_movie import ActorMovie
from movie_catalog.database.models.base import (
    Base,
    SourceMetadataMixin,
    TimestampMixin,
)
from movie_catalog.database.models.movie import SENTINEL_RELEASE_DATE, Movie

__all__ = [
    "Base",
    "TimestampMixin",
    "SourceMetadataMixin",
    "Actor",
    "Movie",
    "ActorMovie",
    "SENTINEL_RELEASE_DATE",
    "parse_known_for_titles",
]
