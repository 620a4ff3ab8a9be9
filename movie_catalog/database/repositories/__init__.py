"""Repository layer for database operations."""

from movie_catalog.database.repositories.actor import ActorRepository
from movie_catalog.database.repositories.base import BaseRepository, InsertedRow
from movie_catalog.database.repositories.movie import MovieRepository

__all__ = [
    "BaseRepository",
    "InsertedRow",
    "ActorRepository",
    "MovieRepository",
]
