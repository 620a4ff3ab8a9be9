"""External source settings."""

from movie_catalog.settings.sources.moviesdatabase import MoviesDatabaseSettings

__all__ = ["MoviesDatabaseSettings"]
