"""API services."""

from movie_catalog.api.services.movie_query import MovieQueryService

__all__ = ["MovieQueryService"]
