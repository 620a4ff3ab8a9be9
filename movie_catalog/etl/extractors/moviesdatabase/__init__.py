"""Movies database extractor package.

Provides extraction of actors and titles from the RapidAPI
moviesdatabase service.

Classes:
    MoviesDatabaseExtractor: Drives the fetch stages.
    MoviesDatabaseClient: HTTP client with rate limiting.
    MoviesDatabaseNormalizer: Data transformation to normalized format.

Usage:
    from movie_catalog.etl.extractors.moviesdatabase import (
        MoviesDatabaseClient,
        MoviesDatabaseExtractor,
    )

    with MoviesDatabaseClient() as client:
        catalog = MoviesDatabaseExtractor(client).extract()
"""

from movie_catalog.etl.extractors.moviesdatabase.client import (
    MoviesDatabaseClient,
    SourceClientError,
)
from movie_catalog.etl.extractors.moviesdatabase.extractor import MoviesDatabaseExtractor
from movie_catalog.etl.extractors.moviesdatabase.normalizer import MoviesDatabaseNormalizer

__all__ = [
    "MoviesDatabaseExtractor",
    "MoviesDatabaseClient",
    "MoviesDatabaseNormalizer",
    "SourceClientError",
]
