"""ETL loaders writing into the catalog store."""

from movie_catalog.etl.loaders.association import AssociationLoader
from movie_catalog.etl.loaders.base import BaseLoader, LoaderStats
from movie_catalog.etl.loaders.catalog import CatalogLoader

__all__ = [
    "BaseLoader",
    "LoaderStats",
    "CatalogLoader",
    "AssociationLoader",
]
