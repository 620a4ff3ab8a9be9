"""ETL data types package.

Exports all TypedDict and dataclass definitions for raw, normalized
and pipeline data structures.

Usage:
    from movie_catalog.etl.types import SourceActor, NormalizedMovieData
"""

from movie_catalog.etl.types.normalized import NormalizedActorData, NormalizedMovieData
from movie_catalog.etl.types.pipeline import (
    FetchedCatalog,
    IngestionResult,
    IngestionStage,
    InsertedCatalog,
)
from movie_catalog.etl.types.source import (
    RawActorData,
    RawActorsResponse,
    RawImageData,
    RawReleaseDateData,
    RawTextData,
    RawTitleData,
    RawTitleResponse,
    SourceActor,
    SourceTitle,
)

__all__ = [
    # Source
    "RawActorData",
    "RawActorsResponse",
    "RawImageData",
    "RawReleaseDateData",
    "RawTextData",
    "RawTitleData",
    "RawTitleResponse",
    "SourceActor",
    "SourceTitle",
    # Normalized
    "NormalizedActorData",
    "NormalizedMovieData",
    # Pipeline
    "IngestionStage",
    "FetchedCatalog",
    "InsertedCatalog",
    "IngestionResult",
]
