"""Normalized data types for database insertion.

TypedDict definitions for data structures that have been
transformed and are ready for database insertion. Keys match
the mapped attribute names of the ORM models.
"""

from datetime import date
from typing import Any, TypedDict


class NormalizedActorData(TypedDict):
    """Normalized actor data ready for database insertion."""

    source_id: str
    name: str
    birthdate: date | None
    source_metadata: dict[str, Any]


class NormalizedMovieData(TypedDict):
    """Normalized movie data ready for database insertion."""

    source_id: str
    title: str
    release_date: date
    image: str
    source_metadata: dict[str, Any]
