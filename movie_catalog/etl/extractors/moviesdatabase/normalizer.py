"""Movies database normalizer.

Transforms client-level actor and title records into
data structures ready for database insertion.
"""

import logging
from datetime import date

from movie_catalog.database.models.movie import SENTINEL_RELEASE_DATE
from movie_catalog.etl.types import (
    NormalizedActorData,
    NormalizedMovieData,
    SourceActor,
    SourceTitle,
)

logger = logging.getLogger(__name__)


class MoviesDatabaseNormalizer:
    """Normalizes source records for database insertion.

    The full source record is carried in ``source_metadata`` so
    associations can be recomputed from stored rows.
    """

    # -------------------------------------------------------------------------
    # Actors
    # -------------------------------------------------------------------------

    def normalize_actor(self, actor: SourceActor) -> NormalizedActorData:
        """Normalize an actor to database format.

        The source only reports a birth year, so the birthdate is
        January 1 of that year.

        Args:
            actor: Actor from the client.

        Returns:
            Normalized actor data.
        """
        return NormalizedActorData(
            source_id=actor["source_id"],
            name=self._clean_string(actor["name"]),
            birthdate=self._birthdate(actor["birth_year"]),
            source_metadata=actor["raw"],
        )

    # -------------------------------------------------------------------------
    # Movies
    # -------------------------------------------------------------------------

    def normalize_movie(self, title: SourceTitle) -> NormalizedMovieData:
        """Normalize a title to database format.

        Args:
            title: Title from the client.

        Returns:
            Normalized movie data.
        """
        return NormalizedMovieData(
            source_id=title["source_id"],
            title=self._clean_string(title["title"]),
            release_date=self.release_date(
                title["release_year"],
                title["release_month"],
                title["release_day"],
            ),
            image=title["image"] or "",
            source_metadata=title["raw"],
        )

    @staticmethod
    def release_date(
        year: int | None,
        month: int | None,
        day: int | None,
    ) -> date:
        """Build a release date, falling back to the sentinel.

        Missing month or day default to 1. A missing year or an
        impossible calendar date yields ``SENTINEL_RELEASE_DATE``.

        Args:
            year: Release year.
            month: Release month (1-12).
            day: Release day of month.

        Returns:
            Release date.
        """
        if year is None:
            return SENTINEL_RELEASE_DATE
        try:
            return date(year, month or 1, day or 1)
        except ValueError:
            logger.warning(f"Invalid release date {year}-{month}-{day}, using sentinel")
            return SENTINEL_RELEASE_DATE

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _birthdate(birth_year: int | None) -> date | None:
        """January 1 of the birth year.

        Args:
            birth_year: Year reported by the source.

        Returns:
            Date or None when unknown or out of range.
        """
        if not birth_year:
            return None
        try:
            return date(birth_year, 1, 1)
        except ValueError:
            logger.warning(f"Invalid birth year: {birth_year}")
            return None

    @staticmethod
    def _clean_string(value: str | None) -> str:
        """Strip and collapse internal whitespace.

        Args:
            value: Raw string.

        Returns:
            Cleaned string (empty when None).
        """
        if not value:
            return ""
        return " ".join(value.split())
