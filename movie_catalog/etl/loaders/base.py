"""Base loader abstract class.

Provides common interface and utilities for all
ETL loaders writing into the catalog store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from sqlalchemy.orm import Session

from movie_catalog.etl.utils.logger import setup_logger


@dataclass
class LoaderStats:
    """Statistics for a loader operation.

    Attributes:
        inserted: Number of new records inserted.
        deleted: Number of records deleted.
        linked: Number of association rows created.
        skipped: Number of records skipped.
    """

    inserted: int = 0
    deleted: int = 0
    linked: int = 0
    skipped: int = 0


class BaseLoader(ABC):
    """Abstract base class for all ETL loaders.

    Provides the session, a named logger and statistics tracking.

    Attributes:
        name: Loader identifier for logging.
    """

    name: str = "base"

    def __init__(self, session: Session) -> None:
        """Initialize loader with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session
        self._logger = setup_logger(f"etl.loader.{self.name}")
        self._stats = LoaderStats()

    @property
    def stats(self) -> LoaderStats:
        """Get current loader statistics."""
        return self._stats

    @abstractmethod
    def load(self, data: object) -> object:
        """Execute the load operation.

        Args:
            data: Data to load (type depends on implementation).

        Returns:
            Loader-specific result.
        """
        pass

    def _log_summary(self) -> None:
        """Log final statistics summary."""
        self._logger.info(
            f"{self.name} complete: "
            f"inserted={self._stats.inserted}, "
            f"deleted={self._stats.deleted}, "
            f"linked={self._stats.linked}, "
            f"skipped={self._stats.skipped}"
        )
