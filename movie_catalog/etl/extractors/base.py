"""Base extractor abstract class.

Provides common interface and utilities for all
ETL extractors.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime

from movie_catalog.etl.utils import setup_logger


class BaseExtractor(ABC):
    """Abstract base class for all ETL extractors.

    Provides common functionality for logging and progress tracking.

    Attributes:
        name: Extractor identifier (e.g., 'moviesdatabase').
        logger: Logger instance for this extractor.
    """

    name: str = "base"

    def __init__(self) -> None:
        """Initialize base extractor."""
        self._logger = setup_logger(f"etl.{self.name}")
        self._start_time: datetime | None = None
        self._extracted_count: int = 0
        self._errors: list[str] = []

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    @property
    def errors(self) -> list[str]:
        """Errors recorded during the current extraction."""
        return list(self._errors)

    @abstractmethod
    def extract(self, **kwargs: object) -> object:
        """Execute the extraction process.

        Args:
            **kwargs: Extractor-specific parameters.

        Returns:
            Extractor-specific result.
        """
        pass

    def _start_extraction(self) -> None:
        """Mark the start of extraction."""
        self._start_time = datetime.now()
        self._extracted_count = 0
        self._errors = []
        self._logger.info(f"Starting {self.name} extraction")

    def _end_extraction(self) -> float:
        """Mark the end of extraction.

        Returns:
            Extraction duration in seconds.
        """
        duration = self._calculate_duration()
        self._logger.info(
            f"Completed {self.name} extraction: {self._extracted_count} items in {duration:.2f}s"
        )
        return duration

    def _calculate_duration(self) -> float:
        """Calculate extraction duration in seconds."""
        if self._start_time is None:
            return 0.0
        delta = datetime.now() - self._start_time
        return delta.total_seconds()

    def _log_error(self, message: str) -> None:
        """Log and track an error.

        Args:
            message: Error message to log.
        """
        self._logger.error(message)
        self._errors.append(message)

    def _log_progress(self, current: int, total: int) -> None:
        """Log extraction progress.

        Args:
            current: Current item count.
            total: Total expected items.
        """
        if total > 0:
            percentage = (current / total) * 100
            self._logger.info(f"Progress: {current}/{total} ({percentage:.1f}%)")
