"""Movies database API client with rate limiting.

Handles HTTP communication with the RapidAPI moviesdatabase
service: authentication headers, request pacing, and response
shaping. Requests are never retried.
"""

import logging
import threading
import time
from types import TracebackType
from typing import Any

import httpx

from movie_catalog.database.models import parse_known_for_titles
from movie_catalog.etl.types import SourceActor, SourceTitle
from movie_catalog.settings import MoviesDatabaseSettings, settings

logger = logging.getLogger(__name__)


class SourceClientError(Exception):
    """Raised when the client is misused (e.g. outside its context)."""

    pass


class MoviesDatabaseClient:
    """HTTP client for the moviesdatabase API.

    Bad statuses and malformed payloads are logged and degrade to
    ``None``; transport errors (``httpx.TransportError``) propagate.

    Attributes:
        config: Source API settings.
    """

    def __init__(
        self,
        config: MoviesDatabaseSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize client with settings.

        Args:
            config: Source settings. Defaults to ``settings.source``.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._config = config or settings.source
        self._transport = transport

        # Rate limiting state
        self._requests_per_period = self._config.requests_per_period
        self._period_seconds = self._config.period_seconds
        self._min_delay = self._config.min_request_delay
        self._request_times: list[float] = []
        self._rate_lock = threading.Lock()

        # HTTP client
        self._client: httpx.Client | None = None

    @property
    def config(self) -> MoviesDatabaseSettings:
        """Get the source settings."""
        return self._config

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    def __enter__(self) -> "MoviesDatabaseClient":
        """Enter context and create HTTP client."""
        self._client = httpx.Client(
            timeout=self._config.timeout,
            headers={
                "x-rapidapi-key": self._config.api_key,
                "x-rapidapi-host": self._config.host,
            },
            transport=self._transport,
        )
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client.

        Args:
            _exc_type: Exception type if raised.
            _exc_val: Exception value if raised.
            _exc_tb: Exception traceback if raised.
        """
        if self._client:
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def fetch_actors_page(self) -> list[SourceActor] | None:
        """Fetch one page of actors.

        Returns:
            Actors of the page, or None if the response was unusable.

        Raises:
            httpx.TransportError: On network failures.
        """
        payload = self._get(self._config.actors_url)
        if payload is None:
            return None

        results = payload.get("results")
        if not isinstance(results, list):
            logger.error("Malformed actors response: 'results' is not a list")
            return None

        actors: list[SourceActor] = []
        for raw in results:
            actor = self._extract_actor(raw)
            if actor is not None:
                actors.append(actor)

        logger.info(f"Fetched {len(actors)} actors ({len(results) - len(actors)} malformed)")
        return actors

    def fetch_movie_by_title_id(self, title_id: str) -> SourceTitle | None:
        """Fetch one title by its source id.

        Args:
            title_id: Source title id (e.g. 'tt0111161').

        Returns:
            Extracted title, or None if not found or unusable.

        Raises:
            httpx.TransportError: On network failures.
        """
        payload = self._get(f"{self._config.titles_url}/{title_id}")
        if payload is None:
            return None

        raw = payload.get("results")
        if raw is None:
            logger.info(f"Title not found: {title_id}")
            return None

        return self._extract_title(raw, title_id)

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    def _wait_for_rate_limit(self) -> None:
        """Wait if necessary to respect rate limits."""
        with self._rate_lock:
            now = time.time()

            # Remove old request times outside the window
            cutoff = now - self._period_seconds
            self._request_times = [t for t in self._request_times if t > cutoff]

            if len(self._request_times) >= self._requests_per_period:
                oldest = self._request_times[0]
                wait_time = oldest + self._period_seconds - now
                if wait_time > 0:
                    logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                    time.sleep(wait_time)

            # Enforce minimum delay between requests
            if self._request_times and self._min_delay > 0:
                elapsed = now - self._request_times[-1]
                if elapsed < self._min_delay:
                    time.sleep(self._min_delay - elapsed)

            self._request_times.append(time.time())

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    def _get(self, url: str) -> dict[str, Any] | None:
        """Execute GET request with rate limiting.

        Args:
            url: Absolute endpoint URL.

        Returns:
            JSON object, or None on bad status or malformed body.

        Raises:
            SourceClientError: If used outside the context manager.
            httpx.TransportError: On network failures.
        """
        if self._client is None:
            msg = "Client not initialized. Use context manager."
            raise SourceClientError(msg)

        self._wait_for_rate_limit()

        try:
            response = self._client.get(url)
        except httpx.TimeoutException:
            logger.warning(f"Request timeout: {url}")
            raise

        return self._handle_response(response, url)

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        url: str,
    ) -> dict[str, Any] | None:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            url: Requested URL (for logging).

        Returns:
            JSON object, or None on bad status or malformed body.
        """
        if response.status_code != 200:
            logger.error(f"Source API error {response.status_code}: {url}")
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            return None

        if not isinstance(payload, dict):
            logger.error(f"Unexpected JSON payload type from {url}: {type(payload).__name__}")
            return None

        return payload

    # -------------------------------------------------------------------------
    # Response Shaping
    # -------------------------------------------------------------------------

    @staticmethod
    def _extract_actor(raw: Any) -> SourceActor | None:
        """Shape one raw actor record.

        Args:
            raw: Element of the ``results`` list.

        Returns:
            SourceActor, or None if required fields are missing.
        """
        try:
            return SourceActor(
                source_id=str(raw["nconst"]),
                name=str(raw["primaryName"]),
                birth_year=_optional_int(raw.get("birthYear")),
                known_for_titles=parse_known_for_titles(raw.get("knownForTitles")),
                raw=dict(raw),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed actor record: {e}")
            return None

    @staticmethod
    def _extract_title(raw: Any, title_id: str) -> SourceTitle | None:
        """Shape one raw title record.

        Args:
            raw: ``results`` object of a title response.
            title_id: Requested id, used when the record has none.

        Returns:
            SourceTitle, or None if the title text is missing.
        """
        try:
            image = raw.get("primaryImage") or {}
            release = raw.get("releaseDate") or {}
            return SourceTitle(
                source_id=str(raw.get("id") or title_id),
                title=str(raw["titleText"]["text"]),
                image=str(image.get("url") or ""),
                release_year=_optional_int(release.get("year")),
                release_month=_optional_int(release.get("month")),
                release_day=_optional_int(release.get("day")),
                raw=dict(raw),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed title {title_id}: {e}")
            return None


def _optional_int(value: Any) -> int | None:
    """Convert a nullable numeric field.

    Args:
        value: Raw value (int, numeric string, or None).

    Returns:
        Integer or None.
    """
    if value is None or value == "":
        return None
    return int(value)
