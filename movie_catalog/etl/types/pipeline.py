"""Ingestion pipeline data types.

Stage identifiers, bulk-insert identity maps and run results.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from movie_catalog.etl.types.normalized import NormalizedActorData, NormalizedMovieData


class IngestionStage(str, Enum):
    """Pipeline stages, in execution order."""

    CLEAR = "clear"
    FETCH_ACTORS = "fetch_actors"
    FETCH_MOVIES = "fetch_movies"
    INSERT = "insert"
    LINK = "link"


@dataclass
class FetchedCatalog:
    """Normalized rows accumulated before the insert stage.

    Attributes:
        actors: One entry per actor of the fetched page.
        movies: One entry per (actor, known-for title) the source resolved.
        titles_skipped: Title ids the source did not return.
    """

    actors: list[NormalizedActorData] = field(default_factory=list)
    movies: list[NormalizedMovieData] = field(default_factory=list)
    titles_skipped: int = 0


@dataclass
class InsertedCatalog:
    """Store identities returned by the bulk inserts.

    Attributes:
        actor_ids: Actor primary keys with their known-for title ids.
        movie_ids_by_source: Source title id to movie primary keys.
    """

    actor_ids: list[tuple[int, list[str]]] = field(default_factory=list)
    movie_ids_by_source: dict[str, list[int]] = field(default_factory=dict)

    @property
    def actor_count(self) -> int:
        """Number of inserted actors."""
        return len(self.actor_ids)

    @property
    def movie_count(self) -> int:
        """Number of inserted movies."""
        return sum(len(ids) for ids in self.movie_ids_by_source.values())


@dataclass
class IngestionResult:
    """Outcome of one ingestion run.

    Attributes:
        success: True when every stage completed.
        stages_completed: Stages that finished, in order.
        failed_stage: Stage that aborted the run, if any.
        error: Human-readable failure reason.
        actors_inserted: Rows written by the insert stage.
        movies_inserted: Rows written by the insert stage.
        links_created: Association rows written by the link stage.
        titles_skipped: Known-for titles the source did not resolve.
        started_at: Run start timestamp.
        finished_at: Run end timestamp.
    """

    success: bool = False
    stages_completed: list[IngestionStage] = field(default_factory=list)
    failed_stage: IngestionStage | None = None
    error: str | None = None
    actors_inserted: int = 0
    movies_inserted: int = 0
    links_created: int = 0
    titles_skipped: int = 0
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        """Run duration, 0.0 while still running."""
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and the health endpoint.

        Returns:
            JSON-compatible dictionary.
        """
        data = asdict(self)
        data["stages_completed"] = [stage.value for stage in self.stages_completed]
        data["failed_stage"] = self.failed_stage.value if self.failed_stage else None
        data["started_at"] = self.started_at.isoformat()
        data["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        data["duration_seconds"] = self.duration_seconds
        return data
