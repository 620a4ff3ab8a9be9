"""Pydantic schemas for API request/response validation.

Defines the movie filter, the query-string parameters it is
built from, and the projected movie rows returned by /movies.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# HEALTH
# =============================================================================


class DatabaseComponentHealth(BaseModel):
    """Database connection health status."""

    connected: bool = False


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    database: DatabaseComponentHealth = Field(default_factory=DatabaseComponentHealth)
    ingestion: dict[str, Any] | None = Field(
        default=None,
        description="Result of the last ingestion run in this process",
    )


# =============================================================================
# FILTER
# =============================================================================


class ComparisonOp(str, Enum):
    """Release date comparison operators."""

    LT = "lt"
    LTE = "lte"
    EQ = "eq"
    GTE = "gte"
    GT = "gt"


class ReleaseDateComparison(BaseModel):
    """One bound on the release date."""

    model_config = ConfigDict(frozen=True)

    op: ComparisonOp
    value: date


class MovieFilter(BaseModel):
    """Validated movie query.

    All conditions are combined with AND.

    Attributes:
        title_contains: Substring the title must contain.
        release_date: Release date comparisons.
    """

    model_config = ConfigDict(frozen=True)

    title_contains: str | None = None
    release_date: list[ReleaseDateComparison] = Field(default_factory=list)

    def cache_key(self) -> str:
        """Stable string identifying this filter.

        Returns:
            JSON representation of the filter.
        """
        return self.model_dump_json()


# =============================================================================
# QUERY PARAMETERS
# =============================================================================


_DATE_FIELDS: tuple[tuple[str, ComparisonOp], ...] = (
    ("release_date_gt", ComparisonOp.GT),
    ("release_date_gte", ComparisonOp.GTE),
    ("release_date_eq", ComparisonOp.EQ),
    ("release_date_lte", ComparisonOp.LTE),
    ("release_date_lt", ComparisonOp.LT),
)


class MovieSearchParams(BaseModel):
    """Query-string parameters of GET /movies.

    Dates accept ``YYYY-MM-DD`` or an ISO 8601 datetime such as
    ``2020-01-01T00:00:00.000Z``; datetimes with an offset are
    converted to UTC, then only the date part is kept.
    Unknown parameters are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=500)
    release_date_gt: date | None = None
    release_date_gte: date | None = None
    release_date_eq: date | None = None
    release_date_lte: date | None = None
    release_date_lt: date | None = None

    @field_validator("title", mode="before")
    @classmethod
    def blank_title_to_none(cls, v: Any) -> Any:
        """Treat an empty title as no title filter."""
        if isinstance(v, str) and not v:
            return None
        return v

    @field_validator(
        "release_date_gt",
        "release_date_gte",
        "release_date_eq",
        "release_date_lte",
        "release_date_lt",
        mode="before",
    )
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Accept plain dates and ISO datetimes.

        Raises:
            ValueError: If the string is not an ISO 8601 date or datetime.
        """
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return None
        try:
            parsed = datetime.fromisoformat(v.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid date '{v}', expected YYYY-MM-DD or ISO 8601") from e
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date()

    def to_filter(self) -> MovieFilter:
        """Build the movie filter.

        Returns:
            MovieFilter with one comparison per given date bound.
        """
        comparisons = [
            ReleaseDateComparison(op=op, value=getattr(self, name))
            for name, op in _DATE_FIELDS
            if getattr(self, name) is not None
        ]
        return MovieFilter(title_contains=self.title, release_date=comparisons)


# =============================================================================
# MOVIE SCHEMAS
# =============================================================================


class ActorSummary(BaseModel):
    """Actor as embedded in a movie row."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    birthdate: date | None = None


class MovieRead(BaseModel):
    """Projected movie row.

    Source identifiers and stored metadata are never exposed.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    release_date: date
    image: str
    actors: list[ActorSummary] = Field(default_factory=list)
