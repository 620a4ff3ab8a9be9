"""Movies database API data types.

TypedDict definitions for raw API responses and the
client-level shapes extracted from them.
"""

from typing import Any, NotRequired, TypedDict

# =============================================================================
# RAW API RESPONSES
# =============================================================================


class RawActorData(TypedDict):
    """Actor record from the /actors endpoint."""

    _id: NotRequired[str]
    nconst: str
    primaryName: str
    birthYear: int | None
    deathYear: NotRequired[int | None]
    primaryProfession: NotRequired[str]
    knownForTitles: str


class RawActorsResponse(TypedDict):
    """Paginated /actors response."""

    page: NotRequired[int]
    next: NotRequired[str | None]
    entries: NotRequired[int]
    results: list[RawActorData]


class RawImageData(TypedDict):
    """Primary image of a title."""

    id: NotRequired[str]
    width: NotRequired[int]
    height: NotRequired[int]
    url: str


class RawTextData(TypedDict):
    """Wrapped text value (titleText, originalTitleText)."""

    text: str


class RawReleaseDateData(TypedDict):
    """Release date; day and month may be missing."""

    year: int | None
    month: int | None
    day: int | None


class RawTitleData(TypedDict):
    """Title record from the /titles/{id} endpoint."""

    _id: NotRequired[str]
    id: str
    primaryImage: RawImageData | None
    titleType: NotRequired[dict[str, Any]]
    titleText: RawTextData
    originalTitleText: NotRequired[RawTextData]
    releaseYear: NotRequired[dict[str, Any] | None]
    releaseDate: RawReleaseDateData | None


class RawTitleResponse(TypedDict):
    """Single-title response; ``results`` is null for unknown ids."""

    results: RawTitleData | None


# =============================================================================
# CLIENT OUTPUT
# =============================================================================


class SourceActor(TypedDict):
    """Actor extracted from an actors page."""

    source_id: str
    name: str
    birth_year: int | None
    known_for_titles: list[str]
    raw: dict[str, Any]


class SourceTitle(TypedDict):
    """Title extracted from a single-title response."""

    source_id: str
    title: str
    image: str
    release_year: int | None
    release_month: int | None
    release_day: int | None
    raw: dict[str, Any]
