"""Movie endpoints for REST API.

Provides the filtered movie listing backed by the
in-process response cache.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from movie_catalog.api.cache import ResponseCache, get_response_cache
from movie_catalog.api.schemas import MovieFilter, MovieRead, MovieSearchParams
from movie_catalog.api.services import MovieQueryService
from movie_catalog.database.connection import get_session
from movie_catalog.etl.utils import setup_logger

logger = setup_logger("api.movies")

router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
)


# =============================================================================
# DEPENDENCIES
# =============================================================================


def get_movie_filter(request: Request) -> MovieFilter:
    """Parse and validate the query string into a filter.

    Args:
        request: Incoming request.

    Returns:
        Validated movie filter.

    Raises:
        HTTPException: 400 with field-level detail on invalid values.
    """
    try:
        params = MovieSearchParams.model_validate(dict(request.query_params))
    except ValidationError as e:
        detail = [
            {"loc": ["query", *error["loc"]], "msg": error["msg"], "type": error["type"]}
            for error in e.errors()
        ]
        logger.info(f"Rejected /movies query: {detail}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from e
    return params.to_filter()


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get(
    "",
    response_model=list[MovieRead],
    summary="List movies",
    description=(
        "List movies whose title contains `title` and whose release date "
        "satisfies every given `release_date_*` bound, with their actors."
    ),
)
def list_movies(
    movie_filter: Annotated[MovieFilter, Depends(get_movie_filter)],
    db: Annotated[Session, Depends(get_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> list[dict[str, Any]]:
    """Get filtered movie list.

    Args:
        movie_filter: Validated filter.
        db: Database session.
        cache: Response cache.

    Returns:
        Projected movie rows ordered by id.
    """
    key = cache.key_for(movie_filter)
    cached = cache.get(key)
    if cached is not None:
        return cached

    movies = MovieQueryService(db).list_movies(movie_filter)
    payload = [movie.model_dump(mode="json") for movie in movies]
    cache.set(key, payload)
    return payload
