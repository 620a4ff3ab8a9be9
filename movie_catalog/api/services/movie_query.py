"""Movie query service.

Translates a validated MovieFilter into store criteria and
projects the matching rows for the /movies endpoint.
"""

import operator
from collections.abc import Callable
from datetime import date
from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.orm import Session

from movie_catalog.api.schemas import ComparisonOp, MovieFilter, MovieRead
from movie_catalog.database.models import Movie
from movie_catalog.database.repositories import MovieRepository

_OPERATORS: dict[ComparisonOp, Callable[[Any, date], ColumnElement[bool]]] = {
    ComparisonOp.LT: operator.lt,
    ComparisonOp.LTE: operator.le,
    ComparisonOp.EQ: operator.eq,
    ComparisonOp.GTE: operator.ge,
    ComparisonOp.GT: operator.gt,
}


class MovieQueryService:
    """Filtered movie listing.

    Attributes:
        _movies: Movie repository bound to the request session.
    """

    def __init__(self, session: Session) -> None:
        """Initialize with a session.

        Args:
            session: SQLAlchemy session.
        """
        self._movies = MovieRepository(session)

    def list_movies(self, movie_filter: MovieFilter) -> list[MovieRead]:
        """List movies matching every condition of the filter.

        Args:
            movie_filter: Validated filter.

        Returns:
            Projected rows ordered by id.
        """
        movies = self._movies.search(*self.build_criteria(movie_filter))
        return [MovieRead.model_validate(movie) for movie in movies]

    @staticmethod
    def build_criteria(movie_filter: MovieFilter) -> list[ColumnElement[bool]]:
        """Build SQLAlchemy criteria for a filter.

        Args:
            movie_filter: Validated filter.

        Returns:
            Boolean expressions to combine with AND.
        """
        criteria: list[ColumnElement[bool]] = []
        if movie_filter.title_contains:
            criteria.append(Movie.title.contains(movie_filter.title_contains, autoescape=True))
        for comparison in movie_filter.release_date:
            criteria.append(_OPERATORS[comparison.op](Movie.release_date, comparison.value))
        return criteria
