"""Unit tests for MovieQueryService."""

from datetime import date

import pytest

from movie_catalog.api.schemas import ComparisonOp, MovieFilter, ReleaseDateComparison
from movie_catalog.api.services import MovieQueryService
from movie_catalog.database import ActorRepository, DatabaseConnection, MovieRepository


def _movie(source_id: str, title: str, released: date) -> dict:
    return {
        "source_id": source_id,
        "title": title,
        "release_date": released,
        "image": f"https://img.example/{source_id}.jpg",
        "source_metadata": {"id": source_id},
    }


@pytest.fixture
def seeded(db: DatabaseConnection) -> DatabaseConnection:
    """Three movies, the second linked to two actors."""
    with db.session() as session:
        movies = MovieRepository(session).bulk_insert(
            [
                _movie("tt1", "Alien", date(1979, 5, 25)),
                _movie("tt2", "Aliens", date(1986, 7, 18)),
                _movie("tt3", "The Thing", date(1982, 6, 25)),
            ]
        )
        actors = ActorRepository(session).bulk_insert(
            [
                {"source_id": "nm1", "name": "Sigourney Weaver", "birthdate": date(1949, 1, 1), "source_metadata": {}},
                {"source_id": "nm2", "name": "Michael Biehn", "birthdate": None, "source_metadata": {}},
            ]
        )
        repo = ActorRepository(session)
        for actor in actors:
            repo.link_movies(actor.id, [movies[1].id])
    return db


def _titles(db: DatabaseConnection, movie_filter: MovieFilter) -> list[str]:
    with db.session() as session:
        return [m.title for m in MovieQueryService(session).list_movies(movie_filter)]


@pytest.mark.unit
class TestMovieQueryService:
    @staticmethod
    def test_no_filter_returns_all(seeded: DatabaseConnection) -> None:
        assert _titles(seeded, MovieFilter()) == ["Alien", "Aliens", "The Thing"]

    @staticmethod
    def test_title_contains(seeded: DatabaseConnection) -> None:
        assert _titles(seeded, MovieFilter(title_contains="Alien")) == ["Alien", "Aliens"]

    @staticmethod
    @pytest.mark.parametrize(
        "op,expected",
        [
            (ComparisonOp.LT, ["Alien"]),
            (ComparisonOp.LTE, ["Alien", "The Thing"]),
            (ComparisonOp.EQ, ["The Thing"]),
            (ComparisonOp.GTE, ["Aliens", "The Thing"]),
            (ComparisonOp.GT, ["Aliens"]),
        ],
    )
    def test_release_date_operators(
        seeded: DatabaseConnection,
        op: ComparisonOp,
        expected: list[str],
    ) -> None:
        movie_filter = MovieFilter(
            release_date=[ReleaseDateComparison(op=op, value=date(1982, 6, 25))]
        )
        assert _titles(seeded, movie_filter) == expected

    @staticmethod
    def test_conditions_are_combined(seeded: DatabaseConnection) -> None:
        movie_filter = MovieFilter(
            title_contains="Alien",
            release_date=[ReleaseDateComparison(op=ComparisonOp.GT, value=date(1980, 1, 1))],
        )
        assert _titles(seeded, movie_filter) == ["Aliens"]

    @staticmethod
    def test_projection_includes_actors(seeded: DatabaseConnection) -> None:
        with seeded.session() as session:
            rows = MovieQueryService(session).list_movies(MovieFilter(title_contains="Aliens"))

        (row,) = rows
        assert row.release_date == date(1986, 7, 18)
        assert row.image == "https://img.example/tt2.jpg"
        assert [(a.name, a.birthdate) for a in row.actors] == [
            ("Sigourney Weaver", date(1949, 1, 1)),
            ("Michael Biehn", None),
        ]
        assert "source_id" not in row.model_dump()

    @staticmethod
    def test_build_criteria_count() -> None:
        movie_filter = MovieFilter(
            title_contains="x",
            release_date=[
                ReleaseDateComparison(op=ComparisonOp.GTE, value=date(2000, 1, 1)),
                ReleaseDateComparison(op=ComparisonOp.LT, value=date(2001, 1, 1)),
            ],
        )
        assert len(MovieQueryService.build_criteria(movie_filter)) == 3
