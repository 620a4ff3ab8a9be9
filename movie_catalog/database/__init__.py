"""Database package for the movie catalog.

Provides database connection management, ORM models, and repositories.

Usage:
    from movie_catalog.database import get_database, MovieRepository

    db = get_database()
    with db.session() as session:
        movies = MovieRepository(session).find_many()
"""

from movie_catalog.database.connection import (
    DatabaseConnection,
    close_database,
    get_database,
    get_session,
    init_database,
    set_database,
)
from movie_catalog.database.models import (
    SENTINEL_RELEASE_DATE,
    Actor,
    ActorMovie,
    Base,
    Movie,
)
from movie_catalog.database.repositories import (
    ActorRepository,
    BaseRepository,
    InsertedRow,
    MovieRepository,
)

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "set_database",
    "get_session",
    "init_database",
    "close_database",
    # Models
    "Base",
    "Actor",
    "Movie",
    "ActorMovie",
    "SENTINEL_RELEASE_DATE",
    # Repositories
    "BaseRepository",
    "InsertedRow",
    "ActorRepository",
    "MovieRepository",
]
