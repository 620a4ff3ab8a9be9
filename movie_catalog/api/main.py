"""FastAPI application entry point.

Creates and configures the movie catalog REST API: CORS for the
web client, the /movies query endpoint and the startup ingestion
hook.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from movie_catalog.api.cache import get_response_cache
from movie_catalog.api.routers import movies
from movie_catalog.api.schemas import DatabaseComponentHealth, HealthResponse
from movie_catalog.database.connection import close_database, get_database, init_database
from movie_catalog.etl.pipeline.orchestrator import run_startup_load
from movie_catalog.etl.utils import setup_logger
from movie_catalog.settings import settings

logger = setup_logger("api.main")

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates missing tables, then runs the startup ingestion hook
    and keeps its result for /health.

    Args:
        app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    init_database()
    app.state.ingestion = await run_in_threadpool(run_startup_load)
    if app.state.ingestion is not None:
        get_response_cache().clear()
    logger.info(f"API ready on {settings.api.host}:{settings.api.port}")
    yield
    close_database()


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="REST API for filtered movie and actor queries",
        lifespan=lifespan,
    )
    app.state.ingestion = None
    _configure_cors(app)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers and root endpoints.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(movies.router)
    app.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================


def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Args:
        request: Incoming request (gives access to app state).

    Returns:
        API status with database connectivity and last ingestion.
    """
    connected = get_database().check_connection()
    ingestion = getattr(request.app.state, "ingestion", None)
    return HealthResponse(
        status="healthy" if connected else "degraded",
        version=settings.api.version,
        database=DatabaseComponentHealth(connected=connected),
        ingestion=ingestion.to_dict() if ingestion is not None else None,
    )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "movie_catalog.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
