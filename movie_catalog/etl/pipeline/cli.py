"""Command Line Interface for the movie catalog.

Provides the CLI entry point with argument parsing and command
handling for serving the API and running ingestion operations.
"""

import argparse
import json
import sys
import traceback

from movie_catalog.database.connection import init_database
from movie_catalog.etl.pipeline.orchestrator import IngestionPipeline
from movie_catalog.etl.utils import setup_logger
from movie_catalog.settings import settings

logger = setup_logger("etl.pipeline.cli")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def _build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="movie_catalog",
        description="Movie catalog: ingestion pipeline and REST API",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.api.host, help="Bind address")
    serve.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    serve.add_argument(
        "--reload",
        action="store_true",
        default=settings.api.reload,
        help="Reload on code changes",
    )

    load = commands.add_parser("load", help="Clear and reload the catalog from the source")
    load.add_argument(
        "--workers",
        type=int,
        default=None,
        help=f"Concurrent title fetches (default: {settings.ingestion.max_workers})",
    )

    commands.add_parser("clear", help="Delete all movies, actors and associations")
    commands.add_parser("relink", help="Recompute associations from stored metadata")
    commands.add_parser("init-db", help="Create missing tables")

    return parser


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _handle_serve(args: argparse.Namespace) -> int:
    """Run the API with uvicorn.

    Args:
        args: Parsed arguments with host, port and reload.

    Returns:
        Process exit code.
    """
    import uvicorn

    uvicorn.run(
        "movie_catalog.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def _handle_load(args: argparse.Namespace) -> int:
    """Run a full ingestion.

    Args:
        args: Parsed arguments with workers.

    Returns:
        0 on success, 1 on a failed run.
    """
    init_database()
    result = IngestionPipeline(max_workers=args.workers).run()
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


def _handle_clear(_args: argparse.Namespace) -> int:
    """Empty the catalog.

    Returns:
        Process exit code.
    """
    init_database()
    deleted = IngestionPipeline().clear_catalog()
    logger.info(f"✅ Catalog cleared: {deleted} rows deleted")
    return 0


def _handle_relink(_args: argparse.Namespace) -> int:
    """Recompute associations from stored metadata.

    Returns:
        Process exit code.
    """
    init_database()
    IngestionPipeline().relink_from_metadata()
    return 0


def _handle_init_db(_args: argparse.Namespace) -> int:
    """Create missing tables.

    Returns:
        Process exit code.
    """
    init_database()
    logger.info("✅ Database tables ready")
    return 0


_HANDLERS = {
    "serve": _handle_serve,
    "load": _handle_load,
    "clear": _handle_clear,
    "relink": _handle_relink,
    "init-db": _handle_init_db,
}


def _handle_fatal_error(error: Exception) -> None:
    """Handle fatal command error.

    Args:
        error: Exception that caused the failure.
    """
    print(f"\n❌ FATAL ERROR: {error}", file=sys.stderr)
    traceback.print_exc()
    logger.error(f"❌ Command failed: {error}")
    sys.exit(1)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Args:
        argv: Arguments (defaults to ``sys.argv[1:]``).
    """
    try:
        args = _build_parser().parse_args(argv)
        sys.exit(_HANDLERS[args.command](args))
    except KeyboardInterrupt:
        logger.warning("⚠️ Interrupted by user")
        sys.exit(130)
    except Exception as e:
        _handle_fatal_error(e)


if __name__ == "__main__":
    main()
