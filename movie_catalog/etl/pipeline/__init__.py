"""Ingestion pipeline package.

Public API:
    - IngestionPipeline: clear, fetch, insert and link the catalog
    - run_ingestion: run the pipeline with the shared connection
    - run_startup_load: LOAD_ON_START hook
    - main: CLI entry point
"""

from movie_catalog.etl.pipeline.cli import main
from movie_catalog.etl.pipeline.orchestrator import (
    IngestionAbortedError,
    IngestionPipeline,
    run_ingestion,
    run_startup_load,
)

__all__ = [
    "IngestionPipeline",
    "IngestionAbortedError",
    "run_ingestion",
    "run_startup_load",
    "main",
]
