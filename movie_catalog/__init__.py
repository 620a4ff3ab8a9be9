"""Movie catalog: actor/movie ingestion and filtered movie API."""

__version__ = "1.0.0"
