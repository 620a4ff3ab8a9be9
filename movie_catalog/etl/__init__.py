"""Ingestion of actors and movies from the external source into the catalog."""
