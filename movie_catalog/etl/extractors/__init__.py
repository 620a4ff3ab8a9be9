"""ETL extractors."""
