"""Allow ``python -m movie_catalog``."""

from movie_catalog.etl.pipeline.cli import main

if __name__ == "__main__":
    main()
