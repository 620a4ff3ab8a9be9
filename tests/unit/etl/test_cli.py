"""Unit tests for the command line interface."""

from unittest.mock import MagicMock, patch

import pytest

from movie_catalog.etl.pipeline import cli
from movie_catalog.etl.types import IngestionResult


@pytest.mark.unit
class TestCLI:
    @staticmethod
    def test_subcommand_required() -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2

    @staticmethod
    @pytest.mark.parametrize("success,code", [(True, 0), (False, 1)])
    def test_load_exit_code(success: bool, code: int) -> None:
        pipeline = MagicMock()
        pipeline.run.return_value = IngestionResult(success=success)

        with (
            patch.object(cli, "init_database"),
            patch.object(cli, "IngestionPipeline", return_value=pipeline) as pipeline_cls,
            pytest.raises(SystemExit) as exc_info,
        ):
            cli.main(["load", "--workers", "3"])

        pipeline_cls.assert_called_once_with(max_workers=3)
        assert exc_info.value.code == code

    @staticmethod
    def test_clear() -> None:
        pipeline = MagicMock()
        pipeline.clear_catalog.return_value = 7

        with (
            patch.object(cli, "init_database"),
            patch.object(cli, "IngestionPipeline", return_value=pipeline),
            pytest.raises(SystemExit) as exc_info,
        ):
            cli.main(["clear"])

        pipeline.clear_catalog.assert_called_once_with()
        assert exc_info.value.code == 0

    @staticmethod
    def test_relink() -> None:
        pipeline = MagicMock()

        with (
            patch.object(cli, "init_database"),
            patch.object(cli, "IngestionPipeline", return_value=pipeline),
            pytest.raises(SystemExit),
        ):
            cli.main(["relink"])

        pipeline.relink_from_metadata.assert_called_once_with()

    @staticmethod
    def test_fatal_error_exits_1() -> None:
        with (
            patch.object(cli, "init_database", side_effect=ConnectionError("db down")),
            pytest.raises(SystemExit) as exc_info,
        ):
            cli.main(["init-db"])

        assert exc_info.value.code == 1
