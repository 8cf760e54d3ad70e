"""Tests for waypoint.cli — CLI entrypoint and argument parsing."""

import pytest

from waypoint.cli import main


class TestCLIHelp:
    @pytest.mark.parametrize("command", ["check", "routes", "resolve", "run"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0

    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    @pytest.mark.parametrize(
        "argv",
        [["check"], ["routes"], ["resolve"], ["resolve", "routes.yaml"], ["run"]],
    )
    def test_missing_arguments_exit_two(self, argv: list[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2

    def test_run_rejects_unknown_log_level(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "routes.yaml", "--log-level", "loud"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "waypoint" in captured.out
