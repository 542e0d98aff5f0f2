"""Unit tests for the CliTool base class."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from aksctl.tools.base import TIMEOUT_RETURNCODE, CliTool
from aksctl.utils.shell import CommandFailedError, CommandResult


class FakeTool(CliTool):
    """Minimal concrete tool for exercising the base class."""

    @property
    def binary(self) -> str:
        return "fake"

    def do(self, *args: str, check: bool = False, quiet: bool = False) -> CommandResult:
        return self._invoke(list(args), check=check, quiet=quiet)

    def names(self) -> list[str]:
        return self._query_names(["list"])


class TestInvoke:
    """Tests for CliTool._invoke."""

    def test_prefixes_binary(self) -> None:
        """The binary name is prepended to the arguments."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)
            FakeTool().do("a", "b")

        assert mock_run.call_args[0][0] == ["fake", "a", "b"]

    def test_dry_run_executes_nothing(self) -> None:
        """In dry-run mode run_command is never called."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            result = FakeTool(dry_run=True).do("delete", "x", check=True)

        mock_run.assert_not_called()
        assert result.success

    def test_echo_hook_receives_command(self) -> None:
        """The echo hook sees the full command and dry-run flag."""
        echo = MagicMock()
        FakeTool(dry_run=True, echo=echo).do("get")

        echo.assert_called_once_with(["fake", "get"], True)

    def test_quiet_skips_echo(self) -> None:
        """Quiet probes are not echoed."""
        echo = MagicMock()
        FakeTool(dry_run=True, echo=echo).do("probe", quiet=True)

        echo.assert_not_called()

    def test_check_raises_on_failure(self) -> None:
        """check=True raises CommandFailedError on non-zero exit."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="boom", returncode=1)

            with pytest.raises(CommandFailedError, match="boom"):
                FakeTool().do("delete", check=True)

    def test_failure_without_check_returns_result(self) -> None:
        """Without check the failing result is returned."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="boom", returncode=2)

            result = FakeTool().do("get")

        assert result.returncode == 2

    def test_timeout_becomes_failed_result(self) -> None:
        """A subprocess timeout is reported as a failed result."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.side_effect = subprocess.TimeoutExpired(cmd=["fake"], timeout=120.0)

            result = FakeTool().do("get")

        assert result.returncode == TIMEOUT_RETURNCODE
        assert "timed out" in result.stderr


class TestQueryNames:
    """Tests for CliTool._query_names."""

    def test_splits_lines(self) -> None:
        """Each non-empty output line is a name."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="a\n\n b \n", stderr="", returncode=0)

            assert FakeTool().names() == ["a", "b"]

    def test_failure_yields_empty(self) -> None:
        """A failing query yields no names."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="denied", returncode=1)

            assert FakeTool().names() == []

    def test_dry_run_yields_empty(self) -> None:
        """Dry-run queries run nothing and yield no names."""
        with patch("aksctl.tools.base.run_command") as mock_run:
            assert FakeTool(dry_run=True).names() == []

        mock_run.assert_not_called()


class TestAvailability:
    """Tests for CliTool.is_available."""

    def test_checks_binary(self) -> None:
        """is_available looks up the binary on PATH."""
        with patch("aksctl.tools.base.command_exists", return_value=True) as mock_exists:
            assert FakeTool().is_available() is True

        mock_exists.assert_called_once_with("fake")
