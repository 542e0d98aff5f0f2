"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

import pytest
from aksctl.utils.shell import (
    CommandFailedError,
    CommandResult,
    command_exists,
    format_command,
    run_command,
)


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success_on_zero(self) -> None:
        """A zero exit code is a success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True

    def test_failure_on_nonzero(self) -> None:
        """A non-zero exit code is not a success."""
        assert CommandResult(stdout="", stderr="", returncode=1).success is False

    def test_output_combines_streams(self) -> None:
        """output joins stripped stdout and stderr."""
        result = CommandResult(stdout="out\n", stderr="  err\n", returncode=1)

        assert result.output == "out\nerr"

    def test_output_skips_empty_streams(self) -> None:
        """output does not add blank lines for empty streams."""
        result = CommandResult(stdout="", stderr="err", returncode=1)

        assert result.output == "err"


class TestRunCommand:
    """Tests for run_command function."""

    @patch("aksctl.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns captured stdout, stderr and exit code."""
        mock_run.return_value = MagicMock(stdout="hello\n", stderr="", returncode=0)

        result = run_command(["echo", "hello"])

        assert result == CommandResult(stdout="hello\n", stderr="", returncode=0)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        assert kwargs["timeout"] == 60.0

    @patch("aksctl.utils.shell.subprocess.run")
    def test_passes_timeout_none(self, mock_run: MagicMock) -> None:
        """run_command forwards timeout=None to leave timing to the callee."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["helm", "version"], timeout=None)

        assert mock_run.call_args.kwargs["timeout"] is None

    def test_raises_file_not_found(self) -> None:
        """run_command raises FileNotFoundError for missing commands."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent_command_xyz_12345"])


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("aksctl.utils.shell.shutil.which", return_value="/usr/bin/kubectl")
    def test_true_when_on_path(self, _mock_which: MagicMock) -> None:
        """command_exists returns True when which finds the binary."""
        assert command_exists("kubectl") is True

    @patch("aksctl.utils.shell.shutil.which", return_value=None)
    def test_false_when_missing(self, _mock_which: MagicMock) -> None:
        """command_exists returns False when which finds nothing."""
        assert command_exists("kubectl") is False


class TestFormatCommand:
    """Tests for format_command function."""

    def test_plain_arguments(self) -> None:
        """Simple arguments are joined with spaces."""
        assert format_command(["kubectl", "get", "pods"]) == "kubectl get pods"

    def test_quotes_arguments_with_spaces(self) -> None:
        """Arguments with shell metacharacters are quoted."""
        rendered = format_command(["az", "--query", "[?contains(name, 'x')].name"])

        assert rendered == "az --query '[?contains(name, '\"'\"'x'\"'\"')].name'"


class TestCommandFailedError:
    """Tests for CommandFailedError."""

    def test_message_uses_stderr(self) -> None:
        """The error message names the command and its stderr."""
        result = CommandResult(stdout="", stderr="forbidden\n", returncode=1)

        error = CommandFailedError(["kubectl", "delete", "svc", "x"], result)

        assert "kubectl delete svc x" in str(error)
        assert "forbidden" in str(error)
        assert error.result is result

    def test_message_falls_back_to_exit_code(self) -> None:
        """Without output the message reports the exit code."""
        result = CommandResult(stdout="", stderr="", returncode=3)

        error = CommandFailedError(["az", "x"], result)

        assert "exit code 3" in str(error)
