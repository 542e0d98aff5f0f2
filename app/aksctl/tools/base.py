"""Abstract base class for wrapped cluster CLIs.

This module defines the CliTool interface that the kubectl, az and helm
wrappers implement.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable

from aksctl.utils.shell import CommandFailedError, CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# Called with (args, dry_run) for every command a tool is about to run.
EchoHook = Callable[[list[str], bool], None]

# Default timeout for a single CLI invocation in seconds
DEFAULT_TIMEOUT = 120.0

# Exit code reported when the subprocess timeout fires (as coreutils timeout does)
TIMEOUT_RETURNCODE = 124


class CliTool(ABC):
    """Abstract base class for all CLI wrappers.

    Tools build argument vectors for one executable and run them through
    :func:`run_command`. In dry-run mode no command is executed at all;
    each one is only echoed and a successful empty result is returned.

    Attributes:
        dry_run: If True, echo commands without executing them.
        echo: Optional hook invoked with every command before it runs.

    Example:
        >>> kubectl = Kubectl(dry_run=True)
        >>> kubectl.delete("deployment", "myapp").success
        True
    """

    def __init__(self, dry_run: bool = False, echo: EchoHook | None = None) -> None:
        """Initialize the tool.

        Args:
            dry_run: If True, only echo commands without executing them.
            echo: Hook called with (args, dry_run) for each command.
        """
        self._dry_run = dry_run
        self._echo = echo

    @property
    def dry_run(self) -> bool:
        """Check if tool is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def binary(self) -> str:
        """Return the executable this tool wraps."""

    def is_available(self) -> bool:
        """Check if the executable is on PATH."""
        return command_exists(self.binary)

    def _invoke(
        self,
        args: list[str],
        *,
        check: bool = False,
        timeout: float | None = DEFAULT_TIMEOUT,
        quiet: bool = False,
    ) -> CommandResult:
        """Echo and run a command for this tool.

        Args:
            args: Arguments after the executable name.
            check: If True, raise CommandFailedError on non-zero exit.
            timeout: Seconds to wait; None leaves the timeout to the wrapped CLI.
            quiet: If True, skip the echo hook (internal probes).

        Returns:
            CommandResult of the execution, or an empty success in dry-run mode.

        Raises:
            CommandFailedError: If check=True and the command fails.
        """
        full_args = [self.binary, *args]

        if self._echo is not None and not quiet:
            self._echo(full_args, self._dry_run)

        if self._dry_run:
            logger.debug("Dry-run, not executing: %s", full_args)
            return CommandResult(stdout="", stderr="", returncode=0)

        logger.info("Executing: %s", " ".join(full_args))
        try:
            result = run_command(full_args, timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Timed out after %ss: %s", timeout, " ".join(full_args))
            result = CommandResult(
                stdout="",
                stderr=f"timed out after {timeout:g}s",
                returncode=TIMEOUT_RETURNCODE,
            )
        logger.debug("Exit code %d for %s", result.returncode, full_args[:3])

        if check and not result.success:
            raise CommandFailedError(full_args, result)
        return result

    def _query_names(self, args: list[str]) -> list[str]:
        """Run a query that prints one name per line and return the names.

        Failures and dry-run yield an empty list.
        """
        if self._dry_run:
            return []
        result = self._invoke(args, quiet=True)
        if not result.success:
            logger.warning("Query failed (%s): %s", " ".join(args[:3]), result.stderr.strip())
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]
