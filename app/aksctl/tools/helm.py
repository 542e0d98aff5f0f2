"""helm wrapper."""

from aksctl.tools.base import CliTool
from aksctl.utils.shell import CommandResult


class Helm(CliTool):
    """Wrapper around the helm CLI."""

    @property
    def binary(self) -> str:
        """Return helm as the wrapped executable."""
        return "helm"

    def upgrade_install(
        self,
        release: str,
        chart: str,
        namespace: str,
        values: dict[str, str],
        timeout: str,
    ) -> CommandResult:
        """Install or upgrade a release and wait until its resources are ready.

        Args:
            release: Release name.
            chart: Chart path or reference.
            namespace: Target namespace; created if missing.
            values: Values passed as ``--set key=value`` pairs, in order.
            timeout: Helm duration string for ``--timeout`` (e.g. "5m").

        Returns:
            CommandResult of the helm invocation. Helm enforces the timeout.
        """
        args = [
            "upgrade",
            "--install",
            release,
            chart,
            "--namespace",
            namespace,
            "--create-namespace",
        ]
        for key, value in values.items():
            args.extend(["--set", f"{key}={value}"])
        args.extend(["--wait", "--timeout", timeout])
        return self._invoke(args, timeout=None)
