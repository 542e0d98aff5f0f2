"""kubectl wrapper.

Builds and runs the kubectl invocations used by validation, deployment
and decommissioning.
"""

from aksctl.tools.base import CliTool
from aksctl.utils.shell import CommandResult

# Resource kinds listed when discovering an application's cluster footprint
DISCOVERY_KINDS = "all,virtualservices,secretproviderclass,hpa"


class Kubectl(CliTool):
    """Wrapper around the kubectl CLI."""

    @property
    def binary(self) -> str:
        """Return kubectl as the wrapped executable."""
        return "kubectl"

    def cluster_info(self) -> bool:
        """Check that the current context can reach its API server."""
        return self._invoke(["cluster-info"], timeout=30.0, quiet=True).success

    def current_context(self) -> str | None:
        """Return the current kubeconfig context name, or None if unset."""
        result = self._invoke(["config", "current-context"], timeout=10.0, quiet=True)
        if not result.success:
            return None
        return result.stdout.strip() or None

    def apply_client_dry_run(self, path: str) -> CommandResult:
        """Validate a manifest file client-side without touching the cluster."""
        return self._invoke(["apply", "--dry-run=client", "-f", path], quiet=True)

    def get_by_label(self, app_name: str, kinds: str = DISCOVERY_KINDS) -> CommandResult:
        """List resource names labelled ``app=<app_name>``."""
        return self._invoke(["get", kinds, "-l", f"app={app_name}", "-o", "name"])

    def get_all(self, app_name: str) -> CommandResult:
        """List the standard workload resources labelled ``app=<app_name>``."""
        return self._invoke(["get", "all", "-l", f"app={app_name}"])

    def delete(self, kind: str, name: str) -> CommandResult:
        """Delete one resource, succeeding if it is already gone.

        Raises:
            CommandFailedError: If kubectl reports an error.
        """
        return self._invoke(["delete", kind, name, "--ignore-not-found=true"], check=True)

    def rollout_status(self, deployment: str, namespace: str, timeout: str) -> CommandResult:
        """Wait for a deployment rollout; kubectl enforces the timeout."""
        return self._invoke(
            [
                "rollout",
                "status",
                f"deployment/{deployment}",
                "-n",
                namespace,
                f"--timeout={timeout}",
            ],
            timeout=None,
        )

    def get_pods(self, namespace: str, app_name: str) -> CommandResult:
        """List pods of an application."""
        return self._invoke(["get", "pods", "-n", namespace, "-l", f"app={app_name}"])
