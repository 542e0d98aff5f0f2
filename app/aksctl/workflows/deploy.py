"""Application deployment with Helm.

Installs or upgrades an application's Helm release on the cluster and
waits for its rollout. A failed install or a rollout that does not finish
in time is reported as an error; nothing is rolled back.
"""

import logging
from collections.abc import Callable

from aksctl.core.config import ClusterConfig
from aksctl.tools.az import AzureCli
from aksctl.tools.helm import Helm
from aksctl.tools.kubectl import Kubectl
from aksctl.utils.formatting import (
    console,
    print_command,
    print_info,
    print_output,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)

# Asks a yes/no question and returns the answer.
Confirm = Callable[[str], bool]


class DeployError(Exception):
    """Raised when a deployment cannot start or does not complete."""


class DeployRunner:
    """Deploys one application to the cluster.

    Attributes:
        app_name: Application and Helm release name.
        image_tag: Image tag to deploy.
        hostname: Public hostname routed to the application.
        namespace: Target namespace.
        chart_path: Helm chart to install.
    """

    def __init__(
        self,
        app_name: str,
        config: ClusterConfig,
        confirm: Confirm,
        *,
        image_tag: str = "latest",
        hostname: str | None = None,
        namespace: str | None = None,
        chart_path: str | None = None,
    ) -> None:
        if not app_name:
            msg = "App name cannot be empty"
            raise ValueError(msg)
        self.app_name = app_name
        self.config = config
        self.image_tag = image_tag
        self.hostname = hostname or config.hostname_for(app_name)
        self.namespace = namespace or config.namespace
        self.chart_path = chart_path or config.chart_path
        self._confirm = confirm
        self._kubectl = Kubectl(echo=print_command)
        self._helm = Helm(echo=print_command)
        self._az = AzureCli()

    @property
    def image(self) -> str:
        """Fully qualified image repository."""
        return self.config.image_for(self.app_name)

    def helm_values(self) -> dict[str, str]:
        """Values passed to the application chart."""
        return {
            "app.name": self.app_name,
            "app.image": self.image,
            "app.tag": self.image_tag,
            "app.hostname": self.hostname,
        }

    def run(self) -> None:
        """Run the deployment.

        Raises:
            DeployError: If a prerequisite is missing, the cluster is
                unreachable, the user declines to continue, Helm fails or
                the rollout does not complete.
        """
        self._check_prerequisites()
        self._check_cluster()
        self._check_image()

        print_info(f"Deploying {self.app_name} to namespace {self.namespace}...")
        result = self._helm.upgrade_install(
            self.app_name,
            self.chart_path,
            self.namespace,
            self.helm_values(),
            self.config.helm_timeout,
        )
        if result.stdout.strip():
            print_output(result.stdout)
        if not result.success:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise DeployError(f"Helm release {self.app_name} failed: {detail}")

        print_info("Verifying deployment...")
        rollout = self._kubectl.rollout_status(
            self.app_name, self.namespace, self.config.rollout_timeout
        )
        if rollout.stdout.strip():
            print_output(rollout.stdout)
        if not rollout.success:
            detail = rollout.stderr.strip() or f"exit code {rollout.returncode}"
            msg = (
                f"Rollout of deployment/{self.app_name} did not complete within "
                f"{self.config.rollout_timeout}: {detail}"
            )
            raise DeployError(msg)

        print_info("Pod status:")
        pods = self._kubectl.get_pods(self.namespace, self.app_name)
        print_output(pods.stdout)

        self._print_success()

    def _check_prerequisites(self) -> None:
        for tool in (self._kubectl, self._helm):
            if not tool.is_available():
                raise DeployError(f"{tool.binary} is required but not installed")

    def _check_cluster(self) -> None:
        cfg = self.config
        print_info("Verifying cluster connection...")
        if not self._kubectl.cluster_info():
            msg = (
                "Cannot connect to cluster. Run: az aks get-credentials "
                f"--resource-group {cfg.resource_group} --name {cfg.cluster_name}"
            )
            raise DeployError(msg)

        context = self._kubectl.current_context()
        if context != cfg.cluster_name:
            current = f"'{context}'" if context else "no current context"
            print_warning(f"kubectl is using {current}, not '{cfg.cluster_name}'")
            if not self._confirm("Continue anyway?"):
                raise DeployError(f"Aborted: kubectl context is not '{cfg.cluster_name}'")

    def _check_image(self) -> None:
        reference = f"{self.image}:{self.image_tag}"
        print_info(f"Checking image {reference}...")
        if not self._az.is_available():
            logger.debug("az not available, skipping image check")
            return
        if not self._az.acr_image_exists(self.config.registry, self.app_name, self.image_tag):
            print_warning(
                f"Image {self.app_name}:{self.image_tag} not found in ACR. Proceeding anyway..."
            )

    def _print_success(self) -> None:
        console.print()
        print_success("Deployment successful!")
        console.print(f"\nYour app is available at: https://{self.hostname}", soft_wrap=True)
        console.print("\nUseful commands:")
        console.print(f"  kubectl logs -l app={self.app_name} -f", soft_wrap=True)
        console.print(f"  kubectl describe deployment {self.app_name}", soft_wrap=True)
        console.print(f"  curl -I https://{self.hostname}", soft_wrap=True)
