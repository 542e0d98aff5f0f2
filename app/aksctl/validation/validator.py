"""Pre-deployment validation of Kubernetes manifests.

Runs four passes over every YAML file found under a path:

1. Syntax: ``kubectl apply --dry-run=client`` per file.
2. Deployments: Istio sidecar, resource limits, probes, non-root
   security context, approved registry.
3. VirtualServices: shared ingress gateway, hostname under the zone.
4. Common mistakes: new Gateways, Certificates for the wildcard zone,
   plausible hard-coded secrets.

Each check produces PASS, WARN or FAIL; any FAIL fails the run.
"""

import logging
from pathlib import Path

from aksctl.core.config import ClusterConfig
from aksctl.models.check import CheckLevel, ValidationReport
from aksctl.tools.kubectl import Kubectl
from aksctl.validation.checks import (
    deployment_checks,
    find_secret_line,
    has_kind,
    resource_name,
    virtual_service_checks,
)
from aksctl.validation.discovery import find_manifests

logger = logging.getLogger(__name__)

CATEGORY_INPUT = "input"
CATEGORY_SYNTAX = "syntax"
CATEGORY_DEPLOYMENT = "deployment"
CATEGORY_VIRTUAL_SERVICE = "virtualservice"
CATEGORY_MISTAKES = "mistakes"

# Lines of kubectl output kept for a syntax failure
SYNTAX_DETAIL_LINES = 5


class ManifestValidator:
    """Validates a directory or file of Kubernetes manifests.

    Attributes:
        config: Cluster configuration providing registry, gateway and zone.
        check_syntax: Whether to run the kubectl client-side dry-run pass.
    """

    def __init__(
        self,
        config: ClusterConfig,
        kubectl: Kubectl | None = None,
        check_syntax: bool = True,
    ) -> None:
        self.config = config
        self.check_syntax = check_syntax
        self._kubectl = kubectl or Kubectl()

    def validate(self, path: Path) -> ValidationReport:
        """Validate all manifests under a path.

        Args:
            path: Manifest file or directory.

        Returns:
            ValidationReport with every check result.
        """
        report = ValidationReport(path=str(path))

        if not path.exists():
            report.add(CheckLevel.FAIL, f"Path does not exist: {path}", category=CATEGORY_INPUT)
            return report

        files = find_manifests(path)
        if not files:
            report.add(CheckLevel.FAIL, f"No YAML files found in {path}", category=CATEGORY_INPUT)
            return report

        report.files = [str(f) for f in files]
        texts = self._read_all(files, report)
        logger.debug("Validating %d manifest file(s) under %s", len(texts), path)

        if self.check_syntax:
            self._check_syntax(list(texts), report)
        self._check_deployments(texts, report)
        self._check_virtual_services(texts, report)
        self._check_common_mistakes(texts, report)

        return report

    def _read_all(self, files: list[Path], report: ValidationReport) -> dict[str, str]:
        texts: dict[str, str] = {}
        for file in files:
            try:
                texts[str(file)] = file.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                report.add(
                    CheckLevel.FAIL,
                    f"Cannot read {file}: {e}",
                    file=str(file),
                    category=CATEGORY_INPUT,
                )
        return texts

    def _check_syntax(self, files: list[str], report: ValidationReport) -> None:
        if not self._kubectl.is_available():
            report.add(
                CheckLevel.WARN,
                "kubectl not available, skipping syntax checks",
                category=CATEGORY_SYNTAX,
            )
            return

        for file in files:
            result = self._kubectl.apply_client_dry_run(file)
            if result.success:
                report.add(CheckLevel.PASS, f"Valid YAML: {file}", file, category=CATEGORY_SYNTAX)
            else:
                detail = "\n".join(result.output.splitlines()[:SYNTAX_DETAIL_LINES])
                report.add(
                    CheckLevel.FAIL,
                    f"Invalid YAML: {file}",
                    file,
                    detail=detail or None,
                    category=CATEGORY_SYNTAX,
                )

    def _check_deployments(self, texts: dict[str, str], report: ValidationReport) -> None:
        checks = deployment_checks(self.config)
        for file, text in texts.items():
            if not has_kind(text, "Deployment"):
                continue
            name = resource_name(text)
            report.extend([check.run(text, name, file, CATEGORY_DEPLOYMENT) for check in checks])

    def _check_virtual_services(self, texts: dict[str, str], report: ValidationReport) -> None:
        checks = virtual_service_checks(self.config)
        for file, text in texts.items():
            if not has_kind(text, "VirtualService"):
                continue
            name = resource_name(text)
            report.extend(
                [check.run(text, name, file, CATEGORY_VIRTUAL_SERVICE) for check in checks]
            )

    def _check_common_mistakes(self, texts: dict[str, str], report: ValidationReport) -> None:
        zone = self.config.dns_zone
        for file, text in texts.items():
            if has_kind(text, "Gateway") and self.config.gateway_name not in text:
                report.add(
                    CheckLevel.WARN,
                    f"Creating new Gateway in {file} - consider using shared gateway",
                    file,
                    category=CATEGORY_MISTAKES,
                )

            if has_kind(text, "Certificate") and zone in text:
                report.add(
                    CheckLevel.WARN,
                    f"Creating Certificate for *.{zone} in {file} - wildcard already exists",
                    file,
                    category=CATEGORY_MISTAKES,
                )

            line = find_secret_line(text)
            if line is not None:
                report.add(
                    CheckLevel.FAIL,
                    f"Possible hardcoded secret in {file} (line {line})",
                    file,
                    category=CATEGORY_MISTAKES,
                )
