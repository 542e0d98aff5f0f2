"""Textual checks for Kubernetes manifests.

Every check here is a regular expression searched in the raw manifest
text. Nothing is parsed as YAML, so a field commented out or placed in
the wrong object still counts as present. That is accepted: these are
pre-deployment hints, and the cluster remains the authority.
"""

import re
from dataclasses import dataclass

from aksctl.core.config import ClusterConfig
from aksctl.models.check import CheckLevel, CheckResult

# Key/value lines that look like credentials committed in plain text
SECRET_PATTERN = re.compile(r"(password|secret|api.?key|token).*:.*['\"]?[a-zA-Z0-9]+")

_NAME_PATTERN = re.compile(r"^\s*(?:-\s+)?name:\s*(\S+)", re.MULTILINE)

UNKNOWN_NAME = "<unnamed>"


@dataclass(frozen=True, slots=True)
class TextCheck:
    """A presence check for one pattern in a manifest.

    Attributes:
        pattern: Regular expression that must appear in the text.
        passed: Message when the pattern is found.
        missing: Message when the pattern is absent.
        level: Level reported when the pattern is absent (WARN or FAIL).
    """

    pattern: re.Pattern[str]
    passed: str
    missing: str
    level: CheckLevel

    def run(self, text: str, name: str, file: str, category: str) -> CheckResult:
        """Run the check against a manifest text."""
        if self.pattern.search(text):
            return CheckResult(CheckLevel.PASS, f"{self.passed}: {name}", file, category=category)
        return CheckResult(self.level, f"{self.missing}: {name}", file, category=category)


def _literal(text: str) -> re.Pattern[str]:
    return re.compile(re.escape(text))


def has_kind(text: str, kind: str) -> bool:
    """Check whether any document or list item in the text declares the given kind.

    Trailing comments are allowed; longer kinds (``GatewayClass``) do not match.
    """
    pattern = rf"^\s*(?:-\s+)?kind:\s*{re.escape(kind)}(?![\w-])"
    return re.search(pattern, text, re.MULTILINE) is not None


def resource_name(text: str) -> str:
    """Name of the first ``name:`` line in the text, which is usually metadata.name."""
    match = _NAME_PATTERN.search(text)
    if match is None:
        return UNKNOWN_NAME
    return match.group(1).strip("'\"")


def deployment_checks(config: ClusterConfig) -> list[TextCheck]:
    """Checks applied to every file that declares a Deployment."""
    return [
        TextCheck(
            re.compile(r"sidecar\.istio\.io/inject.*\"true\""),
            "Istio sidecar enabled",
            "Missing Istio sidecar annotation",
            CheckLevel.WARN,
        ),
        TextCheck(
            _literal("limits:"),
            "Resource limits set",
            "Missing resource limits",
            CheckLevel.FAIL,
        ),
        TextCheck(
            _literal("livenessProbe:"),
            "Liveness probe configured",
            "Missing liveness probe",
            CheckLevel.WARN,
        ),
        TextCheck(
            _literal("readinessProbe:"),
            "Readiness probe configured",
            "Missing readiness probe",
            CheckLevel.WARN,
        ),
        TextCheck(
            _literal("runAsNonRoot: true"),
            "Non-root user configured",
            "Missing runAsNonRoot: true",
            CheckLevel.FAIL,
        ),
        TextCheck(
            _literal(config.registry_server),
            "Using correct registry",
            f"Not using {config.registry_server}",
            CheckLevel.WARN,
        ),
    ]


def virtual_service_checks(config: ClusterConfig) -> list[TextCheck]:
    """Checks applied to every file that declares a VirtualService."""
    return [
        TextCheck(
            _literal(config.gateway),
            "Using shared gateway",
            f"Not using shared gateway ({config.gateway})",
            CheckLevel.WARN,
        ),
        TextCheck(
            _literal(config.dns_zone),
            "Valid hostname",
            f"Non-standard hostname (not *.{config.dns_zone})",
            CheckLevel.WARN,
        ),
    ]


def find_secret_line(text: str) -> int | None:
    """Line number (1-based) of the first plausible hard-coded secret, if any."""
    for number, line in enumerate(text.splitlines(), start=1):
        if SECRET_PATTERN.search(line):
            return number
    return None
