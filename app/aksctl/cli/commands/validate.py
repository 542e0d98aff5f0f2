"""Validate command implementation.

Runs the pre-deployment manifest checks and exits non-zero when any
fail-level check fires.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from aksctl.cli.display import print_report
from aksctl.core.config import require_config
from aksctl.utils.formatting import console
from aksctl.validation.validator import ManifestValidator


def validate_manifests(
    path: Annotated[
        Path,
        typer.Argument(
            help="Manifest file or directory to validate.",
            show_default=True,
        ),
    ] = Path("."),
    skip_syntax: Annotated[
        bool,
        typer.Option(
            "--skip-syntax",
            help="Skip the kubectl client-side dry-run syntax check.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output the report as JSON.",
        ),
    ] = False,
) -> None:
    """Validate Kubernetes manifests before deployment.

    Checks every YAML file for the fields the cluster expects: Istio
    sidecar injection, resource limits, probes, a non-root security
    context, the approved registry and the shared ingress gateway.
    Missing limits, a missing runAsNonRoot or a plausible hard-coded
    secret fail validation; the rest are warnings.

    Examples:
        aksctl validate k8s/
        aksctl validate deployment.yaml
        aksctl validate k8s/ --json
    """
    config = require_config()
    validator = ManifestValidator(config, check_syntax=not skip_syntax)
    report = validator.validate(path)

    if json_output:
        console.print_json(json.dumps(report.to_dict()))
    else:
        print_report(report)

    if report.failed:
        raise typer.Exit(code=report.exit_code)
