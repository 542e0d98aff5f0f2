"""Decommission command implementation.

Deletes an application's Kubernetes resources, Key Vaults, metric
alerts, DNS records and images, behind typed confirmations, and writes
a decommission record.
"""

from pathlib import Path
from typing import Annotated

import typer

from aksctl.cli.types import validate_app_name
from aksctl.core.config import require_config
from aksctl.utils.formatting import print_error, print_info
from aksctl.utils.shell import CommandFailedError
from aksctl.workflows.decommission import DecommissionRunner


def _prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


def decommission_app(
    app_name: Annotated[
        str,
        typer.Argument(
            help="Name of the application to decommission.",
            callback=validate_app_name,
        ),
    ],
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Print every command without executing any of them.",
        ),
    ] = False,
    reason: Annotated[
        str | None,
        typer.Option(
            "--reason",
            "-r",
            help="Reason recorded in the decommission record.",
        ),
    ] = None,
    records_dir: Annotated[
        Path | None,
        typer.Option(
            "--records-dir",
            help="Directory for the decommission record. Defaults to the configured one.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Decommission an application and everything it left behind.

    Every destructive phase asks for a typed 'yes'. Deletions are not
    transactional: if one fails, the run stops and earlier deletions
    stay in effect.

    Examples:
        aksctl decommission myapp --dry-run   # Preview changes
        aksctl decommission myapp             # Execute decommission
    """
    config = require_config()
    runner = DecommissionRunner(
        app_name,
        config,
        _prompt,
        dry_run=dry_run,
        reason=reason,
        records_dir=records_dir,
    )

    missing = runner.missing_tools()
    if missing:
        print_error(f"Required tools not installed: {', '.join(missing)}")
        raise typer.Exit(code=1)

    try:
        runner.run()
    except CommandFailedError as e:
        print_error(str(e))
        print_info("Resources deleted before the failure stay deleted; rerun to continue.")
        raise typer.Exit(code=1) from e
    except (OSError, RuntimeError) as e:
        print_error(f"Decommission stopped: {e}")
        raise typer.Exit(code=1) from e
