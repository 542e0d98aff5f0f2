"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from aksctl import __version__
from aksctl.cli.commands import config, decommission, deploy, validate
from aksctl.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="aksctl",
    help="Validate, deploy and decommission applications on the bigboy AKS cluster.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"aksctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich.

    Args:
        verbose: If True, log at DEBUG; otherwise only warnings and errors.
    """
    package_logger = logging.getLogger("aksctl")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=err_console, show_path=verbose, markup=False))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging of every executed command.",
        ),
    ] = False,
) -> None:
    """aksctl - Cluster onboarding helpers for the bigboy AKS cluster.

    Validate manifests before they reach the cluster, deploy an
    application with the shared Helm chart, and decommission it again.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.command(name="validate")(validate.validate_manifests)
app.command(name="deploy")(deploy.deploy_app)
app.command(name="decommission")(decommission.decommission_app)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
