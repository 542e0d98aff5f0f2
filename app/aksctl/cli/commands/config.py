"""Config command implementation.

Shows and initializes the cluster configuration file.
"""

from typing import Annotated

import typer
from rich.table import Table

from aksctl.core.config import ClusterConfig, ClusterConfigError, require_config, save_config
from aksctl.core.paths import get_config_path
from aksctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the cluster configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the effective cluster configuration."""
    config = require_config()

    if json_output:
        console.print_json(config.model_dump_json())
        return

    path = get_config_path()
    source = str(path) if path.exists() else "built-in defaults"
    table = Table(
        title=f"Cluster Configuration ({source})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    for key, value in config.model_dump().items():
        table.add_row(key, f"[muted]{value}[/muted]")
    table.add_row("registry_server", f"[muted]{config.registry_server}[/muted]")

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default cluster settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {path}")
        print_info("Use --force to overwrite it with defaults.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(ClusterConfig(), path)
    except ClusterConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
