"""Deploy command implementation.

Installs or upgrades an application with the shared Helm chart and
waits for the rollout to finish.
"""

from typing import Annotated

import typer

from aksctl.cli.types import validate_app_name
from aksctl.core.config import require_config
from aksctl.utils.formatting import print_error
from aksctl.workflows.deploy import DeployError, DeployRunner


def _confirm(text: str) -> bool:
    return typer.confirm(text, default=False)


def deploy_app(
    app_name: Annotated[
        str,
        typer.Argument(
            help="Name of the application (Helm release and Deployment name).",
            callback=validate_app_name,
        ),
    ],
    image_tag: Annotated[
        str,
        typer.Argument(help="Image tag to deploy."),
    ] = "latest",
    hostname: Annotated[
        str | None,
        typer.Argument(
            help="Public hostname. Defaults to <app-name>.<dns-zone>.",
            show_default=False,
        ),
    ] = None,
    namespace: Annotated[
        str | None,
        typer.Option(
            "--namespace",
            "-n",
            envvar="NAMESPACE",
            help="Target namespace. Defaults to the configured namespace.",
            show_default=False,
        ),
    ] = None,
    chart: Annotated[
        str | None,
        typer.Option(
            "--chart",
            help="Helm chart path. Defaults to the configured chart path.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Deploy an application with Helm and wait for its rollout.

    Fails if the cluster is unreachable, Helm fails, or the rollout
    does not complete within the configured timeout. Nothing is rolled
    back on failure.

    Examples:
        aksctl deploy myapp
        aksctl deploy myapp v1.2.3
        aksctl deploy myapp latest custom.cat-herding.net
    """
    config = require_config()
    runner = DeployRunner(
        app_name,
        config,
        _confirm,
        image_tag=image_tag,
        hostname=hostname,
        namespace=namespace,
        chart_path=chart,
    )

    try:
        runner.run()
    except DeployError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
