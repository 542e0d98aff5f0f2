"""Shared types and helpers for CLI commands."""

import re

import typer

# RFC 1123 label: the names Kubernetes accepts for Deployments and Services
APP_NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
APP_NAME_MAX_LENGTH = 63


def validate_app_name(value: str) -> str:
    """Typer callback rejecting names Kubernetes would not accept.

    The name also ends up in az JMESPath filters, so anything outside
    the label alphabet is refused before a command is built.

    Args:
        value: App name given on the command line.

    Returns:
        The unchanged app name.

    Raises:
        typer.BadParameter: If the name is not a valid RFC 1123 label.
    """
    if len(value) > APP_NAME_MAX_LENGTH or not APP_NAME_PATTERN.match(value):
        msg = (
            f"'{value}' is not a valid app name: use lowercase letters, digits and '-', "
            f"starting and ending with a letter or digit (max {APP_NAME_MAX_LENGTH})"
        )
        raise typer.BadParameter(msg)
    return value
