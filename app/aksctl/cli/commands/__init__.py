"""CLI commands for aksctl.

This package contains all subcommand implementations.
"""

from aksctl.cli.commands import config, decommission, deploy, validate

__all__ = ["config", "decommission", "deploy", "validate"]
