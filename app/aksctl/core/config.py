"""Cluster configuration and settings.

This module provides the configuration model and I/O functions for the
site constants every command shares: resource group, cluster, registry,
DNS zone, shared ingress gateway and Helm/rollout timeouts.

Configuration is stored in ~/.config/aksctl/config.toml. A missing file
means built-in defaults for the bigboy cluster.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aksctl.core.paths import get_config_path

# Kubernetes and Helm duration strings (e.g. "5m", "90s", "1h30m")
DURATION_PATTERN = r"^(\d+h)?(\d+m)?(\d+s)?$"


class ClusterConfig(BaseModel):
    """Site constants for the target AKS cluster.

    Attributes:
        resource_group: Azure resource group holding the cluster, vaults and DNS zone.
        cluster_name: AKS cluster name; also the expected kubectl context.
        registry: Azure Container Registry name.
        dns_zone: DNS zone applications are published under.
        gateway: Shared Istio ingress gateway (namespace/name).
        namespace: Default namespace for deployments.
        chart_path: Path to the Helm application chart.
        helm_timeout: Timeout passed to ``helm upgrade --timeout``.
        rollout_timeout: Timeout passed to ``kubectl rollout status --timeout``.
        records_dir: Directory decommission records are written to.
    """

    model_config = ConfigDict(extra="forbid")

    resource_group: Annotated[str, Field(min_length=1)] = "nekoc"
    cluster_name: Annotated[str, Field(min_length=1)] = "bigboy"
    registry: Annotated[str, Field(min_length=1, pattern=r"^[a-zA-Z0-9]+$")] = "gabby"
    dns_zone: Annotated[str, Field(min_length=1)] = "cat-herding.net"
    gateway: Annotated[
        str,
        Field(pattern=r"^[a-z0-9-]+/[a-z0-9-]+$", description="namespace/name"),
    ] = "aks-istio-ingress/cat-herding-gateway"
    namespace: Annotated[str, Field(min_length=1)] = "default"
    chart_path: str = "helm/app-template"
    helm_timeout: Annotated[str, Field(pattern=DURATION_PATTERN)] = "5m"
    rollout_timeout: Annotated[str, Field(pattern=DURATION_PATTERN)] = "3m"
    records_dir: str = "docs/decommissioned"

    @property
    def registry_server(self) -> str:
        """Login server of the container registry."""
        return f"{self.registry}.azurecr.io"

    @property
    def gateway_name(self) -> str:
        """Name part of the shared gateway reference."""
        return self.gateway.split("/", 1)[1]

    def hostname_for(self, app_name: str) -> str:
        """Default public hostname of an application."""
        return f"{app_name}.{self.dns_zone}"

    def image_for(self, app_name: str) -> str:
        """Image repository of an application in the registry."""
        return f"{self.registry_server}/{app_name}"


class ClusterConfigError(Exception):
    """Base exception for cluster configuration errors."""


class ClusterConfigParseError(ClusterConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> ClusterConfig:
    """Load cluster configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ClusterConfig; defaults when the file does not exist.

    Raises:
        ClusterConfigParseError: If the TOML syntax is invalid.
        ClusterConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return ClusterConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ClusterConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ClusterConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return ClusterConfig.model_validate(data)
    except ValidationError as e:
        raise ClusterConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: ClusterConfig, path: Path | None = None) -> Path:
    """Save cluster configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ClusterConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ClusterConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ClusterConfigError(f"Failed to write config: {e}") from e

    return config_path


def require_config(path: Path | None = None) -> ClusterConfig:
    """Load configuration or exit with a helpful error message.

    This is a convenience wrapper around load_config() for CLI commands.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded and validated ClusterConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from aksctl.utils.formatting import print_error, print_info

    try:
        return load_config(path)
    except ClusterConfigError as e:
        print_error(str(e))
        print_info("Fix the file or run 'aksctl config init --force' to reset it.")
        raise typer.Exit(code=1) from e
