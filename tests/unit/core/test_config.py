"""Unit tests for ClusterConfig and its I/O functions."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from aksctl.core.config import (
    ClusterConfig,
    ClusterConfigError,
    ClusterConfigParseError,
    load_config,
    require_config,
    save_config,
)
from aksctl.core.paths import get_config_path
from pydantic import ValidationError


class TestClusterConfig:
    """Tests for ClusterConfig Pydantic model."""

    def test_default_values(self) -> None:
        """ClusterConfig defaults describe the bigboy cluster."""
        config = ClusterConfig()

        assert config.resource_group == "nekoc"
        assert config.cluster_name == "bigboy"
        assert config.registry == "gabby"
        assert config.dns_zone == "cat-herding.net"
        assert config.gateway == "aks-istio-ingress/cat-herding-gateway"
        assert config.namespace == "default"
        assert config.helm_timeout == "5m"
        assert config.rollout_timeout == "3m"

    def test_registry_server(self) -> None:
        """registry_server is the ACR login server."""
        assert ClusterConfig(registry="myacr").registry_server == "myacr.azurecr.io"

    def test_gateway_name(self) -> None:
        """gateway_name drops the namespace part."""
        assert ClusterConfig().gateway_name == "cat-herding-gateway"

    def test_hostname_and_image(self) -> None:
        """Derived hostname and image follow the zone and registry."""
        config = ClusterConfig()

        assert config.hostname_for("myapp") == "myapp.cat-herding.net"
        assert config.image_for("myapp") == "gabby.azurecr.io/myapp"

    def test_rejects_unknown_keys(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            ClusterConfig(cluster="typo")  # type: ignore[call-arg]

    def test_rejects_gateway_without_namespace(self) -> None:
        """The gateway must be namespace/name."""
        with pytest.raises(ValidationError):
            ClusterConfig(gateway="cat-herding-gateway")

    @pytest.mark.parametrize("timeout", ["5m", "90s", "1h30m"])
    def test_accepts_durations(self, timeout: str) -> None:
        """Helm-style durations are accepted."""
        assert ClusterConfig(helm_timeout=timeout).helm_timeout == timeout

    def test_rejects_bare_number_timeout(self) -> None:
        """A timeout without unit is rejected."""
        with pytest.raises(ValidationError):
            ClusterConfig(rollout_timeout="180")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing config file yields the defaults."""
        assert load_config(tmp_path / "absent.toml") == ClusterConfig()

    def test_loads_partial_override(self, tmp_path: Path) -> None:
        """Keys present in the file override defaults; others keep them."""
        path = tmp_path / "config.toml"
        path.write_text('namespace = "apps"\nregistry = "otheracr"\n')

        config = load_config(path)

        assert config.namespace == "apps"
        assert config.registry == "otheracr"
        assert config.cluster_name == "bigboy"

    def test_invalid_toml_raises_parse_error(self, tmp_path: Path) -> None:
        """Broken TOML raises ClusterConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("namespace = \n")

        with pytest.raises(ClusterConfigParseError):
            load_config(path)

    def test_invalid_content_raises_config_error(self, tmp_path: Path) -> None:
        """Schema violations raise ClusterConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('unknown_key = "x"\n')

        with pytest.raises(ClusterConfigError):
            load_config(path)

    def test_uses_default_path(self) -> None:
        """Without a path the XDG config location is read."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text('cluster_name = "smallboy"\n')

        assert load_config().cluster_name == "smallboy"


class TestSaveConfig:
    """Tests for save_config function."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        """save_config writes every setting as TOML."""
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(ClusterConfig(namespace="apps"), path)

        assert saved == path
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["namespace"] == "apps"
        assert data["resource_group"] == "nekoc"

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "config.toml"
        config = ClusterConfig(dns_zone="example.org", rollout_timeout="10m")

        save_config(config, path)

        assert load_config(path) == config

    def test_write_failure_raises_and_cleans_up(self, tmp_path: Path) -> None:
        """A failed replace raises ClusterConfigError and leaves no temp file."""
        path = tmp_path / "config.toml"

        with (
            patch("aksctl.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ClusterConfigError, match="disk full"),
        ):
            save_config(ClusterConfig(), path)

        assert list(tmp_path.glob("*.tmp")) == []


class TestRequireConfig:
    """Tests for require_config function."""

    def test_returns_config(self, tmp_path: Path) -> None:
        """require_config returns the loaded config."""
        assert require_config(tmp_path / "absent.toml") == ClusterConfig()

    def test_exits_on_error(self, tmp_path: Path) -> None:
        """require_config exits with code 1 on a broken file."""
        path = tmp_path / "config.toml"
        path.write_text("[[[")

        with pytest.raises(typer.Exit) as exc_info:
            require_config(path)

        assert exc_info.value.exit_code == 1
