"""Unit tests for textual manifest checks."""

from aksctl.core.config import ClusterConfig
from aksctl.models.check import CheckLevel
from aksctl.validation.checks import (
    UNKNOWN_NAME,
    deployment_checks,
    find_secret_line,
    has_kind,
    resource_name,
    virtual_service_checks,
)


class TestHasKind:
    """Tests for has_kind."""

    def test_matches_whole_kind(self) -> None:
        """Kind lines match exactly."""
        assert has_kind("apiVersion: v1\nkind: Deployment\n", "Deployment")

    def test_does_not_match_prefix(self) -> None:
        """Gateway does not match a VirtualService document."""
        assert not has_kind("kind: VirtualService\n", "Gateway")

    def test_matches_in_multi_document_file(self) -> None:
        """Any document in the file counts."""
        text = "kind: Service\n---\nkind: Deployment\n"

        assert has_kind(text, "Deployment")

    def test_matches_with_trailing_comment(self) -> None:
        """A comment after the kind does not hide it."""
        assert has_kind("kind: Deployment  # web tier\n", "Deployment")

    def test_matches_list_item(self) -> None:
        """Items of a kind: List are detected."""
        text = "apiVersion: v1\nkind: List\nitems:\n  - kind: Deployment\n    apiVersion: apps/v1\n"

        assert has_kind(text, "Deployment")

    def test_does_not_match_longer_kind(self) -> None:
        """Kinds that merely start with the name do not match."""
        assert not has_kind("kind: DeploymentConfig\n", "Deployment")
        assert not has_kind("kind: GatewayClass\n", "Gateway")


class TestResourceName:
    """Tests for resource_name."""

    def test_first_name_line(self) -> None:
        """The first name: line is used."""
        assert resource_name("metadata:\n  name: 'web'\n") == "web"

    def test_no_name(self) -> None:
        """Missing names fall back to a placeholder."""
        assert resource_name("kind: Deployment\n") == UNKNOWN_NAME


class TestDeploymentChecks:
    """Tests for the Deployment check set."""

    def test_good_deployment_passes_all(self, good_deployment: str) -> None:
        """A complete Deployment passes every check."""
        results = [
            check.run(good_deployment, "myapp", "d.yaml", "deployment")
            for check in deployment_checks(ClusterConfig())
        ]

        assert all(result.passed for result in results)
        assert len(results) == 6

    def test_missing_non_root_fails(self, root_deployment: str) -> None:
        """Missing runAsNonRoot: true is a failure."""
        results = [
            check.run(root_deployment, "myapp", "d.yaml", "deployment")
            for check in deployment_checks(ClusterConfig())
        ]

        failed = [r for r in results if r.failed]
        assert [r.message for r in failed] == ["Missing runAsNonRoot: true: myapp"]

    def test_missing_limits_fails(self, good_deployment: str) -> None:
        """Missing resource limits is a failure."""
        text = good_deployment.replace("limits:", "requests2:")
        levels = {
            check.missing: check.run(text, "myapp", "d.yaml", "deployment").level
            for check in deployment_checks(ClusterConfig())
        }

        assert levels["Missing resource limits"] == CheckLevel.FAIL

    def test_other_registry_warns(self, good_deployment: str) -> None:
        """Images from another registry produce a warning."""
        text = good_deployment.replace("gabby.azurecr.io", "docker.io/library")
        config = ClusterConfig()
        registry_check = deployment_checks(config)[-1]

        result = registry_check.run(text, "myapp", "d.yaml", "deployment")

        assert result.level == CheckLevel.WARN
        assert result.message == "Not using gabby.azurecr.io: myapp"

    def test_registry_follows_config(self, good_deployment: str) -> None:
        """The registry check uses the configured registry."""
        registry_check = deployment_checks(ClusterConfig(registry="other"))[-1]

        result = registry_check.run(good_deployment, "myapp", "d.yaml", "deployment")

        assert result.level == CheckLevel.WARN


class TestVirtualServiceChecks:
    """Tests for the VirtualService check set."""

    def test_good_virtual_service(self, good_virtual_service: str) -> None:
        """A VirtualService on the shared gateway passes."""
        results = [
            check.run(good_virtual_service, "myapp", "vs.yaml", "virtualservice")
            for check in virtual_service_checks(ClusterConfig())
        ]

        assert [r.message for r in results] == [
            "Using shared gateway: myapp",
            "Valid hostname: myapp",
        ]

    def test_foreign_hostname_warns(self, good_virtual_service: str) -> None:
        """Hosts outside the zone produce a warning."""
        text = good_virtual_service.replace("myapp.cat-herding.net", "myapp.example.com")
        hostname_check = virtual_service_checks(ClusterConfig())[1]

        result = hostname_check.run(text, "myapp", "vs.yaml", "virtualservice")

        assert result.level == CheckLevel.WARN
        assert "Non-standard hostname" in result.message


class TestFindSecretLine:
    """Tests for find_secret_line."""

    def test_reports_line_number(self) -> None:
        """The first matching line number is returned."""
        text = "kind: Secret\nstringData:\n  password: hunter2\n"

        assert find_secret_line(text) == 3

    def test_clean_text(self, good_deployment: str) -> None:
        """Manifests without credentials yield None."""
        assert find_secret_line(good_deployment) is None
