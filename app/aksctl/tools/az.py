"""Azure CLI wrapper.

Builds and runs the az invocations for Key Vault, DNS, Container
Registry and Azure Monitor resources that belong to an application.
Resources are matched to an application by substring of their name.
"""

from aksctl.tools.base import CliTool
from aksctl.utils.shell import CommandResult

DNS_A_RECORD_TYPE = "Microsoft.Network/dnszones/A"

_ALERT_LIST = ["monitor", "metrics", "alert", "list"]


def _contains_name(app_name: str) -> str:
    """JMESPath filter selecting entries whose name contains the app name."""
    return f"[?contains(name, '{app_name}')]"


class AzureCli(CliTool):
    """Wrapper around the az CLI."""

    @property
    def binary(self) -> str:
        """Return az as the wrapped executable."""
        return "az"

    # --- Key Vault ---------------------------------------------------------

    def keyvault_list(self, resource_group: str, app_name: str) -> CommandResult:
        """Show Key Vaults whose name contains the app name."""
        query = _contains_name(app_name) + ".{Name:name, Location:location}"
        return self._invoke(
            ["keyvault", "list", "-g", resource_group, "--query", query, "-o", "table"]
        )

    def keyvault_names(self, resource_group: str, app_name: str) -> list[str]:
        """Names of Key Vaults whose name contains the app name."""
        query = _contains_name(app_name) + ".name"
        return self._query_names(
            ["keyvault", "list", "-g", resource_group, "--query", query, "-o", "tsv"]
        )

    def keyvault_delete(self, name: str, resource_group: str) -> CommandResult:
        """Soft-delete a Key Vault."""
        return self._invoke(
            ["keyvault", "delete", "--name", name, "--resource-group", resource_group],
            check=True,
        )

    # --- DNS ---------------------------------------------------------------

    def dns_record_list(self, resource_group: str, zone: str, app_name: str) -> CommandResult:
        """Show DNS record sets whose name contains the app name."""
        query = _contains_name(app_name) + ".{Name:name, Type:type, TTL:ttl}"
        return self._invoke(
            [
                "network",
                "dns",
                "record-set",
                "list",
                "-g",
                resource_group,
                "-z",
                zone,
                "--query",
                query,
                "-o",
                "table",
            ]
        )

    def dns_a_record_names(self, resource_group: str, zone: str, app_name: str) -> list[str]:
        """Names of A record sets named exactly after the app.

        Most applications are served by the zone's wildcard record, so
        this is usually empty.
        """
        query = f"[?name=='{app_name}' && type=='{DNS_A_RECORD_TYPE}'].name"
        return self._query_names(
            [
                "network",
                "dns",
                "record-set",
                "list",
                "-g",
                resource_group,
                "-z",
                zone,
                "--query",
                query,
                "-o",
                "tsv",
            ]
        )

    def dns_a_record_delete(self, resource_group: str, zone: str, name: str) -> CommandResult:
        """Delete an A record set."""
        return self._invoke(
            [
                "network",
                "dns",
                "record-set",
                "a",
                "delete",
                "-g",
                resource_group,
                "-z",
                zone,
                "-n",
                name,
                "--yes",
            ],
            check=True,
        )

    # --- Container Registry ------------------------------------------------

    def acr_tags(self, registry: str, repository: str) -> CommandResult:
        """Show the tags of an image repository."""
        return self._invoke(
            [
                "acr",
                "repository",
                "show-tags",
                "--name",
                registry,
                "--repository",
                repository,
                "-o",
                "table",
            ]
        )

    def acr_image_exists(self, registry: str, repository: str, tag: str) -> bool:
        """Check whether ``repository:tag`` exists in the registry."""
        result = self._invoke(
            ["acr", "repository", "show", "--name", registry, "--image", f"{repository}:{tag}"],
            quiet=True,
        )
        return result.success

    def acr_repository_delete(self, registry: str, repository: str) -> CommandResult:
        """Delete an image repository with all its tags."""
        return self._invoke(
            [
                "acr",
                "repository",
                "delete",
                "--name",
                registry,
                "--repository",
                repository,
                "--yes",
            ],
            check=True,
        )

    # --- Azure Monitor -----------------------------------------------------

    def alert_list(self, resource_group: str, app_name: str) -> CommandResult:
        """Show metric alerts whose name contains the app name."""
        query = _contains_name(app_name) + ".{Name:name, Enabled:enabled}"
        return self._invoke([*_ALERT_LIST, "-g", resource_group, "--query", query, "-o", "table"])

    def alert_names(self, resource_group: str, app_name: str) -> list[str]:
        """Names of metric alerts whose name contains the app name."""
        query = _contains_name(app_name) + ".name"
        return self._query_names(
            [*_ALERT_LIST, "-g", resource_group, "--query", query, "-o", "tsv"]
        )

    def alert_delete(self, name: str, resource_group: str) -> CommandResult:
        """Delete a metric alert rule."""
        return self._invoke(
            ["monitor", "metrics", "alert", "delete", "--name", name, "-g", resource_group],
            check=True,
        )
