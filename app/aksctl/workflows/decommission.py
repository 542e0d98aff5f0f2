"""Application decommissioning.

Removes everything an application left on the cluster and in Azure, one
phase at a time:

1. Discovery of labelled Kubernetes resources, Key Vaults, DNS records,
   images and metric alerts.
2. Kubernetes resource deletion.
3. Key Vault deletion (soft delete).
4. Metric alert deletion.
5. DNS A record deletion (only a record named exactly after the app).
6. Container repository deletion.
7. Decommission record.

Every destructive phase is gated by a typed ``yes``. The run is not
transactional: if a deletion fails the run stops, and whatever was
already deleted stays deleted.
"""

import getpass
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from aksctl.core.config import ClusterConfig
from aksctl.tools.az import AzureCli
from aksctl.tools.kubectl import Kubectl
from aksctl.utils.formatting import (
    console,
    print_command,
    print_heading,
    print_info,
    print_output,
    print_success,
    print_warning,
)
from aksctl.utils.shell import CommandResult
from aksctl.workflows.record import (
    CLEANUP_ALERTS,
    CLEANUP_DNS,
    CLEANUP_IMAGES,
    CLEANUP_KEY_VAULT,
    CLEANUP_KUBERNETES,
    CLEANUP_STEPS,
    DecommissionRecord,
    write_record,
)

logger = logging.getLogger(__name__)

# Reads one line of user input for the given prompt text.
Prompt = Callable[[str], str]

CONFIRM_WORD = "yes"


def kubernetes_targets(app_name: str) -> list[tuple[str, str]]:
    """(kind, name) pairs deleted for an application, in deletion order."""
    return [
        ("virtualservice", app_name),
        ("service", app_name),
        ("deployment", app_name),
        ("secretproviderclass", f"{app_name}-secrets"),
        ("configmap", f"{app_name}-config"),
        ("serviceaccount", app_name),
        ("hpa", app_name),
    ]


@dataclass(slots=True)
class DecommissionOutcome:
    """What a decommission run did.

    Attributes:
        app_name: Application being decommissioned.
        dry_run: Whether commands were only echoed.
        aborted: True if the user declined a confirmation gate before deletion.
        cleanup: Completion flag per cleanup step.
        record_path: Where the decommission record was written, if it was.
    """

    app_name: str
    dry_run: bool
    aborted: bool = False
    cleanup: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(CLEANUP_STEPS, False))
    record_path: Path | None = None


class DecommissionRunner:
    """Runs the decommission phases for one application.

    Attributes:
        app_name: Application to decommission.
        config: Cluster configuration.
        dry_run: If True, echo every command and execute none.
    """

    def __init__(
        self,
        app_name: str,
        config: ClusterConfig,
        prompt: Prompt,
        *,
        dry_run: bool = False,
        reason: str | None = None,
        records_dir: Path | None = None,
        user: str | None = None,
        today: date | None = None,
    ) -> None:
        if not app_name:
            msg = "App name cannot be empty"
            raise ValueError(msg)
        self.app_name = app_name
        self.config = config
        self.dry_run = dry_run
        self._prompt = prompt
        self._reason = reason
        self._records_dir = records_dir or Path(config.records_dir)
        self._user = user
        self._today = today
        self._kubectl = Kubectl(dry_run=dry_run, echo=print_command)
        self._az = AzureCli(dry_run=dry_run, echo=print_command)

    @property
    def former_url(self) -> str:
        """Public URL the application was served under."""
        return f"https://{self.config.hostname_for(self.app_name)}"

    def missing_tools(self) -> list[str]:
        """Executables required for a live run that are not on PATH."""
        if self.dry_run:
            return []
        return [tool.binary for tool in (self._kubectl, self._az) if not tool.is_available()]

    def run(self) -> DecommissionOutcome:
        """Run all phases.

        Returns:
            DecommissionOutcome describing what was done.

        Raises:
            CommandFailedError: If a deletion fails. Earlier deletions are kept.
        """
        outcome = DecommissionOutcome(app_name=self.app_name, dry_run=self.dry_run)
        self._print_header()

        if not self.dry_run:
            print_warning(f"This will DELETE all resources for {self.app_name}")
            if not self._confirm("Are you sure you want to proceed? (type 'yes' to continue)"):
                print_info("Aborted.")
                outcome.aborted = True
                return outcome

        self._discover()

        if self.dry_run:
            print_heading("Planned Kubernetes Cleanup")
            self._delete_kubernetes()
            print_info(
                "Key Vaults, metric alerts, DNS records and images are resolved "
                "and confirmed individually during a live run."
            )
            print_success("Dry run complete. Run without --dry-run to execute decommission.")
            return outcome

        if not self._confirm("Continue with deletion? (type 'yes')"):
            print_info("Aborted.")
            outcome.aborted = True
            return outcome

        print_heading("Phase 2: Kubernetes Cleanup")
        self._delete_kubernetes()
        outcome.cleanup[CLEANUP_KUBERNETES] = True

        print_heading("Phase 3: Azure Key Vault Cleanup")
        outcome.cleanup[CLEANUP_KEY_VAULT] = self._delete_key_vaults()

        print_heading("Phase 4: Monitoring Cleanup")
        outcome.cleanup[CLEANUP_ALERTS] = self._delete_alerts()

        print_heading("Phase 5: DNS Cleanup")
        outcome.cleanup[CLEANUP_DNS] = self._delete_dns_records()

        print_heading("Phase 6: Container Images")
        outcome.cleanup[CLEANUP_IMAGES] = self._delete_images()

        print_heading("Phase 7: Documentation")
        outcome.record_path = self._write_record(outcome.cleanup)

        self._print_next_steps(outcome)
        return outcome

    # --- Helpers -----------------------------------------------------------

    def _confirm(self, text: str) -> bool:
        answer = self._prompt(text)
        logger.debug("Confirmation %r answered %r", text, answer)
        return answer.strip() == CONFIRM_WORD

    def _show(self, result: CommandResult, fallback: str) -> None:
        """Print discovery output, or the fallback when there is none."""
        if self.dry_run:
            return
        if result.success and result.stdout.strip():
            print_output(result.stdout)
        else:
            console.print(f"    [muted]{fallback}[/]")

    def _print_header(self) -> None:
        console.rule("[bold_header]Application Decommission[/]", style="border")
        console.print(f"App Name: [bold]{self.app_name}[/]")
        console.print(f"Dry Run: {str(self.dry_run).lower()}")
        if self.dry_run:
            console.print("\n[dry_run]DRY RUN MODE - No changes will be made[/]")

    # --- Phases ------------------------------------------------------------

    def _discover(self) -> None:
        cfg = self.config
        print_heading("Phase 1: Discovery")

        console.print("Checking Kubernetes resources...")
        self._show(self._kubectl.get_by_label(self.app_name), "No resources found")

        console.print("Checking Key Vaults...")
        self._show(self._az.keyvault_list(cfg.resource_group, self.app_name), "No Key Vaults found")

        console.print("Checking DNS records...")
        self._show(
            self._az.dns_record_list(cfg.resource_group, cfg.dns_zone, self.app_name),
            "No DNS records found",
        )

        console.print("Checking container images...")
        self._show(self._az.acr_tags(cfg.registry, self.app_name), "No images found")

        console.print("Checking Azure Monitor alerts...")
        self._show(self._az.alert_list(cfg.resource_group, self.app_name), "No alerts found")

    def _delete_kubernetes(self) -> None:
        for kind, name in kubernetes_targets(self.app_name):
            console.print(f"Deleting {kind} {name}...")
            result = self._kubectl.delete(kind, name)
            if not self.dry_run and result.stdout.strip():
                print_output(result.stdout)

        console.print("Verifying Kubernetes cleanup...")
        self._show(self._kubectl.get_all(self.app_name), "All resources deleted")

    def _delete_key_vaults(self) -> bool:
        cfg = self.config
        vaults = self._az.keyvault_names(cfg.resource_group, self.app_name)
        if not vaults:
            print_info(f"No Key Vaults found for {self.app_name}")
            return False

        deleted = False
        for vault in vaults:
            if not self._confirm(f"Delete Key Vault {vault}? (yes/skip)"):
                print_info(f"Skipped {vault}")
                continue
            self._az.keyvault_delete(vault, cfg.resource_group)
            deleted = True
            print_info("Key Vault soft-deleted. Purge after verification period with:")
            console.print(f"    az keyvault purge --name {vault}", soft_wrap=True)
        return deleted

    def _delete_alerts(self) -> bool:
        cfg = self.config
        alerts = self._az.alert_names(cfg.resource_group, self.app_name)
        if not alerts:
            print_info(f"No alerts found for {self.app_name}")
            return False

        deleted = False
        for alert in alerts:
            if not self._confirm(f"Delete alert {alert}? (yes/skip)"):
                print_info(f"Skipped {alert}")
                continue
            self._az.alert_delete(alert, cfg.resource_group)
            deleted = True
        return deleted

    def _delete_dns_records(self) -> bool:
        cfg = self.config
        records = self._az.dns_a_record_names(cfg.resource_group, cfg.dns_zone, self.app_name)
        if not records:
            print_info("No custom DNS records found (using wildcard)")
            return False

        deleted = False
        for record in records:
            console.print(f"Custom A record found: {record}")
            if not self._confirm(f"Delete DNS A record {record}? (yes/skip)"):
                print_info(f"Skipped {record}")
                continue
            self._az.dns_a_record_delete(cfg.resource_group, cfg.dns_zone, record)
            deleted = True
        return deleted

    def _delete_images(self) -> bool:
        cfg = self.config
        console.print(f"Container images for {self.app_name}:")
        tags = self._az.acr_tags(cfg.registry, self.app_name)
        if not tags.success:
            console.print("    [muted]No images found[/]")
            return False
        print_output(tags.stdout)

        if not self._confirm("Delete container repository? (yes/skip)"):
            print_info("Kept container repository")
            return False
        self._az.acr_repository_delete(cfg.registry, self.app_name)
        return True

    def _write_record(self, cleanup: dict[str, bool]) -> Path:
        record = DecommissionRecord(
            app_name=self.app_name,
            former_url=self.former_url,
            resource_group=self.config.resource_group,
            decommission_date=self._today or date.today(),
            decommissioned_by=self._user or getpass.getuser(),
            reason=self._reason,
            cleanup=dict(cleanup),
        )
        path = write_record(record, self._records_dir)
        print_success(f"Decommission record created at: {path}")
        return path

    def _print_next_steps(self, outcome: DecommissionOutcome) -> None:
        console.print("\nTo complete documentation:")
        console.print(f"  1. Edit {outcome.record_path} and add reason/notes", soft_wrap=True)
        console.print("  2. Update docs/CLUSTER_OVERVIEW.md to remove app")
        commit = f"git add docs/ && git commit -m 'docs: Decommission {self.app_name}'"
        console.print(f"  3. Commit changes: {commit}", soft_wrap=True)

        print_success("\nDecommission Complete")
        console.print("\nNext steps:")
        console.print(f"  1. Verify URL is inaccessible: curl -I {self.former_url}", soft_wrap=True)
        console.print("  2. Monitor for 24-48 hours for unexpected issues")
        console.print("  3. After verification, purge soft-deleted Key Vaults:")
        console.print("     az keyvault purge --name <vault-name>")
        console.print("  4. Archive or delete the app repository")
