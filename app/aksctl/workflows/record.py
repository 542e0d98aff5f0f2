"""Decommission record generation.

A decommission record is a Markdown file committed alongside the cluster
documentation. It captures when and why an application was removed, which
cleanup steps actually ran and how to verify the removal.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from aksctl.core.paths import ensure_dir

REASON_PLACEHOLDER = "[Add reason here]"
NOTES_PLACEHOLDER = "[Add any additional notes about the decommission process]"

# Cleanup steps in the order they appear in the record
CLEANUP_KUBERNETES = "Kubernetes resources deleted"
CLEANUP_KEY_VAULT = "Key Vault deleted (soft-deleted, purge after verification)"
CLEANUP_IMAGES = "Container images deleted"
CLEANUP_DNS = "DNS records removed (if any)"
CLEANUP_ALERTS = "Monitoring alerts removed"

CLEANUP_STEPS = (
    CLEANUP_KUBERNETES,
    CLEANUP_KEY_VAULT,
    CLEANUP_IMAGES,
    CLEANUP_DNS,
    CLEANUP_ALERTS,
)


@dataclass(slots=True)
class DecommissionRecord:
    """Write-once documentation of a decommissioned application.

    Attributes:
        app_name: Application that was removed.
        former_url: Public URL the application used to serve.
        resource_group: Resource group used in the verification commands.
        decommission_date: Date of the decommission.
        decommissioned_by: User who ran the decommission.
        reason: Why the application was removed; placeholder if unknown.
        cleanup: Completion flag per cleanup step.
    """

    app_name: str
    former_url: str
    resource_group: str
    decommission_date: date
    decommissioned_by: str
    reason: str | None = None
    cleanup: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(CLEANUP_STEPS, False))

    def render(self) -> str:
        """Render the record as Markdown."""
        checklist = "\n".join(
            f"- [{'x' if self.cleanup.get(step, False) else ' '}] {step}" for step in CLEANUP_STEPS
        )
        return f"""# {self.app_name} - Decommissioned

- **Decommission Date**: {self.decommission_date.isoformat()}
- **Decommissioned By**: {self.decommissioned_by}
- **Former URL**: {self.former_url}
- **Reason**: {self.reason or REASON_PLACEHOLDER}

## Resources Cleaned Up

{checklist}

## Verification Commands

```bash
# Verify no pods
kubectl get pods -l app={self.app_name}

# Verify URL
curl -I {self.former_url}

# Check Key Vault
az keyvault list -g {self.resource_group} --query "[?contains(name, '{self.app_name}')]"
```

## Notes

{NOTES_PLACEHOLDER}
"""


def record_path(records_dir: Path, app_name: str) -> Path:
    """Path of the record file for an application."""
    return records_dir / f"{app_name}.md"


def write_record(record: DecommissionRecord, records_dir: Path) -> Path:
    """Write a decommission record, replacing any previous one for the app.

    Args:
        record: The record to write.
        records_dir: Directory holding decommission records.

    Returns:
        Path of the written file.

    Raises:
        RuntimeError: If the records directory cannot be created.
        OSError: If the file cannot be written.
    """
    ensure_dir(records_dir, "decommission records")
    path = record_path(records_dir, record.app_name)
    path.write_text(record.render(), encoding="utf-8")
    return path
