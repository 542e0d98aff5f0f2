"""Deploy and decommission workflows for aksctl."""

from aksctl.workflows.decommission import DecommissionOutcome, DecommissionRunner
from aksctl.workflows.deploy import DeployError, DeployRunner
from aksctl.workflows.record import DecommissionRecord, write_record

__all__ = [
    "DecommissionOutcome",
    "DecommissionRecord",
    "DecommissionRunner",
    "DeployError",
    "DeployRunner",
    "write_record",
]
