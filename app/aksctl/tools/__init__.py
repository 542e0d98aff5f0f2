"""Wrappers for the external CLIs aksctl drives.

This module exports the tool classes for kubectl, az and helm.
"""

from aksctl.tools.az import AzureCli
from aksctl.tools.base import CliTool, EchoHook
from aksctl.tools.helm import Helm
from aksctl.tools.kubectl import Kubectl

__all__ = [
    "AzureCli",
    "CliTool",
    "EchoHook",
    "Helm",
    "Kubectl",
]
