"""Manifest validation for aksctl.

This module exports the validator and its discovery helper.
"""

from aksctl.validation.discovery import find_manifests
from aksctl.validation.validator import ManifestValidator

__all__ = ["ManifestValidator", "find_manifests"]
