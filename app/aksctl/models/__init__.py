"""Data models for aksctl.

This module exports the core data structures used throughout the application.
"""

from aksctl.models.check import CheckLevel, CheckResult, ValidationReport

__all__ = [
    "CheckLevel",
    "CheckResult",
    "ValidationReport",
]
