"""Check models for manifest validation.

This module defines the outcome of a single manifest check and the
report that aggregates them into pass/warn/fail counts.
"""

from dataclasses import dataclass, field
from enum import Enum


class CheckLevel(str, Enum):
    """Outcome level of a single check.

    Attributes:
        PASS: The required field or pattern was found.
        WARN: A recommended field is missing; does not fail validation.
        FAIL: A required field is missing or a forbidden pattern was found.
    """

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of one check against one manifest file.

    Attributes:
        level: PASS, WARN or FAIL.
        message: Human-readable description of the outcome.
        file: Manifest file the check ran against, if any.
        detail: Extra output (e.g. the first lines of a kubectl error).
        category: Group the check belongs to (syntax, deployment, ...).
    """

    level: CheckLevel
    message: str
    file: str | None = None
    detail: str | None = None
    category: str = "general"

    @property
    def passed(self) -> bool:
        """Check if this result is a pass."""
        return self.level == CheckLevel.PASS

    @property
    def failed(self) -> bool:
        """Check if this result is a failure."""
        return self.level == CheckLevel.FAIL

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "level": self.level.value,
            "message": self.message,
            "file": self.file,
            "detail": self.detail,
            "category": self.category,
        }


@dataclass(slots=True)
class ValidationReport:
    """Accumulated results of a validation pass.

    Attributes:
        path: The path that was validated.
        files: YAML files that were found and checked.
        results: Check results in the order they were produced.
    """

    path: str
    files: list[str] = field(default_factory=list)
    results: list[CheckResult] = field(default_factory=list)

    def add(
        self,
        level: CheckLevel,
        message: str,
        file: str | None = None,
        detail: str | None = None,
        category: str = "general",
    ) -> CheckResult:
        """Record a check result and return it."""
        result = CheckResult(level, message, file, detail, category)
        self.results.append(result)
        return result

    def extend(self, results: list[CheckResult]) -> None:
        """Record several check results."""
        self.results.extend(results)

    def _count(self, level: CheckLevel) -> int:
        return sum(1 for r in self.results if r.level == level)

    @property
    def passes(self) -> int:
        """Number of passed checks."""
        return self._count(CheckLevel.PASS)

    @property
    def warnings(self) -> int:
        """Number of warning-level checks."""
        return self._count(CheckLevel.WARN)

    @property
    def errors(self) -> int:
        """Number of failed checks."""
        return self._count(CheckLevel.FAIL)

    @property
    def failed(self) -> bool:
        """Check if any fail-level check fired."""
        return self.errors > 0

    @property
    def exit_code(self) -> int:
        """Process exit code for this report: 1 on any failure, else 0."""
        return 1 if self.failed else 0

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "path": self.path,
            "files": list(self.files),
            "summary": {
                "passed": self.passes,
                "warnings": self.warnings,
                "errors": self.errors,
            },
            "results": [r.to_dict() for r in self.results],
        }
