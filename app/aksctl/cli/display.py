"""Rich display functions for validation reports."""

from rich.markup import escape

from aksctl.models.check import CheckLevel, CheckResult, ValidationReport
from aksctl.utils.formatting import console, print_heading, print_output
from aksctl.validation.validator import (
    CATEGORY_DEPLOYMENT,
    CATEGORY_MISTAKES,
    CATEGORY_SYNTAX,
    CATEGORY_VIRTUAL_SERVICE,
)

# Section headings in display order
SECTION_TITLES: dict[str, str] = {
    CATEGORY_SYNTAX: "Checking YAML syntax...",
    CATEGORY_DEPLOYMENT: "Checking deployment configurations...",
    CATEGORY_VIRTUAL_SERVICE: "Checking VirtualService configurations...",
    CATEGORY_MISTAKES: "Checking for common mistakes...",
}

_SYMBOLS: dict[CheckLevel, str] = {
    CheckLevel.PASS: "[check.pass]✓[/]",
    CheckLevel.WARN: "[check.warn]⚠[/]",
    CheckLevel.FAIL: "[check.fail]✗[/]",
}


def format_check(result: CheckResult) -> str:
    """Format a check result as a single marked-up line."""
    return f"{_SYMBOLS[result.level]} {escape(result.message)}"


def print_report(report: ValidationReport) -> None:
    """Print a validation report grouped by section, followed by its summary."""
    console.print(f"Validating manifests in: {escape(report.path)}", soft_wrap=True)

    # Input problems (missing path, no files, unreadable files) come first
    for result in report.results:
        if result.category not in SECTION_TITLES:
            console.print(format_check(result), soft_wrap=True)

    for category, title in SECTION_TITLES.items():
        section = [r for r in report.results if r.category == category]
        if not section:
            continue
        print_heading(title)
        for result in section:
            console.print(format_check(result), soft_wrap=True)
            if result.detail:
                print_output(result.detail)

    print_summary(report)


def print_summary(report: ValidationReport) -> None:
    """Print error/warning counts and the overall verdict."""
    print_heading("Validation Summary")
    console.print(f"Errors:   [check.fail]{report.errors}[/]")
    console.print(f"Warnings: [check.warn]{report.warnings}[/]")
    console.print()

    if report.errors:
        console.print(f"[check.fail]Validation failed with {report.errors} error(s)[/]")
    elif report.warnings:
        console.print(f"[check.warn]Validation passed with {report.warnings} warning(s)[/]")
    else:
        console.print("[check.pass]All checks passed![/]")
