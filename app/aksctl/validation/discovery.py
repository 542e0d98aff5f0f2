"""Manifest file discovery."""

from pathlib import Path

YAML_SUFFIXES = (".yaml", ".yml")


def find_manifests(path: Path) -> list[Path]:
    """Find YAML manifest files under a path.

    A file is returned as-is when it has a YAML suffix. A directory is
    searched recursively. Results are sorted so reports are stable.

    Args:
        path: File or directory to search.

    Returns:
        Sorted list of YAML file paths; empty if none were found.
    """
    if path.is_file():
        return [path] if path.suffix in YAML_SUFFIXES else []

    if not path.is_dir():
        return []

    return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in YAML_SUFFIXES)
