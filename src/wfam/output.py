"""Result list files and the console report."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from wfam.scan.models import ClassificationResult, FileEntry

BANNER = "WhichFilesAreMissing console utility"


def write_path_list(path: Path, entries: Iterable[FileEntry]) -> None:
    """Write one absolute path per line in native representation, no header."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for entry in entries:
            handle.write(f"{entry.path}\n")


def report_lines(result: ClassificationResult, unsorted_path: str, base_pattern: str) -> list[str]:
    """Build the human-readable summary printed after a run."""
    if result.all_present:
        return [f"All files from {unsorted_path} are present in {base_pattern}"]
    lines: list[str] = []
    if result.missing:
        lines.append(f"Some files from {unsorted_path} are not present in {base_pattern}")
        lines.extend(str(entry.path) for entry in result.missing)
    if result.different:
        lines.append(f"Some files differ between {unsorted_path} and {base_pattern}")
        lines.extend(str(entry.path) for entry in result.different)
    return lines


def write_result_lists(
    result: ClassificationResult,
    missing_path: Path | None,
    different_path: Path | None,
) -> list[Path]:
    """Write non-empty result lists to their configured files; return written paths."""
    written: list[Path] = []
    if missing_path is not None and result.missing:
        write_path_list(missing_path, result.missing)
        written.append(missing_path)
    if different_path is not None and result.different:
        write_path_list(different_path, result.different)
        written.append(different_path)
    return written
