"""Recursive file enumeration shared by indexing and comparison."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from wfam.logging import NULL_SINK, DiagnosticSink
from wfam.scan.models import ExtensionFilter, FileEntry, ScanCounters


def walk_files(
    root: str | Path,
    ext_filter: ExtensionFilter,
    *,
    sink: DiagnosticSink = NULL_SINK,
    counters: ScanCounters | None = None,
    sort_entries: bool = False,
) -> Iterator[FileEntry]:
    """Yield every non-directory entry below root, at any depth.

    Files of a directory are yielded before its subdirectories are
    descended into. Order within a directory is the platform's
    enumeration order unless ``sort_entries`` is set. Filesystem errors
    propagate to the caller.
    """
    tally = counters if counters is not None else ScanCounters()
    stack: list[str] = [os.path.abspath(root)]
    while stack:
        current = stack.pop()
        subdirectories: list[str] = []
        with os.scandir(current) as iterator:
            entries = list(iterator)
        if sort_entries:
            entries.sort(key=lambda item: item.name)
        for entry in entries:
            tally.entries_seen += 1
            if entry.is_dir():
                tally.directories_skipped += 1
                subdirectories.append(entry.path)
                continue
            if not ext_filter.accepts(entry.name):
                tally.excluded_by_extension += 1
                sink.trace("Unmatched file extension, skipping", path=entry.path)
                continue
            size = entry.stat().st_size
            tally.files_accepted += 1
            yield FileEntry(path=Path(entry.path), size=size)
        stack.extend(reversed(subdirectories))
