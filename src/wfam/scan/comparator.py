"""Classification of unsorted files against a base name index."""

from __future__ import annotations

import time
from dataclasses import asdict
from pathlib import Path

from wfam.logging import NULL_SINK, DiagnosticSink
from wfam.scan.models import (
    ClassificationResult,
    CompareProfile,
    ExtensionFilter,
    FileEntry,
    NameIndex,
    ScanCounters,
)
from wfam.scan.walk import walk_files

MISSING = "missing"
DIFFERENT = "different"
MATCHED = "matched"


def classify(entry: FileEntry, name_index: NameIndex) -> str:
    """Return missing, different or matched for a single file."""
    occurrences = name_index.lookup(entry.name)
    if occurrences is None:
        return MISSING
    if any(occurrence.size == entry.size for occurrence in occurrences):
        return MATCHED
    return DIFFERENT


def compare(
    name_index: NameIndex,
    target_root: str | Path,
    ext_filter: ExtensionFilter,
    *,
    sink: DiagnosticSink = NULL_SINK,
    profile: dict[str, object] | None = None,
    sort_entries: bool = False,
) -> ClassificationResult:
    """Classify every file under target_root against the base index."""
    started = time.perf_counter()
    result = ClassificationResult()
    counters = ScanCounters()
    matched = 0
    for entry in walk_files(
        target_root, ext_filter, sink=sink, counters=counters, sort_entries=sort_entries
    ):
        outcome = classify(entry, name_index)
        if outcome == MISSING:
            sink.trace("File is not found in base", path=str(entry.path))
            result.missing.append(entry)
        elif outcome == DIFFERENT:
            sink.trace("File is found in base, but different", path=str(entry.path))
            result.different.append(entry)
        else:
            matched += 1

    if profile is not None:
        payload = CompareProfile(
            entries_seen=counters.entries_seen,
            directories_skipped=counters.directories_skipped,
            excluded_by_extension=counters.excluded_by_extension,
            files_checked=counters.files_accepted,
            missing=len(result.missing),
            different=len(result.different),
            matched=matched,
            total_seconds=time.perf_counter() - started,
        )
        profile.update(asdict(payload))
    return result
