"""Base-tree indexing by file name."""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path

from wfam.logging import NULL_SINK, DiagnosticSink
from wfam.scan.models import ExtensionFilter, IndexProfile, NameIndex, ScanCounters
from wfam.scan.walk import walk_files


def index(
    directories: Iterable[str | Path],
    ext_filter: ExtensionFilter,
    *,
    name_case: str = "auto",
    sink: DiagnosticSink = NULL_SINK,
    profile: dict[str, object] | None = None,
    sort_entries: bool = False,
) -> NameIndex:
    """Build one name index from every file below the given directories."""
    started = time.perf_counter()
    merged = NameIndex(name_case=name_case)
    counters = ScanCounters()
    directory_count = 0
    for directory in directories:
        directory_count += 1
        merged.merge(
            index_directory(
                directory,
                ext_filter,
                name_case=name_case,
                sink=sink,
                counters=counters,
                sort_entries=sort_entries,
            )
        )
    sink.trace("Internal map built", names=len(merged))

    if profile is not None:
        payload = IndexProfile(
            directories=directory_count,
            names=len(merged),
            occurrences=merged.occurrence_count(),
            entries_seen=counters.entries_seen,
            directories_skipped=counters.directories_skipped,
            excluded_by_extension=counters.excluded_by_extension,
            total_seconds=time.perf_counter() - started,
        )
        profile.update(asdict(payload))
    return merged


def index_directory(
    directory: str | Path,
    ext_filter: ExtensionFilter,
    *,
    name_case: str = "auto",
    sink: DiagnosticSink = NULL_SINK,
    counters: ScanCounters | None = None,
    sort_entries: bool = False,
) -> NameIndex:
    """Index a single base directory."""
    sink.trace("Reading base folder content", directory=str(directory))
    result = NameIndex(name_case=name_case)
    for entry in walk_files(
        directory, ext_filter, sink=sink, counters=counters, sort_entries=sort_entries
    ):
        result.add(entry)
    sink.trace("Building internal map completed", directory=str(directory), names=len(result))
    return result
