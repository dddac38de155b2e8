"""Command-line entrypoint: resolve, index, compare, report."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

from wfam.config import (
    ERROR_HELP_REQUESTED,
    RunConfig,
    parse_run_config,
    usage_lines,
)
from wfam.logging import (
    NULL_SINK,
    DiagnosticSink,
    JsonlAuditLogger,
    RunEvent,
    StreamSink,
    new_run_id,
    sanitize_metadata,
    utc_timestamp,
)
from wfam.output import BANNER, report_lines, write_result_lists
from wfam.scan import ClassificationResult, compare, expand, index

ERROR_BASE_NOT_AVAILABLE = "BASE_NOT_AVAILABLE"
ERROR_UNSORTED_NOT_AVAILABLE = "UNSORTED_NOT_AVAILABLE"
ERROR_SCAN_FAILED = "SCAN_FAILED"
ERROR_OUTPUT_FAILED = "OUTPUT_FAILED"

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2


@dataclass(slots=True)
class RunOutcome:
    """Result of one comparison run, successful or not."""

    ok: bool
    error_code: str | None = None
    message: str | None = None
    base_directories: tuple[str, ...] = ()
    result: ClassificationResult | None = None
    index_profile: dict[str, object] = field(default_factory=dict)
    compare_profile: dict[str, object] = field(default_factory=dict)


def _failure(code: str, message: str, base_directories: tuple[str, ...] = ()) -> RunOutcome:
    return RunOutcome(ok=False, error_code=code, message=message, base_directories=base_directories)


def run(config: RunConfig, *, sink: DiagnosticSink = NULL_SINK) -> RunOutcome:
    """Resolve base directories, build the index and classify the unsorted tree."""
    base_pattern = config.scan.base_pattern or ""
    unsorted_path = config.scan.unsorted_path or ""

    try:
        base_directories = tuple(expand(base_pattern, sink=sink))
    except OSError as exc:
        return _failure(ERROR_SCAN_FAILED, f"Scan failed: {exc}")
    if not base_directories:
        return _failure(
            ERROR_BASE_NOT_AVAILABLE,
            f"Base folder is not available. Value provided: {base_pattern}",
        )
    for directory in base_directories:
        if not os.path.isdir(directory):
            return _failure(
                ERROR_BASE_NOT_AVAILABLE,
                f"Base folder is not available. Value provided: {directory}",
                base_directories,
            )
    if not os.path.isdir(unsorted_path):
        return _failure(
            ERROR_UNSORTED_NOT_AVAILABLE,
            f"Unsorted folder is not available. Value provided: {unsorted_path}",
            base_directories,
        )

    outcome = RunOutcome(ok=True, base_directories=base_directories)
    try:
        name_index = index(
            base_directories,
            config.scan.extensions,
            name_case=config.scan.name_case,
            sink=sink,
            profile=outcome.index_profile,
            sort_entries=config.scan.sort_entries,
        )
        outcome.result = compare(
            name_index,
            unsorted_path,
            config.scan.extensions,
            sink=sink,
            profile=outcome.compare_profile,
            sort_entries=config.scan.sort_entries,
        )
    except OSError as exc:
        return _failure(ERROR_SCAN_FAILED, f"Scan failed: {exc}", base_directories)
    return outcome


def _audit(config: RunConfig, outcome: RunOutcome) -> None:
    if config.output.audit_log is None:
        return
    metadata: dict[str, object] = {
        "base_pattern": config.scan.base_pattern,
        "unsorted_path": config.scan.unsorted_path,
        "base_directories": len(outcome.base_directories),
        "index": outcome.index_profile,
        "compare": outcome.compare_profile,
    }
    if outcome.result is not None:
        metadata["missing"] = len(outcome.result.missing)
        metadata["different"] = len(outcome.result.different)
    JsonlAuditLogger(config.output.audit_log).append(
        RunEvent(
            timestamp=utc_timestamp(),
            run_id=new_run_id(),
            ok=outcome.ok,
            error_code=outcome.error_code,
            metadata=sanitize_metadata(metadata),
        )
    )


def main(
    argv: list[str] | None = None,
    out_stream: TextIO | None = None,
    err_stream: TextIO | None = None,
) -> int:
    """Entrypoint for the wfam console utility."""
    out = out_stream if out_stream is not None else sys.stdout
    err = err_stream if err_stream is not None else sys.stderr
    out.write(f"{BANNER}\n")

    parsed = parse_run_config(sys.argv[1:] if argv is None else argv)
    config = parsed.config
    if parsed.error is not None or config is None:
        if parsed.error is not None and parsed.error.code == ERROR_HELP_REQUESTED:
            for line in usage_lines():
                out.write(f"{line}\n")
            return EXIT_OK
        message = parsed.error.message if parsed.error is not None else "No configuration."
        err.write(f"error: {message}\n")
        return EXIT_CONFIG_ERROR

    sink: DiagnosticSink = StreamSink(err) if config.verbose else NULL_SINK
    outcome = run(config, sink=sink)
    if outcome.ok and outcome.result is not None:
        for line in report_lines(
            outcome.result, config.scan.unsorted_path or "", config.scan.base_pattern or ""
        ):
            out.write(f"{line}\n")
        try:
            write_result_lists(
                outcome.result, config.output.missing_path, config.output.different_path
            )
        except OSError as exc:
            outcome.ok = False
            outcome.error_code = ERROR_OUTPUT_FAILED
            outcome.message = f"Cannot write result list: {exc}"

    _audit(config, outcome)
    if not outcome.ok:
        err.write(f"error: {outcome.message}\n")
        return EXIT_RUN_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
