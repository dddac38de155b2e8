"""Diagnostic sinks and structured run logging."""

from .audit import JsonlAuditLogger, RunEvent, new_run_id, sanitize_metadata, utc_timestamp
from .diagnostics import NULL_SINK, DiagnosticSink, NullSink, RecordingSink, StreamSink, TraceEvent

__all__ = [
    "DiagnosticSink",
    "JsonlAuditLogger",
    "NULL_SINK",
    "NullSink",
    "RecordingSink",
    "RunEvent",
    "StreamSink",
    "TraceEvent",
    "new_run_id",
    "sanitize_metadata",
    "utc_timestamp",
]
