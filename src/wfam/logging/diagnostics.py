"""Injected diagnostic sinks for scan tracing."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO


class DiagnosticSink(Protocol):
    """Receives trace messages from scan operations."""

    def trace(self, message: str, **fields: object) -> None: ...


class NullSink:
    """Discards every trace message."""

    def trace(self, message: str, **fields: object) -> None:
        return None


NULL_SINK: DiagnosticSink = NullSink()


class StreamSink:
    """Write one trace line per message to a text stream, stderr by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def trace(self, message: str, **fields: object) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        suffix = " ".join(f"{key}={fields[key]}" for key in sorted(fields))
        line = f"[trace] {message}"
        if suffix:
            line = f"{line} {suffix}"
        stream.write(f"{line}\n")


@dataclass(slots=True, frozen=True)
class TraceEvent:
    """Captured trace message."""

    message: str
    fields: dict[str, object]


@dataclass(slots=True)
class RecordingSink:
    """Keep trace events in memory."""

    events: list[TraceEvent] = field(default_factory=list)

    def trace(self, message: str, **fields: object) -> None:
        self.events.append(TraceEvent(message=message, fields=dict(fields)))

    def messages(self) -> list[str]:
        return [event.message for event in self.events]
