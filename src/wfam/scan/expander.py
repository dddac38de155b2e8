"""Resolution of wildcarded base paths into concrete directories.

A masked base path such as ``/archive/photos/20*/raw`` names every
directory at one fixed depth below a literal root. Resolution runs in
two phases: enumerate directories level by level down to the depth the
pattern implies, then keep the candidates whose full path matches the
pattern segment by segment. Only ``*`` and ``?`` are wildcards; every
other character, including ``[`` and ``]``, is literal.
"""

from __future__ import annotations

import os
import re
from typing import Final

from wfam.logging import NULL_SINK, DiagnosticSink

WILDCARD_CHARS: Final[str] = "*?"
DRIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:$")


def host_separators() -> tuple[str, ...]:
    """Directory separators recognized on this platform."""
    if os.altsep:
        return (os.sep, os.altsep)
    return (os.sep,)


def has_wildcard(pattern: str) -> bool:
    return any(char in pattern for char in WILDCARD_CHARS)


def trim_trailing_separator(pattern: str, separators: tuple[str, ...]) -> str:
    """Drop one trailing separator unless the path is a bare root."""
    if len(pattern) <= 1 or pattern[-1] not in separators:
        return pattern
    if DRIVE_PATTERN.match(pattern[:-1]):
        return pattern
    return pattern[:-1]


class GlobSegmentMatcher:
    """Case-insensitive per-segment matcher supporting ``*`` and ``?``."""

    def __init__(self, pattern: str, separators: tuple[str, ...]) -> None:
        self._split = re.compile("[" + re.escape("".join(separators)) + "]")
        self._segments = tuple(
            re.compile(_segment_regex(segment), re.IGNORECASE | re.DOTALL)
            for segment in self._split_segments(pattern)
        )

    def _split_segments(self, path: str) -> list[str]:
        return [segment for segment in self._split.split(path) if segment]

    def matches(self, path: str) -> bool:
        """Return True when every segment of path matches the pattern's segment."""
        segments = self._split_segments(path)
        if len(segments) != len(self._segments):
            return False
        return all(
            compiled.fullmatch(segment) is not None
            for compiled, segment in zip(self._segments, segments)
        )


def _segment_regex(segment: str) -> str:
    parts: list[str] = []
    for char in segment:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "".join(parts)


def _root_before(pattern: str, wildcard_index: int, separators: tuple[str, ...]) -> str:
    """Return the literal directory that precedes the wildcard segment."""
    index = wildcard_index - 1
    while index >= 0 and pattern[index] not in separators:
        index -= 1
    if index < 0:
        return ""
    if index == 0:
        return pattern[0]
    root = pattern[:index]
    if DRIVE_PATTERN.match(root):
        return root + pattern[index]
    return root


def _subdirectories(path: str) -> list[str]:
    with os.scandir(path or os.curdir) as iterator:
        return [
            os.path.join(path, entry.name) if path else entry.name
            for entry in iterator
            if entry.is_dir()
        ]


def expand(
    pattern: str,
    *,
    sink: DiagnosticSink = NULL_SINK,
    separators: tuple[str, ...] | None = None,
) -> list[str]:
    """Resolve a possibly wildcarded base path into directory paths.

    A pattern without wildcards comes back verbatim (minus one trailing
    separator) and is not checked for existence. A wildcarded pattern
    whose literal root cannot be listed resolves to an empty list.
    """
    seps = separators or host_separators()
    trimmed = trim_trailing_separator(pattern, seps)
    if not has_wildcard(trimmed):
        return [trimmed]
    wildcard_index = min(trimmed.find(char) for char in WILDCARD_CHARS if char in trimmed)

    root = _root_before(trimmed, wildcard_index, seps)
    depth = sum(1 for char in trimmed[wildcard_index:] if char in seps)
    sink.trace("Expanding masked path", pattern=trimmed, root=root, depth=depth)

    try:
        candidates = _subdirectories(root)
    except OSError as exc:
        sink.trace("Masked path root is not available", root=root, error=exc.strerror)
        return []
    for _ in range(depth):
        candidates = [child for parent in candidates for child in _subdirectories(parent)]

    matcher = GlobSegmentMatcher(trimmed, seps)
    resolved = [candidate for candidate in candidates if matcher.matches(candidate)]
    sink.trace("Masked path resolved", candidates=len(candidates), matched=len(resolved))
    return resolved
