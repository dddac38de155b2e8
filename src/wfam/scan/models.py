"""Typed models for base indexing and unsorted-tree classification."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

NAME_CASE_CHOICES = ("auto", "sensitive", "insensitive")


@dataclass(slots=True, frozen=True)
class FileEntry:
    """One file occurrence captured during a scan."""

    path: Path
    size: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(slots=True, frozen=True)
class ExtensionFilter:
    """Case-insensitive extension allow-list; empty means accept everything."""

    extensions: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, raw: str | None) -> ExtensionFilter:
        """Build a filter from a comma-separated list such as '.jpg,.jpeg'."""
        if not raw:
            return cls()
        return cls.from_iterable(raw.split(","))

    @classmethod
    def from_iterable(cls, tokens: Iterable[str]) -> ExtensionFilter:
        """Keep tokens starting with '.', lowercased; others are dropped."""
        kept = {token.strip().lower() for token in tokens if token.strip().startswith(".")}
        return cls(extensions=frozenset(kept))

    @property
    def active(self) -> bool:
        return bool(self.extensions)

    def accepts(self, file_name: str) -> bool:
        """Return True when the file passes the filter."""
        if not self.extensions:
            return True
        return file_extension(file_name).lower() in self.extensions


def file_extension(file_name: str) -> str:
    """Return text from the last '.' to the end; '' when the name ends with '.' or has none."""
    dot = file_name.rfind(".")
    if dot < 0 or dot == len(file_name) - 1:
        return ""
    return file_name[dot:]


def name_key(file_name: str, name_case: str) -> str:
    """Normalize a base file name into an index key under a case policy."""
    if name_case == "sensitive":
        return file_name
    if name_case == "insensitive":
        return file_name.casefold()
    if name_case == "auto":
        return os.path.normcase(file_name)
    raise ValueError(f"Unknown name_case '{name_case}'; expected one of {NAME_CASE_CHOICES}.")


class NameIndex:
    """Base-name keyed occurrences merged across one or more base directories."""

    def __init__(self, name_case: str = "auto") -> None:
        if name_case not in NAME_CASE_CHOICES:
            raise ValueError(
                f"Unknown name_case '{name_case}'; expected one of {NAME_CASE_CHOICES}."
            )
        self._name_case = name_case
        self._entries: dict[str, list[FileEntry]] = {}

    @property
    def name_case(self) -> str:
        return self._name_case

    def add(self, entry: FileEntry) -> None:
        """Append an occurrence under the entry's base-name key."""
        key = name_key(entry.name, self._name_case)
        self._entries.setdefault(key, []).append(entry)

    def merge(self, other: NameIndex) -> None:
        """Append every occurrence of another index after the existing ones."""
        if other.name_case != self._name_case:
            raise ValueError("Cannot merge indexes built with different name_case policies.")
        for key, occurrences in other._entries.items():
            self._entries.setdefault(key, []).extend(occurrences)

    def lookup(self, file_name: str) -> tuple[FileEntry, ...] | None:
        """Return occurrences for a base name, or None when the name is unknown."""
        occurrences = self._entries.get(name_key(file_name, self._name_case))
        if occurrences is None:
            return None
        return tuple(occurrences)

    def __contains__(self, file_name: object) -> bool:
        if not isinstance(file_name, str):
            return False
        return name_key(file_name, self._name_case) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def occurrence_count(self) -> int:
        return sum(len(items) for items in self._entries.values())


@dataclass(slots=True)
class ClassificationResult:
    """Unsorted files not matched by name and size against the base index."""

    missing: list[FileEntry] = field(default_factory=list)
    different: list[FileEntry] = field(default_factory=list)

    @property
    def all_present(self) -> bool:
        return not self.missing and not self.different


@dataclass(slots=True)
class ScanCounters:
    """Mutable counters accumulated by one walk."""

    entries_seen: int = 0
    directories_skipped: int = 0
    excluded_by_extension: int = 0
    files_accepted: int = 0


@dataclass(slots=True, frozen=True)
class IndexProfile:
    """Diagnostics for one indexing pass over the base directories."""

    directories: int
    names: int
    occurrences: int
    entries_seen: int
    directories_skipped: int
    excluded_by_extension: int
    total_seconds: float


@dataclass(slots=True, frozen=True)
class CompareProfile:
    """Diagnostics for one classification pass over the unsorted tree."""

    entries_seen: int
    directories_skipped: int
    excluded_by_extension: int
    files_checked: int
    missing: int
    different: int
    matched: int
    total_seconds: float
