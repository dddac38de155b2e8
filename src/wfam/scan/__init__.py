"""Base-path expansion, base indexing and unsorted-tree comparison."""

from .comparator import DIFFERENT, MATCHED, MISSING, classify, compare
from .expander import GlobSegmentMatcher, expand, has_wildcard
from .indexer import index, index_directory
from .models import (
    NAME_CASE_CHOICES,
    ClassificationResult,
    CompareProfile,
    ExtensionFilter,
    FileEntry,
    IndexProfile,
    NameIndex,
    ScanCounters,
    file_extension,
    name_key,
)
from .walk import walk_files

__all__ = [
    "ClassificationResult",
    "CompareProfile",
    "DIFFERENT",
    "ExtensionFilter",
    "FileEntry",
    "GlobSegmentMatcher",
    "IndexProfile",
    "MATCHED",
    "MISSING",
    "NAME_CASE_CHOICES",
    "NameIndex",
    "ScanCounters",
    "classify",
    "compare",
    "expand",
    "file_extension",
    "has_wildcard",
    "index",
    "index_directory",
    "name_key",
    "walk_files",
]
