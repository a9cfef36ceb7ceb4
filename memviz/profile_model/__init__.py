"""Domain model for execution profiles and their source synchronization.

This package contains non-UI profile primitives:
- path/file/line identity types with their total orderings
- the ordered ``Profile`` container and lazy per-file section views
- the merge of sparse trace records with physical source lines
- the checkpoint-id set builder
"""

from __future__ import annotations

from .sets import checkpoint_set, merge_checkpoints
from .types import (
    UNKNOWN,
    FileInfo,
    FileItem,
    LineInfo,
    LineItem,
    PathInfo,
    ProfileItem,
    compare_files,
    compare_function_names,
    compare_items,
    compare_lines,
    compare_paths,
)
from .sync import SyncedFileSection
from .profile import FileSection, Profile, RecordTuple

__all__ = [
    "UNKNOWN",
    "PathInfo",
    "FileInfo",
    "LineInfo",
    "FileItem",
    "LineItem",
    "ProfileItem",
    "compare_paths",
    "compare_files",
    "compare_function_names",
    "compare_lines",
    "compare_items",
    "checkpoint_set",
    "merge_checkpoints",
    "SyncedFileSection",
    "FileSection",
    "Profile",
    "RecordTuple",
]
