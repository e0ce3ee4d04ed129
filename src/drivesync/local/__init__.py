"""Local filesystem side of a sync: skip patterns and directory scanning."""

from __future__ import annotations

from .matcher import normalize_pattern, should_skip
from .scanner import list_files, list_subfolders, walk_folders

__all__ = [
    "normalize_pattern",
    "should_skip",
    "list_files",
    "list_subfolders",
    "walk_folders",
]
