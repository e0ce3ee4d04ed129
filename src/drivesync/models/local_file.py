"""Data models for the local side of a sync."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LocalFile:
    """
    A regular file found by the scanner.

    relative_path always uses forward slashes and is relative to the sync root.
    """

    name: str
    relative_path: str
    absolute_path: str
    size: int

    @property
    def folder_path(self) -> str:
        """Destination subfolder path: relative_path without its last segment."""
        head, sep, _ = self.relative_path.rpartition("/")
        return head if sep else ""

    @property
    def size_mb(self) -> float:
        return self.size / 1024 / 1024


@dataclass(slots=True, frozen=True)
class LocalFolder:
    """A local directory selected for syncing."""

    name: str
    path: str
    relative_path: str = ""
