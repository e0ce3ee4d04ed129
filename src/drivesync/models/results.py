"""Result models for reconciliation and upload runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .local_file import LocalFile


@dataclass(slots=True, frozen=True)
class SyncStats:
    """
    Per-folder or per-run counters.

    copied counts successful uploads only; failed uploads land in failed.
    total is the number of local files considered (copied + skipped + failed).
    """

    copied: int = 0
    skipped: int = 0
    failed: int = 0
    total: int = 0

    def __add__(self, other: "SyncStats") -> "SyncStats":
        if not isinstance(other, SyncStats):
            return NotImplemented
        return SyncStats(
            copied=self.copied + other.copied,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
            total=self.total + other.total,
        )


@dataclass(slots=True)
class Reconciliation:
    """Partition of local files against the names already present remotely."""

    to_sync: list[LocalFile] = field(default_factory=list)
    to_skip: list[LocalFile] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class UploadResult:
    """Outcome message posted by an upload worker for one file."""

    file: LocalFile
    success: bool
    error: Optional[str] = None
    file_id: Optional[str] = None
