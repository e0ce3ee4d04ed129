"""Public model exports for drivesync."""

from __future__ import annotations

from .file_info import FileInfo
from .local_file import LocalFile, LocalFolder
from .results import Reconciliation, SyncStats, UploadResult

__all__ = [
    "FileInfo",
    "LocalFile",
    "LocalFolder",
    "Reconciliation",
    "SyncStats",
    "UploadResult",
]
