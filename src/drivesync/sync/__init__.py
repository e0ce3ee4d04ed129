"""Reconciliation, folder resolution and the upload worker pool."""

from __future__ import annotations

from .dispatcher import UploadDispatcher, WorkItem, default_worker_count
from .reconciler import reconcile
from .resolver import FolderCache, ensure_path, find_path

__all__ = [
    "FolderCache",
    "UploadDispatcher",
    "WorkItem",
    "default_worker_count",
    "ensure_path",
    "find_path",
    "reconcile",
]
