"""drivesync public API."""

from __future__ import annotations

from drivesync.auth import AuthInfo, AuthToken, OAuthClient
from drivesync.config import SyncConfig, load_config
from drivesync.errors import (
    ApiError,
    AuthError,
    ConfigError,
    DriveSyncError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)
from drivesync.local import should_skip
from drivesync.manager import DriveSyncManager, RunState, format_summary
from drivesync.models import FileInfo, LocalFile, LocalFolder, Reconciliation, SyncStats, UploadResult
from drivesync.sync import UploadDispatcher, ensure_path, reconcile

__all__ = [
    # High-level
    "DriveSyncManager",
    "RunState",
    "SyncConfig",
    "load_config",
    "format_summary",
    # Pipeline
    "should_skip",
    "ensure_path",
    "reconcile",
    "UploadDispatcher",
    # Auth
    "AuthInfo",
    "AuthToken",
    "OAuthClient",
    # Models
    "FileInfo",
    "LocalFile",
    "LocalFolder",
    "Reconciliation",
    "SyncStats",
    "UploadResult",
    # Errors
    "DriveSyncError",
    "ConfigError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
