"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable, Optional, TypeVar

from drivesync.auth import AuthToken
from drivesync.errors import (
    ApiError,
    AuthError,
    DriveSyncError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    map_http_error,
)
from drivesync.models import FileInfo
from drivesync.util.mime import FOLDER_MIME, guess_mime_type

from .fields import FILE_FIELDS, LIST_FIELDS, LIST_PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - One controller wraps one Drive service. The underlying httplib2
          transport is not thread-safe, so every worker thread builds its own
          controller via from_token().
        - Errors are mapped to drivesync exceptions and raised immediately;
          there is no retry or back-off.
        - `supports_all_drives` is applied to all requests consistently.
    """

    def __init__(self, service: Any, *, supports_all_drives: bool = True) -> None:
        self._service = service
        self._supports_all_drives = supports_all_drives

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        return cls(service, supports_all_drives=supports_all_drives)

    @classmethod
    def from_token(
        cls,
        token: AuthToken,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Build a new Drive service from an AuthToken snapshot."""
        from googleapiclient.discovery import build

        try:
            service = build(
                "drive",
                "v3",
                credentials=token.to_credentials(),
                cache_discovery=False,
            )
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc
        return cls(service, supports_all_drives=supports_all_drives)

    # ----------------------------
    # Public API
    # ----------------------------
    def list_children(self, parent_id: str) -> list[FileInfo]:
        """List all non-trashed children of parent_id, following every page."""
        q = f"'{escape_query_value(parent_id)}' in parents and trashed = false"
        return self._find_by_query(q)

    def find_child_folders(self, parent_id: str, name: str) -> list[FileInfo]:
        """Return folders named exactly `name` directly under parent_id."""
        q = (
            f"'{escape_query_value(parent_id)}' in parents"
            f" and name = '{escape_query_value(name)}'"
            f" and mimeType = '{FOLDER_MIME}'"
            " and trashed = false"
        )
        return self._find_by_query(q)

    def create_folder(self, name: str, parent_id: str) -> FileInfo:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        logger.debug("Created folder %r under %s -> %s", name, parent_id, data.get("id"))
        return _file_dict_to_file_info(data)

    def upload_file(
        self,
        local_path: str,
        parent_id: str,
        *,
        name: Optional[str] = None,
    ) -> FileInfo:
        """
        Stream a local file into a new Drive file under parent_id.

        The upload is a single non-resumable request; an existing file with the
        same name is never overwritten (Drive simply stores another sibling).
        """
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        from googleapiclient.http import MediaIoBaseUpload

        filename = name if name is not None else os.path.basename(local_path)
        body = {"name": filename, "parents": [parent_id]}

        with open(local_path, "rb") as stream:
            media = MediaIoBaseUpload(
                stream,
                mimetype=guess_mime_type(filename),
                resumable=False,
            )
            req = self._service.files().create(
                body=body,
                media_body=media,
                fields=FILE_FIELDS,
                **self._common_write_kwargs(),
            )
            data = self._execute(req.execute)

        return _file_dict_to_file_info(data)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _find_by_query(self, q: str) -> list[FileInfo]:
        all_files: list[FileInfo] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageSize=LIST_PAGE_SIZE,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                all_files.append(_file_dict_to_file_info(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break
            logger.debug("More results for %r, fetching next page", q)

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except DriveSyncError:
            raise
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> DriveSyncError:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError(f"Network error: {exc}", cause=exc)

        return ApiError(f"Drive API error: {exc}", cause=exc)


def escape_query_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _file_dict_to_file_info(data: dict[str, Any]) -> FileInfo:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents", []) or []

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    return FileInfo(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else [],
        size=size,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
