"""Exception hierarchy and HTTP error mapping for drivesync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveSyncError(Exception):
    """
    Base exception for drivesync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigError(DriveSyncError):
    """Raised when the sync configuration is missing or malformed."""


class InvalidStateError(DriveSyncError):
    """Raised when an object is used outside its lifecycle (e.g., pool not started)."""


class AuthError(DriveSyncError):
    """Raised when OAuth authentication/refresh fails. Fatal for a run."""


class PermissionError(DriveSyncError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(DriveSyncError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(DriveSyncError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class RateLimitError(DriveSyncError):
    """Raised when rate-limited (HTTP 429). Never retried."""


class QuotaExceededError(DriveSyncError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(DriveSyncError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(DriveSyncError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to drivesync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveSyncError:
    """
    Map an HTTP error to a drivesync exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, RateLimitError for rate-limit reasons,
                 or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        # Drive reports per-user throttling as 403 rateLimitExceeded.
        if info.reason and "ratelimit" in info.reason.lower():
            return RateLimitError(message, details=details, cause=cause)
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
