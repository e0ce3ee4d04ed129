"""Public auth exports for drivesync."""

from __future__ import annotations

from .auth_info import AuthInfo
from .oauth_client import DEFAULT_SCOPES, OAuthClient
from .token import AuthToken

__all__ = ["AuthInfo", "AuthToken", "OAuthClient", "DEFAULT_SCOPES"]
