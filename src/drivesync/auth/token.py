"""Plain-data OAuth capability handed to upload workers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

GOOGLE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"


@dataclass(slots=True, frozen=True)
class AuthToken:
    """
    Immutable snapshot of the fields needed to rebuild OAuth credentials.

    Workers receive an AuthToken by value and build their own
    google.oauth2.credentials.Credentials (and Drive service) from it, so no
    live client object is ever shared between threads.
    """

    token: Optional[str]
    refresh_token: Optional[str]
    client_id: Optional[str]
    client_secret: Optional[str]
    token_uri: str = GOOGLE_TOKEN_URI
    scopes: tuple[str, ...] = ()

    @classmethod
    def from_credentials(cls, creds: Any) -> "AuthToken":
        """Snapshot a google.oauth2.credentials.Credentials object."""
        scopes = getattr(creds, "scopes", None) or ()
        return cls(
            token=getattr(creds, "token", None),
            refresh_token=getattr(creds, "refresh_token", None),
            client_id=getattr(creds, "client_id", None),
            client_secret=getattr(creds, "client_secret", None),
            token_uri=getattr(creds, "token_uri", None) or GOOGLE_TOKEN_URI,
            scopes=tuple(scopes),
        )

    def to_credentials(self):
        """
        Build fresh OAuth credentials from this snapshot.

        Returns:
            google.oauth2.credentials.Credentials
        """
        from google.oauth2.credentials import Credentials

        return Credentials(
            token=self.token,
            refresh_token=self.refresh_token,
            token_uri=self.token_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=list(self.scopes) or None,
        )

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return f"AuthToken(client_id={self.client_id!r}, scopes={self.scopes!r})"
