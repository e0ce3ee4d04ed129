"""Locations of the OAuth client secrets and the cached user token."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication file locations.

    Attributes:
        client_secrets_file: OAuth client secrets JSON downloaded from the
            Google Cloud console ("Desktop app" client).
        token_file: Authorized-user JSON written after the first interactive
            consent and reused (and refreshed) on later runs.
    """

    client_secrets_file: str
    token_file: str

    def __post_init__(self) -> None:
        for key in ("client_secrets_file", "token_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.{key} must be a non-empty string")
