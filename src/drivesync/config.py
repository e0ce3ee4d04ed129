"""Sync configuration: a JSON file plus command-line overrides."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from drivesync.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE: str = "config.json"
DEFAULT_CREDENTIALS_FILE: str = "credentials.json"
DEFAULT_TOKEN_FILE: str = "token.json"

_PATH_DEFAULTS: dict[str, str] = {
    "credentials_file": DEFAULT_CREDENTIALS_FILE,
    "token_file": DEFAULT_TOKEN_FILE,
}

# JSON key -> SyncConfig field
_KEY_MAP: dict[str, str] = {
    "localFolderPath": "local_folder_path",
    "targetFolderId": "target_folder_id",
    "skipPatterns": "skip_patterns",
    "credentialsFile": "credentials_file",
    "tokenFile": "token_file",
    "maxWorkers": "max_workers",
    "recursive": "recursive",
    "matchInDestination": "match_in_destination",
    "dedupeFolders": "dedupe_folders",
    "dryRun": "dry_run",
    "showProgress": "show_progress",
}


@dataclass(slots=True, frozen=True)
class SyncConfig:
    """
    Everything a run needs besides the OAuth token itself.

    Attributes:
        local_folder_path: Existing local directory to upload from.
        target_folder_id: Drive folder id that mirrors local_folder_path.
        skip_patterns: Substring patterns excluded from scanning
            (see drivesync.local.matcher.should_skip).
        credentials_file: OAuth client secrets JSON.
        token_file: Cached authorized-user token JSON.
        max_workers: Upload threads; None picks default_worker_count().
        recursive: Sync every nested folder instead of only the first level.
        match_in_destination: Compare names against each file's destination
            folder instead of the target root.
        dedupe_folders: Share one create-once folder cache between workers.
        dry_run: Report what would be uploaded without touching Drive.
        show_progress: Draw the progress bar while uploading.
    """

    local_folder_path: str
    target_folder_id: str
    skip_patterns: tuple[str, ...] = ()
    credentials_file: str = DEFAULT_CREDENTIALS_FILE
    token_file: str = DEFAULT_TOKEN_FILE
    max_workers: Optional[int] = None
    recursive: bool = False
    match_in_destination: bool = False
    dedupe_folders: bool = True
    dry_run: bool = False
    show_progress: bool = True

    def __post_init__(self) -> None:
        for key in ("local_folder_path", "target_folder_id", "credentials_file", "token_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{key} must be a non-empty string", details={key: value})

        if not os.path.isdir(self.local_folder_path):
            raise ConfigError(
                "local_folder_path is not a directory",
                details={"local_folder_path": self.local_folder_path},
            )

        patterns = self.skip_patterns if self.skip_patterns is not None else ()
        if isinstance(patterns, str) or not all(isinstance(p, str) for p in patterns):
            raise ConfigError("skip_patterns must be a list of strings")
        object.__setattr__(self, "skip_patterns", tuple(patterns))

        if self.max_workers is not None:
            if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
                raise ConfigError("max_workers must be an integer")
            if self.max_workers < 1:
                raise ConfigError("max_workers must be at least 1")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncConfig":
        """
        Build a SyncConfig from the JSON document layout.

        Keys may be given in camelCase (localFolderPath) or as field names
        (local_folder_path).
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_MAP.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                extra[key] = value

        if extra:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(sorted(extra)))

        for key in ("local_folder_path", "target_folder_id"):
            if key not in kwargs:
                raise ConfigError(f"Missing required configuration key: {key}")

        if "skip_patterns" in kwargs and kwargs["skip_patterns"] is None:
            kwargs["skip_patterns"] = ()
        elif isinstance(kwargs.get("skip_patterns"), list):
            kwargs["skip_patterns"] = tuple(kwargs["skip_patterns"])

        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise ConfigError(f"Invalid configuration: {exc}", cause=exc) from exc

    def replace(self, **overrides: Any) -> "SyncConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "skip_patterns" in changes:
            changes["skip_patterns"] = tuple(changes["skip_patterns"])
        return dataclasses.replace(self, **changes)


def load_config(path: str = DEFAULT_CONFIG_FILE, **overrides: Any) -> SyncConfig:
    """
    Read a JSON config file and apply overrides.

    When `path` does not exist the overrides alone must provide
    local_folder_path and target_folder_id.

    Raises:
        ConfigError: on unreadable or invalid configuration.
    """
    data: dict[str, Any] = {}
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigError(
                f"Failed to read config file: {exc}",
                details={"path": path},
                cause=exc,
            ) from exc
        logger.debug("Loaded configuration from %s", path)
        if isinstance(data, dict):
            _resolve_auth_paths(data, os.path.dirname(os.path.abspath(path)))
    else:
        logger.debug("Config file %s not found, using command-line options only", path)

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object", details={"path": path})

    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    return SyncConfig.from_dict(data)


def _resolve_auth_paths(data: dict[str, Any], base_dir: str) -> None:
    """Make credential and token paths from a config file relative to that file."""
    for camel, name in (("credentialsFile", "credentials_file"), ("tokenFile", "token_file")):
        value = data.pop(camel, data.pop(name, _PATH_DEFAULTS[name]))
        if isinstance(value, str) and value and not os.path.isabs(value):
            value = os.path.join(base_dir, value)
        data[name] = value
