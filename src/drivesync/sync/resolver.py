"""Map slash-separated folder paths onto Drive folder ids, creating what is missing."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

logger = logging.getLogger(__name__)


class FolderCache:
    """
    Run-scoped (parent_id, name) -> folder_id map shared by upload workers.

    Each (parent_id, name) key has its own lock, held across lookup and
    creation, so two workers resolving the same missing folder create it only
    once while lookups of other folders proceed in parallel. The map lock is
    only held for dictionary access, never across an API call.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids: dict[tuple[str, str], str] = {}
        self._key_locks: dict[tuple[str, str], threading.Lock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def resolve(self, client: Any, parent_id: str, name: str) -> str:
        key = (parent_id, name)
        with self._lock:
            folder_id = self._ids.get(key)
            if folder_id is not None:
                return folder_id
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                folder_id = self._ids.get(key)
            if folder_id is None:
                folder_id = _find_or_create(client, parent_id, name)
                with self._lock:
                    self._ids[key] = folder_id
            return folder_id


def split_folder_path(folder_path: str) -> list[str]:
    return [part for part in folder_path.split("/") if part]


def ensure_path(
    client: Any,
    folder_path: str,
    parent_id: str,
    *,
    cache: Optional[FolderCache] = None,
) -> str:
    """
    Return the id of the folder at `folder_path` below `parent_id`.

    Each segment is looked up by exact name among the folders of the current
    parent (first match wins when Drive holds duplicates) and created when
    absent. Segments are resolved strictly in order. An empty path returns
    `parent_id` without touching the API. Lookup or creation errors propagate.
    """
    current = parent_id
    for part in split_folder_path(folder_path):
        if cache is not None:
            current = cache.resolve(client, current, part)
        else:
            current = _find_or_create(client, current, part)
    return current


def find_path(client: Any, folder_path: str, parent_id: str) -> Optional[str]:
    """Like ensure_path but never creates; returns None when a segment is missing."""
    current = parent_id
    for part in split_folder_path(folder_path):
        matches = client.find_child_folders(current, part)
        if not matches:
            return None
        current = matches[0].file_id
    return current


def _find_or_create(client: Any, parent_id: str, name: str) -> str:
    matches = client.find_child_folders(parent_id, name)
    if matches:
        if len(matches) > 1:
            logger.warning(
                "Found %d folders named %r under %s, using %s",
                len(matches),
                name,
                parent_id,
                matches[0].file_id,
            )
        return matches[0].file_id

    created = client.create_folder(name, parent_id)
    logger.info("Created Drive folder %r (%s)", name, created.file_id)
    return created.file_id
