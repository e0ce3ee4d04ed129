"""One-level directory listing for the sync root and its subfolders."""

from __future__ import annotations

import logging
import os
from typing import Iterator, Optional, Sequence

from drivesync.models import LocalFile, LocalFolder

from .matcher import should_skip

logger = logging.getLogger(__name__)


def join_relative(base_path: str, name: str) -> str:
    """Join a forward-slash relative path and a child name."""
    if not base_path:
        return name
    return f"{base_path.rstrip('/')}/{name}"


def list_subfolders(
    root: str,
    skip_patterns: Optional[Sequence[str]] = None,
) -> list[LocalFolder]:
    """
    List the immediate subdirectories of `root` (not recursive).

    Each candidate is checked against the skip patterns using its full joined
    path. An unreadable root is logged and yields an empty list.
    """
    folders: list[LocalFolder] = []
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.error("Error reading directory %s: %s", root, exc)
        return folders

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            logger.warning("Cannot inspect %s: %s", entry.path, exc)
            continue
        if not is_dir:
            continue

        full_path = os.path.join(root, entry.name)
        if should_skip(full_path, skip_patterns):
            logger.info("Skipping excluded folder: %s", full_path)
            continue

        folders.append(LocalFolder(name=entry.name, path=full_path, relative_path=entry.name))

    return folders


def list_files(
    folder: str,
    base_path: str = "",
    skip_patterns: Optional[Sequence[str]] = None,
) -> list[LocalFile]:
    """
    List the regular files directly inside `folder` (not recursive).

    Args:
        folder: Directory to read.
        base_path: Relative path of `folder` from the sync root ("" for the root).
        skip_patterns: Patterns checked against each entry's full path.

    Returns:
        LocalFile entries sorted by name. Directory read errors are logged and
        produce an empty list; a file that cannot be stat'ed is logged and left out.
    """
    files: list[LocalFile] = []
    try:
        with os.scandir(folder) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.error("Error reading folder %s: %s", folder, exc)
        return files

    for entry in entries:
        full_path = os.path.join(folder, entry.name)
        if should_skip(full_path, skip_patterns):
            logger.debug("Skipping excluded file: %s", full_path)
            continue

        try:
            if not entry.is_file():
                continue
            size = os.stat(full_path).st_size
        except OSError as exc:
            logger.warning("Cannot stat %s: %s", full_path, exc)
            continue

        files.append(
            LocalFile(
                name=entry.name,
                relative_path=join_relative(base_path, entry.name),
                absolute_path=full_path,
                size=size,
            )
        )

    return files


def walk_folders(
    root: str,
    skip_patterns: Optional[Sequence[str]] = None,
    base_path: str = "",
) -> Iterator[LocalFolder]:
    """Yield every folder below `root` depth-first, parents before children."""
    for folder in list_subfolders(root, skip_patterns):
        relative = join_relative(base_path, folder.name)
        yield LocalFolder(name=folder.name, path=folder.path, relative_path=relative)
        yield from walk_folders(folder.path, skip_patterns, relative)
