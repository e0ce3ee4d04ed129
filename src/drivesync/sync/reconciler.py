"""Split local files into those already present on Drive and those to upload."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from drivesync.models import LocalFile, Reconciliation

logger = logging.getLogger(__name__)


def basename(relative_path: str) -> str:
    return relative_path.replace("\\", "/").rsplit("/", 1)[-1]


def reconcile(
    client: Any,
    local_files: Sequence[LocalFile],
    target_folder_id: str,
) -> Reconciliation:
    """
    Partition `local_files` by name against the children of `target_folder_id`.

    The remote folder is listed once (all pages). A file is skipped when any
    child, file or folder, has exactly its base name; directory structure is
    not compared. Input order is kept in both lists.
    """
    children = client.list_children(target_folder_id)
    existing = {child.name for child in children}
    logger.debug("Drive folder %s has %d children", target_folder_id, len(existing))

    result = Reconciliation()
    for local_file in local_files:
        if basename(local_file.relative_path) in existing:
            result.to_skip.append(local_file)
        else:
            result.to_sync.append(local_file)
    return result
