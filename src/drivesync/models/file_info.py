"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class FileInfo:
    """
    A Drive item as returned by files().list / files().create.

    Notes:
        - Drive does not enforce unique names among siblings, so several
          FileInfo objects under the same parent may share a name.
    """

    file_id: str
    name: str
    mime_type: str
    parents: list[str] = field(default_factory=list)
    size: Optional[int] = None
