from __future__ import annotations

import mimetypes

FOLDER_MIME: str = "application/vnd.google-apps.folder"

DEFAULT_MIME: str = "application/octet-stream"


def guess_mime_type(path: str) -> str:
    """
    Guess the upload MIME type from a file name.

    Falls back to application/octet-stream; Drive stores the bytes either way.
    """
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or DEFAULT_MIME
