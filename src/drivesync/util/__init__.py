from .mime import DEFAULT_MIME, FOLDER_MIME, guess_mime_type

__all__ = [
    "DEFAULT_MIME",
    "FOLDER_MIME",
    "guess_mime_type",
]
