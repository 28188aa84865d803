"""Image file type guard shared by both extraction pipelines."""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Mapping

from .errors import ExtractionError

# Lower-case extension to MIME type of every image the pipelines accept.
MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
    }
)


def detect_mime_type(file_path: str | os.PathLike[str]) -> str:
    """Return the MIME type matching the extension of ``file_path``.

    Only the path string is inspected; the file does not need to exist.
    Raises :class:`ExtractionError` of kind ``UNSUPPORTED_FILE_TYPE`` with the
    lower-cased extension (``""`` when there is none) for anything outside
    :data:`MIME_TYPES`.
    """

    extension = os.path.splitext(os.fspath(file_path))[1].lower()
    mime_type = MIME_TYPES.get(extension)
    if mime_type is None:
        raise ExtractionError.unsupported_file_type(extension)
    return mime_type
