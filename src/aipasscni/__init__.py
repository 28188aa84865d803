"""Extraction of Cameroonian CNI and passport fields with OCR and generative models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .cni import extract_cni_data
from .errors import ErrorKind, ExtractionError
from .generative import GenerativeModel, MediaPart
from .mime import MIME_TYPES, detect_mime_type
from .passport import extract_passport_data
from .schemas import CniData, PassportData

if TYPE_CHECKING:  # pragma: no cover
    from .main import app as fastapi_app


def __getattr__(name: str):
    if name == "app":
        from .main import app as fastapi_app  # local import to avoid importing FastAPI eagerly

        return fastapi_app
    raise AttributeError(f"module 'aipasscni' has no attribute {name!r}")


__version__ = "0.1.0"

__all__ = [
    "CniData",
    "ErrorKind",
    "ExtractionError",
    "GenerativeModel",
    "MIME_TYPES",
    "MediaPart",
    "PassportData",
    "app",
    "detect_mime_type",
    "extract_cni_data",
    "extract_passport_data",
]
