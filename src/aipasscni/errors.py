"""Failure kinds shared by the CNI and passport extraction pipelines.

Every failure raised by this package is an :class:`ExtractionError` tagged
with an :class:`ErrorKind`.  Call sites branch on ``error.kind`` instead of
catching a family of subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Identity of an extraction failure."""

    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    API_KEY_NOT_DEFINED = "api_key_not_defined"
    GENERATIVE_MODEL_FAILURE = "generative_model_failure"


class ExtractionError(Exception):
    """Raised when a document cannot be turned into structured fields."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        extension: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.extension = extension

    def __repr__(self) -> str:
        return f"ExtractionError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def unsupported_file_type(cls, extension: str) -> "ExtractionError":
        """The file guard rejected ``extension`` (empty when the path has none)."""

        return cls(
            ErrorKind.UNSUPPORTED_FILE_TYPE,
            f"Unsupported file type: {extension}",
            extension=extension,
        )

    @classmethod
    def api_key_not_defined(cls) -> "ExtractionError":
        """A provider was built without any credential."""

        return cls(ErrorKind.API_KEY_NOT_DEFINED, "API_KEY is not defined")

    @classmethod
    def generative_model_failure(cls) -> "ExtractionError":
        """The provider answered but produced no usable text."""

        return cls(
            ErrorKind.GENERATIVE_MODEL_FAILURE,
            "Failed to get a valid response from the generative model.",
        )
