"""Provider-neutral contract for generative models used by the pipelines."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class MediaPart:
    """Base64-encoded image sent to a model alongside the prompt."""

    data: str
    mime_type: str

    @classmethod
    def from_file(cls, file_path: str | os.PathLike[str], mime_type: str) -> "MediaPart":
        """Read ``file_path`` and encode its raw bytes."""

        raw = Path(file_path).read_bytes()
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@runtime_checkable
class GenerativeModel(Protocol):
    """Anything able to answer a prompt, optionally looking at images.

    Implementations raise :class:`~aipasscni.errors.ExtractionError` of kind
    ``API_KEY_NOT_DEFINED`` from their constructor when no credential is
    available and of kind ``GENERATIVE_MODEL_FAILURE`` when the provider
    answers without usable text.  Other provider errors propagate as-is.
    """

    async def generate_content(
        self,
        prompt: str,
        parts: Optional[Sequence[MediaPart]] = None,
    ) -> str: ...
