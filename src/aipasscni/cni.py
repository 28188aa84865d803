"""Extraction of Cameroonian national ID card (CNI) fields."""

from __future__ import annotations

import asyncio
import logging
import os

from .generative import GenerativeModel, MediaPart
from .mime import detect_mime_type
from .normalize import normalize_cni
from .prompts import PROMPT_VERSION, build_cni_prompt
from .schemas import CniData

logger = logging.getLogger(__name__)


async def extract_cni_data(
    front_image_path: str | os.PathLike[str],
    back_image_path: str | os.PathLike[str],
    model: GenerativeModel,
) -> CniData:
    """Read both faces of a CNI with ``model`` and return the parsed fields.

    Parameters
    ----------
    front_image_path, back_image_path:
        JPEG, PNG or GIF images of the two faces.  The front is validated
        first; an unsupported front means the back is never looked at.
    model:
        Any :class:`~aipasscni.generative.GenerativeModel` able to read images.

    Raises
    ------
    ExtractionError
        ``UNSUPPORTED_FILE_TYPE`` before any file is read, or whatever kind
        ``model`` raises.
    pydantic.ValidationError
        When the model reply is not a JSON object.
    """

    front_mime = detect_mime_type(front_image_path)
    back_mime = detect_mime_type(back_image_path)

    front_part = await asyncio.to_thread(MediaPart.from_file, front_image_path, front_mime)
    back_part = await asyncio.to_thread(MediaPart.from_file, back_image_path, back_mime)

    prompt = build_cni_prompt()
    logger.info("Extracting CNI data from %s and %s", front_image_path, back_image_path)
    logger.debug("CNI prompt v%s is %d characters", PROMPT_VERSION, len(prompt))

    response = await model.generate_content(prompt, [front_part, back_part])

    data = CniData.model_validate_json(response)
    logger.info("CNI extraction completed")
    return normalize_cni(data)
