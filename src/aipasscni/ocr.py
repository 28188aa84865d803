"""Tesseract OCR adapter used by the passport pipeline.

The engine is treated as a black box: an image path and a language code go in,
recognised plain text comes out.  Engine errors are not translated.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable

import pytesseract
from PIL import Image

from .config import DEFAULT_OCR_LANG

logger = logging.getLogger(__name__)

# Signature shared by :func:`recognize_text` and the stubs injected in its place.
TextRecognizer = Callable[[str, str], Awaitable[str]]


def _image_to_text(image_path: str, lang: str) -> str:
    """Run Tesseract synchronously on the image stored at ``image_path``."""

    with Image.open(image_path) as img:
        rgb_image = img.convert("RGB")
        return pytesseract.image_to_string(rgb_image, lang=lang)


async def recognize_text(
    image_path: str | os.PathLike[str],
    lang: str = DEFAULT_OCR_LANG,
) -> str:
    """Return the text Tesseract recognises on ``image_path``.

    Parameters
    ----------
    image_path:
        Path to a JPEG, PNG or GIF image.
    lang:
        Tesseract language code; passports are read in French (``fra``).
    """

    path = os.fspath(image_path)
    text = await asyncio.to_thread(_image_to_text, path, lang)
    logger.debug("OCR recognised %d characters on %s", len(text), path)
    return text
