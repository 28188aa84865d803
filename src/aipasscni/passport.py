"""Extraction of Cameroonian passport fields from OCR text."""

from __future__ import annotations

import logging
import os

from .config import DEFAULT_OCR_LANG
from .generative import GenerativeModel
from .mime import detect_mime_type
from .normalize import normalize_passport
from .ocr import TextRecognizer, recognize_text
from .prompts import PROMPT_VERSION, build_passport_prompt
from .schemas import PassportData

logger = logging.getLogger(__name__)


async def extract_passport_data(
    image_path: str | os.PathLike[str],
    model: GenerativeModel,
    *,
    ocr: TextRecognizer = recognize_text,
    ocr_lang: str = DEFAULT_OCR_LANG,
) -> PassportData:
    """OCR the passport data page and let ``model`` structure the text.

    Every failure is raised to the caller, the same way
    :func:`~aipasscni.cni.extract_cni_data` does.
    """

    detect_mime_type(image_path)

    path = os.fspath(image_path)
    logger.info("Extracting passport data from %s", path)
    text = await ocr(path, ocr_lang)

    prompt = build_passport_prompt(text)
    logger.debug("Passport prompt v%s is %d characters", PROMPT_VERSION, len(prompt))

    response = await model.generate_content(prompt)

    data = PassportData.model_validate_json(response)
    logger.info("Passport extraction completed")
    return normalize_passport(data)
