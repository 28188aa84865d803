"""Runtime configuration read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

API_KEY_ENV = "AIPASSCNI_API_KEY"
PROVIDER_ENV = "AIPASSCNI_PROVIDER"
MODEL_ENV = "AIPASSCNI_MODEL"
OCR_LANG_ENV = "AIPASSCNI_OCR_LANG"
LOG_LEVEL_ENV = "AIPASSCNI_LOG_LEVEL"

DEFAULT_PROVIDER = "gemini"
DEFAULT_OCR_LANG = "fra"


@dataclass(frozen=True)
class Settings:
    """Values shared by the providers, the OCR adapter and the HTTP app."""

    api_key: Optional[str] = None
    provider: str = DEFAULT_PROVIDER
    model_name: Optional[str] = None
    ocr_lang: str = DEFAULT_OCR_LANG
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build :class:`Settings` from the process environment.

    A missing credential is not an error here; providers enforce it when they
    are constructed.
    """

    load_dotenv()
    return Settings(
        api_key=os.getenv(API_KEY_ENV) or None,
        provider=(os.getenv(PROVIDER_ENV) or DEFAULT_PROVIDER).strip().lower(),
        model_name=os.getenv(MODEL_ENV) or None,
        ocr_lang=os.getenv(OCR_LANG_ENV) or DEFAULT_OCR_LANG,
        log_level=(os.getenv(LOG_LEVEL_ENV) or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler for scripts and the HTTP app."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
