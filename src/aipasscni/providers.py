"""Concrete :class:`~aipasscni.generative.GenerativeModel` implementations."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import google.generativeai as genai
import openai

from .config import Settings, load_settings
from .errors import ExtractionError
from .generative import GenerativeModel, MediaPart

logger = logging.getLogger(__name__)

GEMINI_DEFAULT_MODEL = "gemini-1.5-flash"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"


def _resolve_api_key(api_key: Optional[str], settings: Optional[Settings]) -> str:
    """Prefer the explicit key, then the configured one."""

    if api_key is None:
        api_key = (settings or load_settings()).api_key
    if not api_key:
        raise ExtractionError.api_key_not_defined()
    return api_key


class GeminiModel:
    """Google Gemini vision model answering in JSON."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model_name: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        key = _resolve_api_key(api_key, settings)
        self.model_name = model_name or (settings and settings.model_name) or GEMINI_DEFAULT_MODEL

        genai.configure(api_key=key)
        self._model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={"response_mime_type": "application/json"},
        )
        logger.info("Initialized Gemini model %s", self.model_name)

    async def generate_content(
        self,
        prompt: str,
        parts: Optional[Sequence[MediaPart]] = None,
    ) -> str:
        contents: List[Any] = [prompt]
        contents.extend(
            {"mime_type": part.mime_type, "data": part.to_bytes()} for part in parts or ()
        )

        response = await self._model.generate_content_async(contents)
        try:
            text = response.text
        except ValueError as exc:
            # Raised by the SDK when the candidate was blocked or carries no text part.
            raise ExtractionError.generative_model_failure() from exc
        if not text:
            raise ExtractionError.generative_model_failure()
        return text


class OpenAIModel:
    """OpenAI chat completion model constrained to JSON objects."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        model_name: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        key = _resolve_api_key(api_key, settings)
        self.model_name = model_name or (settings and settings.model_name) or OPENAI_DEFAULT_MODEL
        self._client = openai.AsyncOpenAI(api_key=key)
        logger.info("Initialized OpenAI model %s", self.model_name)

    @staticmethod
    def _build_content(prompt: str, parts: Sequence[MediaPart]) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for part in parts:
            content.append({"type": "image_url", "image_url": {"url": part.to_data_url()}})
        return content

    async def generate_content(
        self,
        prompt: str,
        parts: Optional[Sequence[MediaPart]] = None,
    ) -> str:
        response = await self._client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": self._build_content(prompt, parts or ())}],
            response_format={"type": "json_object"},
        )

        if not response.choices:
            raise ExtractionError.generative_model_failure()
        text = response.choices[0].message.content
        if not text:
            raise ExtractionError.generative_model_failure()
        return text


PROVIDERS = {
    "gemini": GeminiModel,
    "openai": OpenAIModel,
}


def build_model(settings: Optional[Settings] = None) -> GenerativeModel:
    """Instantiate the provider named by ``settings.provider``."""

    settings = settings or load_settings()
    try:
        provider = PROVIDERS[settings.provider]
    except KeyError as exc:
        raise ValueError(
            f"Unknown generative model provider {settings.provider!r}; "
            f"expected one of: {', '.join(sorted(PROVIDERS))}"
        ) from exc
    return provider(settings.api_key, settings=settings)
