"""Tests for provider construction and reply handling."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from aipasscni.config import API_KEY_ENV, PROVIDER_ENV, Settings, load_settings
from aipasscni.errors import ErrorKind, ExtractionError
from aipasscni.generative import GenerativeModel, MediaPart
from aipasscni.providers import GeminiModel, OpenAIModel, build_model

MOCK_API_KEY = "fake-api-key"


class _BlockedResponse:
    """Gemini response whose text accessor fails like a blocked candidate."""

    @property
    def text(self) -> str:
        raise ValueError("The `response.text` quick accessor requires a valid Part.")


def _openai_reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.mark.parametrize("provider", [GeminiModel, OpenAIModel])
def test_provider_requires_api_key(provider) -> None:
    with pytest.raises(ExtractionError) as excinfo:
        provider(settings=Settings(api_key=None))

    assert excinfo.value.kind is ErrorKind.API_KEY_NOT_DEFINED
    assert str(excinfo.value) == "API_KEY is not defined"


@pytest.mark.parametrize("provider", [GeminiModel, OpenAIModel])
def test_provider_rejects_empty_api_key(provider) -> None:
    with pytest.raises(ExtractionError) as excinfo:
        provider("", settings=Settings(api_key=MOCK_API_KEY))

    assert excinfo.value.kind is ErrorKind.API_KEY_NOT_DEFINED


@patch("aipasscni.providers.genai")
def test_gemini_model_is_created_with_explicit_key(mock_genai) -> None:
    model = GeminiModel(MOCK_API_KEY)

    mock_genai.configure.assert_called_once_with(api_key=MOCK_API_KEY)
    mock_genai.GenerativeModel.assert_called_once_with(
        model_name="gemini-1.5-flash",
        generation_config={"response_mime_type": "application/json"},
    )
    assert isinstance(model, GenerativeModel)


@patch("aipasscni.providers.genai")
def test_gemini_model_reads_key_from_settings(mock_genai) -> None:
    GeminiModel(settings=Settings(api_key=MOCK_API_KEY, model_name="gemini-1.5-pro"))

    mock_genai.configure.assert_called_once_with(api_key=MOCK_API_KEY)
    assert mock_genai.GenerativeModel.call_args.kwargs["model_name"] == "gemini-1.5-pro"


@patch("aipasscni.providers.genai")
def test_gemini_generate_content_sends_prompt_and_image_parts(mock_genai) -> None:
    generate = AsyncMock(return_value=SimpleNamespace(text='{"lastNames": "DOE"}'))
    mock_genai.GenerativeModel.return_value.generate_content_async = generate
    part = MediaPart(data="ZmFrZSBkYXRh", mime_type="image/jpeg")

    result = asyncio.run(GeminiModel(MOCK_API_KEY).generate_content("prompt", [part]))

    assert result == '{"lastNames": "DOE"}'
    generate.assert_awaited_once_with(
        ["prompt", {"mime_type": "image/jpeg", "data": b"fake data"}]
    )


@pytest.mark.parametrize("response", [SimpleNamespace(text=""), _BlockedResponse()])
@patch("aipasscni.providers.genai")
def test_gemini_without_text_raises_generative_model_failure(mock_genai, response) -> None:
    mock_genai.GenerativeModel.return_value.generate_content_async = AsyncMock(
        return_value=response
    )

    with pytest.raises(ExtractionError) as excinfo:
        asyncio.run(GeminiModel(MOCK_API_KEY).generate_content("prompt"))

    assert excinfo.value.kind is ErrorKind.GENERATIVE_MODEL_FAILURE


@patch("aipasscni.providers.genai")
def test_gemini_provider_errors_propagate_unchanged(mock_genai) -> None:
    error = ConnectionError("quota exceeded")
    mock_genai.GenerativeModel.return_value.generate_content_async = AsyncMock(side_effect=error)

    with pytest.raises(ConnectionError) as excinfo:
        asyncio.run(GeminiModel(MOCK_API_KEY).generate_content("prompt"))

    assert excinfo.value is error


@patch("aipasscni.providers.openai")
def test_openai_generate_content_sends_data_urls(mock_openai) -> None:
    create = AsyncMock(return_value=_openai_reply('{"gender": "F"}'))
    mock_openai.AsyncOpenAI.return_value.chat.completions.create = create
    part = MediaPart(data="ZmFrZQ==", mime_type="image/png")

    result = asyncio.run(OpenAIModel(MOCK_API_KEY).generate_content("prompt", [part]))

    assert result == '{"gender": "F"}'
    mock_openai.AsyncOpenAI.assert_called_once_with(api_key=MOCK_API_KEY)
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0]["content"] == [
        {"type": "text", "text": "prompt"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,ZmFrZQ=="}},
    ]


@pytest.mark.parametrize(
    "reply",
    [_openai_reply(None), _openai_reply(""), SimpleNamespace(choices=[])],
)
@patch("aipasscni.providers.openai")
def test_openai_without_text_raises_generative_model_failure(mock_openai, reply) -> None:
    mock_openai.AsyncOpenAI.return_value.chat.completions.create = AsyncMock(return_value=reply)

    with pytest.raises(ExtractionError) as excinfo:
        asyncio.run(OpenAIModel(MOCK_API_KEY).generate_content("prompt"))

    assert excinfo.value.kind is ErrorKind.GENERATIVE_MODEL_FAILURE


@patch("aipasscni.providers.openai")
@patch("aipasscni.providers.genai")
def test_build_model_selects_configured_provider(mock_genai, mock_openai) -> None:
    assert isinstance(build_model(Settings(api_key=MOCK_API_KEY)), GeminiModel)
    assert isinstance(
        build_model(Settings(api_key=MOCK_API_KEY, provider="openai")), OpenAIModel
    )


def test_build_model_rejects_unknown_provider() -> None:
    with pytest.raises(ValueError, match="Unknown generative model provider"):
        build_model(Settings(api_key=MOCK_API_KEY, provider="mistral"))


@patch("aipasscni.config.load_dotenv")
def test_load_settings_reads_environment(mock_dotenv, monkeypatch) -> None:
    monkeypatch.setenv(API_KEY_ENV, MOCK_API_KEY)
    monkeypatch.setenv(PROVIDER_ENV, " OpenAI ")

    settings = load_settings()

    assert settings.api_key == MOCK_API_KEY
    assert settings.provider == "openai"
    assert settings.ocr_lang == "fra"
    mock_dotenv.assert_called_once_with()


@patch("aipasscni.config.load_dotenv")
def test_load_settings_without_credential(mock_dotenv, monkeypatch) -> None:
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(PROVIDER_ENV, raising=False)

    settings = load_settings()

    assert settings.api_key is None
    with pytest.raises(ExtractionError) as excinfo:
        build_model(settings)
    assert excinfo.value.kind is ErrorKind.API_KEY_NOT_DEFINED
