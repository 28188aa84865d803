"""FastAPI application exposing the CNI and passport extraction pipelines."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, File, Request, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .cni import extract_cni_data
from .config import Settings, configure_logging, load_settings
from .errors import ErrorKind, ExtractionError
from .generative import GenerativeModel
from .mime import detect_mime_type
from .passport import extract_passport_data
from .providers import build_model
from .schemas import CniExtractionResponse, PassportExtractionResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Cameroonian ID Extraction API",
    version="0.1.0",
    description=(
        "Upload images of a Cameroonian national ID card (CNI) or passport to "
        "receive structured data such as names, dates and document numbers."
    ),
)

ERROR_STATUS = {
    ErrorKind.UNSUPPORTED_FILE_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.API_KEY_NOT_DEFINED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.GENERATIVE_MODEL_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


@lru_cache
def get_settings() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


@lru_cache
def _model_for(settings: Settings) -> GenerativeModel:
    return build_model(settings)


def get_model(settings: Settings = Depends(get_settings)) -> GenerativeModel:
    """Dependency returning the configured provider, built once per settings."""

    return _model_for(settings)


@app.exception_handler(ExtractionError)
async def _extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.warning("Extraction failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"detail": exc.message, "kind": exc.kind.value},
    )


@app.exception_handler(ValidationError)
async def _invalid_reply_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Unparsable model reply on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "The generative model did not return a valid JSON object."},
    )


async def _save_upload(upload: UploadFile, directory: str, stem: str) -> Path:
    """Write ``upload`` under ``directory`` keeping its original extension."""

    suffix = os.path.splitext(upload.filename or "")[1]
    target = Path(directory) / f"{stem}{suffix}"
    try:
        data = await upload.read()
        await asyncio.to_thread(target.write_bytes, data)
    finally:
        await upload.close()
    return target


@app.post("/cni", response_model=CniExtractionResponse, status_code=status.HTTP_200_OK)
async def extract_cni(
    front: UploadFile = File(..., description="Front face of the national ID card."),
    back: UploadFile = File(..., description="Back face of the national ID card."),
    model: GenerativeModel = Depends(get_model),
) -> CniExtractionResponse:
    """Process both faces of a CNI and return structured information."""

    detect_mime_type(front.filename or "")
    detect_mime_type(back.filename or "")

    with tempfile.TemporaryDirectory() as workdir:
        front_path = await _save_upload(front, workdir, "front")
        back_path = await _save_upload(back, workdir, "back")
        fields = await extract_cni_data(front_path, back_path, model)

    return CniExtractionResponse(fields=fields)


@app.post("/passport", response_model=PassportExtractionResponse, status_code=status.HTTP_200_OK)
async def extract_passport(
    image: UploadFile = File(..., description="Data page of the passport."),
    model: GenerativeModel = Depends(get_model),
    settings: Settings = Depends(get_settings),
) -> PassportExtractionResponse:
    """OCR a passport data page and return structured information."""

    detect_mime_type(image.filename or "")

    with tempfile.TemporaryDirectory() as workdir:
        image_path = await _save_upload(image, workdir, "passport")
        fields = await extract_passport_data(image_path, model, ocr_lang=settings.ocr_lang)

    return PassportExtractionResponse(fields=fields)


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """Simple endpoint to verify that the API is running."""

    return {"status": "ok"}
