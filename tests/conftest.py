"""Shared fixtures for the extraction tests."""

from __future__ import annotations

import json
from io import BytesIO
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

CNI_PAYLOAD = {
    "lastNames": "DOE",
    "firstNames": "JOHN",
    "dateOfBirth": "01.01.1990",
    "placeOfBirth": "DSCHANG",
    "gender": "M",
    "height": "1,80",
    "profession": "INGENIEUR",
    "motherName": "JANE DOE",
    "fatherName": "JOHN DOE SR",
    "address": "YAOUNDE",
    "issueDate": "01.01.2020",
    "expiryDate": "01.01.2030",
    "idPost": "CE0102",
    "cniUniqueId": "AB1234567890",
    "cniNumber": "123456789",
}

PASSPORT_PAYLOAD = {
    "lastNames": "DOE",
    "firstNames": "JANE",
    "nationality": "CAMEROUNAISE/CAMEROONIAN",
    "dateOfBirth": "12.05.1992",
    "gender": "F",
    "placeOfBirth": "DOUALA",
    "issueDate": "03.02.2021",
    "expiryDate": "03.02.2026",
    "profession": "ETUDIANTE",
    "height": "1,65",
    "can": "123456",
    "placeOfIssue": "YAOUNDE",
}

OCR_TEXT = """
REPUBLIQUE DU CAMEROUN
PASSEPORT / PASSPORT
Nom / Surname DOE
Prenoms / Given names JANE
Nationalite / Nationality CAMEROUNAISE/ CAMEROONIAN
""".strip()


def _png_bytes() -> bytes:
    image = Image.new("RGB", (64, 40), color=(240, 240, 240))
    with BytesIO() as buffer:
        image.save(buffer, format="PNG")
        return buffer.getvalue()


@pytest.fixture()
def sample_image_bytes() -> bytes:
    """Return an in-memory PNG image."""

    return _png_bytes()


@pytest.fixture()
def front_image(tmp_path: Path, sample_image_bytes: bytes) -> Path:
    path = tmp_path / "cni_front.png"
    path.write_bytes(sample_image_bytes)
    return path


@pytest.fixture()
def back_image(tmp_path: Path) -> Path:
    path = tmp_path / "cni_back.jpg"
    path.write_bytes(b"fake jpeg data")
    return path


@pytest.fixture()
def passport_image(tmp_path: Path, sample_image_bytes: bytes) -> Path:
    path = tmp_path / "passport.png"
    path.write_bytes(sample_image_bytes)
    return path


def make_model(reply: object = None, *, error: Exception | None = None) -> Mock:
    """Build a generative model stub answering ``reply`` (JSON-encoded) or raising ``error``."""

    model = Mock()
    if error is not None:
        model.generate_content = AsyncMock(side_effect=error)
    else:
        text = reply if isinstance(reply, str) else json.dumps(reply)
        model.generate_content = AsyncMock(return_value=text)
    return model
