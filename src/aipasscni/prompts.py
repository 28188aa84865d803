"""Versioned prompt templates sent to the generative model.

The templates are the contract with the model: they carry the field schema
and the business rules (gender codes, expiry arithmetic, locality names,
nationality format).  Bump :data:`PROMPT_VERSION` whenever a rule changes.
"""

from __future__ import annotations

from typing import Sequence

from .schemas import CniData, PassportData, field_schema

PROMPT_VERSION = "2"

# Localities the model checks the CNI place of birth against.
CAMEROON_LOCALITIES: Sequence[str] = (
    "ABONG-MBANG", "AKONOLINGA", "AMBAM", "BAFANG", "BAFIA", "BAFOUSSAM",
    "BAFUT", "BAHAM", "BALI", "BAMENDA", "BANDJOUN", "BANGANGTE", "BANKIM",
    "BANYO", "BATIBO", "BATOURI", "BELABO", "BERTOUA", "BUEA", "DJOUM",
    "DOUALA", "DSCHANG", "EBOLOWA", "EDEA", "ESEKA", "FIGUIL", "FONTEM",
    "FOUMBAN", "FOUMBOT", "FUNDONG", "GAROUA", "GAROUA-BOULAI", "GUIDER",
    "KAELE", "KEKEM", "KOUSSERI", "KRIBI", "KUMBA", "KUMBO", "LIMBE", "LOMIE",
    "LOUM", "MAGA", "MAMFE", "MANJO", "MAROUA", "MBALMAYO", "MBANGA",
    "MBENGWI", "MBOUDA", "MEIGANGA", "MELONG", "MENJI", "MFOU", "MOKOLO",
    "MONATELE", "MORA", "MUYUKA", "NANGA-EBOKO", "NDOP", "NGAOUNDAL",
    "NGAOUNDERE", "NGUTI", "NKAMBE", "NKONGSAMBA", "NTUI", "OBALA", "PENJA",
    "PITOA", "POLI", "SANGMELIMA", "TCHOLLIRE", "TIBATI", "TIGNERE", "TIKO",
    "WUM", "YABASSI", "YAGOUA", "YAOUNDE", "YOKADOUMA", "YOKO",
)

CNI_PROMPT = """\
You are given a field schema and the front and back images of a Cameroonian
National ID Card (CNI). Extract the data according to the schema and return it
as a single JSON object using exactly these keys.

interface CniData {schema}

Instructions:
- Extract the 'cniNumber' ensuring it is a numeric string.
- Ensure that the 'gender' field is correctly identified as 'M' or 'F'.
- Ensure that the 'expiryDate' is 10 years after the 'issueDate'.
- Extract the 'placeOfBirth' from the images and cross-check it against the
  list of valid place names in Cameroon below. If the place name is not in the
  list, correct it to the closest valid name. For example, correct "OBSCHANG"
  to "DSCHANG".
- Combine the relevant information from both the front and back images,
  ensuring the data is correctly formatted according to the schema.

Valid place names: {localities}
"""

PASSPORT_PROMPT = """\
You are given a field schema and the text of a Cameroonian passport obtained
from Tesseract OCR. Extract the data from the text according to the schema and
return it as a single JSON object using exactly these keys.

interface PassportData {schema}

Text:
"{text}"

Instructions:
- When extracting the 'nationality' field, ensure that there is no space after
  the '/' character. The correct format is 'CAMEROUNAISE/CAMEROONIAN', not
  'CAMEROUNAISE/ CAMEROONIAN'.
- When extracting the 'gender' field, ensure that it is either 'F' or 'M'. If
  the text is not accurate, determine it from the name provided.
"""


def build_cni_prompt() -> str:
    return CNI_PROMPT.format(
        schema=field_schema(CniData),
        localities=", ".join(CAMEROON_LOCALITIES),
    )


def build_passport_prompt(ocr_text: str) -> str:
    """Embed ``ocr_text`` verbatim into the passport template."""

    return PASSPORT_PROMPT.format(schema=field_schema(PassportData), text=ocr_text)
