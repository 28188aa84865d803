"""Re-apply the enforceable prompt rules to parsed records.

The model is asked to respect these rules already; this module corrects the
replies that break them and leaves every other value exactly as returned.
Place names are not touched here: the locality list only guides the prompt.
Records are frozen, so every helper returns a copy.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional

from .schemas import CniData, PassportData

logger = logging.getLogger(__name__)

CNI_VALIDITY_YEARS = 10

DATE_FORMATS = ("%d.%m.%Y", "%d/%m/%Y", "%Y-%m-%d")

_GENDER_ALIASES = {
    "M": "M",
    "MALE": "M",
    "MASCULIN": "M",
    "HOMME": "M",
    "F": "F",
    "FEMALE": "F",
    "FEMININ": "F",
    "FÉMININ": "F",
    "FEMME": "F",
}


def normalize_gender(value: Optional[str]) -> Optional[str]:
    """Map common spellings to ``M``/``F``; unknown values are returned unchanged."""

    if value is None:
        return None
    return _GENDER_ALIASES.get(value.strip().upper(), value)


def normalize_nationality(value: Optional[str]) -> Optional[str]:
    """Drop whitespace around the slash of ``FR/EN`` nationalities."""

    if value is None:
        return None
    return re.sub(r"\s*/\s*", "/", value.strip())


def _parse_date(value: str) -> Optional[tuple[date, str]]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date(), fmt
        except ValueError:
            continue
    return None


def _add_years(day: date, years: int) -> Optional[date]:
    """Shift ``day`` by ``years``; ``None`` past :data:`datetime.date.max`."""

    year = day.year + years
    if year > date.max.year:
        return None
    try:
        return day.replace(year=year)
    except ValueError:
        # 29 February without a leap year on arrival.
        return day.replace(year=year, day=28)


def expected_expiry_date(issue_date: Optional[str]) -> Optional[str]:
    """Return ``issue_date`` plus the CNI validity, in the same format.

    ``None`` when the issue date is missing, not in one of
    :data:`DATE_FORMATS`, or too late to shift.
    """

    if not issue_date:
        return None
    parsed = _parse_date(issue_date)
    if parsed is None:
        return None
    issued, fmt = parsed
    expiry = _add_years(issued, CNI_VALIDITY_YEARS)
    if expiry is None:
        return None
    return expiry.strftime(fmt)


def _corrected_expiry(issue_date: Optional[str], expiry_date: Optional[str]) -> Optional[str]:
    """Return the expiry to use instead of ``expiry_date``, or ``None`` to keep it.

    Only a readable expiry that falls on another day than issue + validity is
    replaced; missing or unreadable expiries and other date formats of the
    right day are kept.
    """

    expected = expected_expiry_date(issue_date)
    if expected is None or not expiry_date:
        return None
    current = _parse_date(expiry_date)
    if current is None or current[0] == _parse_date(expected)[0]:
        return None
    return expected


def normalize_cni(data: CniData) -> CniData:
    """Apply gender, expiry and number rules to a CNI record."""

    updates = {}

    gender = normalize_gender(data.gender)
    if gender != data.gender:
        updates["gender"] = gender

    expiry = _corrected_expiry(data.issue_date, data.expiry_date)
    if expiry is not None:
        logger.warning(
            "Correcting CNI expiry date %r to %r (issued %r)",
            data.expiry_date,
            expiry,
            data.issue_date,
        )
        updates["expiry_date"] = expiry

    if data.cni_number is not None:
        number = re.sub(r"\s+", "", data.cni_number)
        if number != data.cni_number:
            updates["cni_number"] = number

    return data.model_copy(update=updates) if updates else data


def normalize_passport(data: PassportData) -> PassportData:
    """Apply gender and nationality rules to a passport record."""

    updates = {}

    gender = normalize_gender(data.gender)
    if gender != data.gender:
        updates["gender"] = gender

    nationality = normalize_nationality(data.nationality)
    if nationality != data.nationality:
        updates["nationality"] = nationality

    return data.model_copy(update=updates) if updates else data
