"""Pydantic models for extracted documents and the HTTP envelopes."""

from __future__ import annotations

from typing import Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field


class _DocumentFields(BaseModel):
    """Flat string record parsed from a model reply.

    Python attributes are snake_case; the camelCase aliases are the names the
    model is asked to produce.  Unknown keys are ignored and numbers are kept
    as strings.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    def to_json_dict(self) -> Dict[str, str]:
        """Return the camelCase JSON shape, leaving out unread fields."""

        return self.model_dump(by_alias=True, exclude_none=True)


class CniData(_DocumentFields):
    """Fields read from both faces of a Cameroonian national ID card."""

    last_names: Optional[str] = Field(None, alias="lastNames")
    first_names: Optional[str] = Field(None, alias="firstNames")
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    place_of_birth: Optional[str] = Field(None, alias="placeOfBirth")
    gender: Optional[str] = Field(None, alias="gender")
    height: Optional[str] = Field(None, alias="height")
    profession: Optional[str] = Field(None, alias="profession")
    mother_name: Optional[str] = Field(None, alias="motherName")
    father_name: Optional[str] = Field(None, alias="fatherName")
    address: Optional[str] = Field(None, alias="address")
    issue_date: Optional[str] = Field(None, alias="issueDate")
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    id_post: Optional[str] = Field(None, alias="idPost", description="Identification post code.")
    cni_unique_id: Optional[str] = Field(None, alias="cniUniqueId")
    cni_number: Optional[str] = Field(None, alias="cniNumber", description="Numeric card number.")


class PassportData(_DocumentFields):
    """Fields read from the data page of a Cameroonian passport."""

    last_names: Optional[str] = Field(None, alias="lastNames")
    first_names: Optional[str] = Field(None, alias="firstNames")
    nationality: Optional[str] = Field(
        None, alias="nationality", description="French/English form, e.g. CAMEROUNAISE/CAMEROONIAN."
    )
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    gender: Optional[str] = Field(None, alias="gender")
    place_of_birth: Optional[str] = Field(None, alias="placeOfBirth")
    issue_date: Optional[str] = Field(None, alias="issueDate")
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    profession: Optional[str] = Field(None, alias="profession")
    height: Optional[str] = Field(None, alias="height")
    can: Optional[str] = Field(None, alias="can", description="Card access number printed on the page.")
    place_of_issue: Optional[str] = Field(None, alias="placeOfIssue")


def field_schema(model: Type[_DocumentFields]) -> str:
    """Render ``model`` as the field listing embedded in prompts."""

    lines = [f"    {info.alias}: string;" for info in model.model_fields.values()]
    return "{\n" + "\n".join(lines) + "\n}"


class CniExtractionResponse(BaseModel):
    """Response envelope returned by the CNI endpoint."""

    fields: CniData = Field(..., description="Parsed information detected on the ID card.")
    message: str = Field(
        "Extraction completed successfully.",
        description="Human-readable summary of the extraction result.",
    )


class PassportExtractionResponse(BaseModel):
    """Response envelope returned by the passport endpoint."""

    fields: PassportData = Field(..., description="Parsed information detected on the passport.")
    message: str = Field(
        "Extraction completed successfully.",
        description="Human-readable summary of the extraction result.",
    )
