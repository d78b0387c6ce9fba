from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CodenameReference(BaseModel):
    codename: str


class FileReference(BaseModel):
    id: str
    type: str = "internal"


class AssetDescription(BaseModel):
    language: CodenameReference
    description: str


class AssetPayload(BaseModel):
    """Body of ``POST /assets`` registering an uploaded binary file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, str_strip_whitespace=True)

    file_reference: FileReference
    title: Optional[str] = None
    descriptions: list[AssetDescription] = Field(default_factory=list)
    external_id: Optional[str] = None

    @classmethod
    def for_file(
        cls,
        file_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        language_codename: str = "default",
    ) -> "AssetPayload":
        descriptions = []
        if description:
            descriptions.append(
                AssetDescription(
                    language=CodenameReference(codename=language_codename),
                    description=description,
                )
            )
        return cls(file_reference=FileReference(id=file_id), title=title, descriptions=descriptions)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ContentItemPayload(BaseModel):
    """Body of ``POST /items``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    type: CodenameReference
    codename: Optional[str] = None
    external_id: Optional[str] = None

    @field_validator("codename", mode="before")
    @classmethod
    def _blank_codename_is_none(cls, v: Optional[str]):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RichTextElementValue(BaseModel):
    element: CodenameReference
    value: str


class LanguageVariantPayload(BaseModel):
    """Body of ``PUT /items/{id}/variants/codename/{language}``."""

    elements: list[RichTextElementValue]

    @classmethod
    def rich_text(cls, element_codename: str, value: str) -> "LanguageVariantPayload":
        return cls(elements=[RichTextElementValue(element=CodenameReference(codename=element_codename), value=value)])

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()
