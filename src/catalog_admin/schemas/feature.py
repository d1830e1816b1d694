from typing import Optional

from pydantic import field_validator

from .base import BaseSchema, CreatedSchema, RequiredText, blank_to_none


class FeatureCreate(BaseSchema):
    """Schema for creating a feature."""
    label: RequiredText
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class FeatureResponse(CreatedSchema):
    """Schema for feature response."""
    label: str
    description: Optional[str] = None
