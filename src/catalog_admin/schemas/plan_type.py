from typing import Optional

from pydantic import field_validator

from .base import BaseSchema, CreatedSchema, RequiredText, blank_to_none


class PlanTypeCreate(BaseSchema):
    """Schema for creating a plan type."""
    name: RequiredText  # Free, Starter, Pro
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class PlanTypeResponse(CreatedSchema):
    """Schema for plan type response."""
    name: str
    description: Optional[str] = None
