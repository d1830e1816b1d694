from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints

# Trimmed text that must not be blank
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

# Largest value an INTEGER column holds on Postgres
INT32_MAX = 2_147_483_647


def blank_to_none(v: Optional[str]) -> Optional[str]:
    """Empty or whitespace-only optional text is stored as NULL."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class BaseSchema(BaseModel):
    """Base schema with common fields."""
    model_config = ConfigDict(from_attributes=True)


class IDSchema(BaseSchema):
    """Schema with ID field."""
    id: UUID


class CreatedSchema(IDSchema):
    """Schema for rows carrying id and creation time."""
    created_at: datetime


class DeleteRequest(BaseSchema):
    """Body accepted by collection-level DELETE calls."""
    id: Optional[str] = None


class DeleteResponse(BaseSchema):
    """Schema for delete confirmation."""
    message: str
    id: UUID
