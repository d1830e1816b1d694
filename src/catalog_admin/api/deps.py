from typing import Awaitable, Callable, Optional
from uuid import UUID

from fastapi import Body, HTTPException, Query

from catalog_admin.schemas.base import DeleteRequest
from catalog_admin.utils.validation import parse_uuid


def delete_target(resource: str) -> Callable[..., Awaitable[UUID]]:
    """Dependency resolving the id of a collection-level DELETE.

    The id is read from the ``id`` query parameter, falling back to an
    ``{"id": ...}`` JSON body.
    """

    async def _target(
        id: Optional[str] = Query(default=None),
        payload: Optional[DeleteRequest] = Body(default=None),
    ) -> UUID:
        raw = id if id is not None else (payload.id if payload else None)
        if raw is None or not raw.strip():
            raise HTTPException(status_code=400, detail=f"{resource} ID is required for deletion.")
        target = parse_uuid(raw)
        if target is None:
            raise HTTPException(status_code=400, detail=f"Invalid {resource.lower()} ID.")
        return target

    return _target
