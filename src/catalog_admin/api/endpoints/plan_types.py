import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from catalog_admin.api.deps import delete_target
from catalog_admin.core.db_errors import classify_integrity_error
from catalog_admin.crud.crud_plan_type import plan_type as crud_plan_type
from catalog_admin.db.session import SessionDep
from catalog_admin.schemas.base import DeleteResponse
from catalog_admin.schemas.plan_type import PlanTypeCreate, PlanTypeResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[PlanTypeResponse])
async def read_plan_types(db: SessionDep) -> list[PlanTypeResponse]:
    """Get all plan types."""
    return await crud_plan_type.get_multi(db)


@router.get("/{plan_type_id}", response_model=PlanTypeResponse)
async def read_plan_type(plan_type_id: UUID, db: SessionDep) -> PlanTypeResponse:
    """Get a specific plan type."""
    plan_type = await crud_plan_type.get(db, id=plan_type_id)
    if not plan_type:
        raise HTTPException(status_code=404, detail="Plan Type not found.")
    return plan_type


@router.post("", response_model=PlanTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_plan_type(plan_type_in: PlanTypeCreate, db: SessionDep) -> PlanTypeResponse:
    """Create new plan type."""
    try:
        return await crud_plan_type.create(db, obj_in=plan_type_in)
    except IntegrityError as e:
        if classify_integrity_error(e) == "unique":
            raise HTTPException(status_code=409, detail="Plan Type name must be unique.")
        raise


async def _delete_plan_type(db: SessionDep, plan_type_id: UUID) -> DeleteResponse:
    try:
        deleted_id = await crud_plan_type.delete(db, id=plan_type_id)
    except IntegrityError as e:
        if classify_integrity_error(e) == "foreign_key":
            logger.info(f"Plan type {plan_type_id} still referenced by subscription plans")
            raise HTTPException(
                status_code=409,
                detail="Cannot delete plan type: it is linked to Subscription Plans.",
            )
        raise
    if deleted_id is None:
        raise HTTPException(status_code=404, detail="Plan Type not found.")
    return DeleteResponse(message="Plan Type deleted.", id=deleted_id)


@router.delete("", response_model=DeleteResponse)
async def delete_plan_type(
    plan_type_id: Annotated[UUID, Depends(delete_target("Plan Type"))], db: SessionDep
) -> DeleteResponse:
    """Delete plan type named by ``id`` in the query string or body."""
    return await _delete_plan_type(db, plan_type_id)


@router.delete("/{plan_type_id}", response_model=DeleteResponse)
async def delete_plan_type_by_path(plan_type_id: UUID, db: SessionDep) -> DeleteResponse:
    """Delete plan type."""
    return await _delete_plan_type(db, plan_type_id)
