import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from catalog_admin.api.deps import delete_target
from catalog_admin.core.db_errors import classify_integrity_error
from catalog_admin.crud.crud_subscription_plan import subscription_plan as crud_plan
from catalog_admin.db.session import SessionDep
from catalog_admin.schemas.base import DeleteResponse
from catalog_admin.schemas.subscription_plan import SubscriptionPlanCreate, SubscriptionPlanResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[SubscriptionPlanResponse])
async def read_subscription_plans(
    db: SessionDep,
    plan_type_id: Optional[UUID] = None,
    is_active: Optional[bool] = None,
) -> list[SubscriptionPlanResponse]:
    """Get all subscription plans with their plan type and features, cheapest first."""
    plans = await crud_plan.get_multi_with_features(db, plan_type_id=plan_type_id, is_active=is_active)
    return [SubscriptionPlanResponse.from_model(plan) for plan in plans]


@router.get("/{plan_id}", response_model=SubscriptionPlanResponse)
async def read_subscription_plan(plan_id: UUID, db: SessionDep) -> SubscriptionPlanResponse:
    """Get a specific subscription plan."""
    plan = await crud_plan.get_with_features(db, id=plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Subscription plan not found.")
    return SubscriptionPlanResponse.from_model(plan)


@router.post("", response_model=SubscriptionPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_subscription_plan(plan_in: SubscriptionPlanCreate, db: SessionDep) -> SubscriptionPlanResponse:
    """Create a subscription plan and attach its features atomically."""
    try:
        plan = await crud_plan.create_with_features(db, obj_in=plan_in)
    except IntegrityError as e:
        kind = classify_integrity_error(e)
        logger.info(f"Rejected subscription plan {plan_in.label_suffix!r} ({kind} violation)")
        if kind == "unique":
            raise HTTPException(
                status_code=409,
                detail="A subscription plan with this label already exists for this plan type.",
            )
        if kind == "foreign_key":
            raise HTTPException(
                status_code=409,
                detail="The plan type or one of the features does not exist.",
            )
        raise
    return SubscriptionPlanResponse.from_model(plan)


async def _delete_plan(db: SessionDep, plan_id: UUID) -> DeleteResponse:
    try:
        deleted_id = await crud_plan.delete(db, id=plan_id)
    except IntegrityError as e:
        if classify_integrity_error(e) == "foreign_key":
            logger.info(f"Subscription plan {plan_id} still referenced")
            raise HTTPException(
                status_code=409,
                detail="Cannot delete this plan because it is linked to other records.",
            )
        raise
    if deleted_id is None:
        raise HTTPException(status_code=404, detail="Subscription plan not found.")
    return DeleteResponse(message="Subscription plan deleted successfully.", id=deleted_id)


@router.delete("", response_model=DeleteResponse)
async def delete_subscription_plan(
    plan_id: Annotated[UUID, Depends(delete_target("Subscription plan"))], db: SessionDep
) -> DeleteResponse:
    """Delete subscription plan named by ``id`` in the query string or body."""
    return await _delete_plan(db, plan_id)


@router.delete("/{plan_id}", response_model=DeleteResponse)
async def delete_subscription_plan_by_path(plan_id: UUID, db: SessionDep) -> DeleteResponse:
    """Delete subscription plan."""
    return await _delete_plan(db, plan_id)
