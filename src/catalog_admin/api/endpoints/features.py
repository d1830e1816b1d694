import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from catalog_admin.api.deps import delete_target
from catalog_admin.core.db_errors import classify_integrity_error
from catalog_admin.crud.crud_feature import feature as crud_feature
from catalog_admin.db.session import SessionDep
from catalog_admin.schemas.base import DeleteResponse
from catalog_admin.schemas.feature import FeatureCreate, FeatureResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[FeatureResponse])
async def read_features(db: SessionDep) -> list[FeatureResponse]:
    """Get all features, newest first."""
    return await crud_feature.get_multi(db)


@router.get("/{feature_id}", response_model=FeatureResponse)
async def read_feature(feature_id: UUID, db: SessionDep) -> FeatureResponse:
    """Get feature by ID."""
    feature = await crud_feature.get(db, id=feature_id)
    if not feature:
        raise HTTPException(status_code=404, detail="Feature not found.")
    return feature


@router.post("", response_model=FeatureResponse, status_code=status.HTTP_201_CREATED)
async def create_feature(feature_in: FeatureCreate, db: SessionDep) -> FeatureResponse:
    """Create new feature."""
    try:
        return await crud_feature.create(db, obj_in=feature_in)
    except IntegrityError as e:
        if classify_integrity_error(e) == "unique":
            logger.info(f"Feature label already taken: {feature_in.label}")
            raise HTTPException(status_code=409, detail="A feature with this label already exists.")
        raise


async def _delete_feature(db: SessionDep, feature_id: UUID) -> DeleteResponse:
    try:
        deleted_id = await crud_feature.delete(db, id=feature_id)
    except IntegrityError as e:
        if classify_integrity_error(e) == "foreign_key":
            logger.info(f"Feature {feature_id} still linked to a subscription plan")
            raise HTTPException(
                status_code=409,
                detail="Cannot delete feature: it is linked to a subscription plan.",
            )
        raise
    if deleted_id is None:
        raise HTTPException(status_code=404, detail="Feature not found.")
    return DeleteResponse(message="Feature deleted successfully.", id=deleted_id)


@router.delete("", response_model=DeleteResponse)
async def delete_feature(
    feature_id: Annotated[UUID, Depends(delete_target("Feature"))], db: SessionDep
) -> DeleteResponse:
    """Delete feature named by ``id`` in the query string or body."""
    return await _delete_feature(db, feature_id)


@router.delete("/{feature_id}", response_model=DeleteResponse)
async def delete_feature_by_path(feature_id: UUID, db: SessionDep) -> DeleteResponse:
    """Delete feature."""
    return await _delete_feature(db, feature_id)
