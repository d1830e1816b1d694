from fastapi import APIRouter

from catalog_admin.crud.crud_feature import feature as crud_feature
from catalog_admin.crud.crud_plan_type import plan_type as crud_plan_type
from catalog_admin.crud.crud_subscription_plan import subscription_plan as crud_plan
from catalog_admin.db.session import SessionDep
from catalog_admin.schemas.stats import CatalogStats

router = APIRouter()


@router.get("", response_model=CatalogStats)
async def read_stats(db: SessionDep) -> CatalogStats:
    """Catalog totals for the admin dashboard."""
    return CatalogStats(
        total_features=await crud_feature.count(db),
        total_plan_types=await crud_plan_type.count(db),
        total_plans=await crud_plan.count(db),
        active_plans=await crud_plan.count_active(db),
    )
