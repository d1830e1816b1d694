from fastapi import APIRouter

from catalog_admin.api.endpoints import features, plan_types, stats, subscription_plans

api_router = APIRouter()
api_router.include_router(features.router, prefix="/features", tags=["features"])
api_router.include_router(plan_types.router, prefix="/plan_types", tags=["plan_types"])
api_router.include_router(subscription_plans.router, prefix="/subscription_plans", tags=["subscription_plans"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
