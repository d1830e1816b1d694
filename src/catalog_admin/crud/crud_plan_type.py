from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.crud.base import CRUDBase
from catalog_admin.models.plan_type import PlanType
from catalog_admin.schemas.plan_type import PlanTypeCreate


class CRUDPlanType(CRUDBase[PlanType, PlanTypeCreate]):
    """CRUD operations for plan types."""

    async def get_by_name(self, db: AsyncSession, *, name: str) -> Optional[PlanType]:
        return await self.get_by_key(db, key_field="name", key_value=name)


plan_type = CRUDPlanType(PlanType, order_by=(PlanType.name,))
