from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.crud.base import CRUDBase
from catalog_admin.models.feature import Feature
from catalog_admin.schemas.feature import FeatureCreate


class CRUDFeature(CRUDBase[Feature, FeatureCreate]):
    """CRUD operations for features."""

    async def get_by_label(self, db: AsyncSession, *, label: str) -> Optional[Feature]:
        return await self.get_by_key(db, key_field="label", key_value=label)


# Newest first, as the console lists them
feature = CRUDFeature(Feature, order_by=(Feature.created_at.desc(), Feature.label))
