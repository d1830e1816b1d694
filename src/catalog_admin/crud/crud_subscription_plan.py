import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_admin.crud.base import CRUDBase
from catalog_admin.models.subscription_plan import PlanFeature, SubscriptionPlan
from catalog_admin.schemas.subscription_plan import SubscriptionPlanCreate

logger = logging.getLogger(__name__)


class CRUDSubscriptionPlan(CRUDBase[SubscriptionPlan, SubscriptionPlanCreate]):
    """CRUD operations for subscription plans and their feature links."""

    def _select_with_features(self) -> Select:
        return (
            select(SubscriptionPlan)
            .options(
                selectinload(SubscriptionPlan.plan_type),
                selectinload(SubscriptionPlan.plan_features).selectinload(PlanFeature.feature),
            )
            .execution_options(populate_existing=True)
        )

    async def get_with_features(self, db: AsyncSession, *, id: UUID) -> Optional[SubscriptionPlan]:
        """Get a plan with its plan type and features loaded."""
        stmt = self._select_with_features().where(SubscriptionPlan.id == id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_multi_with_features(
        self,
        db: AsyncSession,
        *,
        plan_type_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
    ) -> list[SubscriptionPlan]:
        """Get plans, cheapest first, optionally filtered."""
        stmt = self._select_with_features().order_by(*self.order_by)
        if plan_type_id is not None:
            stmt = stmt.where(SubscriptionPlan.plan_type_id == plan_type_id)
        if is_active is not None:
            stmt = stmt.where(SubscriptionPlan.is_active == is_active)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def count_active(self, db: AsyncSession) -> int:
        stmt = select(func.count()).select_from(SubscriptionPlan).where(SubscriptionPlan.is_active.is_(True))
        result = await db.execute(stmt)
        return result.scalar_one()

    async def create_with_features(self, db: AsyncSession, *, obj_in: SubscriptionPlanCreate) -> SubscriptionPlan:
        """Insert a plan and attach its features in a single transaction.

        When the plan is the default of its type, the flag is cleared on the
        type's other plans in the same transaction.

        Raises:
            IntegrityError: duplicate (plan_type_id, label_suffix) or an
                unknown plan type / feature; nothing is persisted.
        """
        links = obj_in.feature_links()
        plan = SubscriptionPlan(**obj_in.plan_columns())
        try:
            if obj_in.is_default:
                await db.execute(
                    update(SubscriptionPlan)
                    .where(
                        SubscriptionPlan.plan_type_id == obj_in.plan_type_id,
                        SubscriptionPlan.is_default.is_(True),
                    )
                    .values(is_default=False)
                )
            db.add(plan)
            await db.flush()
            db.add_all(
                PlanFeature(
                    plan_id=plan.id,
                    feature_id=link.feature_id,
                    feature_key=link.feature_key,
                    limit_value=link.limit_value,
                )
                for link in links
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise

        logger.info(f"Created subscription plan {plan.id} with {len(links)} feature(s)")
        return await self.get_with_features(db, id=plan.id)


subscription_plan = CRUDSubscriptionPlan(
    SubscriptionPlan, order_by=(SubscriptionPlan.price.asc(), SubscriptionPlan.created_at)
)
