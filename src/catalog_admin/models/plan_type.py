from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from catalog_admin.models.base import Base, CatalogEntityMixin


class PlanType(CatalogEntityMixin, Base):
    """PlanType model grouping subscription plans (Free, Starter, Pro)."""
    __tablename__ = "plan_types"

    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Relationships
    plans = relationship("SubscriptionPlan", back_populates="plan_type", passive_deletes="all")
