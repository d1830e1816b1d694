from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from catalog_admin.models.base import Base, CatalogEntityMixin


class SubscriptionPlan(CatalogEntityMixin, Base):
    """A priced, timed offering of one plan type."""
    __tablename__ = "subscription_plans"

    plan_type_id = Column(Uuid, ForeignKey("plan_types.id", ondelete="RESTRICT"), nullable=False)
    label_suffix = Column(String(255), nullable=False)  # e.g. 'monthly' or 'annual'
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(10), nullable=False, default="USD")
    duration_months = Column(Integer, nullable=False)  # 0 lifetime, 1 monthly, 12 yearly
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    offer_type = Column(String(20), nullable=True)
    offer_value = Column(Numeric(10, 2), nullable=True)
    tag = Column(String(50), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    plan_type = relationship("PlanType", back_populates="plans")
    plan_features = relationship(
        "PlanFeature",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("plan_type_id", "label_suffix", name="uq_subscription_plans_type_suffix"),
    )


class PlanFeature(Base):
    """Link between a plan and a feature, with an optional per-plan limit."""
    __tablename__ = "plan_features"

    plan_id = Column(Uuid, ForeignKey("subscription_plans.id", ondelete="CASCADE"), primary_key=True)
    feature_id = Column(Uuid, ForeignKey("features.id", ondelete="CASCADE"), primary_key=True)
    feature_key = Column(String(100), nullable=True)
    limit_value = Column(Integer, nullable=True)

    # Relationships
    plan = relationship("SubscriptionPlan", back_populates="plan_features")
    feature = relationship("Feature", back_populates="plan_features")
