from .base import Base
from .feature import Feature
from .plan_type import PlanType
from .subscription_plan import SubscriptionPlan, PlanFeature

__all__ = [
    "Base",
    "Feature",
    "PlanType",
    "SubscriptionPlan",
    "PlanFeature",
]
