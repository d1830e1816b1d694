from .base import BaseSchema


class CatalogStats(BaseSchema):
    """Counts shown on the admin dashboard."""
    total_features: int
    total_plan_types: int
    total_plans: int
    active_plans: int
