from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from catalog_admin.models.base import Base, CatalogEntityMixin


class Feature(CatalogEntityMixin, Base):
    """A capability that plans can include."""
    __tablename__ = "features"

    label = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # Relationships
    plan_features = relationship("PlanFeature", back_populates="feature", passive_deletes=True)
