from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field, StringConstraints, computed_field, field_validator, model_validator

from catalog_admin.utils.duration import months_to_label, resolve_duration_months

from .base import INT32_MAX, BaseSchema, RequiredText, blank_to_none
from .enums import Duration, OfferType

CurrencyCode = Annotated[str, StringConstraints(strip_whitespace=True, to_upper=True, min_length=1, max_length=10)]


class PlanFeatureIn(BaseSchema):
    """A feature to attach to a plan, with an optional limit."""
    feature_id: UUID
    feature_key: Optional[str] = Field(default=None, max_length=100)
    limit_value: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)

    @field_validator("feature_key")
    @classmethod
    def normalize_feature_key(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class SubscriptionPlanCreate(BaseSchema):
    """Schema for creating a subscription plan together with its features.

    ``name`` is accepted for ``label_suffix`` and the ``duration`` label for
    ``duration_months``, so payloads from earlier console revisions keep
    working. After validation ``duration_months`` is always set.
    """
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    plan_type_id: UUID
    label_suffix: RequiredText = Field(validation_alias=AliasChoices("label_suffix", "name"))
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: CurrencyCode = "USD"
    duration_months: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    duration: Optional[Duration] = None
    description: Optional[str] = None
    is_default: bool = False
    is_active: bool = True
    offer_type: Optional[OfferType] = None
    offer_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    tag: Optional[str] = Field(default=None, max_length=50)
    feature_ids: list[UUID] = Field(default_factory=list)
    features: list[PlanFeatureIn] = Field(default_factory=list)

    @field_validator("description", "tag")
    @classmethod
    def normalize_text(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)

    @model_validator(mode="after")
    def check_duration_and_offer(self) -> "SubscriptionPlanCreate":
        self.duration_months = resolve_duration_months(self.duration_months, self.duration)

        if self.offer_type is None and self.offer_value is not None:
            raise ValueError("offer_type is required when offer_value is set")
        if self.offer_type is not None:
            if self.offer_value is None:
                raise ValueError("offer_value is required when offer_type is set")
            if self.offer_type == OfferType.PERCENTAGE and self.offer_value > 100:
                raise ValueError("percentage offer_value must not exceed 100")
        return self

    def feature_links(self) -> list[PlanFeatureIn]:
        """Deduplicated links; an entry in ``features`` overrides a bare id."""
        links: dict[UUID, PlanFeatureIn] = {}
        for feature_id in self.feature_ids:
            links.setdefault(feature_id, PlanFeatureIn(feature_id=feature_id))
        for link in self.features:
            links[link.feature_id] = link
        return list(links.values())

    def plan_columns(self) -> dict:
        """Column values for the subscription_plans row."""
        return self.model_dump(exclude={"duration", "feature_ids", "features"}, mode="python")


class PlanFeatureResponse(BaseSchema):
    """Feature as attached to a plan."""
    id: UUID
    label: str
    description: Optional[str] = None
    feature_key: Optional[str] = None
    limit_value: Optional[int] = None


class SubscriptionPlanResponse(BaseSchema):
    """Schema for subscription plan response."""
    id: UUID
    plan_type_id: UUID
    plan_type_name: Optional[str] = None
    label_suffix: str
    price: float
    currency: str
    duration_months: int
    description: Optional[str] = None
    is_default: bool
    is_active: bool
    offer_type: Optional[str] = None
    offer_value: Optional[float] = None
    tag: Optional[str] = None
    features: list[PlanFeatureResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def name(self) -> str:
        return self.label_suffix

    @computed_field
    @property
    def duration(self) -> Duration:
        return months_to_label(self.duration_months)

    @classmethod
    def from_model(cls, plan) -> "SubscriptionPlanResponse":
        """Build from a plan loaded with its plan type and feature links."""
        features = [
            PlanFeatureResponse(
                id=link.feature.id,
                label=link.feature.label,
                description=link.feature.description,
                feature_key=link.feature_key,
                limit_value=link.limit_value,
            )
            for link in sorted(plan.plan_features, key=lambda link: link.feature.label)
        ]
        return cls(
            id=plan.id,
            plan_type_id=plan.plan_type_id,
            plan_type_name=plan.plan_type.name if plan.plan_type else None,
            label_suffix=plan.label_suffix,
            price=plan.price,
            currency=plan.currency,
            duration_months=plan.duration_months,
            description=plan.description,
            is_default=plan.is_default,
            is_active=plan.is_active,
            offer_type=plan.offer_type,
            offer_value=plan.offer_value,
            tag=plan.tag,
            features=features,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
