from enum import Enum


class Duration(str, Enum):
    """Billing cycle labels used by the admin console."""
    MONTHLY = "monthly"
    YEARLY = "yearly"
    LIFETIME = "lifetime"


class OfferType(str, Enum):
    """How a plan's promotional offer is applied to its price."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"
