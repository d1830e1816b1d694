"""Conversions between ``duration_months`` and the billing cycle label.

Older console revisions posted a ``duration`` label while the current schema
stores ``duration_months``; both shapes are accepted on input.
"""
from typing import Optional, Union

from catalog_admin.schemas.enums import Duration

MONTHS_BY_DURATION: dict[Duration, int] = {
    Duration.MONTHLY: 1,
    Duration.YEARLY: 12,
    Duration.LIFETIME: 0,
}


def months_to_label(months: Optional[int]) -> Duration:
    """Label for a month count; anything but 1 or 12 reads as lifetime."""
    if months == 1:
        return Duration.MONTHLY
    if months == 12:
        return Duration.YEARLY
    return Duration.LIFETIME


def label_to_months(label: Union[Duration, str]) -> int:
    try:
        duration = Duration(label.lower() if isinstance(label, str) else label)
    except ValueError:
        raise ValueError(f"Unknown duration label: {label!r}") from None
    return MONTHS_BY_DURATION[duration]


def resolve_duration_months(
    duration_months: Optional[int], duration: Optional[Union[Duration, str]]
) -> int:
    """Explicit ``duration_months`` wins over the label."""
    if duration_months is not None:
        return duration_months
    if duration is not None:
        return label_to_months(duration)
    raise ValueError("duration_months or duration is required")
