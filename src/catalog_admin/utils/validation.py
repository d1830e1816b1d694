import uuid
from typing import Optional


def parse_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    """Parse an id taken from a query string or body, None when malformed."""
    if value is None:
        return None
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        return None

