"""Map database integrity failures to the conflict kinds the API reports."""
from typing import Literal, Optional

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

ConflictKind = Literal["unique", "foreign_key"]


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    # asyncpg exposes ``sqlstate``, psycopg ``pgcode``; the SQLAlchemy
    # asyncpg adapter re-raises with the original error as ``__cause__``
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def classify_integrity_error(exc: IntegrityError) -> Optional[ConflictKind]:
    """Return ``"unique"``, ``"foreign_key"`` or None when unrecognised."""
    code = _sqlstate(exc)
    if code == UNIQUE_VIOLATION:
        return "unique"
    if code == FOREIGN_KEY_VIOLATION:
        return "foreign_key"

    # SQLite reports constraint failures only through the message
    message = str(exc.orig).lower()
    if "unique constraint failed" in message or "duplicate key" in message:
        return "unique"
    if "foreign key constraint failed" in message or "violates foreign key" in message:
        return "foreign_key"
    return None
