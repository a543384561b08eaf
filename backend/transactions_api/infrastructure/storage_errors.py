"""Storage Error Classification - maps driver-specific failures to backend-neutral kinds.

Invariants:
    - classify_storage_error() never raises; unknown failures are OTHER
    - Only this module knows SQLSTATE codes and SQLite error names

Design Decisions:
    - PostgreSQL drivers expose SQLSTATE as `sqlstate` (asyncpg, psycopg) or `pgcode` (psycopg2)
    - SQLite exposes `sqlite_errorname` (Python 3.11+); the message prefix is the fallback
"""

from enum import Enum


class StorageErrorKind(str, Enum):
    """What the storage engine objected to."""
    UNIQUE_VIOLATION = "unique_violation"
    CHECK_VIOLATION = "check_violation"
    OTHER = "other"


_SQLSTATE_KINDS = {
    "23505": StorageErrorKind.UNIQUE_VIOLATION,
    "23514": StorageErrorKind.CHECK_VIOLATION,
}

_SQLITE_NAME_KINDS = {
    "SQLITE_CONSTRAINT_UNIQUE": StorageErrorKind.UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_PRIMARYKEY": StorageErrorKind.UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_CHECK": StorageErrorKind.CHECK_VIOLATION,
}

_SQLITE_MESSAGE_KINDS = (
    ("UNIQUE constraint failed", StorageErrorKind.UNIQUE_VIOLATION),
    ("CHECK constraint failed", StorageErrorKind.CHECK_VIOLATION),
)


def classify_storage_error(exc: BaseException) -> StorageErrorKind:
    """Classify a SQLAlchemy DBAPIError (or a raw driver error)."""
    orig = getattr(exc, "orig", None) or exc

    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[code]

    name = getattr(orig, "sqlite_errorname", None)
    if name in _SQLITE_NAME_KINDS:
        return _SQLITE_NAME_KINDS[name]

    message = str(orig)
    for prefix, kind in _SQLITE_MESSAGE_KINDS:
        if prefix in message:
            return kind

    return StorageErrorKind.OTHER
