"""Storage Error Classification - driver codes map to backend-neutral kinds.

Tests cover:
    - PostgreSQL SQLSTATE via `sqlstate` (asyncpg/psycopg) and `pgcode` (psycopg2)
    - SQLite extended error names and message fallback
    - SQLAlchemy wrappers are unwrapped through `.orig`
"""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from transactions_api.infrastructure.storage_errors import (
    StorageErrorKind, classify_storage_error,
)


class _PgError(Exception):
    def __init__(self, message, sqlstate=None, pgcode=None):
        super().__init__(message)
        if sqlstate is not None:
            self.sqlstate = sqlstate
        if pgcode is not None:
            self.pgcode = pgcode


@pytest.mark.parametrize("code,kind", [
    ("23505", StorageErrorKind.UNIQUE_VIOLATION),
    ("23514", StorageErrorKind.CHECK_VIOLATION),
    ("23502", StorageErrorKind.OTHER),
])
def test_sqlstate_codes(code, kind):
    assert classify_storage_error(_PgError("boom", sqlstate=code)) is kind


def test_psycopg2_pgcode():
    exc = _PgError("duplicate key", pgcode="23505")
    assert classify_storage_error(exc) is StorageErrorKind.UNIQUE_VIOLATION


def test_unwraps_sqlalchemy_error():
    wrapped = IntegrityError("INSERT ...", {}, _PgError("check", sqlstate="23514"))
    assert classify_storage_error(wrapped) is StorageErrorKind.CHECK_VIOLATION


@pytest.mark.parametrize("message,kind", [
    ("UNIQUE constraint failed: transactions.trace_number", StorageErrorKind.UNIQUE_VIOLATION),
    ("CHECK constraint failed: ck_transactions_amount_range", StorageErrorKind.CHECK_VIOLATION),
    ("NOT NULL constraint failed: transactions.amount", StorageErrorKind.OTHER),
])
def test_sqlite_message_fallback(message, kind):
    assert classify_storage_error(sqlite3.IntegrityError(message)) is kind


def test_sqlite_error_name():
    exc = sqlite3.IntegrityError("constraint failed")
    exc.sqlite_errorname = "SQLITE_CONSTRAINT_CHECK"
    assert classify_storage_error(exc) is StorageErrorKind.CHECK_VIOLATION


def test_unknown_errors_are_other():
    assert classify_storage_error(RuntimeError("disk I/O error")) is StorageErrorKind.OTHER
