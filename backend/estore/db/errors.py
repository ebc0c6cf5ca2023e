"""Translate driver/SQLAlchemy failures into the store's error taxonomy."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm.exc import StaleDataError

from estore.core.errors import (
    ConflictViolation,
    ConstraintViolation,
    ReferenceViolation,
    StoreError,
    TimeoutViolation,
    UniquenessViolation,
)

# Postgres SQLSTATE codes
_SERIALIZATION_FAILURE = "40001"
_DEADLOCK_DETECTED = "40P01"
_LOCK_NOT_AVAILABLE = "55P03"
_QUERY_CANCELED = "57014"
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(error: BaseException) -> Optional[str]:
    orig = getattr(error, "orig", None)
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def translate_db_error(error: Exception, entity: Optional[str] = None) -> StoreError:
    """Map an exception raised at flush/commit time onto a StoreError."""
    if isinstance(error, StoreError):
        return error
    message = str(getattr(error, "orig", None) or error)
    lowered = message.lower()
    code = _sqlstate(error)

    if isinstance(error, StaleDataError):
        return ConflictViolation(f"Row changed concurrently: {message}", entity)
    if isinstance(error, sa_exc.TimeoutError):
        return TimeoutViolation(f"Connection pool wait timed out: {message}", entity)

    if isinstance(error, sa_exc.IntegrityError):
        if code == _UNIQUE_VIOLATION or "unique" in lowered or "duplicate" in lowered:
            return UniquenessViolation(entity or "row", (), message)
        if code == _FOREIGN_KEY_VIOLATION or "foreign key" in lowered:
            return ReferenceViolation(entity or "row", "?", "row", message)
        return ConstraintViolation(entity, message)

    if isinstance(error, sa_exc.DBAPIError):
        if code in (_SERIALIZATION_FAILURE, _DEADLOCK_DETECTED):
            return ConflictViolation(f"Serialization failure: {message}", entity)
        if code in (_LOCK_NOT_AVAILABLE, _QUERY_CANCELED) or "database is locked" in lowered:
            return TimeoutViolation(f"Lock wait timed out: {message}", entity)
    elif isinstance(error, sa_exc.StatementError):
        # raised while binding parameters, before the statement reached the database
        return ConstraintViolation(entity, message)

    return ConflictViolation(f"Transaction aborted: {message}", entity)
