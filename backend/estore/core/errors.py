"""
Error taxonomy raised by the store.

Every error is recoverable by the caller (retry, correct input or abort);
none of them leaves the store in a partially applied state.
"""
from __future__ import annotations

from typing import Any, Optional


class StoreError(Exception):
    """
    Base class for all store errors.
    """

    kind = "store_error"

    def __init__(self, message: str, entity: Optional[str] = None):
        self.message = message
        self.entity = entity
        super().__init__(self.message)


class NotFound(StoreError):
    """
    Exception raised when a row addressed by key does not exist
    """

    kind = "not_found"

    def __init__(self, entity: str, key: Any):
        self.key = key
        super().__init__(f"{entity} {key!r} not found", entity)


class UniquenessViolation(StoreError):
    """
    Exception raised when a value collides inside a uniqueness scope
    (single unique field, shared primary key or composite key)
    """

    kind = "uniqueness_violation"

    def __init__(self, entity: str, fields: tuple[str, ...], value: Any):
        self.fields = tuple(fields)
        self.value = value
        super().__init__(
            f"{entity} with {', '.join(self.fields)}={value!r} already exists", entity
        )


class ConstraintViolation(StoreError):
    """
    Exception raised when a required field is missing, an enum value is
    unknown or a numeric/length check fails
    """

    kind = "constraint_violation"

    def __init__(self, entity: Optional[str], errors: list[dict[str, Any]] | str):
        if isinstance(errors, str):
            errors = [{"field": None, "message": errors}]
        self.errors = errors
        detail = "; ".join(
            f"{e['field']}: {e['message']}" if e.get("field") else e["message"]
            for e in errors
        )
        super().__init__(f"{entity or 'row'} rejected: {detail}", entity)

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors if e.get("field")]


class ReferenceViolation(StoreError):
    """
    Exception raised when a foreign key does not resolve to an existing row
    """

    kind = "reference_violation"

    def __init__(self, entity: str, field: str, target: str, value: Any):
        self.field = field
        self.target = target
        self.value = value
        super().__init__(f"{entity}.{field}={value!r}: no such {target}", entity)


class RestrictedDeletion(StoreError):
    """
    Exception raised when a delete is blocked by a restrict-policy dependent
    """

    kind = "restricted_deletion"

    def __init__(self, entity: str, key: Any, dependent: str, dependent_keys: list[Any]):
        self.key = key
        self.dependent = dependent
        self.dependent_keys = dependent_keys
        super().__init__(
            f"cannot delete {entity} {key!r}: referenced by "
            f"{len(dependent_keys)} {dependent} row(s)",
            entity,
        )


class ConflictViolation(StoreError):
    """
    Exception raised when a concurrent transaction won the race for the same rows
    """

    kind = "conflict_violation"

    def __init__(self, message: str = "Concurrent modification, retry the operation", entity: Optional[str] = None):
        super().__init__(message, entity)


class TimeoutViolation(StoreError):
    """
    Exception raised when a lock or connection wait exceeded its bound
    """

    kind = "timeout_violation"

    def __init__(self, message: str = "Lock wait timed out", entity: Optional[str] = None):
        super().__init__(message, entity)
