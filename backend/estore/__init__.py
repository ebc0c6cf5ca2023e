"""Integrity-enforcing storage for a small e-commerce store."""
from estore.core.errors import (
    ConflictViolation,
    ConstraintViolation,
    NotFound,
    ReferenceViolation,
    RestrictedDeletion,
    StoreError,
    TimeoutViolation,
    UniquenessViolation,
)
from estore.services.store import Store

__all__ = [
    "ConflictViolation",
    "ConstraintViolation",
    "NotFound",
    "ReferenceViolation",
    "RestrictedDeletion",
    "Store",
    "StoreError",
    "TimeoutViolation",
    "UniquenessViolation",
]
