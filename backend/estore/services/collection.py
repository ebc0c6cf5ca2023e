"""
Per-entity CRUD surface of the store.

Every call is one transaction: validation, the write and any cascade it
triggers commit together or not at all.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Optional

from sqlalchemy import Enum, Integer

from estore.core.errors import ConstraintViolation, NotFound
from estore.entities import EntityDef
from estore.repositories import (
    apply_delete_plan,
    fetch_page,
    fetch_row,
    insert_row,
    load_model,
    row_to_dict,
    update_row,
)
from estore.schemas.base import MAX_ID
from estore.services.relationships import DeletePlan, plan_delete
from estore.services.validator import validate_row

if TYPE_CHECKING:
    from estore.services.store import Store

logger = logging.getLogger(__name__)


def _in_id_range(value: Any) -> bool:
    return not isinstance(value, int) or isinstance(value, bool) or -MAX_ID - 1 <= value <= MAX_ID


def _filter_errors(entity: EntityDef, criteria: dict[str, Any]) -> list[dict[str, Any]]:
    errors = []
    for name in sorted(criteria):
        if name not in entity.columns:
            errors.append({"field": name, "message": "unknown column", "type": "unknown_column"})
            continue
        value = criteria[name]
        if value is None:
            continue
        column_type = entity.model.__table__.columns[name].type
        if isinstance(column_type, Enum) and column_type.enum_class is not None:
            try:
                column_type.enum_class(value)
            except ValueError:
                errors.append({"field": name, "message": f"{value!r} is not a valid value", "type": "enum"})
        elif isinstance(column_type, Integer) and not _in_id_range(value):
            errors.append({"field": name, "message": "integer out of range", "type": "int_range"})
    return errors


class RowSequence:
    """
    Lazy, restartable view over the rows matching a filter.

    Rows are fetched page by page when iterated; iterating again re-reads
    the current state of the collection.
    """

    def __init__(self, store: "Store", entity: EntityDef, criteria: dict[str, Any]):
        errors = _filter_errors(entity, criteria)
        if errors:
            raise ConstraintViolation(entity.name, errors)
        self._store = store
        self._entity = entity
        self.criteria = dict(criteria)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        page_size = self._store.settings.list_page_size
        offset = 0
        while True:
            with self._store.transaction(self._entity.name) as db:
                page = fetch_page(db, self._entity, self.criteria, offset, page_size)
            yield from page
            if len(page) < page_size:
                return
            offset += page_size

    def all(self) -> list[dict[str, Any]]:
        return list(self)

    def first(self) -> Optional[dict[str, Any]]:
        return next(iter(self), None)

    def __repr__(self) -> str:
        return f"<RowSequence {self._entity.collection} {self.criteria!r}>"


class Collection:
    """create/update/delete/get/list for one entity."""

    def __init__(self, store: "Store", entity: EntityDef):
        self._store = store
        self.entity = entity

    def __repr__(self) -> str:
        return f"<Collection {self.entity.collection}>"

    def _key(self, key: Any) -> tuple:
        normalized = self.entity.normalize_key(key)
        if len(normalized) != len(self.entity.key) or not all(_in_id_range(part) for part in normalized):
            raise NotFound(self.entity.name, key)
        return normalized

    def _reject_store_assigned(self, values: dict[str, Any], current: Optional[dict[str, Any]] = None) -> None:
        errors = []
        for name, value in values.items():
            if name in self.entity.key and current is not None:
                if value != current[name]:
                    errors.append({"field": name, "message": "key columns are immutable", "type": "immutable"})
            elif name in self.entity.auto_fields:
                errors.append({"field": name, "message": "assigned by the store", "type": "auto_field"})
        if errors:
            raise ConstraintViolation(self.entity.name, errors)

    def create(self, data: Optional[dict[str, Any]] = None, **fields: Any) -> dict[str, Any]:
        """Insert a row; returns the stored row including its assigned key."""
        values = {**(data or {}), **fields}
        self._reject_store_assigned(values)
        with self._store.transaction(self.entity.name) as db:
            row = validate_row(db, self.entity, values, self._store.settings)
            created = insert_row(db, self.entity, row)
        logger.info("Created %s %r", self.entity.name, self.entity.key_of(created))
        return created

    def update(self, key: Any, changes: Optional[dict[str, Any]] = None, **fields: Any) -> dict[str, Any]:
        """Apply changes to one row and re-validate the resulting row in full."""
        key = self._key(key)
        changes = {**(changes or {}), **fields}
        with self._store.transaction(self.entity.name) as db:
            obj = load_model(db, self.entity, key)
            if obj is None:
                raise NotFound(self.entity.name, self.entity.key_of(dict(zip(self.entity.key, key))))
            current = row_to_dict(self.entity, obj)
            self._reject_store_assigned(changes, current)
            candidate = {name: current[name] for name in self.entity.fields}
            candidate.update({k: v for k, v in changes.items() if k not in self.entity.key})
            row = validate_row(db, self.entity, candidate, self._store.settings, current_key=key)
            updated = update_row(db, self.entity, obj, row)
        logger.info("Updated %s %r: %s", self.entity.name, self.entity.key_of(updated), sorted(changes))
        return updated

    def delete(self, key: Any) -> DeletePlan:
        """Delete one row and apply its deletion policy to every dependent."""
        key = self._key(key)
        with self._store.transaction(self.entity.name) as db:
            plan = plan_delete(db, self.entity.name, key)
            apply_delete_plan(db, plan)
        logger.info("Deleted %s %r (%s)", self.entity.name, key, plan.summary())
        return plan

    def get(self, key: Any) -> dict[str, Any]:
        normalized = self._key(key)
        with self._store.transaction(self.entity.name) as db:
            row = fetch_row(db, self.entity, normalized)
        if row is None:
            raise NotFound(self.entity.name, key)
        return row

    def list(self, filters: Optional[dict[str, Any]] = None, **criteria: Any) -> RowSequence:
        """Rows whose columns equal every given value (None matches NULL)."""
        return RowSequence(self._store, self.entity, {**(filters or {}), **criteria})
