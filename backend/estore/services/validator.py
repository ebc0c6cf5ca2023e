"""
Row validation: pure checks run before the repository admits a row.

validate_fields() needs nothing but the candidate. The reference, uniqueness
and rule checks read the database but never write to it.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from estore.core.config import Settings
from estore.core.errors import ConstraintViolation, ReferenceViolation, UniquenessViolation
from estore.entities import ENTITIES, EntityDef
from estore.repositories.rows import find_keys, row_exists
from estore.schemas.base import RowSchema
from estore.schemas.catalog import check_reservation
from estore.services.relationships import references_of


def _coerce_decimals(entity: EntityDef, candidate: dict[str, Any]) -> dict[str, Any]:
    # 11.98 must arrive as Decimal("11.98"), not the binary float expansion
    coerced = dict(candidate)
    for name in entity.decimal_fields:
        value = coerced.get(name)
        if isinstance(value, float):
            coerced[name] = Decimal(repr(value))
    return coerced


def _errors_from(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": str(e["loc"][0]) if e["loc"] else None,
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


def validate_fields(entity: EntityDef, candidate: dict[str, Any]) -> RowSchema:
    """Required-field, enum, range and length checks. Raises ConstraintViolation."""
    try:
        return entity.schema.model_validate(_coerce_decimals(entity, candidate))
    except ValidationError as exc:
        raise ConstraintViolation(entity.name, _errors_from(exc)) from None


def check_references(
    db: Session,
    entity: EntityDef,
    row: dict[str, Any],
    columns: Optional[Iterable[str]] = None,
) -> None:
    """Every non-null foreign key must resolve. Raises ReferenceViolation."""
    wanted = set(columns) if columns is not None else None
    for relation in references_of(entity.name):
        if wanted is not None and relation.column not in wanted:
            continue
        value = row.get(relation.column)
        if value is None:
            continue
        if not row_exists(db, ENTITIES[relation.parent], (value,)):
            raise ReferenceViolation(entity.name, relation.column, relation.parent, value)


def check_uniqueness(
    db: Session,
    entity: EntityDef,
    row: dict[str, Any],
    current_key: Optional[tuple] = None,
    extra_scopes: Iterable[tuple[str, ...]] = (),
) -> None:
    """No other row may share a value in any uniqueness scope. Raises UniquenessViolation."""
    for scope in tuple(entity.uniqueness_scopes) + tuple(extra_scopes):
        criteria = {column: row[column] for column in scope}
        if any(v is None for v in criteria.values()):
            continue
        clashes = [k for k in find_keys(db, entity, criteria, limit=2) if k != current_key]
        if clashes:
            value = criteria[scope[0]] if len(scope) == 1 else tuple(criteria.values())
            raise UniquenessViolation(entity.name, scope, value)


def check_rules(entity: EntityDef, parsed: RowSchema, settings: Settings) -> None:
    """Cross-field rules that are switched on by configuration."""
    if entity.name == "Inventory" and settings.enforce_inventory_reservation:
        problem = check_reservation(parsed)
        if problem:
            raise ConstraintViolation(
                entity.name, [{"field": "reserved_quantity", "message": problem, "type": "reservation"}]
            )


def validate_row(
    db: Session,
    entity: EntityDef,
    candidate: dict[str, Any],
    settings: Settings,
    current_key: Optional[tuple] = None,
) -> dict[str, Any]:
    """
    Full admission check for a create (current_key None) or an update.

    Order: field checks, configured rules, references, uniqueness. Returns
    the normalized row (defaults filled in, enums and decimals converted).
    """
    parsed = validate_fields(entity, candidate)
    check_rules(entity, parsed, settings)
    row = parsed.model_dump()
    check_references(db, entity, row)
    extra_scopes = (("order_id",),) if entity.name == "Payment" and settings.single_payment_per_order else ()
    check_uniqueness(db, entity, row, current_key=current_key, extra_scopes=extra_scopes)
    return row
