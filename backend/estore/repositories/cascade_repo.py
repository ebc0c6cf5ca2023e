"""
Delete-plan executor: applies a precomputed plan as ordered statements.

Order matters: FKs require dependents nulled or deleted first.
1) UPDATE ... SET fk = NULL for every set-absent dependent that survives.
2) DELETE rows deepest-first, so no statement removes a row still referenced.
Each statement must touch exactly the planned rows; anything else means a
concurrent writer got in between planning and applying.
Call within a transaction; the caller commits or rolls back.
"""
from __future__ import annotations

import logging
from itertools import groupby
from typing import TYPE_CHECKING

from sqlalchemy import delete, update
from sqlalchemy.orm import Session

from estore.core.errors import ConflictViolation
from estore.entities import ENTITIES, EntityDef
from estore.repositories.rows import key_clause

if TYPE_CHECKING:
    from estore.services.relationships import DeletePlan

logger = logging.getLogger(__name__)


def _nullify_rows(db: Session, entity: EntityDef, column: str, parent_id, keys: list[tuple]) -> None:
    table = entity.model.__table__
    result = db.execute(
        update(table)
        .where(key_clause(entity, keys))
        .where(table.c[column] == parent_id)
        .values({column: None})
    )
    if result.rowcount != len(keys):
        raise ConflictViolation(
            f"{entity.name}.{column}: expected to clear {len(keys)} row(s), cleared {result.rowcount}",
            entity.name,
        )


def _delete_rows(db: Session, entity: EntityDef, keys: list[tuple]) -> None:
    table = entity.model.__table__
    result = db.execute(delete(table).where(key_clause(entity, keys)))
    if result.rowcount != len(keys):
        raise ConflictViolation(
            f"{entity.name}: expected to delete {len(keys)} row(s), deleted {result.rowcount}",
            entity.name,
        )


def apply_delete_plan(db: Session, plan: "DeletePlan") -> None:
    """Run the nullify and delete steps of plan inside the caller's transaction."""
    by_target = lambda n: (n.entity, n.column, n.parent_id)  # noqa: E731
    for (entity_name, column, parent_id), group in groupby(sorted(plan.nullifies, key=by_target), key=by_target):
        keys = [n.key for n in group]
        logger.debug("Nullifying %s.%s on %d row(s)", entity_name, column, len(keys))
        _nullify_rows(db, ENTITIES[entity_name], column, parent_id, keys)

    for depth, entity_name, keys in plan.delete_batches():
        logger.debug("Deleting %d %s row(s) at depth %d", len(keys), entity_name, depth)
        _delete_rows(db, ENTITIES[entity_name], keys)
