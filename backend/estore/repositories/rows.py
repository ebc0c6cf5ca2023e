"""Row repository: key lookups, paging, insert and update for any registered entity."""
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session

from estore.entities import EntityDef


def row_to_dict(entity: EntityDef, obj: Any) -> dict[str, Any]:
    """Detached snapshot of a mapped row, one key per column."""
    return {column: getattr(obj, column) for column in entity.columns}


def key_clause(entity: EntityDef, keys: list[tuple]):
    """WHERE clause matching any of the given key tuples."""
    table = entity.model.__table__
    if len(entity.key) == 1:
        return table.c[entity.key[0]].in_([k[0] for k in keys])
    return or_(
        *(and_(*(table.c[col] == value for col, value in zip(entity.key, key))) for key in keys)
    )


def load_model(db: Session, entity: EntityDef, key: tuple) -> Optional[Any]:
    return db.get(entity.model, key if len(key) > 1 else key[0])


def fetch_row(db: Session, entity: EntityDef, key: tuple) -> Optional[dict[str, Any]]:
    obj = load_model(db, entity, key)
    return row_to_dict(entity, obj) if obj is not None else None


def row_exists(db: Session, entity: EntityDef, key: tuple) -> bool:
    table = entity.model.__table__
    first_key_col = table.c[entity.key[0]]
    return db.execute(select(first_key_col).where(key_clause(entity, [key])).limit(1)).first() is not None


def find_keys(
    db: Session,
    entity: EntityDef,
    criteria: dict[str, Any],
    limit: Optional[int] = None,
) -> list[tuple]:
    """Key tuples of every row whose columns equal criteria."""
    table = entity.model.__table__
    stmt = select(*(table.c[col] for col in entity.key)).where(
        *(table.c[col] == value for col, value in criteria.items())
    ).order_by(*(table.c[col] for col in entity.key))
    if limit is not None:
        stmt = stmt.limit(limit)
    return [tuple(r) for r in db.execute(stmt).all()]


def fetch_page(
    db: Session,
    entity: EntityDef,
    criteria: dict[str, Any],
    offset: int,
    limit: int,
) -> list[dict[str, Any]]:
    """One page of matching rows in key order."""
    model = entity.model
    stmt = (
        select(model)
        .where(*(getattr(model, col) == value for col, value in criteria.items()))
        .order_by(*(getattr(model, col) for col in entity.key))
        .offset(offset)
        .limit(limit)
    )
    return [row_to_dict(entity, obj) for obj in db.execute(stmt).scalars()]


def insert_row(db: Session, entity: EntityDef, values: dict[str, Any]) -> dict[str, Any]:
    obj = entity.model(**values)
    db.add(obj)
    db.flush()
    # pull server defaults (created_at, last_updated) back into the snapshot
    db.refresh(obj)
    return row_to_dict(entity, obj)


def update_row(db: Session, entity: EntityDef, obj: Any, values: dict[str, Any]) -> dict[str, Any]:
    for column, value in values.items():
        setattr(obj, column, value)
    db.flush()
    db.refresh(obj)
    return row_to_dict(entity, obj)
