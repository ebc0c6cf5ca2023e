"""
Relationship table and delete planner.

RELATIONS is the single source of truth for every foreign key in the store
and for what deleting the parent row does to the dependent rows. A delete is
planned in full (every cascaded, nullified or blocking row resolved) before
anything is written, then handed to the cascade repository to apply.
"""
from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from estore.core.errors import NotFound, RestrictedDeletion
from estore.entities import ENTITIES
from estore.repositories.rows import find_keys, row_exists

logger = logging.getLogger(__name__)


class Policy(str, enum.Enum):
    cascade = "cascade"
    restrict = "restrict"
    set_null = "set_null"


@dataclass(frozen=True)
class Relation:
    parent: str
    dependent: str
    # FK column on the dependent, holding the parent's single-column key;
    # composite-key entities never appear as a parent
    column: str
    policy: Policy


RELATIONS: tuple[Relation, ...] = (
    Relation("Customer", "CustomerProfile", "customer_id", Policy.cascade),
    Relation("Customer", "Address", "customer_id", Policy.cascade),
    Relation("Customer", "Order", "customer_id", Policy.restrict),
    Relation("Customer", "Review", "customer_id", Policy.set_null),
    Relation("Supplier", "Product", "supplier_id", Policy.set_null),
    Relation("Product", "ProductCategory", "product_id", Policy.cascade),
    Relation("Category", "ProductCategory", "category_id", Policy.cascade),
    Relation("Product", "Inventory", "product_id", Policy.cascade),
    Relation("Product", "OrderItem", "product_id", Policy.restrict),
    Relation("Product", "Review", "product_id", Policy.cascade),
    Relation("Address", "Order", "shipping_address_id", Policy.set_null),
    Relation("Address", "Order", "billing_address_id", Policy.set_null),
    Relation("Order", "OrderItem", "order_id", Policy.cascade),
    Relation("Order", "Payment", "order_id", Policy.cascade),
)


def relations_from(parent: str) -> list[Relation]:
    return [r for r in RELATIONS if r.parent == parent]


def references_of(dependent: str) -> list[Relation]:
    """Foreign keys carried by rows of the dependent entity."""
    return [r for r in RELATIONS if r.dependent == dependent]


@dataclass(frozen=True)
class PlannedDelete:
    entity: str
    key: tuple
    depth: int


@dataclass(frozen=True)
class PlannedNullify:
    entity: str
    key: tuple
    column: str
    parent_id: Any


@dataclass
class DeletePlan:
    """Every row a delete touches, resolved before the first write."""

    entity: str
    key: tuple
    deletes: list[PlannedDelete] = field(default_factory=list)
    nullifies: list[PlannedNullify] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._seen: set[tuple[str, tuple]] = set()

    def add_delete(self, entity: str, key: tuple, depth: int) -> bool:
        if (entity, key) in self._seen:
            return False
        self._seen.add((entity, key))
        self.deletes.append(PlannedDelete(entity, key, depth))
        return True

    def is_deleted(self, entity: str, key: tuple) -> bool:
        return (entity, key) in self._seen

    def deleted(self, entity: str) -> list[tuple]:
        return [d.key for d in self.deletes if d.entity == entity]

    def nullified(self, entity: str, column: str | None = None) -> list[tuple]:
        return [
            n.key for n in self.nullifies
            if n.entity == entity and (column is None or n.column == column)
        ]

    def delete_batches(self) -> list[tuple[int, str, list[tuple]]]:
        """(depth, entity, keys) batches, deepest first."""
        batches: dict[tuple[int, str], list[tuple]] = {}
        for d in self.deletes:
            batches.setdefault((d.depth, d.entity), []).append(d.key)
        return [
            (depth, entity, keys)
            for (depth, entity), keys in sorted(batches.items(), key=lambda item: -item[0][0])
        ]

    def summary(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for d in self.deletes:
            counts[f"deleted.{d.entity}"] = counts.get(f"deleted.{d.entity}", 0) + 1
        for n in self.nullifies:
            counts[f"nullified.{n.entity}.{n.column}"] = counts.get(f"nullified.{n.entity}.{n.column}", 0) + 1
        return counts


def plan_delete(db: Session, entity_name: str, key: Any) -> DeletePlan:
    """
    Resolve the deletion policy of every relation reachable from the row.

    Raises NotFound when the row is absent and RestrictedDeletion when any
    restrict-policy dependent would survive the delete.
    """
    entity = ENTITIES[entity_name]
    key = entity.normalize_key(key)
    if len(key) != len(entity.key) or not row_exists(db, entity, key):
        raise NotFound(entity_name, key[0] if len(key) == 1 else key)

    plan = DeletePlan(entity_name, key)
    plan.add_delete(entity_name, key, 0)
    blocked: list[tuple[Relation, tuple, list[tuple]]] = []
    candidates: list[PlannedNullify] = []

    frontier = deque([(entity_name, key, 0)])
    while frontier:
        parent, parent_key, depth = frontier.popleft()
        for relation in relations_from(parent):
            parent_id = parent_key[0]
            dependent = ENTITIES[relation.dependent]
            dependent_keys = find_keys(db, dependent, {relation.column: parent_id})
            if not dependent_keys:
                continue
            if relation.policy is Policy.restrict:
                blocked.append((relation, parent_key, dependent_keys))
            elif relation.policy is Policy.cascade:
                for dependent_key in dependent_keys:
                    if plan.add_delete(dependent.name, dependent_key, depth + 1):
                        frontier.append((dependent.name, dependent_key, depth + 1))
            else:
                candidates.extend(
                    PlannedNullify(dependent.name, k, relation.column, parent_id) for k in dependent_keys
                )

    # a restrict dependent that is itself removed by this plan does not block it
    for relation, parent_key, dependent_keys in blocked:
        surviving = [k for k in dependent_keys if not plan.is_deleted(relation.dependent, k)]
        if surviving:
            raise RestrictedDeletion(
                relation.parent,
                parent_key[0],
                relation.dependent,
                [k[0] if len(k) == 1 else k for k in surviving],
            )

    plan.nullifies = [n for n in candidates if not plan.is_deleted(n.entity, n.key)]
    logger.debug("Delete plan for %s %r: %s", entity_name, key, plan.summary())
    return plan
