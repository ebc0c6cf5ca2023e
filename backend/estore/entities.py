"""
Entity registry: which model, schema, key and uniqueness scopes belong together.

ENTITIES is ordered by dependency (parents before dependents), which is also
the order seed data must be created in.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from estore import models, schemas
from estore.schemas.base import RowSchema


@dataclass(frozen=True)
class EntityDef:
    name: str
    collection: str
    model: type
    schema: type[RowSchema]
    key: tuple[str, ...]
    # surrogate id assigned by the store; otherwise the key is caller-supplied
    auto_key: bool = True
    unique: tuple[tuple[str, ...], ...] = field(default_factory=tuple)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.schema.model_fields)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(c.key for c in self.model.__table__.columns)

    @property
    def auto_fields(self) -> tuple[str, ...]:
        return tuple(c for c in self.columns if c not in self.schema.model_fields)

    @property
    def decimal_fields(self) -> tuple[str, ...]:
        return tuple(
            name for name, info in self.schema.model_fields.items() if info.annotation is Decimal
        )

    @property
    def uniqueness_scopes(self) -> tuple[tuple[str, ...], ...]:
        if self.auto_key:
            return self.unique
        return (self.key,) + self.unique

    def key_of(self, row: dict[str, Any]) -> Any:
        values = tuple(row[c] for c in self.key)
        return values[0] if len(values) == 1 else values

    def normalize_key(self, key: Any) -> tuple:
        values = key if isinstance(key, (tuple, list)) else (key,)
        return tuple(values)


_DEFS = (
    EntityDef("Customer", "customers", models.Customer, schemas.CustomerRow, ("id",), unique=(("email",),)),
    EntityDef("Supplier", "suppliers", models.Supplier, schemas.SupplierRow, ("id",)),
    EntityDef("Category", "categories", models.Category, schemas.CategoryRow, ("id",), unique=(("name",),)),
    EntityDef(
        "CustomerProfile",
        "customer_profiles",
        models.CustomerProfile,
        schemas.CustomerProfileRow,
        ("customer_id",),
        auto_key=False,
    ),
    EntityDef("Address", "addresses", models.Address, schemas.AddressRow, ("id",)),
    EntityDef("Product", "products", models.Product, schemas.ProductRow, ("id",), unique=(("sku",),)),
    EntityDef(
        "ProductCategory",
        "product_categories",
        models.ProductCategory,
        schemas.ProductCategoryRow,
        ("product_id", "category_id"),
        auto_key=False,
    ),
    EntityDef(
        "Inventory",
        "inventory",
        models.Inventory,
        schemas.InventoryRow,
        ("product_id",),
        auto_key=False,
    ),
    EntityDef("Order", "orders", models.Order, schemas.OrderRow, ("id",)),
    EntityDef(
        "OrderItem",
        "order_items",
        models.OrderItem,
        schemas.OrderItemRow,
        ("order_id", "product_id"),
        auto_key=False,
    ),
    EntityDef("Payment", "payments", models.Payment, schemas.PaymentRow, ("id",)),
    EntityDef("Review", "reviews", models.Review, schemas.ReviewRow, ("id",)),
)

ENTITIES: dict[str, EntityDef] = {d.name: d for d in _DEFS}
