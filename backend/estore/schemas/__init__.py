"""
Admissible-row schemas, one per entity.

Each schema lists exactly the caller-supplied columns of its entity (auto
fields such as surrogate ids and timestamps are absent, unknown fields are
rejected) together with their required/enum/range/length checks.
"""
from estore.schemas.catalog import (
    CategoryRow,
    InventoryRow,
    ProductCategoryRow,
    ProductRow,
    ReviewRow,
    SupplierRow,
)
from estore.schemas.customers import AddressRow, CustomerProfileRow, CustomerRow
from estore.schemas.orders import OrderItemRow, OrderRow, PaymentRow

__all__ = [
    "AddressRow",
    "CategoryRow",
    "CustomerProfileRow",
    "CustomerRow",
    "InventoryRow",
    "OrderItemRow",
    "OrderRow",
    "PaymentRow",
    "ProductCategoryRow",
    "ProductRow",
    "ReviewRow",
    "SupplierRow",
]
