"""Row schemas for the catalog side: suppliers, categories, products, stock, reviews."""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import Field

from estore.schemas.base import MAX_ID, ForeignKey, Price, RowSchema, bounded_str

Str255 = bounded_str(255)
Str100 = bounded_str(100)
OptStr255 = bounded_str(255, required=False)
OptStr25 = bounded_str(25, required=False)

Rating = Annotated[int, Field(strict=True, ge=1, le=5)]
Quantity = Annotated[int, Field(strict=True, ge=0, le=MAX_ID)]


class SupplierRow(RowSchema):
    name: Str255
    contact_email: Optional[OptStr255] = None
    phone: Optional[OptStr25] = None


class CategoryRow(RowSchema):
    name: Str100
    description: Optional[str] = None


class ProductRow(RowSchema):
    sku: Str100
    name: Str255
    description: Optional[str] = None
    price: Price
    supplier_id: Optional[ForeignKey] = None


class ProductCategoryRow(RowSchema):
    product_id: ForeignKey
    category_id: ForeignKey


class InventoryRow(RowSchema):
    product_id: ForeignKey
    quantity_in_stock: Quantity = 0
    reserved_quantity: Quantity = 0


class ReviewRow(RowSchema):
    product_id: ForeignKey
    customer_id: Optional[ForeignKey] = None
    rating: Rating
    title: Optional[OptStr255] = None
    body: Optional[str] = None


def check_reservation(row: InventoryRow) -> Optional[str]:
    """Stock reservation rule, applied only when the store enables it."""
    if row.reserved_quantity > row.quantity_in_stock:
        return (
            f"reserved_quantity ({row.reserved_quantity}) exceeds "
            f"quantity_in_stock ({row.quantity_in_stock})"
        )
    return None
