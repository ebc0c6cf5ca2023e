"""Row schemas for orders, order lines and payments."""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field

from estore.models.enums import OrderStatus, PaymentMethod, PaymentStatus
from estore.schemas.base import MAX_ID, Amount, ForeignKey, Price, RowSchema, bounded_str

OptStr255 = bounded_str(255, required=False)
LineQuantity = Annotated[int, Field(strict=True, gt=0, le=MAX_ID)]


class OrderRow(RowSchema):
    customer_id: ForeignKey
    status: OrderStatus = OrderStatus.pending
    total_amount: Amount
    shipping_address_id: Optional[ForeignKey] = None
    billing_address_id: Optional[ForeignKey] = None


class OrderItemRow(RowSchema):
    order_id: ForeignKey
    product_id: ForeignKey
    quantity: LineQuantity
    unit_price: Price
    discount: Price = Decimal("0")


class PaymentRow(RowSchema):
    order_id: ForeignKey
    payment_method: PaymentMethod
    amount: Amount
    status: PaymentStatus = PaymentStatus.initiated
    provider_txn_id: Optional[OptStr255] = None
