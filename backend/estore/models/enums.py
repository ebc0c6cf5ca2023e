"""Closed value sets for enumerated columns."""
from __future__ import annotations

import enum

from sqlalchemy import Enum


class Gender(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class AddressType(str, enum.Enum):
    shipping = "shipping"
    billing = "billing"
    other = "other"


class OrderStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"
    refunded = "refunded"


class PaymentMethod(str, enum.Enum):
    card = "card"
    paypal = "paypal"
    bank_transfer = "bank_transfer"
    cash_on_delivery = "cash_on_delivery"


class PaymentStatus(str, enum.Enum):
    initiated = "initiated"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


def enum_column_type(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Column type storing the member value, checked by the database as well."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        create_constraint=True,
        validate_strings=True,
    )
