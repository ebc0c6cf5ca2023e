from datetime import date
from decimal import Decimal

import pytest

from estore.core.errors import ConstraintViolation
from estore.entities import ENTITIES
from estore.models import AddressType, OrderStatus, PaymentStatus
from estore.services.validator import validate_fields


def test_defaults_are_filled_in():
    order = validate_fields(ENTITIES["Order"], {"customer_id": 1, "total_amount": "10"})
    assert order.status is OrderStatus.pending

    payment = validate_fields(
        ENTITIES["Payment"], {"order_id": 1, "payment_method": "card", "amount": 1}
    )
    assert payment.status is PaymentStatus.initiated

    address = validate_fields(
        ENTITIES["Address"],
        {"customer_id": 1, "line1": "1 Road", "city": "Lagos", "postal_code": "1", "country": "NG"},
    )
    assert address.type is AddressType.shipping

    item = validate_fields(
        ENTITIES["OrderItem"], {"order_id": 1, "product_id": 1, "quantity": 1, "unit_price": "1.00"}
    )
    assert item.discount == Decimal("0")


def test_float_money_is_converted_exactly():
    order = validate_fields(ENTITIES["Order"], {"customer_id": 1, "total_amount": 11.98})
    assert order.total_amount == Decimal("11.98")


@pytest.mark.parametrize(
    "entity, candidate, field",
    [
        ("Customer", {"password_hash": "h", "first_name": "A", "last_name": "B"}, "email"),
        ("Customer", {"email": "", "password_hash": "h", "first_name": "A", "last_name": "B"}, "email"),
        ("Customer", {"email": "x" * 256, "password_hash": "h", "first_name": "A", "last_name": "B"}, "email"),
        ("Product", {"sku": "S", "name": "N", "price": "-0.01"}, "price"),
        ("Product", {"sku": "S", "name": "N", "price": "1.999"}, "price"),
        ("Product", {"sku": "S", "name": "N", "price": "123456789.00"}, "price"),
        ("Review", {"product_id": 1, "rating": 0}, "rating"),
        ("Review", {"product_id": 1, "rating": 6}, "rating"),
        ("Review", {"product_id": 1, "rating": True}, "rating"),
        ("Review", {"product_id": 0, "rating": 3}, "product_id"),
        ("Order", {"customer_id": 2**70, "total_amount": 1}, "customer_id"),
        ("OrderItem", {"order_id": 1, "product_id": 1, "quantity": 0, "unit_price": 1}, "quantity"),
        ("OrderItem", {"order_id": 1, "product_id": 1, "quantity": True, "unit_price": 1}, "quantity"),
        ("Inventory", {"product_id": 1, "reserved_quantity": False}, "reserved_quantity"),
        ("OrderItem", {"order_id": 1, "product_id": 1, "quantity": 1, "unit_price": 1, "discount": -1}, "discount"),
        ("Order", {"customer_id": 1, "total_amount": 1, "status": "lost"}, "status"),
        ("Payment", {"order_id": 1, "payment_method": "cheque", "amount": 1}, "payment_method"),
        ("CustomerProfile", {"customer_id": 1, "gender": "unknown"}, "gender"),
        ("Inventory", {"product_id": 1, "quantity_in_stock": -1}, "quantity_in_stock"),
        ("Supplier", {"name": "S", "website": "x"}, "website"),
    ],
)
def test_rejected_candidates(entity, candidate, field):
    with pytest.raises(ConstraintViolation) as exc_info:
        validate_fields(ENTITIES[entity], candidate)
    assert field in exc_info.value.fields
    assert exc_info.value.entity == entity


def test_rating_bounds_are_inclusive():
    for rating in (1, 5):
        assert validate_fields(ENTITIES["Review"], {"product_id": 1, "rating": rating}).rating == rating


def test_profile_date_is_parsed():
    profile = validate_fields(ENTITIES["CustomerProfile"], {"customer_id": 1, "date_of_birth": "1990-05-12"})
    assert profile.date_of_birth == date(1990, 5, 12)
    assert profile.newsletter_optin is False


def test_validation_does_not_touch_the_candidate():
    candidate = {"customer_id": 1, "total_amount": 11.98}
    validate_fields(ENTITIES["Order"], candidate)
    assert candidate == {"customer_id": 1, "total_amount": 11.98}
