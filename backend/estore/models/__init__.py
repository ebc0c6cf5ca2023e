"""SQLAlchemy models only; integrity rules live in estore.services."""
from estore.models.address import Address
from estore.models.base import IntegerPrimaryKeyMixin, TimestampMixin
from estore.models.category import Category, ProductCategory
from estore.models.customer import Customer
from estore.models.customer_profile import CustomerProfile
from estore.models.enums import (
    AddressType,
    Gender,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from estore.models.order import Order, OrderItem, Payment
from estore.models.product import Inventory, Product
from estore.models.review import Review
from estore.models.supplier import Supplier

__all__ = [
    "Address",
    "AddressType",
    "Category",
    "Customer",
    "CustomerProfile",
    "Gender",
    "IntegerPrimaryKeyMixin",
    "Inventory",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Product",
    "ProductCategory",
    "Review",
    "Supplier",
    "TimestampMixin",
]
