#!/usr/bin/env python3
"""
Bootstrap the two sample rows per entity through ordinary create() calls.

Run from the backend directory:
  python scripts/seed_data.py

Rows are created in dependency order (customers, suppliers, categories, then
profiles, addresses, products, links, inventory, orders, lines, payments,
reviews), so every foreign key already resolves when it is used.
"""
from __future__ import annotations

import os
import sys
from datetime import date
from decimal import Decimal
from typing import Any

_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from estore.core.config import get_settings
from estore.core.errors import StoreError
from estore.core.logging import configure_logging
from estore.services.store import Store


def seed_sample_data(store: Store) -> dict[str, list[dict[str, Any]]]:
    """Create the sample rows; returns the created rows per collection."""
    created: dict[str, list[dict[str, Any]]] = {}

    def add(collection: str, **fields: Any) -> dict[str, Any]:
        row = store.collection(collection).create(**fields)
        created.setdefault(collection, []).append(row)
        return row

    alice = add("customers", email="alice@gmail.com", password_hash="hash_alice",
                first_name="Alice", last_name="Doe", phone="555-1234")
    bob = add("customers", email="bob@gmail.com", password_hash="hash_bob",
              first_name="Bob", last_name="Smith", phone="555-5678")

    acme = add("suppliers", name="Acme Supplies", contact_email="sales@acme.com", phone="111-222-3333")
    techsource = add("suppliers", name="TechSource", contact_email="support@techsource.com", phone="444-555-6666")

    electronics = add("categories", name="Electronics", description="Devices and gadgets")
    books = add("categories", name="Books", description="Printed and digital books")

    add("customer_profiles", customer_id=alice["id"], date_of_birth=date(1990, 5, 12),
        gender="female", newsletter_optin=True, bio="Loves online shopping")
    add("customer_profiles", customer_id=bob["id"], date_of_birth=date(1985, 11, 23),
        gender="male", newsletter_optin=False, bio="Enjoys tech gadgets")

    alice_home = add("addresses", customer_id=alice["id"], type="shipping", line1="123 Main St",
                     city="Lagos", state="LA", postal_code="100001", country="Nigeria")
    bob_office = add("addresses", customer_id=bob["id"], type="billing", line1="45 Broad Ave",
                     city="Abuja", state="FC", postal_code="900001", country="Nigeria")

    cable = add("products", sku="SKU-100", name="USB Cable", description="1m fast-charging USB cable",
                price=Decimal("5.99"), supplier_id=acme["id"])
    book = add("products", sku="SKU-200", name="Data Science Book",
               description="Introductory guide to Data Science", price=Decimal("29.99"),
               supplier_id=techsource["id"])

    add("product_categories", product_id=cable["id"], category_id=electronics["id"])
    add("product_categories", product_id=book["id"], category_id=books["id"])

    add("inventory", product_id=cable["id"], quantity_in_stock=100, reserved_quantity=5)
    add("inventory", product_id=book["id"], quantity_in_stock=25, reserved_quantity=2)

    alice_order = add("orders", customer_id=alice["id"], status="processing", total_amount=Decimal("11.98"),
                      shipping_address_id=alice_home["id"], billing_address_id=alice_home["id"])
    bob_order = add("orders", customer_id=bob["id"], status="pending", total_amount=Decimal("29.99"),
                    shipping_address_id=bob_office["id"], billing_address_id=bob_office["id"])

    # Alice ordered 2 USB Cables, Bob ordered 1 Book
    add("order_items", order_id=alice_order["id"], product_id=cable["id"], quantity=2,
        unit_price=Decimal("5.99"), discount=Decimal("0"))
    add("order_items", order_id=bob_order["id"], product_id=book["id"], quantity=1,
        unit_price=Decimal("29.99"), discount=Decimal("0"))

    add("payments", order_id=alice_order["id"], payment_method="card", amount=Decimal("11.98"),
        status="completed", provider_txn_id="TXN123")
    add("payments", order_id=bob_order["id"], payment_method="paypal", amount=Decimal("29.99"),
        status="initiated", provider_txn_id="TXN124")

    add("reviews", product_id=cable["id"], customer_id=alice["id"], rating=5,
        title="Great Cable", body="Works perfectly, fast delivery!")
    add("reviews", product_id=book["id"], customer_id=bob["id"], rating=4,
        title="Good Book", body="Very informative, but a bit dense.")

    return created


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    store = Store(settings)
    try:
        created = seed_sample_data(store)
    except StoreError as e:
        print(f"[FAIL] {e.kind}: {e.message}", file=sys.stderr)
        return 1
    finally:
        store.dispose()
    for collection, rows in created.items():
        print(f"[OK] {collection}: {len(rows)} row(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
