from decimal import Decimal

import pytest

from estore.core.errors import ConflictViolation, NotFound, RestrictedDeletion
from estore.entities import ENTITIES
from estore.repositories import cascade_repo
from estore.services.relationships import RELATIONS, Policy, plan_delete


def _ids(rows):
    return sorted(r["id"] for r in rows)


def test_relationship_table_is_complete():
    table = {(r.parent, r.dependent, r.column): r.policy for r in RELATIONS}
    assert table == {
        ("Customer", "CustomerProfile", "customer_id"): Policy.cascade,
        ("Customer", "Address", "customer_id"): Policy.cascade,
        ("Customer", "Order", "customer_id"): Policy.restrict,
        ("Customer", "Review", "customer_id"): Policy.set_null,
        ("Supplier", "Product", "supplier_id"): Policy.set_null,
        ("Product", "ProductCategory", "product_id"): Policy.cascade,
        ("Category", "ProductCategory", "category_id"): Policy.cascade,
        ("Product", "Inventory", "product_id"): Policy.cascade,
        ("Product", "OrderItem", "product_id"): Policy.restrict,
        ("Product", "Review", "product_id"): Policy.cascade,
        ("Address", "Order", "shipping_address_id"): Policy.set_null,
        ("Address", "Order", "billing_address_id"): Policy.set_null,
        ("Order", "OrderItem", "order_id"): Policy.cascade,
        ("Order", "Payment", "order_id"): Policy.cascade,
    }


def test_relations_match_model_foreign_keys():
    ondelete = {Policy.cascade: "CASCADE", Policy.restrict: "RESTRICT", Policy.set_null: "SET NULL"}
    for relation in RELATIONS:
        column = ENTITIES[relation.dependent].model.__table__.c[relation.column]
        (fk,) = column.foreign_keys
        assert fk.column.table.name == ENTITIES[relation.parent].model.__tablename__
        assert fk.ondelete == ondelete[relation.policy]


def test_customer_without_orders_takes_profile_and_addresses(store, customer, product):
    store.customer_profiles.create(customer_id=customer["id"], bio="hi")
    store.addresses.create(customer_id=customer["id"], line1="1 Road", city="Lagos", postal_code="1", country="NG")
    review = store.reviews.create(product_id=product["id"], customer_id=customer["id"], rating=4)

    plan = store.customers.delete(customer["id"])

    assert plan.deleted("CustomerProfile") == [(customer["id"],)]
    assert len(plan.deleted("Address")) == 1
    with pytest.raises(NotFound):
        store.customers.get(customer["id"])
    assert store.customer_profiles.list().all() == []
    assert store.addresses.list().all() == []
    # the review survives without attribution
    assert store.reviews.get(review["id"])["customer_id"] is None


def test_customer_with_orders_cannot_be_deleted(seeded):
    store, created = seeded
    alice = created["customers"][0]

    with pytest.raises(RestrictedDeletion) as exc_info:
        store.customers.delete(alice["id"])

    assert exc_info.value.dependent == "Order"
    assert store.customers.get(alice["id"]) == alice
    assert store.customer_profiles.get(alice["id"])
    assert len(store.addresses.list(customer_id=alice["id"]).all()) == 1


def test_product_on_order_is_restricted_until_lines_are_gone(seeded):
    store, created = seeded
    cable = created["products"][0]
    order_id = created["orders"][0]["id"]

    with pytest.raises(RestrictedDeletion) as exc_info:
        store.products.delete(cable["id"])
    assert exc_info.value.dependent == "OrderItem"
    assert exc_info.value.dependent_keys == [(order_id, cable["id"])]
    assert store.inventory.get(cable["id"])

    store.order_items.delete((order_id, cable["id"]))
    plan = store.products.delete(cable["id"])

    assert plan.deleted("Inventory") == [(cable["id"],)]
    assert len(plan.deleted("ProductCategory")) == 1
    assert len(plan.deleted("Review")) == 1
    assert store.inventory.list(product_id=cable["id"]).all() == []
    assert store.product_categories.list(product_id=cable["id"]).all() == []
    assert store.reviews.list(product_id=cable["id"]).all() == []
    # the category itself is untouched
    assert len(store.categories.list().all()) == 2


def test_deleting_a_category_only_unlinks_products(seeded):
    store, created = seeded
    electronics = created["categories"][0]
    cable = created["products"][0]

    store.categories.delete(electronics["id"])

    assert store.product_categories.list(category_id=electronics["id"]).all() == []
    assert store.products.get(cable["id"]) == cable


def test_deleting_a_supplier_clears_product_reference(seeded):
    store, created = seeded
    acme = created["suppliers"][0]
    cable = created["products"][0]

    plan = store.suppliers.delete(acme["id"])

    assert plan.nullified("Product", "supplier_id") == [(cable["id"],)]
    assert store.products.get(cable["id"])["supplier_id"] is None


def test_deleting_an_address_keeps_the_order(seeded):
    store, created = seeded
    address = created["addresses"][0]
    order = created["orders"][0]

    store.addresses.delete(address["id"])

    kept = store.orders.get(order["id"])
    assert kept["shipping_address_id"] is None
    assert kept["billing_address_id"] is None
    assert kept["total_amount"] == Decimal("11.98")


def test_only_the_matching_address_reference_is_cleared(store, customer):
    home = store.addresses.create(customer_id=customer["id"], line1="1 Road", city="A", postal_code="1", country="NG")
    office = store.addresses.create(
        customer_id=customer["id"], type="billing", line1="2 Road", city="B", postal_code="2", country="NG"
    )
    order = store.orders.create(
        customer_id=customer["id"], total_amount=1, shipping_address_id=home["id"], billing_address_id=office["id"]
    )

    store.addresses.delete(home["id"])

    kept = store.orders.get(order["id"])
    assert kept["shipping_address_id"] is None
    assert kept["billing_address_id"] == office["id"]


def test_deleting_an_order_takes_lines_and_payments(seeded):
    store, created = seeded
    order = created["orders"][0]

    plan = store.orders.delete(order["id"])

    assert plan.summary() == {"deleted.Order": 1, "deleted.OrderItem": 1, "deleted.Payment": 1}
    assert store.order_items.list(order_id=order["id"]).all() == []
    assert store.payments.list(order_id=order["id"]).all() == []
    # products are only referenced, never removed by an order delete
    assert len(store.products.list().all()) == 2


def test_customer_delete_after_orders_are_removed(seeded):
    store, created = seeded
    alice = created["customers"][0]
    for order in store.orders.list(customer_id=alice["id"]):
        store.orders.delete(order["id"])

    plan = store.customers.delete(alice["id"])

    assert plan.deleted("Customer") == [(alice["id"],)]
    assert store.reviews.list(customer_id=None).first()["title"] == "Great Cable"


def test_every_parent_has_a_single_column_key():
    # the planner matches dependents on the parent's one key column
    for relation in RELATIONS:
        assert len(ENTITIES[relation.parent].key) == 1, relation


def test_delete_of_missing_row(store):
    with pytest.raises(NotFound):
        store.products.delete(42)
    with pytest.raises(NotFound):
        store.product_categories.delete((1, 1))


def test_plan_is_resolved_before_any_write(seeded):
    store, created = seeded
    bob = created["customers"][1]
    with store.transaction() as db:
        with pytest.raises(RestrictedDeletion):
            plan_delete(db, "Customer", bob["id"])
    assert store.customers.get(bob["id"]) == bob


def test_failed_cascade_rolls_back_everything(seeded, monkeypatch):
    store, created = seeded
    book = created["products"][1]
    order_id = created["orders"][1]["id"]
    store.order_items.delete((order_id, book["id"]))
    calls = []
    real_delete_rows = cascade_repo._delete_rows

    def flaky_delete_rows(db, entity, keys):
        calls.append(entity.name)
        if entity.name == "Product":
            raise ConflictViolation("simulated failure", entity.name)
        real_delete_rows(db, entity, keys)

    monkeypatch.setattr(cascade_repo, "_delete_rows", flaky_delete_rows)

    with pytest.raises(ConflictViolation):
        store.products.delete(book["id"])

    # dependents were deleted first, then the whole transaction was undone
    assert "Inventory" in calls and calls[-1] == "Product"
    assert store.products.get(book["id"]) == book
    assert store.inventory.get(book["id"])["quantity_in_stock"] == 25
    assert len(store.product_categories.list(product_id=book["id"]).all()) == 1
    assert len(store.reviews.list(product_id=book["id"]).all()) == 1
