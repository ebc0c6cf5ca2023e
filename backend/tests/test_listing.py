import pytest

from estore.core.errors import ConstraintViolation
from estore.models import OrderStatus


@pytest.fixture
def paged_store(make_store):
    store = make_store(list_page_size=3)
    for n in range(7):
        store.suppliers.create(name=f"Supplier {n}", phone="1" if n % 2 else None)
    return store


def test_list_is_lazy_and_paged(paged_store):
    rows = paged_store.suppliers.list()
    iterator = iter(rows)
    first = next(iterator)
    assert first["name"] == "Supplier 0"
    # rows created after iteration started are visible on later pages
    paged_store.suppliers.create(name="Late")
    names = [first["name"]] + [r["name"] for r in iterator]
    assert names[-1] == "Late"
    assert len(names) == 8


def test_list_is_restartable(paged_store):
    rows = paged_store.suppliers.list(phone="1")
    assert len(rows.all()) == 3
    paged_store.suppliers.create(name="Another", phone="1")
    assert len(rows.all()) == 4
    assert [r["name"] for r in rows][:1] == ["Supplier 1"]


def test_list_filters_on_null(paged_store):
    assert {r["name"] for r in paged_store.suppliers.list(phone=None)} == {
        "Supplier 0", "Supplier 2", "Supplier 4", "Supplier 6",
    }


def test_list_rejects_unknown_columns(paged_store):
    with pytest.raises(ConstraintViolation):
        paged_store.suppliers.list(website="x")


def test_list_filters_on_enum_values(seeded):
    store, created = seeded
    alice = created["customers"][0]
    assert [o["customer_id"] for o in store.orders.list(status="processing")] == [alice["id"]]
    assert store.orders.list(status="delivered").first() is None


def test_collections_are_reachable_by_both_names(store):
    assert store.collection("Order") is store.orders
    assert store.collection("order_items") is store.order_items
    with pytest.raises(KeyError):
        store.collection("widgets")


def test_list_rejects_invalid_enum_filter(seeded):
    store, _ = seeded
    with pytest.raises(ConstraintViolation) as exc_info:
        store.orders.list(status="bogus")
    assert exc_info.value.fields == ["status"]
    assert store.orders.list(status=OrderStatus.processing).first() is not None


def test_list_rejects_out_of_range_integer_filter(seeded):
    store, _ = seeded
    with pytest.raises(ConstraintViolation) as exc_info:
        store.orders.list(customer_id=2**70)
    assert exc_info.value.fields == ["customer_id"]
    assert store.orders.list(customer_id=2**40).all() == []
