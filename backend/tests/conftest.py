from __future__ import annotations

from decimal import Decimal

import pytest

from estore.core.config import Settings
from estore.services.store import Store
from scripts.seed_data import seed_sample_data


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "lock_timeout_seconds": 2.0}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store(settings):
    store = Store(settings)
    yield store
    store.dispose()


@pytest.fixture
def seeded(store):
    """Store populated with the sample rows; yields (store, created rows)."""
    return store, seed_sample_data(store)


@pytest.fixture
def customer(store):
    return store.customers.create(
        email="a@x.com",
        password_hash="hash_a",
        first_name="Ada",
        last_name="Xu",
    )


@pytest.fixture
def product(store):
    return store.products.create(sku="SKU-1", name="Widget", price=Decimal("5.99"))


@pytest.fixture
def make_store():
    """Factory for extra stores with setting overrides; all disposed at teardown."""
    stores = []

    def factory(**overrides) -> Store:
        store = Store(make_settings(**overrides))
        stores.append(store)
        return store

    yield factory
    for store in stores:
        store.dispose()
