from __future__ import annotations

import os

import pytest

os.environ["STOREFRONT_STORAGE"] = "memory"

from storefront.store.cart_models import ProductInfo
from storefront.store.cart_store import CartStore
from storefront.store.storage import MemoryStorage


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(storage: MemoryStorage) -> CartStore:
    return CartStore(storage)


@pytest.fixture()
def product() -> ProductInfo:
    return ProductInfo(id=1, name="X", unit_price=10, stock=5, image="x.webp")
