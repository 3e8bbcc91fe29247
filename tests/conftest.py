from __future__ import annotations

import pytest

from search_cache.types import Product


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> list[Product]:
    return [
        Product(product_id="p-1", name="Apple", price=0.5, product_type="produce"),
        Product(product_id="p-2", name="Apple Juice", price=2.99, product_type="beverage"),
        Product(product_id="p-3", name="Apricot", price=0.8, product_type="produce"),
        Product(product_id="p-4", name="Banana", price=0.25, product_type="produce"),
        Product(product_id="p-5", name="Frozen Peas", price=1.75, product_type="frozen"),
    ]
