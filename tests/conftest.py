"""Pytest configuration and fixtures"""
import asyncio
from typing import Dict, List

import pytest

from app.cart import CartStore
from app.database import MemoryStorage
from app.models import ProductInfo, StockRecord


class FakeStockService:
    """
    In-process stand-in for the stock api. Every call yields to the event
    loop once, like a real round trip, so overlapping operations interleave.
    """

    def __init__(self, stock: Dict[int, int], products: Dict[int, ProductInfo]):
        self.stock = stock
        self.products = products
        self.stock_calls: List[int] = []
        self.product_calls: List[int] = []

    async def get_stock(self, product_id: int) -> StockRecord:
        self.stock_calls.append(product_id)
        await asyncio.sleep(0)
        if product_id not in self.stock:
            raise LookupError(f"no stock record for {product_id}")
        return StockRecord(id=product_id, amount=self.stock[product_id])

    async def get_product(self, product_id: int) -> ProductInfo:
        self.product_calls.append(product_id)
        await asyncio.sleep(0)
        if product_id not in self.products:
            raise LookupError(f"no product {product_id}")
        return self.products[product_id]


class RecordingNotifier:
    def __init__(self):
        self.messages: List[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)


def _info(pid: int, name: str, price: float) -> ProductInfo:
    return ProductInfo(id=pid, name=name, price=price, image_url=f"https://img.test/{pid}.jpg")


@pytest.fixture
def stock_service():
    return FakeStockService(
        stock={1: 5, 2: 3, 7: 2, 9: 0},
        products={
            1: _info(1, "Flex Pro", 179.9),
            2: _info(2, "Trail Grip", 139.9),
            7: _info(7, "Court Classic", 219.9),
            9: _info(9, "Sprint Spike", 249.9),
        },
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def make_store(stock_service, notifier, storage):
    def _make(**overrides):
        deps = {"stock_service": stock_service, "notifier": notifier, "storage": storage}
        deps.update(overrides)
        return CartStore(**deps)
    return _make


@pytest.fixture
def run():
    return asyncio.run
