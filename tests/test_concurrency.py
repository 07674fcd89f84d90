# tests/test_concurrency.py
import asyncio

from app.core import CartOutcome
from app.database import CART_STORAGE_KEY, serialize_cart
from app.models import UpdateProductAmount


def test_concurrent_adds_last_commit_wins(make_store, storage):
    store = make_store()

    async def scenario():
        return await asyncio.gather(store.add_product(1), store.add_product(1))

    outcomes = asyncio.run(scenario())

    # Both read the empty cart before either committed
    assert outcomes == [CartOutcome.SUCCESS, CartOutcome.SUCCESS]
    assert [(p.id, p.amount) for p in store.cart] == [(1, 1)]
    assert storage.get(CART_STORAGE_KEY) == serialize_cart(store.cart)
    assert storage.writes == 2


def test_concurrent_add_and_update_overlap(make_store):
    store = make_store()
    asyncio.run(store.add_product(2))

    async def scenario():
        return await asyncio.gather(
            store.update_product_amount(UpdateProductAmount(product_id=2, amount=3)),
            store.add_product(2),
        )

    outcomes = asyncio.run(scenario())
    assert outcomes == [CartOutcome.SUCCESS, CartOutcome.SUCCESS]
    # The add finished last and was computed from amount 1
    assert store.cart[0].amount == 2


def test_remove_during_pending_add(make_store):
    store = make_store()
    asyncio.run(store.add_product(1))

    async def scenario():
        pending = asyncio.ensure_future(store.add_product(7))
        await asyncio.sleep(0)
        removed = store.remove_product(1)
        return removed, await pending

    removed, added = asyncio.run(scenario())
    assert removed is CartOutcome.SUCCESS
    assert added is CartOutcome.SUCCESS
    # The add started from the cart that still held product 1
    assert [p.id for p in store.cart] == [1, 7]
