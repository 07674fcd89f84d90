#!/usr/bin/env python
"""Scripted walk through the cart against a running stock api (uvicorn app.main:app --port 3333)."""
import asyncio

from app.cart import CartStore
from app.config import settings
from app.core import cart_total, format_price
from app.database import CART_STORAGE_KEY, MemoryStorage
from app.models import UpdateProductAmount
from app.notifications import ConsoleNotifier
from sdk.stockclient import StockClient


async def main():
    storage = MemoryStorage()

    async with StockClient(base_url=settings.stock_api_url, timeout=settings.http_timeout) as stock:
        store = CartStore(stock_service=stock, notifier=ConsoleNotifier(), storage=storage)

        # -----------------------------
        # Fill the cart
        # -----------------------------
        print("Adding product 3 (stock 2) three times...")
        for _ in range(3):
            print(" ->", (await store.add_product(3)).value)

        print("\nAdding product 1...")
        print(" ->", (await store.add_product(1)).value)

        # -----------------------------
        # Quantities
        # -----------------------------
        print("\nSetting product 1 to 3, then to 99...")
        print(" ->", (await store.update_product_amount(UpdateProductAmount(product_id=1, amount=3))).value)
        print(" ->", (await store.update_product_amount(UpdateProductAmount(product_id=1, amount=99))).value)

        print("\nSetting product 1 to 0 (ignored)...")
        print(" ->", (await store.update_product_amount(UpdateProductAmount(product_id=1, amount=0))).value)

        # -----------------------------
        # Removal
        # -----------------------------
        print("\nRemoving product 3, then removing it again...")
        print(" ->", store.remove_product(3).value)
        print(" ->", store.remove_product(3).value)

        print("\nFinal cart:")
        for p in store.cart:
            print(f"  {p.id} {p.name} x{p.amount}")
        print("Total:", format_price(cart_total(store.cart)))
        print("Persisted:", storage.get(CART_STORAGE_KEY))


if __name__ == "__main__":
    asyncio.run(main())
