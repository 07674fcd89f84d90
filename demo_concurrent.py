import asyncio

from app.cart import CartStore
from app.config import settings
from app.database import MemoryStorage
from app.notifications import LoggingNotifier
from sdk.stockclient import StockClient


async def main():
    async with StockClient(base_url=settings.stock_api_url, timeout=settings.http_timeout) as stock:
        store = CartStore(stock_service=stock, notifier=LoggingNotifier(), storage=MemoryStorage())

        # Both calls read the same empty cart before either commits
        print("\n⚡ Adding product 6 twice concurrently...")
        outcomes = await asyncio.gather(store.add_product(6), store.add_product(6))
        print("Outcomes:", [o.value for o in outcomes])

        # Last commit wins: one entry, amount 1
        print("📦 Cart:", [(p.id, p.amount) for p in store.cart])

        print("\n➕ Adding product 6 again, sequentially...")
        await store.add_product(6)
        print("📦 Cart:", [(p.id, p.amount) for p in store.cart])


if __name__ == "__main__":
    asyncio.run(main())
