# sdk/stockclient.py
from typing import List, Optional, Protocol

import httpx

from app.models import ProductInfo, StockRecord


class StockService(Protocol):
    async def get_stock(self, product_id: int) -> StockRecord: ...

    async def get_product(self, product_id: int) -> ProductInfo: ...


class StockClient:
    """
    Async client for the stock/catalog API.

    Non-2xx responses raise httpx.HTTPStatusError and payloads that do not
    match the models raise pydantic.ValidationError; callers decide what a
    failure means.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3333",
        timeout: float = 10,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def _get_json(self, path: str):
        r = await self.client.get(f"{self.base_url}{path}")
        r.raise_for_status()
        return r.json()

    async def get_stock(self, product_id: int) -> StockRecord:
        data = await self._get_json(f"/stock/{product_id}")
        return StockRecord.model_validate(data)

    async def get_product(self, product_id: int) -> ProductInfo:
        data = await self._get_json(f"/products/{product_id}")
        return ProductInfo.model_validate(data)

    async def list_products(self) -> List[ProductInfo]:
        data = await self._get_json("/products")
        return [ProductInfo.model_validate(p) for p in data]
