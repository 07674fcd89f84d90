# app/cart.py
from typing import Optional, Tuple

from .core import (
    ADD_FAILED_MESSAGE,
    OUT_OF_STOCK_MESSAGE,
    REMOVE_FAILED_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    CartError,
    CartOutcome,
    CorruptCartError,
    OutOfStockError,
    ProductNotFoundError,
    find_product,
)
from .database import CART_STORAGE_KEY, KeyValueStorage, deserialize_cart, serialize_cart
from .logging import get_logger
from .models import Product, UpdateProductAmount
from .notifications import Notifier
from sdk.stockclient import StockService

logger = get_logger(__name__)

Cart = Tuple[Product, ...]


class CartStore:
    """
    Shopping cart kept in memory and mirrored to durable storage.

    Every public operation returns a CartOutcome and never raises. Failures
    are reported once through the notifier and leave the cart untouched.

    Operations read the cart as it was when they were called and commit when
    they finish. There is no locking: two overlapping operations on the same
    product race and the last commit wins.
    """

    def __init__(self, stock_service: StockService, notifier: Notifier, storage: KeyValueStorage,
                 key: str = CART_STORAGE_KEY):
        self.stock_service = stock_service
        self.notifier = notifier
        self.storage = storage
        self.key = key
        self._cart: Cart = self._load()

    @property
    def cart(self) -> Cart:
        return self._cart

    def _load(self) -> Cart:
        try:
            raw = self.storage.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read persisted cart, starting empty: {e}")
            return ()

        if raw is None:
            return ()

        try:
            cart = deserialize_cart(raw)
        except CorruptCartError as e:
            logger.warning(f"Ignoring corrupted cart snapshot under {self.key}: {e}")
            return ()

        logger.debug(f"Loaded cart with {len(cart)} product(s)")
        return cart

    def _commit(self, cart: Cart) -> None:
        # Write first: a failed write must not leave memory ahead of storage
        self.storage.set(self.key, serialize_cart(cart))
        self._cart = cart
        logger.debug(f"Committed cart with {len(cart)} product(s)")

    async def _ensure_in_stock(self, product_id: int, amount: int) -> None:
        stock = await self.stock_service.get_stock(product_id)
        if amount > stock.amount:
            raise OutOfStockError(product_id, amount, stock.amount)

    def _fail(self, e: Exception, failed_message: str, action: str) -> CartOutcome:
        if isinstance(e, OutOfStockError):
            logger.info(str(e))
            self.notifier.error(OUT_OF_STOCK_MESSAGE)
            return e.outcome
        if isinstance(e, CartError):
            logger.info(str(e))
            self.notifier.error(failed_message)
            return e.outcome
        logger.exception(f"Unexpected failure while trying to {action}")
        self.notifier.error(failed_message)
        return CartOutcome.FAILED

    # ---------------------------
    # Public operations
    # ---------------------------
    async def add_product(self, product_id: int) -> CartOutcome:
        snapshot = self._cart
        try:
            existing: Optional[Product] = find_product(snapshot, product_id)
            current_amount = existing.amount if existing else 0
            desired_amount = current_amount + 1

            await self._ensure_in_stock(product_id, desired_amount)

            if existing:
                updated = tuple(
                    p.with_amount(desired_amount) if p.id == product_id else p
                    for p in snapshot
                )
            else:
                info = await self.stock_service.get_product(product_id)
                updated = snapshot + (Product.from_info(info, amount=1),)

            self._commit(updated)
            return CartOutcome.SUCCESS
        except Exception as e:
            return self._fail(e, ADD_FAILED_MESSAGE, f"add product {product_id}")

    def remove_product(self, product_id: int) -> CartOutcome:
        snapshot = self._cart
        try:
            if find_product(snapshot, product_id) is None:
                raise ProductNotFoundError(product_id)

            self._commit(tuple(p for p in snapshot if p.id != product_id))
            return CartOutcome.SUCCESS
        except Exception as e:
            return self._fail(e, REMOVE_FAILED_MESSAGE, f"remove product {product_id}")

    async def update_product_amount(self, request: UpdateProductAmount) -> CartOutcome:
        product_id, amount = request.product_id, request.amount

        # Zero or below never removes; callers use remove_product for that
        if amount <= 0:
            return CartOutcome.IGNORED

        snapshot = self._cart
        try:
            await self._ensure_in_stock(product_id, amount)

            if find_product(snapshot, product_id) is None:
                raise ProductNotFoundError(product_id)

            self._commit(tuple(
                p.with_amount(amount) if p.id == product_id else p
                for p in snapshot
            ))
            return CartOutcome.SUCCESS
        except Exception as e:
            return self._fail(e, UPDATE_FAILED_MESSAGE, f"update product {product_id}")
