from enum import Enum
from typing import Iterable

from .models import Product

# User-facing messages, one per failure kind
OUT_OF_STOCK_MESSAGE = "Requested quantity is out of stock"
ADD_FAILED_MESSAGE = "Failed to add product"
REMOVE_FAILED_MESSAGE = "Failed to remove product"
UPDATE_FAILED_MESSAGE = "Failed to update product quantity"


class CartOutcome(str, Enum):
    SUCCESS = "success"
    IGNORED = "ignored"
    OUT_OF_STOCK = "out_of_stock"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self in (CartOutcome.SUCCESS, CartOutcome.IGNORED)


class CartError(Exception):
    """Base for failures raised inside the cart store."""
    outcome = CartOutcome.FAILED


class OutOfStockError(CartError):
    outcome = CartOutcome.OUT_OF_STOCK

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(f"product {product_id}: requested {requested}, in stock {available}")
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ProductNotFoundError(CartError):
    outcome = CartOutcome.NOT_FOUND

    def __init__(self, product_id: int):
        super().__init__(f"product {product_id} is not in the cart")
        self.product_id = product_id


class CorruptCartError(CartError):
    """Persisted cart snapshot could not be decoded."""


# ---------------------------
# Summaries
# ---------------------------
def find_product(cart: Iterable[Product], product_id: int):
    return next((p for p in cart if p.id == product_id), None)


def cart_size(cart: Iterable[Product]) -> int:
    """Number of distinct products, not units."""
    return len({p.id for p in cart})


def subtotal(product: Product) -> float:
    return round(product.price * product.amount, 2)


def cart_total(cart: Iterable[Product]) -> float:
    return round(sum(subtotal(p) for p in cart), 2)


def format_price(value: float, symbol: str = "$") -> str:
    return f"{symbol}{value:,.2f}"
