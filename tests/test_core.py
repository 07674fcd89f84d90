# tests/test_core.py
from app.core import CartOutcome, cart_size, cart_total, find_product, format_price, subtotal
from app.models import Product


def _cart():
    return (
        Product(id=1, name="A", price=10.5, image_url="", amount=2),
        Product(id=2, name="B", price=99.9, image_url="", amount=1),
    )


def test_cart_size_counts_products_not_units():
    assert cart_size(_cart()) == 2
    assert cart_size(()) == 0


def test_totals():
    cart = _cart()
    assert subtotal(cart[0]) == 21.0
    assert cart_total(cart) == 120.9
    assert cart_total(()) == 0


def test_find_product():
    assert find_product(_cart(), 2).name == "B"
    assert find_product(_cart(), 3) is None


def test_format_price():
    assert format_price(1234.5) == "$1,234.50"
    assert format_price(0) == "$0.00"
    assert format_price(9.9, symbol="R$ ") == "R$ 9.90"


def test_outcome_ok():
    assert CartOutcome.SUCCESS.ok
    assert CartOutcome.IGNORED.ok
    assert not CartOutcome.OUT_OF_STOCK.ok
    assert not CartOutcome.NOT_FOUND.ok
    assert not CartOutcome.FAILED.ok


def test_with_amount_returns_new_product():
    original = _cart()[0]
    updated = original.with_amount(5)
    assert updated.amount == 5
    assert original.amount == 2
    assert updated.model_dump(exclude={"amount"}) == original.model_dump(exclude={"amount"})
