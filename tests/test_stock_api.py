# tests/test_stock_api.py
from fastapi.testclient import TestClient
from app.main import app, PRODUCTS, STOCK, seed

client = TestClient(app)

def reset():
    client.post("/reset")

def test_list_products_has_no_stock_levels():
    reset()
    r = client.get("/products")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == len(PRODUCTS)
    assert all("amount" not in p for p in body)
    assert {"id", "name", "price", "imageUrl"} <= set(body[0])

def test_get_product_and_stock():
    reset()
    r = client.get("/products/3")
    assert r.status_code == 200
    assert r.json()["name"] == "Court Classic Low"
    s = client.get("/stock/3")
    assert s.status_code == 200
    assert s.json() == {"id": 3, "amount": 2}

def test_unknown_ids_are_404():
    reset()
    assert client.get("/products/999").status_code == 404
    assert client.get("/stock/999").status_code == 404

def test_reset_restores_seed():
    seed([{"id": 42, "name": "Only", "price": 1.0, "amount": 1, "imageUrl": ""}])
    assert list(PRODUCTS) == [42]
    reset()
    assert 42 not in PRODUCTS
    assert STOCK[1]["amount"] == 3
