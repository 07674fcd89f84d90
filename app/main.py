# app/main.py
from fastapi import FastAPI, HTTPException
from typing import Dict, Any, List

from .logging import get_logger

logger = get_logger(__name__)

app = FastAPI(title="rocketcart stock api (in-memory demo)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ---------------------------
# In-memory stores (session)
# ---------------------------
PRODUCTS: Dict[int, Dict[str, Any]] = {}
STOCK: Dict[int, Dict[str, int]] = {}

SEED_CATALOG: List[Dict[str, Any]] = [
    {"id": 1, "name": "Running Shoe Flex Pro", "price": 179.9, "amount": 3,
     "imageUrl": "https://cdn.example.com/shoes/flex-pro.jpg"},
    {"id": 2, "name": "Trail Runner Grip", "price": 139.9, "amount": 5,
     "imageUrl": "https://cdn.example.com/shoes/trail-grip.jpg"},
    {"id": 3, "name": "Court Classic Low", "price": 219.9, "amount": 2,
     "imageUrl": "https://cdn.example.com/shoes/court-classic.jpg"},
    {"id": 4, "name": "Daily Walker Knit", "price": 99.9, "amount": 1,
     "imageUrl": "https://cdn.example.com/shoes/walker-knit.jpg"},
    {"id": 5, "name": "Sprint Spike Elite", "price": 249.9, "amount": 0,
     "imageUrl": "https://cdn.example.com/shoes/sprint-spike.jpg"},
    {"id": 6, "name": "Canvas Skate Mid", "price": 129.9, "amount": 10,
     "imageUrl": "https://cdn.example.com/shoes/skate-mid.jpg"},
]


def seed(catalog: List[Dict[str, Any]] = SEED_CATALOG) -> None:
    """Replace the catalog; each entry carries its stock level under `amount`."""
    PRODUCTS.clear()
    STOCK.clear()
    for item in catalog:
        pid = int(item["id"])
        PRODUCTS[pid] = {k: v for k, v in item.items() if k != "amount"}
        STOCK[pid] = {"id": pid, "amount": int(item.get("amount", 0))}
    logger.info(f"Seeded catalog with {len(PRODUCTS)} product(s)")


seed()

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products")
async def list_products():
    return list(PRODUCTS.values())

@app.get("/products/{product_id}")
async def get_product(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

# ---------------------------
# Stock endpoints
# ---------------------------
@app.get("/stock/{product_id}")
async def get_stock(product_id: int):
    s = STOCK.get(product_id)
    if s is None:
        raise HTTPException(status_code=404, detail="stock not found")
    return s

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    seed()
    return {"status": "reset"}
