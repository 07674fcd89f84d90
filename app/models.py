# app/models.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductInfo(BaseModel):
    """Catalog entry as served by `GET products/{id}`."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    price: float
    image_url: str = Field(default="", alias="imageUrl")


class Product(ProductInfo):
    """A catalog entry sitting in the cart. `amount` is the cart quantity, not stock."""
    amount: int = Field(ge=1)

    @classmethod
    def from_info(cls, info: ProductInfo, amount: int = 1) -> "Product":
        return cls(**info.model_dump(), amount=amount)

    def with_amount(self, amount: int) -> "Product":
        # model_copy(update=...) skips validation, so rebuild instead
        return Product(**self.model_dump(exclude={"amount"}), amount=amount)


class StockRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    amount: int = Field(ge=0)


class UpdateProductAmount(BaseModel):
    product_id: int
    amount: int
