from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, Union

from .models import Product, DEFAULT_LOW_STOCK_THRESHOLD

# Request bodies are permissive on purpose: every field is optional so that
# missing fields reach the service and come back as a 400 with a message,
# while pydantic still coerces numeric strings ("9.99", "10").
# An absent field and an explicit null are told apart via model_fields_set.

class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    price: Optional[Union[int, float]] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    low_stock_threshold: Optional[int] = Field(None, alias="lowStockThreshold")

    @field_validator("low_stock_threshold", mode="before")
    @classmethod
    def _blank_threshold(cls, v):
        # "" means "use the default", same as a missing value
        if v == "":
            return None
        return v

    def missing_required(self) -> bool:
        # price and stock may be 0 or null; only leaving them out counts as missing
        return (
            not self.name
            or not self.category
            or "price" not in self.model_fields_set
            or "stock" not in self.model_fields_set
        )

class StockUpdateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Matched exactly against stored ids: "1" does not find product 1
    id: Any = None
    new_quantity: Optional[int] = Field(None, alias="newQuantity")

    def missing_required(self) -> bool:
        return "id" not in self.model_fields_set or "new_quantity" not in self.model_fields_set

def same_id(a: Any, b: Any) -> bool:
    numbers = (int, float)
    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    if isinstance(a, numbers) and isinstance(b, numbers):
        return a == b
    return type(a) is type(b) and a == b

def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    product = Product(
        id=product_id,
        name=p.name,
        price=p.price if p.price is not None else 0,
        stock=p.stock if p.stock is not None else 0,
        low_stock_threshold=p.low_stock_threshold or DEFAULT_LOW_STOCK_THRESHOLD,
        category=p.category,
    )
    return product.model_dump(by_alias=True)
