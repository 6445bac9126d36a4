# inventory/models.py
from typing import Union
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LOW_STOCK_THRESHOLD = 5

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    # int stays int on disk (10, not 10.0)
    price: Union[int, float]
    stock: int = Field(ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, alias="lowStockThreshold")
    category: str
