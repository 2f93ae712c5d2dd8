from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field
from datetime import datetime

from app.enums.product_category import ProductCategory

class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: ProductCategory
    price: Decimal = Field(ge=Decimal("0.01"), max_digits=19, decimal_places=2)

class ProductCreate(ProductBase):
    stock: int = Field(ge=0, le=1_000_000)

class ProductUpdate(ProductBase):
    stock: int = Field(ge=0)
    active: bool

class ProductResponse(ProductBase):
    id: int
    stock: int
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProductPage(BaseModel):
    items: List[ProductResponse]
    page: int
    size: int
    total: int
    total_pages: int
