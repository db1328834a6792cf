"""
Pydantic схемы вариантов товара и словарей цвет/размер.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ColorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    slug: str
    hex_code: str


class SizeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    slug: str
    sort_order: Optional[int] = 0


class VariantOut(BaseModel):
    """Вариант товара вместе со своими цветом и размером."""

    model_config = ConfigDict(from_attributes=True)
    id: str
    product_id: str
    sku: str
    price: float
    sale_price: Optional[float] = None
    color_id: Optional[str] = None
    size_id: Optional[str] = None
    in_stock: int = 0
    weight: Optional[float] = None
    dimensions: Optional[dict] = None
    created_at: Optional[datetime] = None
    color: Optional[ColorOut] = None
    size: Optional[SizeOut] = None
