"""
Схемы выбора варианта и проверки добавления в корзину.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from storefront.schemas.variant import ColorOut, SizeOut, VariantOut


class InventoryStatusOut(BaseModel):
    status: Literal["in_stock", "low_stock", "out_of_stock"]
    display_text: str
    can_order: bool


class SelectionRequest(BaseModel):
    """
    Текущий выбор покупателя и, опционально, его изменение.

    Attributes:
        color_id / size_id: Текущий выбор (пустой: значение по умолчанию)
        axis: Какую ось меняет покупатель (color / size)
        value: Новое значение оси (None: сбросить выбор)
    """

    color_id: Optional[str] = None
    size_id: Optional[str] = None
    axis: Optional[Literal["color", "size"]] = None
    value: Optional[str] = None


class SelectionOut(BaseModel):
    selected_color_id: Optional[str] = None
    selected_size_id: Optional[str] = None
    selected_variant: Optional[VariantOut] = None
    available_colors: List[ColorOut] = Field(default_factory=list)
    available_sizes: List[SizeOut] = Field(default_factory=list)
    gallery_index: int = 0
    inventory: Optional[InventoryStatusOut] = None


class CartCheckRequest(BaseModel):
    color_id: Optional[str] = None
    size_id: Optional[str] = None
    quantity: int = Field(1, ge=1)
    cart_quantity: int = Field(0, ge=0)


class CartCheckOut(BaseModel):
    can_add: bool
    max_quantity: int
    error: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    sale_price: Optional[float] = None
