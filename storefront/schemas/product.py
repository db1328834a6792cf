"""
Pydantic схемы карточки товара.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.variant import ColorOut, SizeOut, VariantOut


class ImageOut(BaseModel):
    """Изображение товара или варианта."""

    model_config = ConfigDict(from_attributes=True)
    id: str
    product_id: str
    variant_id: Optional[str] = None
    url: str
    sort_order: int = 0
    is_primary: bool = False


class BrandOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    slug: str
    logo_url: Optional[str] = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    slug: str
    parent_id: Optional[str] = None


class GenderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    label: str
    slug: str


class ProductOut(BaseModel):
    """
    Данные товара для страницы товара.

    Для простых товаров заполнены price/sale_price/sku/in_stock,
    для настраиваемых эти поля обычно пустые.
    """

    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: str
    product_type: str
    is_published: bool
    price: Optional[float] = None
    sale_price: Optional[float] = None
    sku: Optional[str] = None
    in_stock: Optional[int] = None
    weight: Optional[float] = None
    dimensions: Optional[dict] = None
    default_variant_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    brand: Optional[BrandOut] = None
    category: Optional[CategoryOut] = None
    gender: Optional[GenderOut] = None


class GalleryVariant(BaseModel):
    """Галерея изображений для одного цвета."""

    color: str
    images: List[str] = Field(default_factory=list)


class FullProduct(BaseModel):
    """Товар со всеми вариантами и изображениями."""

    product: ProductOut
    variants: List[VariantOut] = Field(default_factory=list)
    images: List[ImageOut] = Field(default_factory=list)


class ProductDetailOut(FullProduct):
    gallery: List[GalleryVariant] = Field(default_factory=list)


class ReviewOut(BaseModel):
    id: str
    author: str
    rating: int
    title: Optional[str] = None
    content: str
    created_at: datetime


class RecommendedProductOut(BaseModel):
    id: str
    title: str
    price: Optional[float] = None
    image_url: str


__all__ = [
    "BrandOut",
    "CategoryOut",
    "ColorOut",
    "FullProduct",
    "GalleryVariant",
    "GenderOut",
    "ImageOut",
    "ProductDetailOut",
    "ProductOut",
    "RecommendedProductOut",
    "ReviewOut",
    "SizeOut",
    "VariantOut",
]
