"""
Схемы каталога: нормализованные фильтры и краткие карточки товаров.
"""

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.core.config import settings

SortKey = Literal["featured", "newest", "price_asc", "price_desc"]
SORT_KEYS = ("featured", "newest", "price_asc", "price_desc")

PriceRange = Tuple[Optional[float], Optional[float]]


class ProductFilters(BaseModel):
    """
    Нормализованный набор фильтров каталога.

    Некорректные page/limit/sort не вызывают ошибку, а приводятся
    к допустимым значениям: page >= 1, 1 <= limit <= CATALOG_MAX_LIMIT,
    неизвестная сортировка превращается в "newest".

    Attributes:
        search: Подстрока для поиска по названию и описанию
        gender_slugs / brand_slugs / category_slugs: Фильтры по словарям товара
        size_slugs / color_slugs: Фильтры по атрибутам вариантов
        price_min / price_max: Непрерывный диапазон эффективной цены
        price_ranges: Дискретные диапазоны цен (объединяются через ИЛИ)
        sort: Ключ сортировки
        page: Номер страницы (начиная с 1)
        limit: Размер страницы
    """

    search: Optional[str] = None
    gender_slugs: Optional[List[str]] = None
    brand_slugs: Optional[List[str]] = None
    category_slugs: Optional[List[str]] = None
    size_slugs: Optional[List[str]] = None
    color_slugs: Optional[List[str]] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    price_ranges: Optional[List[PriceRange]] = None
    sort: SortKey = "newest"
    page: int = 1
    limit: int = Field(default_factory=lambda: settings.CATALOG_DEFAULT_LIMIT)

    @field_validator("sort", mode="before")
    @classmethod
    def _normalize_sort(cls, value):
        return value if value in SORT_KEYS else "newest"

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, value):
        try:
            page = int(value)
        except (TypeError, ValueError, OverflowError):
            return 1
        return max(1, page)

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value):
        try:
            limit = int(value)
        except (TypeError, ValueError, OverflowError):
            return settings.CATALOG_DEFAULT_LIMIT
        return max(1, min(limit, settings.CATALOG_MAX_LIMIT))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class ProductSummary(BaseModel):
    """Краткая карточка товара для сетки каталога."""

    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    image_url: Optional[str] = None
    hover_image_url: Optional[str] = None
    price: Optional[float] = None
    sale_price: Optional[float] = None
    discount_percentage: Optional[int] = None
    created_at: datetime
    average_rating: Optional[float] = None
    review_count: int = 0


class ProductListResult(BaseModel):
    """Страница каталога и общее количество найденных товаров."""

    products: List[ProductSummary] = Field(default_factory=list)
    total_count: int = 0
