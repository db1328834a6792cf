"""
Схемы вариантов фильтров каталога со счетчиками.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FilterOption(BaseModel):
    id: str
    name: str
    slug: str
    count: int
    disabled: bool = False
    hex_code: Optional[str] = None


class SizeGroup(BaseModel):
    """Размеры, сгруппированные по категории размеров."""

    category_id: str
    category_name: str
    sizes: List[FilterOption] = Field(default_factory=list)


class PriceRangeOption(BaseModel):
    id: str
    label: str
    min: float
    max: Optional[float] = None
    count: int = 0


class FilterOptionsOut(BaseModel):
    genders: List[FilterOption] = Field(default_factory=list)
    brands: List[FilterOption] = Field(default_factory=list)
    categories: List[FilterOption] = Field(default_factory=list)
    colors: List[FilterOption] = Field(default_factory=list)
    sizes: List[SizeGroup] = Field(default_factory=list)
    price_ranges: List[PriceRangeOption] = Field(default_factory=list)
