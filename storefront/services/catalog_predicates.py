"""
Декларативные предикаты фильтрации каталога.

Фильтры каталога описываются списком типизированных объектов-предикатов,
которые затем сводятся в одно составное условие SQLAlchemy.
Разделяются два случая:
- фильтр не задан: предиката нет, ограничения нет;
- фильтр задан, но его slug'и не нашлись в словаре: NeverMatch,
  условие заведомо ложно и запрос возвращает ноль строк.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import and_, false, func, or_
from sqlalchemy.sql.elements import ColumnElement

from storefront.db.models import Brand, Category, Gender, Product, ProductVariant
from storefront.schemas.catalog import ProductFilters


class Predicate:
    """Базовый класс предиката."""

    def to_clause(self) -> ColumnElement:
        raise NotImplementedError


@dataclass(frozen=True)
class NeverMatch(Predicate):
    """Заведомо ложное условие (например, slug не найден в словаре)."""

    reason: str = ""

    def to_clause(self) -> ColumnElement:
        return false()


@dataclass(frozen=True)
class Published(Predicate):
    def to_clause(self) -> ColumnElement:
        return Product.is_published.is_(True)


@dataclass(frozen=True)
class TextSearch(Predicate):
    """Поиск подстроки в названии или описании без учета регистра."""

    term: str

    def to_clause(self) -> ColumnElement:
        pattern = f"%{self.term}%"
        return or_(Product.name.ilike(pattern), Product.description.ilike(pattern))


@dataclass(frozen=True)
class ValueIn(Predicate):
    """Значение колонки входит в список."""

    column: Any
    values: Tuple[Any, ...]

    def to_clause(self) -> ColumnElement:
        if not self.values:
            return false()
        return self.column.in_(self.values)


@dataclass(frozen=True)
class PriceBand(Predicate):
    """Эффективная цена варианта в границах [min, max] (любая граница опциональна)."""

    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None

    def to_clause(self) -> ColumnElement:
        price = effective_variant_price()
        bounds = []
        if self.min is not None:
            bounds.append(price >= self.min)
        if self.max is not None:
            bounds.append(price <= self.max)
        return and_(*bounds)


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Логическое ИЛИ над вложенными предикатами."""

    items: Tuple[Predicate, ...]

    def to_clause(self) -> ColumnElement:
        return or_(*(item.to_clause() for item in self.items))


def effective_variant_price() -> ColumnElement:
    """Эффективная цена варианта: цена со скидкой, если есть, иначе обычная."""
    return func.coalesce(ProductVariant.sale_price, ProductVariant.price)


def reduce_predicates(predicates: Sequence[Predicate]) -> Optional[ColumnElement]:
    """Свести список предикатов в одно условие через AND (None для пустого списка)."""
    if not predicates:
        return None
    clauses = [p.to_clause() for p in predicates]
    return clauses[0] if len(clauses) == 1 else and_(*clauses)


def build_product_predicates(filters: ProductFilters) -> List[Predicate]:
    """
    Предикаты уровня товара: публикация, поиск, пол, бренд, категория.

    Пол, бренд и категория сравниваются по slug присоединенного словаря,
    поэтому запрос должен присоединять таблицы genders, brands и categories.
    """
    predicates: List[Predicate] = [Published()]

    if filters.search:
        predicates.append(TextSearch(filters.search))
    if filters.gender_slugs:
        predicates.append(ValueIn(Gender.slug, tuple(filters.gender_slugs)))
    if filters.brand_slugs:
        predicates.append(ValueIn(Brand.slug, tuple(filters.brand_slugs)))
    if filters.category_slugs:
        predicates.append(ValueIn(Category.slug, tuple(filters.category_slugs)))

    return predicates


def build_price_predicate(filters: ProductFilters) -> Optional[Predicate]:
    """
    Ценовой предикат: любой из дискретных диапазонов ИЛИ пара min/max.

    Returns:
        None, если ценовые фильтры не заданы
    """
    bands: List[PriceBand] = []
    for low, high in filters.price_ranges or []:
        band = PriceBand(low, high)
        if not band.is_empty:
            bands.append(band)

    continuous = PriceBand(filters.price_min, filters.price_max)
    if not continuous.is_empty:
        bands.append(continuous)

    if not bands:
        return None
    return bands[0] if len(bands) == 1 else AnyOf(tuple(bands))


def build_variant_predicates(
    filters: ProductFilters,
    size_ids: Optional[Sequence[str]] = None,
    color_ids: Optional[Sequence[str]] = None,
) -> List[Predicate]:
    """
    Предикаты уровня варианта: размер, цвет, цена.

    Args:
        filters: Нормализованные фильтры
        size_ids: ID размеров, найденные по filters.size_slugs
        color_ids: ID цветов, найденные по filters.color_slugs

    Returns:
        List[Predicate]: Пустой список означает, что варианты не фильтруются
    """
    predicates: List[Predicate] = []

    if filters.size_slugs:
        if size_ids:
            predicates.append(ValueIn(ProductVariant.size_id, tuple(size_ids)))
        else:
            predicates.append(NeverMatch("unknown size slug"))

    if filters.color_slugs:
        if color_ids:
            predicates.append(ValueIn(ProductVariant.color_id, tuple(color_ids)))
        else:
            predicates.append(NeverMatch("unknown color slug"))

    price = build_price_predicate(filters)
    if price is not None:
        predicates.append(price)

    return predicates
