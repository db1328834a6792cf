"""
Сервис вариантов фильтров каталога.

Считает для каждого значения фильтра (пол, бренд, категория, цвет,
размер, ценовой диапазон) количество опубликованных товаров.
"""

from typing import Dict, List, Optional

from sqlalchemy import and_, distinct, func, select
from sqlalchemy.orm import Session

from storefront.db.models import (
    Brand,
    Category,
    Color,
    Gender,
    Product,
    ProductVariant,
    Size,
    SizeCategory,
)
from storefront.schemas.catalog import ProductFilters
from storefront.schemas.filters import FilterOption, FilterOptionsOut, PriceRangeOption, SizeGroup
from storefront.services.catalog_predicates import Published, TextSearch, reduce_predicates

GENERAL_SIZE_GROUP_ID = "general"
GENERAL_SIZE_GROUP_NAME = "General"

# Фиксированные ценовые диапазоны: (id, подпись, min, max)
PRICE_BUCKETS = (
    ("0-50", "$0 - $50", 0, 50),
    ("50-100", "$50 - $100", 50, 100),
    ("100-150", "$100 - $150", 100, 150),
    ("150-200", "$150 - $200", 150, 200),
    ("200-", "Over $200", 200, None),
)


def _base_where(filters: Optional[ProductFilters]):
    predicates = [Published()]
    if filters is not None and filters.search:
        predicates.append(TextSearch(filters.search))
    return reduce_predicates(predicates)


def _product_count():
    return func.count(distinct(Product.id)).label("product_count")


def _option(row_id, name, slug, count, hex_code=None) -> FilterOption:
    return FilterOption(
        id=row_id,
        name=name,
        slug=slug,
        count=int(count),
        disabled=int(count) == 0,
        hex_code=hex_code,
    )


def _size_groups(db: Session, where) -> List[SizeGroup]:
    stmt = (
        select(
            Size.id,
            Size.name,
            Size.slug,
            Size.sort_order,
            SizeCategory.id.label("category_id"),
            SizeCategory.name.label("category_name"),
            _product_count(),
        )
        .select_from(Product)
        .join(ProductVariant, ProductVariant.product_id == Product.id)
        .join(Size, Size.id == ProductVariant.size_id)
        .outerjoin(SizeCategory, SizeCategory.id == Size.category_id)
        .where(where)
        .group_by(Size.id, Size.name, Size.slug, Size.sort_order, SizeCategory.id, SizeCategory.name)
        .order_by(Size.sort_order, Size.name)
    )

    groups: Dict[str, SizeGroup] = {}
    for row in db.execute(stmt).all():
        group_id = row.category_id or GENERAL_SIZE_GROUP_ID
        if group_id not in groups:
            groups[group_id] = SizeGroup(
                category_id=group_id,
                category_name=row.category_name or GENERAL_SIZE_GROUP_NAME,
            )
        groups[group_id].sizes.append(_option(row.id, row.name, row.slug, row.product_count))
    return list(groups.values())


def _price_ranges(db: Session, where) -> List[PriceRangeOption]:
    span = db.execute(
        select(func.min(ProductVariant.price), func.max(ProductVariant.price))
        .select_from(Product)
        .join(ProductVariant, ProductVariant.product_id == Product.id)
        .where(where)
    ).first()
    min_price = float(span[0]) if span and span[0] is not None else 0.0
    max_price = float(span[1]) if span and span[1] is not None else 1000.0

    options: List[PriceRangeOption] = []
    for bucket_id, label, low, high in PRICE_BUCKETS:
        # Диапазоны, целиком лежащие вне наблюдаемых цен, не показываются
        if high is not None and low > max_price:
            continue
        if high is not None and low < min_price and high < min_price:
            continue

        conditions = [where, ProductVariant.price >= low]
        if high is not None:
            conditions.append(ProductVariant.price <= high)
        count = db.scalar(
            select(func.count(distinct(Product.id)))
            .select_from(Product)
            .join(ProductVariant, ProductVariant.product_id == Product.id)
            .where(and_(*conditions))
        )
        options.append(
            PriceRangeOption(id=bucket_id, label=label, min=low, max=high, count=int(count or 0))
        )
    return options


def get_filter_options(
    db: Session, filters: Optional[ProductFilters] = None
) -> FilterOptionsOut:
    """
    Получить варианты фильтров со счетчиками товаров.

    Учитывается только поисковый запрос из текущих фильтров, чтобы
    счетчики отражали контекст поиска, но не обнулялись выбором
    в соседних группах.

    Args:
        db: Сессия базы данных
        filters: Текущие фильтры каталога

    Returns:
        FilterOptionsOut: Варианты по всем группам фильтров
    """
    where = _base_where(filters)

    genders = db.execute(
        select(Gender.id, Gender.label, Gender.slug, _product_count())
        .select_from(Product)
        .join(Gender, Gender.id == Product.gender_id)
        .where(where)
        .group_by(Gender.id, Gender.label, Gender.slug)
        .order_by(Gender.label)
    ).all()

    brands = db.execute(
        select(Brand.id, Brand.name, Brand.slug, _product_count())
        .select_from(Product)
        .join(Brand, Brand.id == Product.brand_id)
        .where(where)
        .group_by(Brand.id, Brand.name, Brand.slug)
        .order_by(Brand.name)
    ).all()

    # Только корневые категории
    categories = db.execute(
        select(Category.id, Category.name, Category.slug, _product_count())
        .select_from(Product)
        .join(Category, Category.id == Product.category_id)
        .where(where, Category.parent_id.is_(None))
        .group_by(Category.id, Category.name, Category.slug)
        .order_by(Category.name)
    ).all()

    colors = db.execute(
        select(Color.id, Color.name, Color.slug, Color.hex_code, _product_count())
        .select_from(Product)
        .join(ProductVariant, ProductVariant.product_id == Product.id)
        .join(Color, Color.id == ProductVariant.color_id)
        .where(where)
        .group_by(Color.id, Color.name, Color.slug, Color.hex_code)
        .order_by(Color.name)
    ).all()

    return FilterOptionsOut(
        genders=[_option(g.id, g.label, g.slug, g.product_count) for g in genders],
        brands=[_option(b.id, b.name, b.slug, b.product_count) for b in brands],
        categories=[_option(c.id, c.name, c.slug, c.product_count) for c in categories],
        colors=[_option(c.id, c.name, c.slug, c.product_count, c.hex_code) for c in colors],
        sizes=_size_groups(db, where),
        price_ranges=_price_ranges(db, where),
    )
