"""
Построитель запроса каталога.

Превращает нормализованные фильтры в один агрегирующий запрос
(товары + варианты + изображения + отзывы), возвращающий страницу
кратких карточек, и параллельный запрос общего количества
с теми же JOIN'ами и условиями.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import Float, Select, asc, case, cast, desc, distinct, func, select
from sqlalchemy.orm import Session

from storefront.db.models import (
    Brand,
    Category,
    Color,
    Gender,
    Product,
    ProductImage,
    ProductVariant,
    Review,
    Size,
)
from storefront.schemas.catalog import ProductFilters, ProductListResult, ProductSummary
from storefront.services.catalog_predicates import (
    build_product_predicates,
    build_variant_predicates,
    reduce_predicates,
)

logger = logging.getLogger(__name__)


def resolve_slug_ids(db: Session, model, slugs: Optional[Sequence[str]]) -> List[str]:
    """
    Найти ID записей словаря (Size, Color, ...) по списку slug'ов.

    Returns:
        List[str]: Найденные ID (пустой список, если slug'и не заданы или не найдены)
    """
    if not slugs:
        return []
    return list(db.scalars(select(model.id).where(model.slug.in_(list(slugs)))).all())


def _variants_subquery(variant_where):
    stmt = select(
        ProductVariant.id.label("variant_id"),
        ProductVariant.product_id.label("product_id"),
        ProductVariant.price.label("price"),
        ProductVariant.sale_price.label("sale_price"),
        ProductVariant.color_id.label("color_id"),
        ProductVariant.size_id.label("size_id"),
    )
    if variant_where is not None:
        stmt = stmt.where(variant_where)
    return stmt.subquery("v")


def _images_subquery():
    # Сначала изображения уровня товара, затем главные, затем по sort_order
    rn = func.row_number().over(
        partition_by=ProductImage.product_id,
        order_by=(
            asc(case((ProductImage.variant_id.is_(None), 0), else_=1)),
            desc(ProductImage.is_primary),
            asc(ProductImage.sort_order),
        ),
    )
    return select(
        ProductImage.product_id.label("product_id"),
        ProductImage.url.label("url"),
        rn.label("rn"),
    ).subquery("pi")


def _reviews_subquery():
    return (
        select(
            Review.product_id.label("product_id"),
            func.avg(Review.rating).label("avg_rating"),
            func.count(Review.id).label("review_count"),
        )
        .group_by(Review.product_id)
        .subquery("r")
    )


def _join_filters(stmt: Select, variants, inner: bool) -> Select:
    """Присоединить варианты и словари, по slug'ам которых идет фильтрация."""
    stmt = stmt.join(variants, variants.c.product_id == Product.id, isouter=not inner)
    return (
        stmt.outerjoin(Gender, Gender.id == Product.gender_id)
        .outerjoin(Brand, Brand.id == Product.brand_id)
        .outerjoin(Category, Category.id == Product.category_id)
    )


def build_catalog_queries(
    filters: ProductFilters,
    size_ids: Optional[Sequence[str]] = None,
    color_ids: Optional[Sequence[str]] = None,
):
    """
    Построить основной запрос страницы и запрос общего количества.

    Args:
        filters: Нормализованные фильтры
        size_ids / color_ids: ID, найденные по slug'ам размеров и цветов

    Returns:
        tuple: (запрос страницы, запрос количества)
    """
    base_where = reduce_predicates(build_product_predicates(filters))
    variant_predicates = build_variant_predicates(filters, size_ids, color_ids)
    needs_variant_filter = bool(variant_predicates)

    v = _variants_subquery(reduce_predicates(variant_predicates))
    pi = _images_subquery()
    r = _reviews_subquery()

    price = func.coalesce(v.c.price, Product.price)
    sale_price = func.coalesce(v.c.sale_price, Product.sale_price)

    min_price = func.min(price)
    min_sale_price = func.min(sale_price)
    max_discount = func.max(
        case(
            (
                sale_price.is_not(None) & (price > 0),
                func.round((1 - cast(sale_price, Float) / cast(price, Float)) * 100),
            ),
            else_=None,
        )
    )
    image_url = func.max(case((pi.c.rn == 1, pi.c.url), else_=None))
    hover_image_url = func.max(case((pi.c.rn == 2, pi.c.url), else_=None))
    effective_price = func.min(func.coalesce(sale_price, price))

    if filters.sort == "price_asc":
        primary_order = asc(effective_price).nulls_last()
    elif filters.sort == "price_desc":
        primary_order = desc(effective_price).nulls_last()
    else:
        primary_order = desc(Product.created_at)

    stmt = select(
        Product.id.label("id"),
        Product.name.label("name"),
        Product.created_at.label("created_at"),
        min_price.label("price"),
        min_sale_price.label("sale_price"),
        max_discount.label("discount_percentage"),
        image_url.label("image_url"),
        hover_image_url.label("hover_image_url"),
        r.c.avg_rating.label("average_rating"),
        func.coalesce(r.c.review_count, 0).label("review_count"),
    ).select_from(Product)
    stmt = _join_filters(stmt, v, needs_variant_filter)
    stmt = stmt.outerjoin(pi, pi.c.product_id == Product.id).outerjoin(
        r, r.c.product_id == Product.id
    )
    if base_where is not None:
        stmt = stmt.where(base_where)
    stmt = (
        stmt.group_by(
            Product.id, Product.name, Product.created_at, r.c.avg_rating, r.c.review_count
        )
        .order_by(primary_order, desc(Product.created_at), asc(Product.id))
        .offset(filters.offset)
        .limit(filters.limit)
    )

    count_stmt = select(func.count(distinct(Product.id))).select_from(Product)
    count_stmt = _join_filters(count_stmt, v, needs_variant_filter)
    if base_where is not None:
        count_stmt = count_stmt.where(base_where)

    return stmt, count_stmt


def _to_summary(row) -> ProductSummary:
    return ProductSummary(
        id=row.id,
        name=row.name,
        image_url=row.image_url,
        hover_image_url=row.hover_image_url,
        price=None if row.price is None else float(row.price),
        sale_price=None if row.sale_price is None else float(row.sale_price),
        discount_percentage=(
            None if row.discount_percentage is None else int(round(float(row.discount_percentage)))
        ),
        created_at=row.created_at,
        average_rating=float(row.average_rating) if row.average_rating else None,
        review_count=int(row.review_count or 0),
    )


def get_products(db: Session, filters: ProductFilters) -> ProductListResult:
    """
    Получить страницу каталога по фильтрам.

    Размеры и цвета сначала разрешаются из slug'ов в ID: если slug'и заданы,
    но ни один не найден, фильтр не игнорируется, а дает пустой результат.

    Args:
        db: Сессия базы данных
        filters: Нормализованные фильтры

    Returns:
        ProductListResult: Карточки товаров и общее количество

    Raises:
        SQLAlchemyError: Ошибки базы данных пробрасываются вызывающему коду
    """
    size_ids = resolve_slug_ids(db, Size, filters.size_slugs)
    color_ids = resolve_slug_ids(db, Color, filters.color_slugs)

    stmt, count_stmt = build_catalog_queries(filters, size_ids, color_ids)

    rows = db.execute(stmt).all()
    total = db.scalar(count_stmt) or 0

    products = [_to_summary(row) for row in rows]
    logger.debug(
        f"Catalog query page={filters.page} limit={filters.limit}: "
        f"{len(products)} products, total={total}"
    )
    return ProductListResult(products=products, total_count=int(total))
