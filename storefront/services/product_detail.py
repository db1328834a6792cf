"""
Сервис карточки товара: товар с вариантами, отзывы, рекомендации, галереи.
"""

import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import and_, asc, case, desc, func, literal, select
from sqlalchemy.orm import Session, selectinload

from storefront.core.config import settings
from storefront.db.models import (
    PRODUCT_TYPE_CONFIGURABLE,
    PRODUCT_TYPE_SIMPLE,
    Product,
    ProductImage,
    ProductVariant,
    Review,
    User,
)
from storefront.schemas.product import (
    FullProduct,
    GalleryVariant,
    ImageOut,
    ProductOut,
    RecommendedProductOut,
    ReviewOut,
)
from storefront.schemas.variant import VariantOut

logger = logging.getLogger(__name__)

DEFAULT_GALLERY = "Default"
REVIEWS_LIMIT = 10
RECOMMENDATION_CANDIDATES = 8


def get_product(db: Session, product_id: str) -> Optional[FullProduct]:
    """
    Получить товар со словарями, вариантами и изображениями.

    Варианты возвращаются только для настраиваемых товаров и
    сортируются по артикулу.

    Args:
        db: Сессия базы данных
        product_id: ID товара

    Returns:
        Optional[FullProduct]: Данные товара или None, если товар не найден
    """
    stmt = (
        select(Product)
        .where(Product.id == product_id)
        .options(
            selectinload(Product.brand),
            selectinload(Product.category),
            selectinload(Product.gender),
            selectinload(Product.variants).selectinload(ProductVariant.color),
            selectinload(Product.variants).selectinload(ProductVariant.size),
            selectinload(Product.images),
        )
    )
    product = db.scalar(stmt)
    if product is None:
        logger.info(f"Product {product_id} not found")
        return None

    variants: List[VariantOut] = []
    if product.product_type == PRODUCT_TYPE_CONFIGURABLE:
        variants = [
            VariantOut.model_validate(v)
            for v in sorted(product.variants, key=lambda v: v.sku)
        ]

    images = sorted(product.images, key=lambda img: (img.sort_order, not img.is_primary))

    return FullProduct(
        product=ProductOut.model_validate(product),
        variants=variants,
        images=[ImageOut.model_validate(img) for img in images],
    )


def _image_rank(image) -> tuple:
    return (not image.is_primary, image.sort_order or 0)


def build_gallery_variants(
    product: ProductOut, variants: Sequence[VariantOut], images: Sequence[ImageOut]
) -> List[GalleryVariant]:
    """
    Построить галереи изображений по цветам.

    Для настраиваемого товара варианты группируются по названию цвета
    (без цвета: "Default"); в каждую галерею сначала попадают изображения
    уровня товара, затем изображения вариантов этого цвета, без дублей.
    Пустые галереи отбрасываются. Для простого товара возвращается одна галерея
    "Default" со всеми изображениями.
    """
    if product.product_type == PRODUCT_TYPE_CONFIGURABLE and variants:
        groups: Dict[str, List[str]] = {}
        for variant in variants:
            key = variant.color.name if variant.color else DEFAULT_GALLERY
            groups.setdefault(key, []).append(variant.id)

        product_level = [
            img.url for img in sorted(images, key=_image_rank) if img.variant_id is None and img.url
        ]

        galleries: List[GalleryVariant] = []
        for color_name, variant_ids in groups.items():
            variant_images = [
                img.url
                for img in sorted(images, key=_image_rank)
                if img.variant_id in variant_ids
            ]
            merged = list(dict.fromkeys(product_level + variant_images))
            if merged:
                galleries.append(GalleryVariant(color=color_name, images=merged))
        return galleries

    if product.product_type == PRODUCT_TYPE_SIMPLE:
        urls = [img.url for img in sorted(images, key=_image_rank)]
        if urls:
            return [GalleryVariant(color=DEFAULT_GALLERY, images=urls)]

    return []


def get_product_reviews(db: Session, product_id: str) -> List[ReviewOut]:
    """Последние отзывы о товаре (не более 10)."""
    stmt = (
        select(Review, User.name, User.email)
        .join(User, User.id == Review.user_id)
        .where(Review.product_id == product_id)
        .order_by(desc(Review.created_at))
        .limit(REVIEWS_LIMIT)
    )
    reviews: List[ReviewOut] = []
    for review, author_name, author_email in db.execute(stmt).all():
        reviews.append(
            ReviewOut(
                id=review.id,
                author=(author_name or "").strip() or author_email or "Anonymous",
                rating=review.rating,
                content=review.comment or "",
                created_at=review.created_at,
            )
        )
    return reviews


def get_recommended_products(db: Session, product_id: str) -> List[RecommendedProductOut]:
    """
    Похожие товары: совпадение категории (x3), бренда (x2) и пола (x1).

    Кандидаты без изображения пропускаются.
    """
    base = db.execute(
        select(Product.category_id, Product.brand_id, Product.gender_id).where(
            Product.id == product_id
        )
    ).first()
    if base is None:
        return []

    def _same(column, value):
        if value is None:
            return literal(0)
        return case((and_(column.is_not(None), column == value), 1), else_=0)

    priority = (
        _same(Product.category_id, base.category_id) * 3
        + _same(Product.brand_id, base.brand_id) * 2
        + _same(Product.gender_id, base.gender_id)
    )

    v = select(
        ProductVariant.product_id.label("product_id"),
        ProductVariant.price.label("price"),
    ).subquery("v")
    rn = func.row_number().over(
        partition_by=ProductImage.product_id,
        order_by=(desc(ProductImage.is_primary), asc(ProductImage.sort_order)),
    )
    pi = select(
        ProductImage.product_id.label("product_id"),
        ProductImage.url.label("url"),
        rn.label("rn"),
    ).subquery("pi")

    stmt = (
        select(
            Product.id,
            Product.name,
            func.coalesce(func.min(v.c.price), Product.price).label("min_price"),
            func.max(case((pi.c.rn == 1, pi.c.url), else_=None)).label("image_url"),
        )
        .outerjoin(v, v.c.product_id == Product.id)
        .outerjoin(pi, pi.c.product_id == Product.id)
        .where(Product.is_published.is_(True), Product.id != product_id)
        .group_by(Product.id, Product.name, Product.price, Product.created_at)
        .order_by(desc(priority), desc(Product.created_at), asc(Product.id))
        .limit(RECOMMENDATION_CANDIDATES)
    )

    result: List[RecommendedProductOut] = []
    for row in db.execute(stmt).all():
        image = (row.image_url or "").strip()
        if not image:
            continue
        result.append(
            RecommendedProductOut(
                id=row.id,
                title=row.name,
                price=None if row.min_price is None else float(row.min_price),
                image_url=image,
            )
        )
        if len(result) >= settings.RECOMMENDATIONS_LIMIT:
            break
    return result
