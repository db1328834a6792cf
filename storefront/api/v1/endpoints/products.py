"""
API endpoints для работы с товарами.

Содержит список каталога с фильтрацией, сортировкой и пагинацией,
карточку товара, отзывы, рекомендации и выбор варианта.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.db.models import PRODUCT_TYPE_CONFIGURABLE
from storefront.schemas.pagination import PageMeta, pagination_range
from storefront.schemas.product import ProductDetailOut, RecommendedProductOut, ReviewOut
from storefront.schemas.selection import (
    CartCheckOut,
    CartCheckRequest,
    InventoryStatusOut,
    SelectionOut,
    SelectionRequest,
)
from storefront.schemas.variant import ColorOut, SizeOut, VariantOut
from storefront.services.catalog_query import get_products
from storefront.services.filter_params import build_filter_badges, parse_filter_params
from storefront.services.inventory import check_add_to_cart, get_inventory_status
from storefront.services.product_detail import (
    build_gallery_variants,
    get_product,
    get_product_reviews,
    get_recommended_products,
)
from storefront.services.variant_selection import VariantSelection

logger = logging.getLogger(__name__)

router = APIRouter()


def query_params_to_dict(request: Request) -> Dict[str, List[str]]:
    """Преобразовать параметры запроса в {ключ: список значений}."""
    params = request.query_params
    return {key: params.getlist(key) for key in params.keys()}


def _load_product(db: Session, product_id: str):
    try:
        data = get_product(db, product_id)
    except SQLAlchemyError:
        logger.exception(f"Failed to load product {product_id}")
        raise HTTPException(500, detail="Failed to load product")
    if data is None:
        raise HTTPException(404, detail="Product not found")
    return data


@router.get("", response_model=dict)
def list_products(request: Request, db: Session = Depends(get_db)):
    """
    Получить страницу каталога с фильтрацией, сортировкой и пагинацией.

    Поддерживаемые параметры (массивы передаются повтором ключа или как key[]):
    - search: Поиск по названию и описанию
    - gender, brand, category, size, color: Фильтры по slug'ам
    - price: Диапазоны цен вида "50-100", "200-"
    - priceMin, priceMax: Непрерывный диапазон цен
    - sort: newest / featured / price_asc / price_desc
    - page, limit: Пагинация (limit 1-60, по умолчанию 24)

    Returns:
        dict: Карточки товаров, метаданные пагинации и подписи активных фильтров

    Raises:
        HTTPException: 500, если не удалось загрузить товары
    """
    params = query_params_to_dict(request)
    filters = parse_filter_params(params)

    try:
        result = get_products(db, filters)
    except SQLAlchemyError:
        logger.exception("Failed to load products")
        raise HTTPException(500, detail="Failed to load products")

    meta = PageMeta.create(page=filters.page, page_size=filters.limit, total=result.total_count)

    return {
        "items": [p.model_dump() for p in result.products],
        "meta": meta.model_dump(),
        "pages": pagination_range(meta.page, meta.total_pages),
        "badges": build_filter_badges(params),
    }


@router.get("/{product_id}", response_model=ProductDetailOut)
def get_product_detail(product_id: str, db: Session = Depends(get_db)):
    """
    Получить товар по ID вместе с вариантами, изображениями и галереями.

    Raises:
        HTTPException: Если товар не найден
    """
    data = _load_product(db, product_id)
    gallery = build_gallery_variants(data.product, data.variants, data.images)
    return ProductDetailOut(**data.model_dump(), gallery=gallery)


@router.get("/{product_id}/reviews", response_model=List[ReviewOut])
def list_product_reviews(product_id: str, db: Session = Depends(get_db)):
    """Последние отзывы о товаре."""
    return get_product_reviews(db, product_id)


@router.get("/{product_id}/recommended", response_model=List[RecommendedProductOut])
def list_recommended_products(product_id: str, db: Session = Depends(get_db)):
    """Похожие товары для блока "Вам может понравиться"."""
    return get_recommended_products(db, product_id)


@router.post("/{product_id}/selection", response_model=SelectionOut)
def resolve_selection(
    product_id: str, payload: SelectionRequest, db: Session = Depends(get_db)
):
    """
    Применить выбор цвета/размера и вернуть состояние выбора варианта.

    Пустые color_id/size_id заменяются значениями первого варианта.
    Если указаны axis и value, выбор по этой оси меняется с автоматическим
    исправлением другой оси.

    Returns:
        SelectionOut: Выбранный вариант (или None), доступные цвета/размеры,
        индекс галереи и статус наличия выбранного варианта
    """
    data = _load_product(db, product_id)
    gallery = build_gallery_variants(data.product, data.variants, data.images)

    selection = VariantSelection(
        data.variants,
        default_color_id=payload.color_id,
        default_size_id=payload.size_id,
        gallery_variants=gallery,
    )
    if payload.axis == "color":
        selection.set_selected_color(payload.value)
    elif payload.axis == "size":
        selection.set_selected_size(payload.value)

    state = selection.snapshot()
    variant = state.selected_variant
    inventory = None
    if variant is not None:
        status = get_inventory_status(variant.in_stock)
        inventory = InventoryStatusOut(
            status=status.status, display_text=status.display_text, can_order=status.can_order
        )

    return SelectionOut(
        selected_color_id=state.selected_color_id,
        selected_size_id=state.selected_size_id,
        selected_variant=variant,
        available_colors=[ColorOut.model_validate(c) for c in state.available_colors],
        available_sizes=[SizeOut.model_validate(s) for s in state.available_sizes],
        gallery_index=state.gallery_index,
        inventory=inventory,
    )


@router.post("/{product_id}/cart-check", response_model=CartCheckOut)
def check_cart(product_id: str, payload: CartCheckRequest, db: Session = Depends(get_db)):
    """
    Проверить возможность добавить товар в корзину.

    Для настраиваемого товара вариант определяется по выбору цвета/размера;
    незавершенный выбор блокирует добавление с сообщением для покупателя.
    """
    data = _load_product(db, product_id)

    item: Any
    if data.product.product_type == PRODUCT_TYPE_CONFIGURABLE:
        selection = VariantSelection(
            data.variants, default_color_id=payload.color_id, default_size_id=payload.size_id
        )
        item = selection.selected_variant
    else:
        item = data.product

    check = check_add_to_cart(item, payload.quantity, payload.cart_quantity)
    return CartCheckOut(
        can_add=check.can_add,
        max_quantity=check.max_quantity,
        error=check.error,
        variant_id=item.id if isinstance(item, VariantOut) else None,
        sku=getattr(item, "sku", None),
        price=getattr(item, "price", None),
        sale_price=getattr(item, "sale_price", None),
    )
