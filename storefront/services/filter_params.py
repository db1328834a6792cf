"""
Разбор параметров строки запроса каталога.

Принимает параметры в виде словаря {ключ: строка | список строк},
поддерживая как обычные ключи (brand=a&brand=b), так и скобочную
нотацию (brand[]=a&brand[]=b), и возвращает нормализованные ProductFilters.
"""

import math
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from storefront.core.config import settings
from storefront.schemas.catalog import SORT_KEYS, PriceRange, ProductFilters

ParamValue = Union[str, Sequence[str], None]


def _get_list(params: Mapping[str, ParamValue], key: str) -> List[str]:
    for candidate in (key, f"{key}[]"):
        value = params.get(candidate)
        if value is None:
            continue
        if isinstance(value, str):
            return [value]
        return [str(v) for v in value]
    return []


def _get_str(params: Mapping[str, ParamValue], key: str) -> Optional[str]:
    values = _get_list(params, key)
    if not values or not values[0]:
        return None
    return values[0]


def _to_number(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    # Только конечные числа: "inf", "nan" и "1e999" отбрасываются
    return number if math.isfinite(number) else None


def _slugs(params: Mapping[str, ParamValue], key: str) -> Optional[List[str]]:
    slugs = [s.strip().lower() for s in _get_list(params, key)]
    slugs = [s for s in slugs if s]
    return slugs or None


def parse_price_range(raw: str) -> PriceRange:
    """Разобрать диапазон вида "50-100", "200-" или "-50"."""
    low, _, high = str(raw).partition("-")
    return _to_number(low), _to_number(high)


def _positive_int(raw: Optional[str], default: int) -> int:
    # Пустое, нечисловое или нулевое значение заменяется значением по умолчанию
    number = _to_number(raw)
    if not number:
        return default
    return int(number)


def parse_filter_params(params: Mapping[str, ParamValue]) -> ProductFilters:
    """
    Построить ProductFilters из параметров строки запроса.

    Args:
        params: Параметры запроса: строка или список строк на ключ

    Returns:
        ProductFilters: Нормализованные фильтры (slug'и в нижнем регистре,
        page/limit ограничены допустимыми значениями)
    """
    search = (_get_str(params, "search") or "").strip() or None

    price_ranges: List[Tuple[Optional[float], Optional[float]]] = []
    for raw in _get_list(params, "price"):
        low, high = parse_price_range(raw)
        if low is not None or high is not None:
            price_ranges.append((low, high))

    sort = _get_str(params, "sort")

    return ProductFilters(
        search=search,
        gender_slugs=_slugs(params, "gender"),
        size_slugs=_slugs(params, "size"),
        color_slugs=_slugs(params, "color"),
        brand_slugs=_slugs(params, "brand"),
        category_slugs=_slugs(params, "category"),
        price_min=_to_number(_get_str(params, "priceMin")),
        price_max=_to_number(_get_str(params, "priceMax")),
        price_ranges=price_ranges or None,
        sort=sort if sort in SORT_KEYS else "newest",
        page=_positive_int(_get_str(params, "page"), 1),
        limit=_positive_int(_get_str(params, "limit"), settings.CATALOG_DEFAULT_LIMIT),
    )


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _format_price(value: float) -> str:
    return str(int(value)) if value.is_integer() else f"{value:.2f}"


def build_filter_badges(params: Mapping[str, ParamValue]) -> List[str]:
    """
    Подписи активных фильтров для отображения в виде "бейджей".

    Example:
        {"brand": ["nike"], "size": ["m"], "price": ["50-100"]}
        -> ["Nike", "Size: m", "$50 - $100"]
    """
    badges: List[str] = []
    for key in ("gender", "brand", "category"):
        badges.extend(_capitalize(v) for v in _get_list(params, key) if v)
    badges.extend(f"Size: {v}" for v in _get_list(params, "size") if v)
    badges.extend(_capitalize(v) for v in _get_list(params, "color") if v)

    for raw in _get_list(params, "price"):
        low, high = parse_price_range(raw)
        if low is not None and high is not None:
            badges.append(f"${_format_price(low)} - ${_format_price(high)}")
        elif low is not None:
            badges.append(f"Over ${_format_price(low)}")
        elif high is not None:
            badges.append(f"$0 - ${_format_price(high)}")
    return badges
