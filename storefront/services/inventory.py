"""
Проверки остатков и возможности добавления в корзину.

Точные остатки покупателю не показываются: наружу отдается
статус (в наличии / заканчивается / нет в наличии) и текст для UI.
"""

from dataclasses import dataclass
from typing import Any, Optional

from storefront.core.config import settings


@dataclass(frozen=True)
class InventoryStatus:
    status: str
    display_text: str
    can_order: bool


@dataclass(frozen=True)
class AddToCartCheck:
    can_add: bool
    max_quantity: int
    error: Optional[str] = None


def get_inventory_status(
    in_stock: int, low_stock_threshold: Optional[int] = None
) -> InventoryStatus:
    """Статус наличия для отображения покупателю."""
    threshold = settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
    if in_stock <= 0:
        return InventoryStatus("out_of_stock", "Out of Stock", False)
    if in_stock <= threshold:
        return InventoryStatus("low_stock", f"Only {in_stock} left in stock!", True)
    return InventoryStatus("in_stock", "In Stock", True)


def can_add_to_cart(
    requested_quantity: int, in_stock: int, current_cart_quantity: int = 0
) -> AddToCartCheck:
    """
    Проверить, можно ли добавить количество с учетом уже лежащего в корзине.

    Args:
        requested_quantity: Сколько хотят добавить
        in_stock: Остаток на складе
        current_cart_quantity: Сколько уже в корзине

    Returns:
        AddToCartCheck: Результат проверки и максимально допустимое количество
    """
    if in_stock <= 0:
        return AddToCartCheck(False, 0, "This item is out of stock")

    if requested_quantity + current_cart_quantity > in_stock:
        return AddToCartCheck(
            False,
            in_stock - current_cart_quantity,
            f"Only {in_stock} available. You already have {current_cart_quantity} in cart.",
        )

    return AddToCartCheck(True, in_stock)


def check_add_to_cart(
    item: Optional[Any], quantity: int, current_cart_quantity: int = 0
) -> AddToCartCheck:
    """
    Проверка перед добавлением выбранного варианта (или простого товара) в корзину.

    Отсутствие варианта означает незавершенный выбор: действие блокируется
    с сообщением для покупателя, исключение не выбрасывается.
    """
    if item is None:
        return AddToCartCheck(False, 0, "Please select a color and size")

    in_stock = item.in_stock or 0
    if in_stock <= 0:
        return AddToCartCheck(False, 0, "This variant is out of stock")
    if quantity > in_stock:
        return AddToCartCheck(False, in_stock, f"Only {in_stock} items available in stock")

    return can_add_to_cart(quantity, in_stock, current_cart_quantity)
