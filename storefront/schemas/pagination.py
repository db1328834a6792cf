"""
Схемы для пагинации.
"""

from typing import List, Union

from pydantic import BaseModel

PageItem = Union[int, str]
ELLIPSIS = "ellipsis"


class PageMeta(BaseModel):
    """
    Метаданные пагинации.

    Attributes:
        page: Номер текущей страницы (ограничен диапазоном 1..total_pages)
        page_size: Размер страницы
        total: Общее количество записей
        total_pages: Общее количество страниц
        has_next_page: Есть ли следующая страница
        has_previous_page: Есть ли предыдущая страница
        start_index: Номер первой записи на странице (с 1)
        end_index: Номер последней записи на странице
    """

    page: int
    page_size: int
    total: int
    total_pages: int
    has_next_page: bool = False
    has_previous_page: bool = False
    start_index: int = 0
    end_index: int = 0

    @classmethod
    def create(cls, page: int, page_size: int, total: int) -> "PageMeta":
        """
        Создает экземпляр PageMeta с автоматическим расчетом total_pages.

        Args:
            page: Номер запрошенной страницы
            page_size: Размер страницы
            total: Общее количество записей

        Returns:
            PageMeta: Экземпляр с рассчитанными метаданными
        """
        total_pages = max(1, (total + page_size - 1) // page_size) if total > 0 else 1
        current = min(max(1, page), total_pages)
        return cls(
            page=current,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next_page=current < total_pages,
            has_previous_page=current > 1,
            start_index=min((current - 1) * page_size + 1, total),
            end_index=min(current * page_size, total),
        )


def pagination_range(
    current_page: int, total_pages: int, sibling_count: int = 1
) -> List[PageItem]:
    """
    Построить список номеров страниц с многоточиями для навигации.

    Example:
        pagination_range(5, 10) -> [1, "ellipsis", 4, 5, 6, "ellipsis", 10]
        pagination_range(1, 5)  -> [1, 2, 3, 4, 5]
    """
    # Края + текущая + соседи + два многоточия
    displayable = sibling_count * 2 + 5
    if total_pages <= displayable:
        return list(range(1, total_pages + 1))

    left_sibling = max(current_page - sibling_count, 1)
    right_sibling = min(current_page + sibling_count, total_pages)

    show_left = left_sibling > 2
    show_right = right_sibling < total_pages - 1

    if not show_left and show_right:
        left_count = 3 + 2 * sibling_count
        return [*range(1, left_count + 1), ELLIPSIS, total_pages]

    if show_left and not show_right:
        right_count = 3 + 2 * sibling_count
        return [1, ELLIPSIS, *range(total_pages - right_count + 1, total_pages + 1)]

    return [1, ELLIPSIS, *range(left_sibling, right_sibling + 1), ELLIPSIS, total_pages]
