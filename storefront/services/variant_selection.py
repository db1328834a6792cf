"""
Сервис выбора варианта товара по цвету и размеру.

Хранит состояние выбора {selected_color_id, selected_size_id} над
фиксированным списком вариантов и вычисляет выбранный вариант,
доступные цвета и размеры. При смене одной оси автоматически
исправляет другую, если текущая пара не соответствует ни одному варианту.

Сервис не выполняет ввод-вывод и не зависит от UI: состояние передается
явно через конструктор, наружу отдается снимок (snapshot) и пара
мутаторов set_selected_color / set_selected_size.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple


def _color_id(variant: Any) -> Optional[str]:
    color = getattr(variant, "color", None)
    return color.id if color else None


def _size_id(variant: Any) -> Optional[str]:
    size = getattr(variant, "size", None)
    return size.id if size else None


def variant_matches(
    variant: Any, color_id: Optional[str], size_id: Optional[str]
) -> bool:
    """
    Проверить, подходит ли вариант под выбранные цвет и размер.

    Правило зависит от того, какие оси задает вариант:
    - ни одной: подходит под любой выбор;
    - только цвет: цвет выбран и совпадает;
    - только размер: размер выбран и совпадает;
    - обе: оба значения выбраны и совпадают.
    """
    has_color = variant.color is not None
    has_size = variant.size is not None

    if not has_color and not has_size:
        return True
    if has_color and not has_size:
        return bool(color_id) and variant.color.id == color_id
    if has_size and not has_color:
        return bool(size_id) and variant.size.id == size_id
    return (
        bool(color_id)
        and bool(size_id)
        and variant.color.id == color_id
        and variant.size.id == size_id
    )


def _is_compatible(variant: Any, color_id: str, size_id: str) -> bool:
    # Вариант без осей не считается подтверждением совместимости
    has_color = variant.color is not None
    has_size = variant.size is not None
    if has_color and has_size:
        return variant.color.id == color_id and variant.size.id == size_id
    if has_color:
        return variant.color.id == color_id
    if has_size:
        return variant.size.id == size_id
    return False


@dataclass(frozen=True)
class VariantSelectionState:
    """Неизменяемый снимок состояния выбора."""

    selected_color_id: Optional[str]
    selected_size_id: Optional[str]
    selected_variant: Optional[Any]
    available_colors: Tuple[Any, ...]
    available_sizes: Tuple[Any, ...]
    gallery_index: int


class VariantSelection:
    """
    Машина состояний выбора варианта.

    Args:
        variants: Варианты товара (объекты с атрибутами color и size,
            каждый из которых None или объект с id)
        default_color_id: Цвет по умолчанию
        default_size_id: Размер по умолчанию
        gallery_variants: Галереи по цветам (объекты с атрибутом color,
            названием цвета)
        on_gallery_change: Вызывается с новым индексом галереи только
            когда индекс действительно меняется
    """

    def __init__(
        self,
        variants: Sequence[Any],
        default_color_id: Optional[str] = None,
        default_size_id: Optional[str] = None,
        gallery_variants: Optional[Sequence[Any]] = None,
        on_gallery_change: Optional[Callable[[int], None]] = None,
    ):
        self._variants: List[Any] = list(variants)
        self._gallery_variants: List[Any] = list(gallery_variants or [])
        self._on_gallery_change = on_gallery_change
        self._last_gallery_index = -1

        self.available_colors: List[Any] = self._collect_colors()
        self.available_sizes: List[Any] = self._collect_sizes()

        first = self._variants[0] if self._variants else None
        self._color_id: Optional[str] = default_color_id or (
            _color_id(first) if first is not None else None
        )
        self._size_id: Optional[str] = default_size_id or (
            _size_id(first) if first is not None else None
        )

        self._sync_gallery()

    def _collect_colors(self) -> List[Any]:
        colors, seen = [], set()
        for variant in self._variants:
            color = variant.color
            if color is not None and color.id not in seen:
                seen.add(color.id)
                colors.append(color)
        return colors

    def _collect_sizes(self) -> List[Any]:
        sizes, seen = [], set()
        for variant in self._variants:
            size = variant.size
            if size is not None and size.id not in seen:
                seen.add(size.id)
                sizes.append(size)
        # sorted() стабилен: при равном sort_order сохраняется порядок вариантов
        return sorted(sizes, key=lambda s: getattr(s, "sort_order", None) or 0)

    @property
    def variants(self) -> List[Any]:
        return list(self._variants)

    @property
    def selected_color_id(self) -> Optional[str]:
        return self._color_id

    @property
    def selected_size_id(self) -> Optional[str]:
        return self._size_id

    @property
    def selected_variant(self) -> Optional[Any]:
        """
        Первый вариант, подходящий под текущий выбор, или None.

        Вариант только с цветом может совпасть, когда размер еще не выбран,
        поэтому наличие совпадения не означает полностью заданный выбор.
        """
        for variant in self._variants:
            if variant_matches(variant, self._color_id, self._size_id):
                return variant
        return None

    @property
    def gallery_index(self) -> int:
        """Индекс галереи, чье название цвета совпадает с выбранным цветом."""
        if not self._color_id:
            return 0
        color = next((c for c in self.available_colors if c.id == self._color_id), None)
        if color is None:
            return 0
        for index, gallery in enumerate(self._gallery_variants):
            if gallery.color == color.name:
                return index
        return 0

    def set_selected_color(self, color_id: Optional[str]) -> None:
        """
        Выбрать цвет.

        Если при новом цвете текущий размер не образует ни одного варианта,
        размер заменяется размером первого варианта нового цвета (или
        сбрасывается в None). Сброс цвета в None размер не трогает.
        """
        self._color_id = color_id

        if color_id and self._size_id:
            compatible = any(
                _is_compatible(v, color_id, self._size_id) for v in self._variants
            )
            if not compatible:
                replacement = next(
                    (
                        v.size
                        for v in self._variants
                        if _color_id(v) == color_id and v.size is not None
                    ),
                    None,
                )
                self._size_id = replacement.id if replacement is not None else None

        self._sync_gallery()

    def set_selected_size(self, size_id: Optional[str]) -> None:
        """Выбрать размер. Симметрично set_selected_color."""
        self._size_id = size_id

        if size_id and self._color_id:
            compatible = any(
                _is_compatible(v, self._color_id, size_id) for v in self._variants
            )
            if not compatible:
                replacement = next(
                    (
                        v.color
                        for v in self._variants
                        if _size_id(v) == size_id and v.color is not None
                    ),
                    None,
                )
                self._color_id = replacement.id if replacement is not None else None

        self._sync_gallery()

    def _sync_gallery(self) -> None:
        index = self.gallery_index
        if index == self._last_gallery_index:
            return
        self._last_gallery_index = index
        if self._on_gallery_change is not None:
            self._on_gallery_change(index)

    def snapshot(self) -> VariantSelectionState:
        return VariantSelectionState(
            selected_color_id=self._color_id,
            selected_size_id=self._size_id,
            selected_variant=self.selected_variant,
            available_colors=tuple(self.available_colors),
            available_sizes=tuple(self.available_sizes),
            gallery_index=self.gallery_index,
        )
