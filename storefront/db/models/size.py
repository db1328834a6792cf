"""
Модели размеров и категорий размеров.
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_uuid


class SizeCategory(Base):
    """Группа размеров (например, "Обувь" или "Одежда")."""

    __tablename__ = "size_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(Text)

    sizes: Mapped[List["Size"]] = relationship(back_populates="category")


class Size(Base):
    """
    Словарь размеров.

    Attributes:
        id: Уникальный идентификатор размера
        name: Отображаемое название
        slug: URL-friendly название размера
        sort_order: Порядок отображения
        category_id: ID категории размеров
    """

    __tablename__ = "sizes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("size_categories.id", ondelete="SET NULL"), nullable=True
    )

    category: Mapped[Optional["SizeCategory"]] = relationship(back_populates="sizes")

    def __repr__(self) -> str:
        return f"<Size(id='{self.id}', slug='{self.slug}')>"
