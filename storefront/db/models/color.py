"""
Модель цвета.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_uuid


class Color(Base):
    """
    Словарь цветов вариантов.

    Attributes:
        id: Уникальный идентификатор цвета
        name: Отображаемое название (по нему связывается галерея)
        slug: URL-friendly название цвета
        hex_code: HEX код для отрисовки образца
    """

    __tablename__ = "colors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hex_code: Mapped[str] = mapped_column(String(7), default="#000000")

    def __repr__(self) -> str:
        return f"<Color(id='{self.id}', slug='{self.slug}')>"
