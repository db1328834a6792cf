"""
Модель бренда.
"""

from typing import List, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_uuid


class Brand(Base):
    """
    Модель бренда.

    Attributes:
        id: Уникальный идентификатор бренда
        name: Название бренда
        slug: URL-friendly название бренда (используется в фильтрах)
        logo_url: URL логотипа
        products: Связь с товарами бренда
    """

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    products: Mapped[List["Product"]] = relationship(back_populates="brand")

    def __repr__(self) -> str:
        return f"<Brand(id='{self.id}', slug='{self.slug}')>"
