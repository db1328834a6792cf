"""
Модель пола (мужское / женское / унисекс).
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_uuid


class Gender(Base):
    """Словарь полов для фильтрации каталога."""

    __tablename__ = "genders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    label: Mapped[str] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
