"""
Модель товара.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_uuid, utcnow

PRODUCT_TYPE_SIMPLE = "simple"
PRODUCT_TYPE_CONFIGURABLE = "configurable"


class Product(Base):
    """
    Модель товара.

    Простой товар (simple) хранит цену, артикул и остаток в самой записи.
    Настраиваемый товар (configurable) не имеет собственной цены:
    цены и остатки живут в вариантах.

    Attributes:
        id: Уникальный идентификатор товара
        name: Название товара
        description: Описание товара
        category_id / gender_id / brand_id: Ссылки на словари фильтров
        is_published: Опубликован ли товар в каталоге
        product_type: simple / configurable
        price / sale_price: Цены простого товара
        sku / in_stock / weight / dimensions: Данные простого товара
        default_variant_id: Вариант, выбираемый по умолчанию
        variants: Связь с вариантами товара
        images: Связь с изображениями товара
        reviews: Связь с отзывами
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text, default="")
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL"), index=True, nullable=True
    )
    gender_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("genders.id", ondelete="SET NULL"), index=True, nullable=True
    )
    brand_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("brands.id", ondelete="SET NULL"), index=True, nullable=True
    )
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    product_type: Mapped[str] = mapped_column(String(32), default=PRODUCT_TYPE_SIMPLE)

    # Поля простого товара
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    sale_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    sku: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    in_stock: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    dimensions: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    default_variant_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    # Временные метки
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    # Связи с другими моделями
    category: Mapped[Optional["Category"]] = relationship(back_populates="products")
    brand: Mapped[Optional["Brand"]] = relationship(back_populates="products")
    gender: Mapped[Optional["Gender"]] = relationship()
    variants: Mapped[List["ProductVariant"]] = relationship(
        back_populates="product", cascade="all,delete"
    )
    images: Mapped[List["ProductImage"]] = relationship(
        back_populates="product", cascade="all,delete"
    )
    reviews: Mapped[List["Review"]] = relationship(
        back_populates="product", cascade="all,delete"
    )

    @property
    def is_configurable(self) -> bool:
        return self.product_type == PRODUCT_TYPE_CONFIGURABLE

    def __repr__(self) -> str:
        return f"<Product(id='{self.id}', name='{self.name}')>"
