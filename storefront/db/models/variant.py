"""
Модель варианта товара.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_uuid, utcnow


class ProductVariant(Base):
    """
    Вариант товара: конкретная комбинация цвета и/или размера.

    Вариант может задавать только цвет, только размер, оба атрибута
    или ни одного (такой вариант подходит под любой выбор).

    Attributes:
        id: Уникальный идентификатор варианта
        product_id: ID товара
        sku: Артикул (уникален глобально)
        price: Цена
        sale_price: Цена со скидкой (строго меньше price)
        color_id: ID цвета (опционально)
        size_id: ID размера (опционально)
        in_stock: Остаток на складе
        weight / dimensions: Габариты
    """

    __tablename__ = "product_variants"

    __table_args__ = (
        CheckConstraint("in_stock >= 0", name="ck_product_variants_in_stock"),
        CheckConstraint(
            "sale_price IS NULL OR sale_price < price",
            name="ck_product_variants_sale_price",
        ),
        Index("ix_product_variants_product_id", "product_id"),
        Index("ix_product_variants_color_id", "color_id"),
        Index("ix_product_variants_size_id", "size_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("products.id", ondelete="CASCADE")
    )
    sku: Mapped[str] = mapped_column(String(100), unique=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    sale_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    color_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("colors.id", ondelete="RESTRICT"), nullable=True
    )
    size_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("sizes.id", ondelete="RESTRICT"), nullable=True
    )
    in_stock: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    dimensions: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    product: Mapped["Product"] = relationship(back_populates="variants")
    color: Mapped[Optional["Color"]] = relationship()
    size: Mapped[Optional["Size"]] = relationship()
    images: Mapped[List["ProductImage"]] = relationship(back_populates="variant")

    def __repr__(self) -> str:
        return f"<ProductVariant(id='{self.id}', sku='{self.sku}')>"
