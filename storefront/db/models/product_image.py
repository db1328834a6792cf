"""
Модель изображения товара.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, new_uuid


class ProductImage(Base):
    """
    Модель изображения товара.

    Изображение принадлежит товару и, опционально, конкретному варианту.
    Для миниатюр каталога сначала берутся изображения без варианта,
    затем главные (is_primary), затем по sort_order.

    Attributes:
        id: Уникальный идентификатор изображения
        product_id: ID товара
        variant_id: ID варианта (None для изображений уровня товара)
        url: URL изображения
        sort_order: Порядок сортировки
        is_primary: Флаг главного изображения
    """

    __tablename__ = "product_images"

    __table_args__ = (
        Index("ix_product_images_product_id", "product_id"),
        Index("ix_product_images_variant_id", "variant_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("products.id", ondelete="CASCADE")
    )
    variant_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=True
    )
    url: Mapped[str] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)

    product: Mapped["Product"] = relationship(back_populates="images")
    variant: Mapped[Optional["ProductVariant"]] = relationship(back_populates="images")
