"""
Модели базы данных.

Импортирует все модели для корректной работы SQLAlchemy.
"""

from .base import Base
from .brand import Brand
from .category import Category
from .color import Color
from .gender import Gender
from .product import PRODUCT_TYPE_CONFIGURABLE, PRODUCT_TYPE_SIMPLE, Product
from .product_image import ProductImage
from .review import Review
from .size import Size, SizeCategory
from .user import User
from .variant import ProductVariant

__all__ = [
    "Base",
    "Brand",
    "Category",
    "Color",
    "Gender",
    "Product",
    "ProductVariant",
    "ProductImage",
    "Review",
    "Size",
    "SizeCategory",
    "User",
    "PRODUCT_TYPE_SIMPLE",
    "PRODUCT_TYPE_CONFIGURABLE",
]
