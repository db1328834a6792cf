#!/usr/bin/env python3
"""
Заполнение базы демонстрационным каталогом.

Создает словари (пол, бренды, категории, цвета, размеры), один
настраиваемый товар с вариантами цвет/размер и один простой товар.

Использование:
    python scripts/seed_demo_catalog.py
"""

import sys
from decimal import Decimal
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront.db.database import SessionLocal, engine
from storefront.db.models import (
    PRODUCT_TYPE_CONFIGURABLE,
    PRODUCT_TYPE_SIMPLE,
    Base,
    Brand,
    Category,
    Color,
    Gender,
    Product,
    ProductImage,
    ProductVariant,
    Size,
    SizeCategory,
)


def seed_demo_catalog() -> bool:
    """Создает демонстрационные данные каталога."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        if db.query(Product).count() > 0:
            print("ℹ️ Каталог уже содержит товары, пропускаем")
            return True

        women = Gender(label="Women", slug="women")
        men = Gender(label="Men", slug="men")
        brand = Brand(name="Northwind", slug="northwind")
        tops = Category(name="Tops", slug="tops")
        accessories = Category(name="Accessories", slug="accessories")
        red = Color(name="Red", slug="red", hex_code="#FF0000")
        blue = Color(name="Blue", slug="blue", hex_code="#0000FF")
        apparel = SizeCategory(name="Apparel")
        small = Size(name="S", slug="s", sort_order=1, category=apparel)
        medium = Size(name="M", slug="m", sort_order=2, category=apparel)
        db.add_all([women, men, brand, tops, accessories, red, blue, apparel, small, medium])
        db.flush()

        shirt = Product(
            name="Classic Tee",
            description="Cotton t-shirt",
            product_type=PRODUCT_TYPE_CONFIGURABLE,
            is_published=True,
            brand_id=brand.id,
            category_id=tops.id,
            gender_id=women.id,
        )
        db.add(shirt)
        db.flush()

        for color, size, price, sale, stock in (
            (red, small, "100.00", "75.00", 10),
            (red, medium, "100.00", None, 3),
            (blue, medium, "110.00", None, 0),
        ):
            db.add(
                ProductVariant(
                    product_id=shirt.id,
                    sku=f"TEE-{color.slug}-{size.slug}".upper(),
                    price=Decimal(price),
                    sale_price=Decimal(sale) if sale else None,
                    color_id=color.id,
                    size_id=size.id,
                    in_stock=stock,
                )
            )
        db.add(ProductImage(product_id=shirt.id, url="/static/tee-front.jpg", sort_order=0, is_primary=True))
        db.add(ProductImage(product_id=shirt.id, url="/static/tee-back.jpg", sort_order=1))

        cap = Product(
            name="Canvas Cap",
            description="Adjustable cap",
            product_type=PRODUCT_TYPE_SIMPLE,
            is_published=True,
            price=Decimal("25.00"),
            sku="CAP-001",
            in_stock=12,
            brand_id=brand.id,
            category_id=accessories.id,
            gender_id=men.id,
        )
        db.add(cap)
        db.flush()
        db.add(ProductImage(product_id=cap.id, url="/static/cap.jpg", sort_order=0, is_primary=True))

        db.commit()
        print("✅ Демонстрационный каталог создан")
        return True

    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Ошибка заполнения каталога: {e}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if not seed_demo_catalog():
        sys.exit(1)
