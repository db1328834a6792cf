"""Pytest configuration for storefront catalog tests."""

import os

# The application engine is created at import time; point it at SQLite
# before any storefront module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.database import get_db
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
    Review,
    Size,
    SizeCategory,
    User,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    from storefront.main import app

    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------

def make_product(db, name, minutes=0, product_type=PRODUCT_TYPE_CONFIGURABLE, **kwargs):
    """Create a published product whose created_at is BASE_TIME + minutes."""
    kwargs.setdefault("is_published", True)
    product = Product(
        name=name,
        product_type=product_type,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        updated_at=BASE_TIME + timedelta(minutes=minutes),
        **kwargs,
    )
    db.add(product)
    db.flush()
    return product


def make_variant(db, product, sku, price, sale_price=None, color=None, size=None, in_stock=10):
    variant = ProductVariant(
        product_id=product.id,
        sku=sku,
        price=Decimal(price),
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        color_id=color.id if color else None,
        size_id=size.id if size else None,
        in_stock=in_stock,
    )
    db.add(variant)
    db.flush()
    return variant


def make_image(db, product, url, variant=None, sort_order=0, is_primary=False):
    image = ProductImage(
        product_id=product.id,
        variant_id=variant.id if variant else None,
        url=url,
        sort_order=sort_order,
        is_primary=is_primary,
    )
    db.add(image)
    db.flush()
    return image


@pytest.fixture()
def catalog(db):
    """
    Small catalog:

    - tee (configurable, women, northwind, tops): red/S 100->75, red/M 100, blue/M 110
    - hoodie (configurable, men, acme, tops): blue/L 60
    - cap (simple, men, acme, accessories): 25
    - draft (unpublished simple)
    """
    women = Gender(label="Women", slug="women")
    men = Gender(label="Men", slug="men")
    northwind = Brand(name="Northwind", slug="northwind")
    acme = Brand(name="Acme", slug="acme")
    tops = Category(name="Tops", slug="tops")
    accessories = Category(name="Accessories", slug="accessories")
    red = Color(name="Red", slug="red", hex_code="#FF0000")
    blue = Color(name="Blue", slug="blue", hex_code="#0000FF")
    green = Color(name="Green", slug="green", hex_code="#00FF00")
    apparel = SizeCategory(name="Apparel")
    small = Size(name="S", slug="s", sort_order=1, category=apparel)
    medium = Size(name="M", slug="m", sort_order=2, category=apparel)
    large = Size(name="L", slug="l", sort_order=3, category=apparel)
    db.add_all(
        [women, men, northwind, acme, tops, accessories, red, blue, green, apparel, small, medium, large]
    )
    db.flush()

    tee = make_product(
        db, "Classic Tee", minutes=30, description="Soft cotton tee",
        gender_id=women.id, brand_id=northwind.id, category_id=tops.id,
    )
    tee_red_s = make_variant(db, tee, "TEE-RED-S", "100.00", "75.00", red, small)
    tee_red_m = make_variant(db, tee, "TEE-RED-M", "100.00", None, red, medium, in_stock=3)
    tee_blue_m = make_variant(db, tee, "TEE-BLUE-M", "110.00", None, blue, medium, in_stock=0)
    make_image(db, tee, "/img/tee-front.jpg", sort_order=0, is_primary=True)
    make_image(db, tee, "/img/tee-back.jpg", sort_order=1)
    make_image(db, tee, "/img/tee-blue.jpg", variant=tee_blue_m, sort_order=0, is_primary=True)

    hoodie = make_product(
        db, "Warm Hoodie", minutes=20, description="Fleece hoodie",
        gender_id=men.id, brand_id=acme.id, category_id=tops.id,
    )
    make_variant(db, hoodie, "HOOD-BLUE-L", "60.00", None, blue, large)
    make_image(db, hoodie, "/img/hoodie.jpg", is_primary=True)

    cap = make_product(
        db, "Canvas Cap", minutes=10, product_type=PRODUCT_TYPE_SIMPLE,
        description="Adjustable cap", price=Decimal("25.00"), sku="CAP-1", in_stock=12,
        gender_id=men.id, brand_id=acme.id, category_id=accessories.id,
    )
    make_image(db, cap, "/img/cap.jpg", is_primary=True)

    draft = make_product(
        db, "Draft Scarf", minutes=40, product_type=PRODUCT_TYPE_SIMPLE,
        price=Decimal("15.00"), is_published=False,
    )

    alice = User(name="Alice", email="alice@example.com")
    nameless = User(name="  ", email="anon@example.com")
    db.add_all([alice, nameless])
    db.flush()
    db.add_all(
        [
            Review(product_id=tee.id, user_id=alice.id, rating=5, comment="Great",
                   created_at=BASE_TIME + timedelta(days=1)),
            Review(product_id=tee.id, user_id=nameless.id, rating=3, comment="Ok",
                   created_at=BASE_TIME + timedelta(days=2)),
        ]
    )
    db.commit()

    return SimpleNamespace(
        women=women, men=men, northwind=northwind, acme=acme,
        tops=tops, accessories=accessories,
        red=red, blue=blue, green=green,
        small=small, medium=medium, large=large,
        tee=tee, tee_red_s=tee_red_s, tee_red_m=tee_red_m, tee_blue_m=tee_blue_m,
        hoodie=hoodie, cap=cap, draft=draft,
        alice=alice, nameless=nameless,
    )
