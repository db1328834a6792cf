"""Tests for the catalog query builder against an in-memory database."""

from storefront.schemas.catalog import ProductFilters
from storefront.services.catalog_query import get_products, resolve_slug_ids
from storefront.db.models import Color

from conftest import make_image, make_product, make_variant


def names(result):
    return [p.name for p in result.products]


class TestListing:
    def test_default_listing_is_newest_first_and_published_only(self, db, catalog):
        result = get_products(db, ProductFilters())
        assert names(result) == ["Classic Tee", "Warm Hoodie", "Canvas Cap"]
        assert result.total_count == 3

    def test_summary_aggregates(self, db, catalog):
        result = get_products(db, ProductFilters())
        tee = result.products[0]
        assert tee.price == 100.0
        assert tee.sale_price == 75.0
        assert tee.discount_percentage == 25
        assert tee.image_url == "/img/tee-front.jpg"
        assert tee.hover_image_url == "/img/tee-back.jpg"
        assert tee.average_rating == 4.0
        assert tee.review_count == 2

    def test_product_without_sale_has_no_discount(self, db, catalog):
        hoodie = get_products(db, ProductFilters()).products[1]
        assert hoodie.price == 60.0
        assert hoodie.sale_price is None
        assert hoodie.discount_percentage is None
        assert hoodie.review_count == 0
        assert hoodie.average_rating is None

    def test_simple_product_uses_own_price(self, db, catalog):
        cap = get_products(db, ProductFilters()).products[2]
        assert cap.price == 25.0
        assert cap.image_url == "/img/cap.jpg"
        assert cap.hover_image_url is None


class TestFiltering:
    def test_unknown_color_slug_returns_nothing(self, db, catalog):
        result = get_products(db, ProductFilters(color_slugs=["nonexistent-slug"]))
        assert result.products == []
        assert result.total_count == 0

    def test_unknown_size_slug_returns_nothing(self, db, catalog):
        result = get_products(db, ProductFilters(size_slugs=["xxl"]))
        assert result.total_count == 0

    def test_color_filter(self, db, catalog):
        result = get_products(db, ProductFilters(color_slugs=["blue"]))
        assert names(result) == ["Classic Tee", "Warm Hoodie"]
        assert result.total_count == 2

    def test_size_filter_limits_aggregated_variants(self, db, catalog):
        result = get_products(db, ProductFilters(size_slugs=["m"]))
        assert names(result) == ["Classic Tee"]
        tee = result.products[0]
        assert tee.price == 100.0
        assert tee.sale_price is None
        assert tee.discount_percentage is None

    def test_simple_product_excluded_by_any_variant_filter(self, db, catalog):
        assert "Canvas Cap" in names(get_products(db, ProductFilters(brand_slugs=["acme"])))
        assert "Canvas Cap" not in names(
            get_products(db, ProductFilters(brand_slugs=["acme"], color_slugs=["blue"]))
        )
        assert "Canvas Cap" not in names(get_products(db, ProductFilters(price_max=30)))

    def test_brand_gender_category_filters(self, db, catalog):
        assert names(get_products(db, ProductFilters(brand_slugs=["acme"]))) == [
            "Warm Hoodie",
            "Canvas Cap",
        ]
        assert names(get_products(db, ProductFilters(gender_slugs=["women"]))) == ["Classic Tee"]
        assert names(get_products(db, ProductFilters(category_slugs=["tops"]))) == [
            "Classic Tee",
            "Warm Hoodie",
        ]

    def test_unknown_brand_slug_returns_nothing(self, db, catalog):
        assert get_products(db, ProductFilters(brand_slugs=["nope"])).total_count == 0

    def test_search_matches_name_and_description_case_insensitively(self, db, catalog):
        assert names(get_products(db, ProductFilters(search="cap"))) == ["Canvas Cap"]
        assert names(get_products(db, ProductFilters(search="FLEECE"))) == ["Warm Hoodie"]

    def test_price_ranges_are_or_combined(self, db, catalog):
        result = get_products(db, ProductFilters(price_ranges=[(50, 70), (70, 80)]))
        assert names(result) == ["Classic Tee", "Warm Hoodie"]
        tee = result.products[0]
        assert tee.price == 100.0
        assert tee.sale_price == 75.0

    def test_price_uses_sale_price_when_present(self, db, catalog):
        result = get_products(db, ProductFilters(price_min=70, price_max=80))
        assert names(result) == ["Classic Tee"]


class TestSortingAndPaging:
    def test_price_sorting(self, db, catalog):
        assert names(get_products(db, ProductFilters(sort="price_asc"))) == [
            "Canvas Cap",
            "Warm Hoodie",
            "Classic Tee",
        ]
        assert names(get_products(db, ProductFilters(sort="price_desc"))) == [
            "Classic Tee",
            "Warm Hoodie",
            "Canvas Cap",
        ]

    def test_featured_sorts_like_newest(self, db, catalog):
        assert names(get_products(db, ProductFilters(sort="featured"))) == names(
            get_products(db, ProductFilters())
        )

    def test_pages_are_disjoint_and_ordered(self, db, catalog):
        full = names(get_products(db, ProductFilters(limit=10)))
        first = get_products(db, ProductFilters(page=1, limit=2))
        second = get_products(db, ProductFilters(page=2, limit=2))
        assert first.total_count == second.total_count == 3
        assert not set(names(first)) & set(names(second))
        assert names(first) + names(second) == full

    def test_page_past_the_end_is_empty(self, db, catalog):
        result = get_products(db, ProductFilters(page=5, limit=2))
        assert result.products == []
        assert result.total_count == 3

    def test_ties_broken_by_id(self, db):
        first = make_product(db, "Twin A", minutes=5)
        second = make_product(db, "Twin B", minutes=5)
        make_variant(db, first, "A-1", "10.00")
        make_variant(db, second, "B-1", "10.00")
        db.commit()

        expected = sorted([first, second], key=lambda p: p.id)
        result = get_products(db, ProductFilters())
        assert [p.id for p in result.products] == [p.id for p in expected]


def test_product_level_image_outranks_variant_primary_image(db):
    poster = make_product(db, "Poster")
    variant = make_variant(db, poster, "POSTER-1", "10.00")
    make_image(db, poster, "/img/variant-primary.jpg", variant=variant, sort_order=0, is_primary=True)
    make_image(db, poster, "/img/product-extra.jpg", sort_order=5, is_primary=False)
    db.commit()

    summary = get_products(db, ProductFilters()).products[0]
    assert summary.image_url == "/img/product-extra.jpg"
    assert summary.hover_image_url == "/img/variant-primary.jpg"


def test_resolve_slug_ids(db, catalog):
    assert resolve_slug_ids(db, Color, None) == []
    assert resolve_slug_ids(db, Color, ["missing"]) == []
    assert resolve_slug_ids(db, Color, ["red"]) == [catalog.red.id]


class TestFilterNormalization:
    def test_limit_is_clamped(self):
        assert ProductFilters(limit=1000).limit == 60
        assert ProductFilters(limit=0).limit == 1
        assert ProductFilters(limit="abc").limit == 24
        assert ProductFilters().limit == 24

    def test_page_is_clamped(self):
        assert ProductFilters(page=-3).page == 1
        assert ProductFilters(page="x").page == 1
        assert ProductFilters(page=float("inf")).page == 1
        assert ProductFilters(limit=float("inf")).limit == 24
        assert ProductFilters(page=3, limit=10).offset == 20

    def test_unknown_sort_falls_back_to_newest(self):
        assert ProductFilters(sort="bogus").sort == "newest"
