"""HTTP-level tests for the catalog API."""

from sqlalchemy.exc import OperationalError

from storefront.api.v1.endpoints import products as products_endpoint


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestProductList:
    def test_list_with_filters_and_badges(self, client, catalog):
        response = client.get("/api/v1/products", params={"color": "blue"})
        assert response.status_code == 200

        body = response.json()
        assert [p["name"] for p in body["items"]] == ["Classic Tee", "Warm Hoodie"]
        assert body["meta"]["total"] == 2
        assert body["meta"]["page"] == 1
        assert body["badges"] == ["Blue"]

    def test_bracket_keys_and_paging(self, client, catalog):
        response = client.get("/api/v1/products?brand[]=acme&limit=1&page=2")
        body = response.json()

        assert [p["name"] for p in body["items"]] == ["Canvas Cap"]
        assert body["meta"]["total_pages"] == 2
        assert body["meta"]["has_previous_page"] is True
        assert body["pages"] == [1, 2]

    def test_unknown_slug_yields_empty_page(self, client, catalog):
        body = client.get("/api/v1/products?size=nonexistent-slug").json()
        assert body["items"] == []
        assert body["meta"]["total"] == 0

    def test_database_error_returns_500(self, client, monkeypatch):
        def _broken(db, filters):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        monkeypatch.setattr(products_endpoint, "get_products", _broken)

        response = client.get("/api/v1/products")
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to load products"


class TestProductDetail:
    def test_detail_includes_gallery(self, client, catalog):
        response = client.get(f"/api/v1/products/{catalog.tee.id}")
        assert response.status_code == 200

        body = response.json()
        assert body["product"]["name"] == "Classic Tee"
        assert len(body["variants"]) == 3
        assert [g["color"] for g in body["gallery"]] == ["Blue", "Red"]

    def test_missing_product_is_404(self, client, catalog):
        response = client.get("/api/v1/products/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"

    def test_reviews_and_recommendations(self, client, catalog):
        reviews = client.get(f"/api/v1/products/{catalog.tee.id}/reviews").json()
        assert [r["author"] for r in reviews] == ["anon@example.com", "Alice"]

        recommended = client.get(f"/api/v1/products/{catalog.tee.id}/recommended").json()
        assert recommended[0]["title"] == "Warm Hoodie"


class TestSelection:
    def test_defaults_to_first_variant(self, client, catalog):
        response = client.post(f"/api/v1/products/{catalog.tee.id}/selection", json={})
        assert response.status_code == 200

        body = response.json()
        assert body["selected_variant"]["sku"] == "TEE-BLUE-M"
        assert body["inventory"]["status"] == "out_of_stock"
        assert body["gallery_index"] == 0
        assert [s["slug"] for s in body["available_sizes"]] == ["s", "m"]

    def test_changing_size_resolves_variant(self, client, catalog):
        payload = {
            "color_id": catalog.red.id,
            "size_id": catalog.medium.id,
            "axis": "size",
            "value": catalog.small.id,
        }
        body = client.post(f"/api/v1/products/{catalog.tee.id}/selection", json=payload).json()

        assert body["selected_variant"]["sku"] == "TEE-RED-S"
        assert body["inventory"]["status"] == "in_stock"
        assert body["gallery_index"] == 1

    def test_changing_color_repairs_size(self, client, catalog):
        payload = {
            "color_id": catalog.red.id,
            "size_id": catalog.small.id,
            "axis": "color",
            "value": catalog.blue.id,
        }
        body = client.post(f"/api/v1/products/{catalog.tee.id}/selection", json=payload).json()

        assert body["selected_size_id"] == catalog.medium.id
        assert body["selected_variant"]["sku"] == "TEE-BLUE-M"


class TestCartCheck:
    def test_quantity_above_stock(self, client, catalog):
        payload = {"color_id": catalog.red.id, "size_id": catalog.medium.id, "quantity": 5}
        body = client.post(f"/api/v1/products/{catalog.tee.id}/cart-check", json=payload).json()

        assert body["can_add"] is False
        assert body["error"] == "Only 3 items available in stock"
        assert body["sku"] == "TEE-RED-M"

    def test_unresolved_selection(self, client, catalog):
        payload = {"color_id": catalog.green.id, "size_id": catalog.medium.id}
        body = client.post(f"/api/v1/products/{catalog.tee.id}/cart-check", json=payload).json()

        assert body["can_add"] is False
        assert body["error"] == "Please select a color and size"
        assert body["variant_id"] is None

    def test_simple_product(self, client, catalog):
        payload = {"quantity": 2, "cart_quantity": 1}
        body = client.post(f"/api/v1/products/{catalog.cap.id}/cart-check", json=payload).json()

        assert body["can_add"] is True
        assert body["sku"] == "CAP-1"
        assert body["price"] == 25.0

    def test_invalid_quantity_rejected(self, client, catalog):
        response = client.post(
            f"/api/v1/products/{catalog.cap.id}/cart-check", json={"quantity": 0}
        )
        assert response.status_code == 422


def test_filter_options_endpoint(client, catalog):
    response = client.get("/api/v1/filters", params={"search": "tee"})
    assert response.status_code == 200

    body = response.json()
    assert [g["slug"] for g in body["genders"]] == ["women"]
    assert [c["slug"] for c in body["colors"]] == ["blue", "red"]


def test_non_finite_paging_is_clamped(client, catalog):
    response = client.get("/api/v1/products", params={"page": "inf", "limit": "nan"})
    assert response.status_code == 200

    body = response.json()
    assert body["meta"]["page"] == 1
    assert body["meta"]["page_size"] == 24
    assert len(body["items"]) == 3
