"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/products.
- Domain exception mapping (404 PRODUCT_NOT_FOUND, 400 VALIDATION_FAILED).
- Type, search, price-range, types and count endpoints.
- The full create -> read -> update -> delete lifecycle.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_product(make_product):
    """A persisted Product instance."""
    return make_product()


@pytest.fixture()
def catalog(make_product):
    return [
        make_product(name="Apple", description="Fresh red apple", price=Decimal("2.99")),
        make_product(
            name="Green Apple",
            description="Fresh green apple",
            price=Decimal("3.49"),
            image_url="green-apple.jpg",
        ),
        make_product(name="Banana", description="Fresh banana", price=Decimal("1.99")),
        make_product(
            type="vegetable",
            name="Carrot",
            description="Fresh carrot",
            price=Decimal("1.49"),
        ),
    ]


# ===========================================================================
# LIST
# ===========================================================================


class TestProductList:
    def test_list_empty(self, api_client):
        response = api_client.get("/api/products")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_returns_products_in_id_order(self, api_client, make_product):
        make_product(name="Apple")
        make_product(name="Banana", price=Decimal("1.99"))

        response = api_client.get("/api/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Apple", "Banana"]


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestProductRetrieve:
    def test_retrieve_success(self, api_client, sample_product):
        response = api_client.get(f"/api/products/{sample_product.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == sample_product.id
        assert data["name"] == "Apple"
        assert data["type"] == "fruit"
        assert data["price"] == 2.99
        assert data["imageUrl"] == "apple.jpg"
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_retrieve_not_found(self, api_client):
        response = api_client.get("/api/products/999")
        assert response.status_code == 404
        data = response.json()
        assert data["errorCode"] == "PRODUCT_NOT_FOUND"
        assert data["message"] == "Product not found with id: 999"


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_success(self, api_client):
        payload = {
            "type": "fruit",
            "name": "Apple",
            "description": "Fresh apple",
            "price": 2.99,
            "imageUrl": "apple.jpg",
        }
        response = api_client.post("/api/products", payload, format="json")

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Apple"
        assert data["type"] == "fruit"
        assert data["price"] == 2.99
        assert data["imageUrl"] == "apple.jpg"
        assert data["createdAt"] == data["updatedAt"]
        assert Product.objects.filter(id=data["id"]).exists()

    def test_create_minimal(self, api_client):
        payload = {"type": "fruit", "name": "Apple", "price": "2.99"}
        response = api_client.post("/api/products", payload, format="json")
        assert response.status_code == 201
        assert response.json()["description"] is None
        assert response.json()["imageUrl"] is None

    def test_create_invalid_returns_400(self, api_client):
        payload = {"name": "", "price": -1}
        response = api_client.post("/api/products", payload, format="json")

        assert response.status_code == 400
        data = response.json()
        assert data["errorCode"] == "VALIDATION_FAILED"
        fields = {e["field"] for e in data["validationErrors"]}
        assert fields == {"type", "name", "price"}
        assert Product.objects.count() == 0

    def test_create_reports_wire_field_names(self, api_client):
        payload = {"type": "fruit", "name": "Apple", "price": "2.99", "imageUrl": 5}
        response = api_client.post("/api/products", payload, format="json")
        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "imageUrl"

    def test_create_keeps_padded_text_verbatim(self, api_client):
        payload = {"type": " fruit ", "name": "Apple ", "price": 2.99}
        response = api_client.post("/api/products", payload, format="json")
        assert response.status_code == 201
        assert response.json()["type"] == " fruit "
        assert response.json()["name"] == "Apple "

    def test_create_price_with_three_decimals_returns_400(self, api_client):
        payload = {"type": "fruit", "name": "Apple", "price": "2.999"}
        response = api_client.post("/api/products", payload, format="json")
        assert response.status_code == 400


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_update_changes_only_supplied_fields(self, api_client, sample_product):
        payload = {"name": "Updated Apple", "price": 3.99}
        response = api_client.put(
            f"/api/products/{sample_product.id}", payload, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Updated Apple"
        assert data["price"] == 3.99
        assert data["type"] == "fruit"
        assert data["description"] == "Fresh apple"
        assert data["imageUrl"] == "apple.jpg"

    def test_null_fields_are_ignored(self, api_client, sample_product):
        payload = {"description": None, "imageUrl": None, "price": "4.50"}
        response = api_client.put(
            f"/api/products/{sample_product.id}", payload, format="json"
        )

        assert response.status_code == 200
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("4.50")
        assert sample_product.description == "Fresh apple"
        assert sample_product.image_url == "apple.jpg"

    def test_update_refreshes_updated_at(self, api_client, sample_product):
        created_at = sample_product.created_at
        updated_at = sample_product.updated_at

        api_client.put(
            f"/api/products/{sample_product.id}", {"name": "Pear"}, format="json"
        )

        sample_product.refresh_from_db()
        assert sample_product.created_at == created_at
        assert sample_product.updated_at > updated_at

    def test_patch_behaves_like_put(self, api_client, sample_product):
        response = api_client.patch(
            f"/api/products/{sample_product.id}", {"type": "pome"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["type"] == "pome"
        assert response.json()["name"] == "Apple"

    def test_update_keeps_padded_name_verbatim(self, api_client, sample_product):
        response = api_client.put(
            f"/api/products/{sample_product.id}",
            {"name": "  Updated Apple"},
            format="json",
        )
        assert response.status_code == 200
        sample_product.refresh_from_db()
        assert sample_product.name == "  Updated Apple"

    def test_update_not_found(self, api_client):
        response = api_client.put("/api/products/999", {"name": "Ghost"}, format="json")
        assert response.status_code == 404
        assert response.json()["errorCode"] == "PRODUCT_NOT_FOUND"

    def test_update_invalid_returns_400(self, api_client, sample_product):
        response = api_client.put(
            f"/api/products/{sample_product.id}", {"price": 0}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_FAILED"
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("2.99")


# ===========================================================================
# DESTROY
# ===========================================================================


class TestProductDestroy:
    def test_destroy_success(self, api_client, sample_product):
        response = api_client.delete(f"/api/products/{sample_product.id}")
        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert not Product.objects.filter(id=sample_product.id).exists()

    def test_destroy_not_found(self, api_client):
        response = api_client.delete("/api/products/999")
        assert response.status_code == 404
        assert response.json()["errorCode"] == "PRODUCT_NOT_FOUND"


# ===========================================================================
# Filtered listings
# ===========================================================================


class TestByType:
    def test_exact_type(self, api_client, catalog):
        response = api_client.get("/api/products/type/vegetable")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Carrot"]

    def test_unknown_type_is_empty(self, api_client, catalog):
        response = api_client.get("/api/products/type/meat")
        assert response.status_code == 200
        assert response.json() == []


class TestSearch:
    def test_search(self, api_client, catalog):
        response = api_client.get("/api/products/search", {"q": "apple"})
        assert response.status_code == 200
        assert {p["name"] for p in response.json()} == {"Apple", "Green Apple"}

    def test_search_is_case_insensitive(self, api_client, catalog):
        upper = api_client.get("/api/products/search", {"q": "APPLE"}).json()
        lower = api_client.get("/api/products/search", {"q": "apple"}).json()
        assert {p["id"] for p in upper} == {p["id"] for p in lower}

    def test_empty_term_returns_everything(self, api_client, catalog):
        response = api_client.get("/api/products/search", {"q": ""})
        assert response.status_code == 200
        assert len(response.json()) == len(catalog)

    def test_missing_term_returns_400(self, api_client, catalog):
        response = api_client.get("/api/products/search")
        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "q"


class TestPriceRange:
    def test_inclusive_range(self, api_client, catalog):
        response = api_client.get(
            "/api/products/price-range", {"minPrice": "1.99", "maxPrice": "2.99"}
        )
        assert response.status_code == 200
        assert {p["name"] for p in response.json()} == {"Apple", "Banana"}

    def test_reversed_bounds_are_empty(self, api_client, catalog):
        response = api_client.get(
            "/api/products/price-range", {"minPrice": "5", "maxPrice": "1"}
        )
        assert response.status_code == 200
        assert response.json() == []

    def test_narrowed_by_type(self, api_client, catalog):
        response = api_client.get(
            "/api/products/price-range",
            {"minPrice": "0.01", "maxPrice": "100", "type": "vegetable"},
        )
        assert [p["name"] for p in response.json()] == ["Carrot"]

    def test_missing_bound_returns_400(self, api_client):
        response = api_client.get("/api/products/price-range", {"minPrice": "1"})
        assert response.status_code == 400
        assert response.json()["validationErrors"][0]["field"] == "maxPrice"

    def test_invalid_bound_returns_400(self, api_client):
        response = api_client.get(
            "/api/products/price-range", {"minPrice": "cheap", "maxPrice": "1"}
        )
        assert response.status_code == 400
        assert response.json()["errorCode"] == "VALIDATION_FAILED"


class TestTypesAndCounts:
    def test_types_sorted_and_distinct(self, api_client, catalog, make_product):
        make_product(type="dairy", name="Milk")
        response = api_client.get("/api/products/types")
        assert response.status_code == 200
        assert response.json() == ["dairy", "fruit", "vegetable"]

    def test_count_by_type(self, api_client, catalog):
        response = api_client.get("/api/products/count/type/fruit")
        assert response.status_code == 200
        assert response.json() == {"count": 3}

    def test_count_unknown_type_is_zero(self, api_client, catalog):
        response = api_client.get("/api/products/count/type/nonexistent")
        assert response.status_code == 200
        assert response.json() == {"count": 0}


# ===========================================================================
# Lifecycle
# ===========================================================================


class TestProductLifecycle:
    def test_create_read_update_delete(self, api_client):
        created = api_client.post(
            "/api/products",
            {"type": "fruit", "name": "Apple", "price": 2.99},
            format="json",
        )
        assert created.status_code == 201
        product_id = created.json()["id"]

        fetched = api_client.get(f"/api/products/{product_id}")
        assert fetched.status_code == 200
        assert fetched.json() == created.json()

        updated = api_client.put(
            f"/api/products/{product_id}",
            {"name": "Updated Apple", "price": 3.99},
            format="json",
        )
        assert updated.status_code == 200
        body = updated.json()
        assert body["name"] == "Updated Apple"
        assert body["price"] == 3.99
        assert body["type"] == "fruit"
        assert body["description"] is None
        assert body["imageUrl"] is None

        deleted = api_client.delete(f"/api/products/{product_id}")
        assert deleted.status_code == 200

        gone = api_client.get(f"/api/products/{product_id}")
        assert gone.status_code == 404
        assert gone.json()["errorCode"] == "PRODUCT_NOT_FOUND"
