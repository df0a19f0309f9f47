"""
Catalog Service API Component Tests

Tests FastAPI endpoints with the real routes and an injected CatalogService
built on mocked repository and storage.

Usage:
    pytest tests/component/tdd/catalog_service/test_catalog_api.py -v
"""
import json

import pytest
from fastapi.testclient import TestClient

from microservices.catalog_service import main
from microservices.catalog_service.catalog_service import CatalogService
from tests.fixtures import make_garment, make_image_bytes

pytestmark = [pytest.mark.component]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def garment(mock_catalog_repository):
    return mock_catalog_repository.set_garment(make_garment(garment_id=1, stock=10))


@pytest.fixture
def client(monkeypatch, mock_catalog_repository, mock_storage):
    """Test client over the real app; the lifespan is not run"""
    service = CatalogService(repository=mock_catalog_repository, storage=mock_storage)
    monkeypatch.setattr(main, "catalog_service", service)
    return TestClient(main.app)


def _images(*names):
    return [("images", (name, make_image_bytes(name), "image/png")) for name in names]


# =============================================================================
# Health
# =============================================================================

class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health(self, client):
        response = client.get("/health/detailed")

        assert response.json()["database"] == "healthy"

    def test_service_info_lists_routes(self, client):
        body = client.get("/api/v1/catalog/info").json()

        assert body["service_name"] == "catalog_service"
        assert body["routes"]["route_count"] > 0

    def test_uninitialized_service_returns_503(self, monkeypatch):
        monkeypatch.setattr(main, "catalog_service", None)

        response = TestClient(main.app).get("/api/v1/sizes")

        assert response.status_code == 503


# =============================================================================
# Stock allocation
# =============================================================================

class TestSizeRegistrationApi:

    def test_register_sizes(self, client, garment, mock_catalog_repository):
        response = client.post("/api/v1/sizes/register", json={
            "garmentId": garment.id,
            "sizes": [{"sizeId": 1, "stock": 3}, {"sizeId": 2, "stock": 3}],
        })

        assert response.status_code == 200
        assert "message" in response.json()
        assert mock_catalog_repository.allocation_rows(garment.id) == [(1, 3), (2, 3)]

    def test_missing_garment_id_is_400(self, client):
        response = client.post("/api/v1/sizes/register", json={"sizes": [{"sizeId": 1, "stock": 3}]})

        assert response.status_code == 400

    def test_malformed_sizes_is_400(self, client, garment):
        response = client.post("/api/v1/sizes/register", json={"garmentId": garment.id, "sizes": "S"})

        assert response.status_code == 400

    def test_unknown_garment_is_404(self, client):
        response = client.post("/api/v1/sizes/register", json={
            "garmentId": 999, "sizes": [{"sizeId": 1, "stock": 1}],
        })

        assert response.status_code == 404

    def test_store_failure_is_500(self, client, garment, mock_catalog_repository):
        mock_catalog_repository.set_error(RuntimeError("connection reset"))

        response = TestClient(main.app, raise_server_exceptions=False).post(
            "/api/v1/sizes/register",
            json={"garmentId": garment.id, "sizes": [{"sizeId": 1, "stock": 1}]},
        )

        assert response.status_code == 500


class TestStockDetailApi:

    def test_stock_available(self, client, garment, mock_catalog_repository):
        mock_catalog_repository.set_allocation(garment.id, 1, 3)
        mock_catalog_repository.set_allocation(garment.id, 2, 3)

        response = client.get(f"/api/v1/garments/{garment.id}/stock-detail")

        assert response.status_code == 200
        body = response.json()
        assert body["stockTotal"] == 10
        assert body["stockAssigned"] == 6
        assert body["stockAvailable"] == 4
        assert [s["sizeName"] for s in body["assignedSizes"]] == ["S", "M"]

    def test_fully_allocated_is_400_with_summary(self, client, garment, mock_catalog_repository):
        mock_catalog_repository.set_allocation(garment.id, 1, 6)
        mock_catalog_repository.set_allocation(garment.id, 2, 6)

        response = client.get(f"/api/v1/garments/{garment.id}/stock-detail")

        assert response.status_code == 400
        body = response.json()
        assert body["error"]
        assert body["stockAvailable"] == -2
        assert len(body["assignedSizes"]) == 2

    def test_unknown_garment_is_404(self, client):
        assert client.get("/api/v1/garments/999/stock-detail").status_code == 404


# =============================================================================
# Color variants
# =============================================================================

class TestColorRegistrationApi:

    def test_register_colors(self, client, garment):
        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": json.dumps([1, 2])},
            files=_images("black.png", "white.png"),
        )

        assert response.status_code == 200
        body = response.json()
        assert [r["colorId"] for r in body["records"]] == [1, 2]
        assert body["failedColorIds"] == []

    def test_partial_success_is_reported(self, client, garment, mock_storage):
        mock_storage.fail_upload(2)

        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": "[1, 2]"},
            files=_images("black.png", "white.png"),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["records"]) == 1
        assert body["failedColorIds"] == [2]

    def test_count_mismatch_is_400(self, client, garment, mock_storage):
        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": "[1, 2, 3]"},
            files=_images("a.png", "b.png"),
        )

        assert response.status_code == 400
        assert mock_storage.upload_count == 0

    def test_unknown_garment_is_404(self, client, mock_storage):
        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": "999", "colors": "[1]"},
            files=_images("a.png"),
        )

        assert response.status_code == 404
        assert mock_storage.upload_count == 0

    @pytest.mark.parametrize("colors", ["not json", '{"id": 1}', '["red"]'])
    def test_malformed_colors_is_400(self, client, garment, colors):
        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": colors},
            files=_images("a.png"),
        )

        assert response.status_code == 400

    def test_missing_images_is_400(self, client, garment):
        response = client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": "[1]"},
        )

        assert response.status_code == 400

    def test_list_garment_colors(self, client, garment):
        client.post(
            "/api/v1/garments/colors",
            data={"garmentId": str(garment.id), "colors": "[3]"},
            files=_images("navy.png"),
        )

        body = client.get(f"/api/v1/garments/{garment.id}/colors").json()

        assert [v["colorName"] for v in body] == ["Navy"]


# =============================================================================
# Garments
# =============================================================================

class TestGarmentApi:

    def test_create_garment(self, client):
        response = client.post("/api/v1/garments", json={
            "name": "Linen Shirt", "price": "39.90", "stock": 12, "categoryId": 1,
        })

        assert response.status_code == 201
        assert response.json()["garment"]["name"] == "Linen Shirt"

    def test_create_with_negative_stock_is_400(self, client):
        response = client.post("/api/v1/garments", json={"name": "Tee", "price": "5", "stock": -1})

        assert response.status_code == 400

    def test_list_with_query_filters(self, client, mock_catalog_repository):
        mock_catalog_repository.set_garment(make_garment(garment_id=1, category_id=1))
        mock_catalog_repository.set_garment(make_garment(garment_id=2, category_id=2))

        body = client.get("/api/v1/garments", params={"categoryId": 2}).json()

        assert [g["id"] for g in body] == [2]

    def test_get_update_delete(self, client, garment):
        assert client.get(f"/api/v1/garments/{garment.id}").json()["stock"] == 10

        updated = client.put(f"/api/v1/garments/{garment.id}", json={
            "name": "Tee", "price": "15.00", "stock": 20,
        })
        assert updated.json()["garment"]["stock"] == 20

        assert client.delete(f"/api/v1/garments/{garment.id}").status_code == 200
        assert client.get(f"/api/v1/garments/{garment.id}").status_code == 404

    def test_upload_image(self, client):
        response = client.post(
            "/api/v1/garments/upload-image",
            files={"image": ("front.png", make_image_bytes(), "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["url"].startswith("http://storage.test/garments/garments/")

    def test_lookups(self, client):
        assert client.get("/api/v1/sizes").status_code == 200
        assert client.get("/api/v1/colors").json()[0]["hexCode"] == "#000000"
        assert client.get("/api/v1/categories").status_code == 200
