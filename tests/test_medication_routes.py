"""
API tests for the medication endpoints.

The openFDA repository is replaced through FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeMedicationRepository, make_medication
from medcatalog.errors import UpstreamError
from medcatalog.main import app
from medcatalog.routes.medication_routes import get_medication_service
from medcatalog.services.medication_service import MedicationService

BASE = "/api/v1/medications"


@pytest.fixture
def repository():
    return FakeMedicationRepository([make_medication(medication_id="abc-123")], total=30)


@pytest.fixture
def api(repository):
    app.dependency_overrides[get_medication_service] = lambda: MedicationService(repository)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_medications(api, repository):
    response = api.get(BASE, params={"page": 2, "limit": 10, "activeIngredient": "ibuprofen"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 30
    assert data["currentPage"] == 2
    assert data["totalPages"] == 3
    assert data["hasMore"] is True
    assert data["medications"][0] == {
        "id": "abc-123",
        "brandName": "Ibuprofen",
        "genericName": "IBUPROFEN",
        "labelerName": "Walgreen Company",
        "activeIngredients": [{"name": "IBUPROFEN", "strength": "200 mg/1"}],
        "route": "ORAL",
        "packaging": ["100 TABLET in 1 BOTTLE"],
    }
    assert repository.filters[0].active_ingredient == "ibuprofen"


def test_list_uses_default_paging(api, repository):
    response = api.get(BASE)
    assert response.status_code == 200
    assert repository.filters[0].page == 1
    assert repository.filters[0].limit == app.state.settings.default_page_size


def test_all_route_is_not_forwarded(api, repository):
    response = api.get(BASE, params={"route": "ALL", "name": "advil"})
    assert response.status_code == 200
    assert repository.filters[0].route is None
    assert repository.filters[0].name == "advil"


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 101}, {"page": "two"}])
def test_invalid_filters_return_400(api, repository, params):
    response = api.get(BASE, params=params)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_filter"
    assert repository.filters == []


def test_upstream_failure_returns_error_body(api, repository):
    repository.error = UpstreamError(500, "Internal Server Error")
    response = api.get(BASE)
    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "fetch_error"
    assert error["message"].startswith("Failed to fetch medications:")


def test_get_medication(api):
    response = api.get(f"{BASE}/abc-123")
    assert response.status_code == 200
    assert response.json()["id"] == "abc-123"


def test_get_missing_medication(api):
    response = api.get(f"{BASE}/nope")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_health(api):
    response = api.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_medication_with_query_characters_is_404(fake_fda):
    app.dependency_overrides[get_medication_service] = lambda: MedicationService(fake_fda.client())
    try:
        response = TestClient(app).get(f'{BASE}/ab"c+d')
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"
    assert fake_fda.requests == []


@pytest.mark.parametrize("method, status", [("GET", 200), ("DELETE", 400), ("POST", 400)])
def test_cors_preflight_allows_only_reads(api, method, status):
    response = api.options(BASE, headers={
        "Origin": app.state.settings.frontend_url,
        "Access-Control-Request-Method": method,
    })
    assert response.status_code == status
