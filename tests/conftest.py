"""
Pytest configuration and shared fixtures for the medication lookup tests.
"""

import copy
from typing import Any, Dict, List, Optional

import httpx
import pytest

from medcatalog.models.medication import ActiveIngredient, CatalogPage, Medication, Packaging
from medcatalog.services.repository import MedicationRepository
from medcatalog.utils.fda_client import FDAApiClient

IBUPROFEN_RECORD = {
    "product_ndc": "0363-0291",
    "product_id": "0363-0291_4f5c2b1e-8b3c-4c8a-9b0f-2f1a0b7c6d5e",
    "brand_name": "Ibuprofen",
    "generic_name": "IBUPROFEN",
    "labeler_name": "Walgreen Company",
    "active_ingredients": [{"name": "IBUPROFEN", "strength": "200 mg/1"}],
    "route": ["ORAL"],
    "packaging": [
        {
            "package_ndc": "0363-0291-01",
            "description": "100 TABLET, FILM COATED in 1 BOTTLE (0363-0291-01)",
            "marketing_start_date": "20100301",
            "sample": False,
        }
    ],
    "dosage_form": "TABLET, FILM COATED",
    "finished": True,
    "openfda": {"manufacturer_name": ["Walgreen Company"]},
}


def fda_payload(records: List[Dict[str, Any]], total: Optional[int] = None, skip: int = 0, limit: int = 10) -> Dict[str, Any]:
    """Build an openFDA NDC response body around the given records."""
    return {
        "meta": {
            "disclaimer": "Do not rely on openFDA to make decisions regarding medical care.",
            "last_updated": "2024-05-01",
            "results": {
                "skip": skip,
                "limit": limit,
                "total": len(records) if total is None else total,
            },
        },
        "results": records,
    }


@pytest.fixture
def ibuprofen_record() -> Dict[str, Any]:
    return copy.deepcopy(IBUPROFEN_RECORD)


class FakeFDA:
    """Stand-in for the openFDA endpoint built on httpx.MockTransport."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = fda_payload([])

    def respond(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = body

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    def client(self, api_key: str = "test-key", **kwargs) -> FDAApiClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return FDAApiClient(api_key=api_key, http_client=http_client, **kwargs)


@pytest.fixture
def fake_fda() -> FakeFDA:
    return FakeFDA()


def make_medication(
    medication_id: str = "0363-0291_abc",
    brand_name: Optional[str] = "Ibuprofen",
    routes=("ORAL",),
    packaging=None,
) -> Medication:
    if packaging is None:
        packaging = (Packaging(description="100 TABLET in 1 BOTTLE", marketing_start_date="20100301", sample=False),)
    return Medication(
        id=medication_id,
        brand_name=brand_name,
        generic_name="IBUPROFEN",
        labeler_name="Walgreen Company",
        active_ingredients=(ActiveIngredient(name="IBUPROFEN", strength="200 mg/1"),),
        routes=tuple(routes),
        packaging=tuple(packaging),
    )


class FakeMedicationRepository(MedicationRepository):
    """In-memory repository that records the filters it receives."""

    def __init__(self, medications=None, total: Optional[int] = None, error: Optional[Exception] = None):
        self.medications = list(medications or [])
        self.total = len(self.medications) if total is None else total
        self.error = error
        self.filters = []
        self.requested_ids = []

    async def find_medications(self, filters):
        self.filters.append(filters)
        if self.error:
            raise self.error
        return CatalogPage(medications=self.medications, total=self.total)

    async def find_by_id(self, medication_id):
        self.requested_ids.append(medication_id)
        if self.error:
            raise self.error
        for medication in self.medications:
            if medication.id == medication_id:
                return medication
        return None
