"""
Medication Routes

Endpoints for browsing the openFDA NDC directory.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request

from medcatalog.models.fda_resources import ErrorResponse, MedicationResponse, PaginatedMedicationResponse
from medcatalog.services.medication_service import MedicationService
from medcatalog.services.use_cases import GetMedicationDetailUseCase, GetMedicationListUseCase
from medcatalog.utils.fda_client import FDAApiClient

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/medications",
    tags=["Medications"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid filter"},
        502: {"model": ErrorResponse, "description": "FDA API error"},
    },
)


def get_medication_service(request: Request) -> MedicationService:
    """Build the service around the application's shared HTTP client."""
    settings = request.app.state.settings
    repository = FDAApiClient(
        api_key=settings.fda_api_key,
        http_client=request.app.state.http_client,
        base_url=settings.fda_ndc_url,
    )
    return MedicationService(repository)


@router.get("", response_model=PaginatedMedicationResponse)
async def list_medications(
    request: Request,
    page: Optional[str] = Query(None, description="Page number (default: 1)"),
    limit: Optional[str] = Query(None, description="Results per page, 1-100"),
    active_ingredient: Optional[str] = Query(None, alias="activeIngredient", description="Active ingredient name"),
    route: Optional[str] = Query(None, description="Route of administration, or ALL"),
    name: Optional[str] = Query(None, description="Brand or generic name of the drug"),
    service: MedicationService = Depends(get_medication_service),
):
    """
    List medications from the FDA NDC directory.

    Filters can be combined. Pagination metadata is computed from the total
    number of matches, which openFDA caps at 5000.
    """
    filters = {
        "page": page or 1,
        "limit": limit or request.app.state.settings.default_page_size,
        "activeIngredient": active_ingredient,
        "route": route,
        "name": name,
    }
    logger.info(f"Listing medications with filters {filters}")
    return await GetMedicationListUseCase(service).execute(filters)


@router.get(
    "/{medication_id}",
    response_model=MedicationResponse,
    responses={404: {"model": ErrorResponse, "description": "Medication not found"}},
)
async def get_medication(
    medication_id: str = Path(..., description="openFDA product_id"),
    service: MedicationService = Depends(get_medication_service),
):
    """Get a single medication by product identifier."""
    return await GetMedicationDetailUseCase(service).execute(medication_id)
