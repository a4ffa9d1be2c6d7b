"""
Medication Use Cases

Application-level operations behind the medication endpoints: filter
validation, choosing the service lookup, and mapping entities to responses.
"""
import logging
from typing import Any, Mapping, Union

from medcatalog.errors import MedicationNotFoundError
from medcatalog.models.fda_resources import (
    ActiveIngredientResponse,
    MedicationFilter,
    MedicationResponse,
    PaginatedMedicationResponse,
)
from medcatalog.models.medication import Medication
from medcatalog.services.medication_service import MedicationService

logger = logging.getLogger(__name__)


def to_medication_response(medication: Medication) -> MedicationResponse:
    """
    Map a Medication entity to its API representation.

    Only the primary route and the package descriptions are exposed.
    """
    return MedicationResponse(
        id=medication.id,
        brand_name=medication.brand_name or "",
        generic_name=medication.generic_name,
        labeler_name=medication.labeler_name,
        active_ingredients=[
            ActiveIngredientResponse(name=ing.name, strength=ing.strength)
            for ing in medication.active_ingredients
        ],
        route=medication.primary_route,
        packaging=medication.packaging_descriptions(),
    )


class GetMedicationListUseCase:
    """Paginated medication list with optional filters."""

    def __init__(self, medication_service: MedicationService):
        self.medication_service = medication_service

    async def execute(self, raw_filters: Union[MedicationFilter, Mapping[str, Any]]) -> PaginatedMedicationResponse:
        """
        Validate the filter, run the matching lookup and format the page.

        Args:
            raw_filters: Filter values as received from the client

        Returns:
            Paginated medication response

        Raises:
            FilterValidationError: If the filter is invalid (raised before any lookup)
            CatalogError: If the lookup fails
        """
        filters = MedicationFilter.parse(raw_filters)
        service = self.medication_service

        if filters.active_ingredient and filters.route:
            result = await service.search_by_ingredient_and_route(
                filters.active_ingredient, filters.route, filters.page, filters.limit
            )
        elif filters.active_ingredient:
            result = await service.search_by_active_ingredient(filters.active_ingredient, filters.page, filters.limit)
        elif filters.route:
            result = await service.filter_by_route(filters.route, filters.page, filters.limit)
        else:
            result = await service.get_medications(filters)

        return PaginatedMedicationResponse(
            medications=[to_medication_response(med) for med in result.items],
            total=result.total,
            current_page=result.current_page,
            total_pages=result.total_pages,
            has_more=result.has_more,
        )


class GetMedicationDetailUseCase:
    """Single medication lookup where a missing record is an error."""

    def __init__(self, medication_service: MedicationService):
        self.medication_service = medication_service

    async def execute(self, medication_id: str) -> MedicationResponse:
        medication = await self.medication_service.get_medication_by_id(medication_id)
        if medication is None:
            logger.warning(f"Medication not found: {medication_id}")
            raise MedicationNotFoundError(f"Medication not found: {medication_id}")
        return to_medication_response(medication)
