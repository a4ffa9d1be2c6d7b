"""
Medication Service

Wraps a medication repository behind a paginated contract and provides the
named lookups used by the API.
"""
import logging
from typing import Optional

from medcatalog.errors import CatalogError
from medcatalog.models.fda_resources import MedicationFilter
from medcatalog.models.medication import Medication, PaginatedResult
from medcatalog.services.repository import MedicationRepository

logger = logging.getLogger(__name__)


class MedicationService:
    """Medication lookups with pagination metadata."""

    def __init__(self, repository: MedicationRepository):
        self.repository = repository

    async def get_medications(self, filters: MedicationFilter) -> PaginatedResult[Medication]:
        """
        Retrieve a page of medications matching the filter.

        Pagination metadata is always recomputed from the total and the
        requested page and limit.

        Args:
            filters: Validated filter

        Returns:
            PaginatedResult of medications

        Raises:
            CatalogError: If the repository lookup fails
        """
        try:
            page = await self.repository.find_medications(filters)
        except Exception as e:
            logger.error(f"Error retrieving medications: {str(e)}")
            raise CatalogError(f"Failed to fetch medications: {str(e)}") from e

        return PaginatedResult.build(page.medications, page.total, filters.page, filters.limit)

    async def get_medication_by_id(self, medication_id: str) -> Optional[Medication]:
        """
        Retrieve a single medication.

        Returns:
            The medication, or None if it does not exist

        Raises:
            CatalogError: If the repository lookup fails
        """
        try:
            return await self.repository.find_by_id(medication_id)
        except Exception as e:
            logger.error(f"Error retrieving medication {medication_id}: {str(e)}")
            raise CatalogError(f"Failed to fetch medication with ID {medication_id}: {str(e)}") from e

    async def search_by_active_ingredient(
        self, ingredient: str, page: int = 1, limit: int = 10
    ) -> PaginatedResult[Medication]:
        return await self.get_medications(
            MedicationFilter.parse({"active_ingredient": ingredient, "page": page, "limit": limit})
        )

    async def filter_by_route(self, route: str, page: int = 1, limit: int = 10) -> PaginatedResult[Medication]:
        return await self.get_medications(MedicationFilter.parse({"route": route, "page": page, "limit": limit}))

    async def filter_by_name(self, name: str, page: int = 1, limit: int = 10) -> PaginatedResult[Medication]:
        return await self.get_medications(MedicationFilter.parse({"name": name, "page": page, "limit": limit}))

    async def search_by_ingredient_and_route(
        self, ingredient: str, route: str, page: int = 1, limit: int = 10
    ) -> PaginatedResult[Medication]:
        return await self.get_medications(
            MedicationFilter.parse(
                {"active_ingredient": ingredient, "route": route, "page": page, "limit": limit}
            )
        )
