from abc import ABC, abstractmethod
from typing import Optional

from medcatalog.models.fda_resources import MedicationFilter
from medcatalog.models.medication import CatalogPage, Medication


class MedicationRepository(ABC):
    """Port interface for medication data access."""

    @abstractmethod
    async def find_medications(self, filters: MedicationFilter) -> CatalogPage:
        """Fetch one page of medications matching the filter, with the total match count."""
        ...

    @abstractmethod
    async def find_by_id(self, medication_id: str) -> Optional[Medication]:
        """Fetch a single medication, or None if no record has that identifier."""
        ...
