"""
Medication Services Package

Repository port, catalog service and use cases for medication lookups.
"""

from medcatalog.services.repository import MedicationRepository
from medcatalog.services.medication_service import MedicationService
from medcatalog.services.use_cases import (
    GetMedicationDetailUseCase,
    GetMedicationListUseCase,
    to_medication_response,
)

__all__ = [
    'MedicationRepository',
    'MedicationService',
    'GetMedicationDetailUseCase',
    'GetMedicationListUseCase',
    'to_medication_response',
]
