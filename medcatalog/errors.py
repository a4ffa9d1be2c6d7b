"""
Medication Catalog Errors

Exception types raised across the medication lookup layers. Every error carries
a machine readable code and the HTTP status the API should answer with.
"""
from typing import Any, Dict, List, Optional


class MedicationError(Exception):
    """Base class for medication lookup errors."""

    code = "MEDICATION_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code.lower(),
            "type": type(self).__name__,
        }


class FilterValidationError(MedicationError):
    """Filter or pagination parameters failed validation."""

    code = "INVALID_FILTER"
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class UpstreamError(MedicationError):
    """openFDA answered with a status we do not treat as an empty result, or could not be reached."""

    code = "UPSTREAM_ERROR"
    status_code = 502

    def __init__(self, upstream_status: Optional[int], reason: str):
        if upstream_status is None:
            message = f"FDA API error: {reason}"
        else:
            message = f"FDA API error: {upstream_status} {reason}"
        super().__init__(message)
        self.upstream_status = upstream_status
        self.reason = reason


class ResponseValidationError(MedicationError):
    """openFDA response body did not match the expected schema."""

    code = "INVALID_RESPONSE"
    status_code = 502


class CatalogError(MedicationError):
    """Service level wrapper around any repository failure."""

    code = "FETCH_ERROR"
    status_code = 500


class MedicationNotFoundError(MedicationError):
    code = "NOT_FOUND"
    status_code = 404
