"""
openFDA NDC Directory Client

Repository implementation backed by the openFDA NDC directory. Handles the
API's result-window ceiling, its status code conventions, and validation of
the response body before mapping records to Medication entities.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from medcatalog.config import FDA_NDC_ENDPOINT
from medcatalog.errors import ResponseValidationError, UpstreamError
from medcatalog.models.fda_resources import FDAProduct, FDAResponse, MedicationFilter
from medcatalog.models.medication import ActiveIngredient, CatalogPage, Medication, Packaging
from medcatalog.services.repository import MedicationRepository
from medcatalog.utils.api_clients import build_url, encode_search, parse_json, send_get
from medcatalog.utils.fda_query import identifier_query, is_queryable_identifier, translate_to_fda_query

logger = logging.getLogger(__name__)

# openFDA refuses to page deeper than this many records
MAX_SKIP_LIMIT = 5000


def map_to_medication(product: FDAProduct) -> Medication:
    """
    Map a validated openFDA product record to a Medication entity.

    Args:
        product: Product record from the NDC directory

    Returns:
        Medication entity
    """
    return Medication(
        id=product.product_id,
        brand_name=product.brand_name,
        generic_name=product.generic_name,
        labeler_name=product.labeler_name,
        active_ingredients=tuple(
            ActiveIngredient(name=ing.name, strength=ing.strength)
            for ing in product.active_ingredients
        ),
        routes=tuple(product.route or ()),
        packaging=tuple(
            Packaging(
                description=package.description,
                marketing_start_date=package.marketing_start_date,
                marketing_end_date=package.marketing_end_date,
                sample=package.sample,
                package_ndc=package.package_ndc,
            )
            for package in product.packaging
        ),
    )


def validate_fda_response(data: Dict[str, Any]) -> FDAResponse:
    try:
        return FDAResponse.model_validate(data)
    except ValidationError as e:
        logger.error(f"FDA API response failed validation: {e.error_count()} error(s)")
        raise ResponseValidationError(f"Invalid FDA API response: {str(e)}") from e


class FDAApiClient(MedicationRepository):
    """Medication repository backed by the openFDA NDC directory."""

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = FDA_NDC_ENDPOINT,
        max_skip_limit: int = MAX_SKIP_LIMIT,
    ):
        """
        Args:
            api_key: openFDA API key, sent as a query parameter (may be empty)
            http_client: Shared HTTP client owned by the application
            base_url: NDC directory endpoint
            max_skip_limit: Deepest record openFDA will serve
        """
        self.api_key = api_key
        self.http_client = http_client
        self.base_url = base_url
        self.max_skip_limit = max_skip_limit

    def get_max_pages(self, limit: int) -> int:
        """Number of pages of the given size that fit inside the result window."""
        return self.max_skip_limit // limit

    def build_url(self, search_query: str, limit: int, skip: int) -> str:
        params = []
        if self.api_key:
            params.append(("api_key", self.api_key))
        params.extend([
            ("search", encode_search(search_query)),
            ("limit", limit),
            ("skip", skip),
        ])
        return build_url(self.base_url, params)

    async def find_medications(self, filters: MedicationFilter) -> CatalogPage:
        """
        Find one page of medications matching the filter.

        Args:
            filters: Validated filter with page and limit

        Returns:
            CatalogPage with the mapped medications and the total, capped at the result window

        Raises:
            UpstreamError: If openFDA fails or cannot be reached
            ResponseValidationError: If the response body does not match the schema
        """
        max_pages = self.get_max_pages(filters.limit)
        if filters.page > max_pages:
            logger.info(
                f"Page {filters.page} is beyond the FDA result window "
                f"({max_pages} pages of {filters.limit}), skipping request"
            )
            return CatalogPage(medications=[], total=self.max_skip_limit)

        search_query = translate_to_fda_query(filters)
        logger.info(f"Querying FDA NDC directory with search={search_query} page={filters.page} limit={filters.limit}")
        url = self.build_url(search_query, filters.limit, filters.skip)
        response = await send_get(self.http_client, url)

        if response.status_code == 404:
            # openFDA reports "No matches found" as a 404
            logger.info(f"No FDA results for search={search_query}")
            return CatalogPage(medications=[], total=0)
        if response.status_code == 400:
            logger.warning(f"FDA API rejected search={search_query} skip={filters.skip}, returning empty page")
            return CatalogPage(medications=[], total=self.max_skip_limit)
        if not response.is_success:
            logger.error(f"HTTP error: {response.status_code} - {response.text[:200]}")
            raise UpstreamError(response.status_code, response.reason_phrase)

        validated = validate_fda_response(parse_json(response))
        total = min(validated.meta.results.total, self.max_skip_limit)
        medications = [map_to_medication(product) for product in validated.results]
        logger.info(f"Found {validated.meta.results.total} total results, returning {len(medications)} medications")
        return CatalogPage(medications=medications, total=total)

    async def find_by_id(self, medication_id: str) -> Optional[Medication]:
        """
        Find a single medication by product identifier.

        Args:
            medication_id: openFDA product_id

        Returns:
            The medication, or None if openFDA has no matching record or the
            identifier is empty or contains query characters

        Raises:
            UpstreamError: If openFDA fails or cannot be reached
            ResponseValidationError: If the response body does not match the schema
        """
        if not is_queryable_identifier(medication_id):
            # No product_id contains these characters, so nothing can match
            logger.info(f"Identifier {medication_id!r} cannot match any FDA product, skipping request")
            return None

        search_query = identifier_query(medication_id)
        url = self.build_url(search_query, 1, 0)
        response = await send_get(self.http_client, url)

        if response.status_code == 404:
            logger.info(f"No FDA product with id {medication_id}")
            return None
        if not response.is_success:
            logger.error(f"HTTP error: {response.status_code} - {response.text[:200]}")
            raise UpstreamError(response.status_code, response.reason_phrase)

        validated = validate_fda_response(parse_json(response))
        if not validated.results:
            return None
        return map_to_medication(validated.results[0])
