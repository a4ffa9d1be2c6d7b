"""
Medication Domain Models

Defines data classes for medication records and paginated lookups.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ActiveIngredient:
    """An active ingredient and its labelled strength."""
    name: str
    strength: str


@dataclass(frozen=True)
class Packaging:
    """Represents one package configuration of a product."""
    description: str
    marketing_start_date: Optional[str] = None
    marketing_end_date: Optional[str] = None
    sample: Optional[bool] = None
    package_ndc: Optional[str] = None


@dataclass(frozen=True)
class Medication:
    """Represents a medication product from the NDC directory."""
    id: str
    brand_name: Optional[str]
    generic_name: str
    labeler_name: str
    active_ingredients: Tuple[ActiveIngredient, ...] = ()
    routes: Tuple[str, ...] = ()
    packaging: Tuple[Packaging, ...] = ()

    @property
    def primary_route(self) -> str:
        """First listed route of administration, or an empty string."""
        return self.routes[0] if self.routes else ""

    def packaging_descriptions(self) -> List[str]:
        return [package.description for package in self.packaging]


@dataclass(frozen=True)
class CatalogPage:
    """One page of medications as returned by a repository."""
    medications: List[Medication] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """A page of items with pagination metadata derived from the requested page."""
    items: List[T]
    total: int
    current_page: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, items: List[T], total: int, page: int, limit: int) -> "PaginatedResult[T]":
        """
        Derive pagination metadata from the total and the requested page/limit.

        Args:
            items: Items on the requested page
            total: Number of items matching the query (not the page size)
            page: Requested page number (1-based)
            limit: Requested page size

        Returns:
            PaginatedResult with total_pages and has_more computed
        """
        total_pages = math.ceil(total / limit)
        return cls(
            items=list(items),
            total=total,
            current_page=page,
            total_pages=total_pages,
            has_more=page < total_pages,
        )
