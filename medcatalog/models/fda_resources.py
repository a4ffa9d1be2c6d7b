from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from medcatalog.errors import FilterValidationError

# Route value meaning "any route"
ALL_ROUTES = "ALL"

MAX_PAGE_SIZE = 100


class MedicationFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = Field(1, ge=1, description="Page number, starting at 1")
    limit: int = Field(10, ge=1, le=MAX_PAGE_SIZE, description="Results per page (1-100)")
    active_ingredient: Optional[str] = Field(None, alias="activeIngredient", description="Active ingredient name")
    route: Optional[str] = Field(None, description="Route of administration; 'ALL' means any route")
    name: Optional[str] = Field(None, description="Brand or generic name of the drug")

    @field_validator("active_ingredient", "route", "name", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("route")
    @classmethod
    def drop_all_routes(cls, value: Optional[str]) -> Optional[str]:
        # The sentinel must never reach dispatch or query translation
        if value is not None and value.strip().upper() == ALL_ROUTES:
            return None
        return value

    @classmethod
    def parse(cls, data: Any) -> "MedicationFilter":
        """
        Validate raw filter input.

        Args:
            data: Mapping of filter values (camelCase or snake_case keys) or a MedicationFilter

        Returns:
            Validated filter with the route sentinel removed

        Raises:
            FilterValidationError: If page or limit are out of range or values have the wrong type
        """
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors()
            ]
            details = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors)
            raise FilterValidationError(f"Invalid medication filter: {details}", errors=errors) from e

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


# openFDA NDC directory response schema

class FDAActiveIngredient(BaseModel):
    name: str = Field(..., description="Name of the active ingredient")
    strength: str = Field(..., description="Strength of the active ingredient")


class FDAPackaging(BaseModel):
    description: str = Field(..., description="Package description")
    package_ndc: Optional[str] = Field(None, description="Package-level NDC")
    marketing_start_date: Optional[str] = None
    marketing_end_date: Optional[str] = None
    sample: Optional[bool] = None


class FDAProduct(BaseModel):
    product_id: str = Field(..., description="Unique product identifier")
    brand_name: Optional[str] = Field(None, description="Brand name of the drug")
    generic_name: str = Field(..., description="Generic name of the drug")
    labeler_name: str = Field(..., description="Name of the labeler/manufacturer")
    active_ingredients: List[FDAActiveIngredient] = Field(..., description="Active ingredients and their strengths")
    route: Optional[List[str]] = Field(None, description="Routes of administration")
    packaging: List[FDAPackaging] = Field(..., description="Package configurations")


class FDAResultsMeta(BaseModel):
    skip: int
    limit: int
    total: int


class FDAMeta(BaseModel):
    disclaimer: Optional[str] = None
    last_updated: Optional[str] = None
    results: FDAResultsMeta


class FDAResponse(BaseModel):
    meta: FDAMeta
    results: List[FDAProduct]


# API response models

class ActiveIngredientResponse(BaseModel):
    name: str = Field(..., description="Name of the active ingredient")
    strength: str = Field(..., description="Strength of the active ingredient")


class MedicationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Product identifier")
    brand_name: str = Field("", alias="brandName", description="Brand name, empty when the product has none")
    generic_name: str = Field(..., alias="genericName")
    labeler_name: str = Field(..., alias="labelerName")
    active_ingredients: List[ActiveIngredientResponse] = Field([], alias="activeIngredients")
    route: str = Field("", description="Primary route of administration")
    packaging: List[str] = Field([], description="Package descriptions")


class PaginatedMedicationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    medications: List[MedicationResponse] = Field(..., description="Medications on this page")
    total: int = Field(..., description="Total number of medications matching the filter")
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    has_more: bool = Field(..., alias="hasMore")


class ErrorResponse(BaseModel):
    error: Dict[str, Any]
