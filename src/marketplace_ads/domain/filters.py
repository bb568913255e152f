from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from marketplace_ads.domain.ads import (
    AdCategory,
    BodyType,
    CommercialVehicleType,
    PropertyType,
    VehicleType,
)
from marketplace_ads.domain.errors import FilterValidationError, PagingValidationError

MAX_LIMIT = 100
DEFAULT_LIMIT = 20
MIN_YEAR = 1900

# Wire name -> Ad attribute
SORTABLE_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "price": "price",
    "title": "title",
    "category": "category",
}

PROPERTY_FILTER_FIELDS = (
    "property_type",
    "min_bedrooms",
    "max_bedrooms",
    "min_bathrooms",
    "max_bathrooms",
    "min_area",
    "max_area",
    "is_furnished",
    "has_parking",
    "has_garden",
)

VEHICLE_FILTER_FIELDS = (
    "vehicle_type",
    "manufacturer_ids",
    "model_ids",
    "variant_ids",
    "transmission_type_ids",
    "fuel_type_ids",
    "color",
    "max_mileage",
    "is_first_owner",
    "has_insurance",
    "has_rc_book",
    "min_year",
    "max_year",
)

COMMERCIAL_FILTER_FIELDS = (
    "commercial_vehicle_type",
    "body_type",
    "min_payload",
    "max_payload",
    "axle_count",
    "has_fitness",
    "has_permit",
    "min_seating",
    "max_seating",
)


@dataclass(frozen=True, slots=True)
class AdFilters:
    """Flat search filters; AND semantics across every field that is set.

    ``None`` means "not filtered". ``is_active`` left unset behaves as True.
    Id-valued filters hold one or more ids.
    """

    # Base ad
    category: AdCategory | None = None
    search: str | None = None
    location: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None
    posted_by: str | None = None
    is_active: bool | None = None

    # Property details
    property_type: PropertyType | None = None
    min_bedrooms: int | None = None
    max_bedrooms: int | None = None
    min_bathrooms: int | None = None
    max_bathrooms: int | None = None
    min_area: Decimal | None = None
    max_area: Decimal | None = None
    is_furnished: bool | None = None
    has_parking: bool | None = None
    has_garden: bool | None = None

    # Vehicle details
    vehicle_type: VehicleType | None = None
    manufacturer_ids: tuple[str, ...] | None = None
    model_ids: tuple[str, ...] | None = None
    variant_ids: tuple[str, ...] | None = None
    transmission_type_ids: tuple[str, ...] | None = None
    fuel_type_ids: tuple[str, ...] | None = None
    color: str | None = None
    max_mileage: int | None = None
    is_first_owner: bool | None = None
    has_insurance: bool | None = None
    has_rc_book: bool | None = None
    min_year: int | None = None
    max_year: int | None = None

    # Commercial vehicle details
    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    min_payload: Decimal | None = None
    max_payload: Decimal | None = None
    axle_count: int | None = None
    has_fitness: bool | None = None
    has_permit: bool | None = None
    min_seating: int | None = None
    max_seating: int | None = None

    def has_property_filters(self) -> bool:
        return self._any_set(PROPERTY_FILTER_FIELDS)

    def has_vehicle_filters(self) -> bool:
        return self._any_set(VEHICLE_FILTER_FIELDS)

    def has_commercial_filters(self) -> bool:
        return self._any_set(COMMERCIAL_FILTER_FIELDS)

    def active_fields(self) -> list[str]:
        """Names of the fields carrying a value (empty strings and tuples count as unset)."""
        return [f.name for f in fields(self) if is_set(getattr(self, f.name))]

    def _any_set(self, names: tuple[str, ...]) -> bool:
        return any(is_set(getattr(self, name)) for name in names)

    def validate(self) -> None:
        """
        Validate filter parameters.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        for name in ("price_min", "price_max", "min_area", "max_area", "min_payload", "max_payload"):
            value = getattr(self, name)
            # Guardrails: prevent float leakage past boundary
            if value is not None and not isinstance(value, Decimal):
                raise FilterValidationError(
                    f"{name} must be Decimal or None (no floats past the boundary)"
                )
            if value is not None and value < 0:
                raise FilterValidationError(f"{name} must be >= 0")

        ranges = (
            ("price_min", "price_max"),
            ("min_bedrooms", "max_bedrooms"),
            ("min_bathrooms", "max_bathrooms"),
            ("min_area", "max_area"),
            ("min_year", "max_year"),
            ("min_payload", "max_payload"),
            ("min_seating", "max_seating"),
        )
        for low_name, high_name in ranges:
            low = getattr(self, low_name)
            high = getattr(self, high_name)
            if low is not None and high is not None and low > high:
                raise FilterValidationError(f"{low_name} cannot be greater than {high_name}")

        for name in ("min_year", "max_year"):
            year = getattr(self, name)
            if year is not None and year < MIN_YEAR:
                raise FilterValidationError(f"{name} must be >= {MIN_YEAR}")

        if self.max_mileage is not None and self.max_mileage < 0:
            raise FilterValidationError("max_mileage must be >= 0")
        if self.axle_count is not None and not 1 <= self.axle_count <= 10:
            raise FilterValidationError("axle_count must be between 1 and 10")


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit < 1:
            raise PagingValidationError("limit must be >= 1")
        if self.limit > MAX_LIMIT:
            raise PagingValidationError(f"limit must be <= {MAX_LIMIT}")


@dataclass(frozen=True, slots=True)
class Sorting:
    sort_by: str = "createdAt"
    sort_order: str = "DESC"

    @property
    def attribute(self) -> str:
        return SORTABLE_FIELDS[self.sort_by]

    @property
    def descending(self) -> bool:
        return self.sort_order.upper() == "DESC"

    def validate(self) -> None:
        if self.sort_by not in SORTABLE_FIELDS:
            raise PagingValidationError(
                f"sortBy must be one of {sorted(SORTABLE_FIELDS)}"
            )
        if self.sort_order.upper() not in ("ASC", "DESC"):
            raise PagingValidationError("sortOrder must be ASC or DESC")


def is_set(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, tuple, list)) and len(value) == 0:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True
