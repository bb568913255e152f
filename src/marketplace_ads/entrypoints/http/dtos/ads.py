from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketplace_ads.domain.ads import (
    AdCategory,
    BodyType,
    CommercialVehicleType,
    PropertyType,
    VehicleType,
)

DECIMAL_PATTERN = r"^\d+(\.\d{1,2})?$"


class CamelModel(BaseModel):
    """Wire models use camelCase names; Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class AdsSearchQueryDTO(CamelModel):
    """Query parameters for listing and searching ads."""

    page: int = Field(default=1, description="1-based page number", examples=[1], ge=1)
    limit: int = Field(default=20, description="Page size", examples=[20], ge=1, le=100)
    sort_by: str = Field(
        default="createdAt",
        description="One of createdAt, updatedAt, price, title, category",
        examples=["price"],
    )
    sort_order: str = Field(
        default="DESC",
        description="ASC or DESC (case-insensitive)",
        examples=["ASC"],
        pattern=r"^(?i:asc|desc)$",
    )

    category: AdCategory | None = Field(default=None, examples=["property"])
    search: str | None = Field(
        default=None,
        description="Full-text search over title, description and location",
        examples=["sea view"],
    )
    location: str | None = Field(
        default=None, description="Case-insensitive substring", examples=["Mumbai"]
    )
    min_price: str | None = Field(
        default=None, description="Decimal as string", examples=["1000000"], pattern=DECIMAL_PATTERN
    )
    max_price: str | None = Field(
        default=None, description="Decimal as string", examples=["10000000"], pattern=DECIMAL_PATTERN
    )
    posted_by: str | None = Field(default=None, description="Owner user id")
    is_active: bool | None = Field(default=None, description="Defaults to true when omitted")

    property_type: PropertyType | None = None
    min_bedrooms: int | None = Field(default=None, ge=0)
    max_bedrooms: int | None = Field(default=None, ge=0)
    min_bathrooms: int | None = Field(default=None, ge=0)
    max_bathrooms: int | None = Field(default=None, ge=0)
    min_area: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    max_area: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    is_furnished: bool | None = None
    has_parking: bool | None = None
    has_garden: bool | None = None

    vehicle_type: VehicleType | None = None
    manufacturer_id: list[str] | None = Field(
        default=None, description="One or more ids, repeated or comma-separated"
    )
    model_id: list[str] | None = None
    variant_id: list[str] | None = None
    transmission_type_id: list[str] | None = None
    fuel_type_id: list[str] | None = None
    color: str | None = Field(default=None, examples=["White"])
    max_mileage: int | None = Field(default=None, ge=0)
    is_first_owner: bool | None = None
    has_insurance: bool | None = None
    has_rc_book: bool | None = None
    min_year: int | None = Field(default=None, ge=1900)
    max_year: int | None = Field(default=None, ge=1900)

    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    min_payload: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    max_payload: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    axle_count: int | None = Field(default=None, ge=1, le=10)
    has_fitness: bool | None = None
    has_permit: bool | None = None
    min_seating: int | None = Field(default=None, ge=0)
    max_seating: int | None = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Write payloads
# ---------------------------------------------------------------------------


class AdPayloadFields(CamelModel):
    description: str | None = Field(default=None, examples=["2BHK with sea view"])
    price: str | None = Field(
        default=None,
        description="Decimal as string",
        examples=["4500000.00"],
        pattern=DECIMAL_PATTERN,
    )
    location: str | None = Field(default=None, examples=["Bandra, Mumbai"])

    property_type: PropertyType | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area_sqft: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    floor: int | None = None
    is_furnished: bool | None = None
    has_parking: bool | None = None
    has_garden: bool | None = None

    vehicle_type: VehicleType | None = None
    manufacturer_id: str | None = None
    model_id: str | None = None
    variant_id: str | None = None
    year: int | None = None
    mileage: int | None = None
    transmission_type_id: str | None = None
    fuel_type_id: str | None = None
    color: str | None = None
    is_first_owner: bool | None = None
    has_insurance: bool | None = None
    has_rc_book: bool | None = None

    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    payload_capacity: str | None = Field(default=None, pattern=DECIMAL_PATTERN)
    payload_unit: str | None = Field(default=None, examples=["kg"])
    axle_count: int | None = None
    seating_capacity: int | None = None
    has_fitness: bool | None = None
    has_permit: bool | None = None


class CreateAdRequestDTO(AdPayloadFields):
    """Unified create payload; which fields are required depends on the category."""

    category: AdCategory | None = Field(
        default=None,
        description="Inferred as commercial_vehicle when omitted and modelId is commercial",
    )
    images: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    additional_features: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "property",
                "description": "2BHK with sea view",
                "price": "4500000.00",
                "location": "Bandra, Mumbai",
                "propertyType": "apartment",
                "bedrooms": 2,
                "bathrooms": 2,
                "areaSqft": "950",
            }
        }
    )


class UpdateAdRequestDTO(AdPayloadFields):
    """Partial update; omitted fields stay unchanged. The category cannot change."""

    category: AdCategory | None = None
    images: list[str] | None = None
    is_active: bool | None = None
    amenities: list[str] | None = None
    additional_features: list[str] | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class OwnerDTO(CamelModel):
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class PropertyDetailsDTO(CamelModel):
    id: str
    property_type: str
    area_sqft: str
    bedrooms: int | None = None
    bathrooms: int | None = None
    floor: int | None = None
    is_furnished: bool
    has_parking: bool
    has_garden: bool
    amenities: list[str]


class VehicleDetailsDTO(CamelModel):
    id: str
    vehicle_type: str | None = None
    manufacturer_id: str
    model_id: str
    variant_id: str | None = None
    year: int
    mileage: int
    transmission_type_id: str
    fuel_type_id: str
    color: str
    is_first_owner: bool
    has_insurance: bool
    has_rc_book: bool
    additional_features: list[str]


class CommercialVehicleDetailsDTO(VehicleDetailsDTO):
    commercial_vehicle_type: str
    body_type: str
    payload_capacity: str
    payload_unit: str
    axle_count: int
    seating_capacity: int | None = None
    has_fitness: bool
    has_permit: bool


class InventoryRefDTO(CamelModel):
    id: str
    name: str


class InventorySummaryDTO(CamelModel):
    manufacturer: InventoryRefDTO | None = None
    model: InventoryRefDTO | None = None
    variant: InventoryRefDTO | None = None
    transmission_type: InventoryRefDTO | None = None
    fuel_type: InventoryRefDTO | None = None


class AdResponseDTO(CamelModel):
    id: str
    title: str
    description: str
    price: str
    images: list[str]
    location: str
    category: str
    is_active: bool
    posted_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    owner: OwnerDTO | None = None
    property_details: PropertyDetailsDTO | None = None
    vehicle_details: VehicleDetailsDTO | None = None
    commercial_vehicle_details: CommercialVehicleDetailsDTO | None = None
    year: int | None = None
    inventory: InventorySummaryDTO | None = None


class PaginatedAdsResponseDTO(CamelModel):
    data: list[AdResponseDTO]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class DeleteAdResponseDTO(CamelModel):
    id: str
    deleted: bool = True


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------


class WarmUpResponseDTO(CamelModel):
    warmed: int
    failed: int


class ConsistencyReportDTO(CamelModel):
    """Orphan ids per detail collection."""

    ads_missing_details: dict[str, list[str]]
    orphaned_details: dict[str, list[str]]
    has_issues: bool
    cleaned_up: bool
