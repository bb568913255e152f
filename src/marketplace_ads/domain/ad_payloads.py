"""Write-side payloads for the ad aggregate.

``AdDraft`` is the unified create payload (base fields plus every
category-specific field); ``AdPatch`` is the partial update payload.
Both are validated here, before any store access.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Any

from marketplace_ads.domain.ads import (
    NON_RESIDENTIAL_PROPERTY_TYPES,
    RESIDENTIAL_PROPERTY_TYPES,
    Ad,
    AdCategory,
    AdDetail,
    BodyType,
    CommercialVehicleDetails,
    CommercialVehicleType,
    PropertyDetails,
    PropertyType,
    VehicleDetails,
    VehicleType,
)
from marketplace_ads.domain.errors import ValidationError
from marketplace_ads.domain.filters import MIN_YEAR

VEHICLE_REQUIRED_FIELDS = (
    "vehicle_type",
    "manufacturer_id",
    "model_id",
    "year",
    "mileage",
    "transmission_type_id",
    "fuel_type_id",
    "color",
)

COMMERCIAL_REQUIRED_FIELDS = (
    "commercial_vehicle_type",
    "body_type",
    "payload_capacity",
    "manufacturer_id",
    "model_id",
    "year",
    "mileage",
    "transmission_type_id",
    "fuel_type_id",
    "color",
)

# Attribute -> wire name, used in field-level error entries
_WIRE_NAMES = {
    "area_sqft": "areaSqft",
    "property_type": "propertyType",
    "vehicle_type": "vehicleType",
    "manufacturer_id": "manufacturerId",
    "model_id": "modelId",
    "variant_id": "variantId",
    "transmission_type_id": "transmissionTypeId",
    "fuel_type_id": "fuelTypeId",
    "commercial_vehicle_type": "commercialVehicleType",
    "body_type": "bodyType",
    "payload_capacity": "payloadCapacity",
    "payload_unit": "payloadUnit",
    "axle_count": "axleCount",
    "seating_capacity": "seatingCapacity",
}


def wire_name(attribute: str) -> str:
    return _WIRE_NAMES.get(attribute, attribute)


def _error(attribute: str, message: str, code: str) -> dict[str, str]:
    return {"field": wire_name(attribute), "message": message, "code": code}


@dataclass(frozen=True)
class AdDraft:
    category: AdCategory | None = None
    description: str | None = None
    price: Decimal | None = None
    location: str | None = None
    images: tuple[str, ...] = ()

    # Property
    property_type: PropertyType | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area_sqft: Decimal | None = None
    floor: int | None = None
    is_furnished: bool | None = None
    has_parking: bool | None = None
    has_garden: bool | None = None
    amenities: tuple[str, ...] = ()

    # Vehicle / two-wheeler / commercial vehicle
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
    additional_features: tuple[str, ...] = ()

    # Commercial vehicle only
    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    payload_capacity: Decimal | None = None
    payload_unit: str | None = None
    axle_count: int | None = None
    seating_capacity: int | None = None
    has_fitness: bool | None = None
    has_permit: bool | None = None

    def fill_missing(self, **values: Any) -> AdDraft:
        """Return a copy where only the unset (None) fields take the given values."""
        updates = {
            name: value
            for name, value in values.items()
            if value is not None and getattr(self, name) is None
        }
        return replace(self, **updates) if updates else self

    def to_ad(self, ad_id: str, posted_by: str, title: str = "") -> Ad:
        """Base record of a validated draft."""
        return Ad(
            id=ad_id,
            description=self.description.strip(),
            price=self.price,
            location=self.location.strip(),
            category=self.category,
            posted_by=posted_by,
            title=title,
            images=tuple(self.images),
        )

    def to_detail(self, ad_id: str, detail_id: str) -> AdDetail:
        """Category detail record of a validated draft; unset flags become False."""
        if self.category is AdCategory.PROPERTY:
            return PropertyDetails(
                id=detail_id,
                ad_id=ad_id,
                property_type=self.property_type,
                area_sqft=self.area_sqft,
                bedrooms=self.bedrooms,
                bathrooms=self.bathrooms,
                floor=self.floor,
                is_furnished=bool(self.is_furnished),
                has_parking=bool(self.has_parking),
                has_garden=bool(self.has_garden),
                amenities=tuple(self.amenities),
            )

        vehicle_fields = dict(
            id=detail_id,
            ad_id=ad_id,
            manufacturer_id=self.manufacturer_id,
            model_id=self.model_id,
            variant_id=self.variant_id,
            year=self.year,
            mileage=self.mileage,
            transmission_type_id=self.transmission_type_id,
            fuel_type_id=self.fuel_type_id,
            color=self.color.strip(),
            is_first_owner=bool(self.is_first_owner),
            has_insurance=bool(self.has_insurance),
            has_rc_book=bool(self.has_rc_book),
            additional_features=tuple(self.additional_features),
        )
        if self.category is AdCategory.COMMERCIAL_VEHICLE:
            return CommercialVehicleDetails(
                **vehicle_fields,
                vehicle_type=self.vehicle_type,
                commercial_vehicle_type=self.commercial_vehicle_type,
                body_type=self.body_type,
                payload_capacity=self.payload_capacity,
                payload_unit=self.payload_unit or "kg",
                axle_count=self.axle_count or 2,
                seating_capacity=self.seating_capacity,
                has_fitness=bool(self.has_fitness),
                has_permit=bool(self.has_permit),
            )
        return VehicleDetails(**vehicle_fields, vehicle_type=self.vehicle_type)

    def validate(self) -> None:
        """
        Validate required fields for the draft's category.

        Raises:
            ValidationError: With one entry per missing or invalid field
        """
        errors: list[dict[str, str]] = []

        if not self.description or not self.description.strip():
            errors.append(_error("description", "Required for all ad types", "REQUIRED"))
        if self.price is None:
            errors.append(_error("price", "Required for all ad types", "REQUIRED"))
        if not self.location or not self.location.strip():
            errors.append(_error("location", "Required for all ad types", "REQUIRED"))

        if self.category is None:
            errors.append(_error("category", "Required", "REQUIRED"))
        elif self.category is AdCategory.PROPERTY:
            errors.extend(self._property_errors())
        elif self.category is AdCategory.COMMERCIAL_VEHICLE:
            errors.extend(self._missing(COMMERCIAL_REQUIRED_FIELDS, "Commercial vehicle ads"))
        else:
            errors.extend(self._missing(VEHICLE_REQUIRED_FIELDS, "Vehicle ads"))

        errors.extend(_range_errors(self))

        if errors:
            raise ValidationError(errors=errors)

    def _missing(self, names: tuple[str, ...], label: str) -> list[dict[str, str]]:
        return [
            _error(name, f"{label} require {wire_name(name)}", "REQUIRED")
            for name in names
            if _is_missing(getattr(self, name))
        ]

    def _property_errors(self) -> list[dict[str, str]]:
        errors = self._missing(("property_type", "area_sqft"), "Property ads")
        if self.property_type in RESIDENTIAL_PROPERTY_TYPES:
            for name in ("bedrooms", "bathrooms"):
                if getattr(self, name) is None:
                    errors.append(
                        _error(name, "Required for apartment, house and villa", "REQUIRED")
                    )
        elif self.property_type in NON_RESIDENTIAL_PROPERTY_TYPES:
            for name in ("bedrooms", "bathrooms"):
                if getattr(self, name) is not None:
                    errors.append(
                        _error(
                            name,
                            f"Not allowed for {self.property_type.value} properties",
                            "NOT_ALLOWED",
                        )
                    )
        return errors


@dataclass(frozen=True)
class AdPatch:
    """Partial update. ``None`` leaves a field unchanged."""

    category: AdCategory | None = None
    description: str | None = None
    price: Decimal | None = None
    location: str | None = None
    images: tuple[str, ...] | None = None
    is_active: bool | None = None

    property_type: PropertyType | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    area_sqft: Decimal | None = None
    floor: int | None = None
    is_furnished: bool | None = None
    has_parking: bool | None = None
    has_garden: bool | None = None
    amenities: tuple[str, ...] | None = None

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
    additional_features: tuple[str, ...] | None = None

    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    payload_capacity: Decimal | None = None
    payload_unit: str | None = None
    axle_count: int | None = None
    seating_capacity: int | None = None
    has_fitness: bool | None = None
    has_permit: bool | None = None

    def changes(self, names: tuple[str, ...] | list[str]) -> dict[str, Any]:
        """Set values among ``names`` (the ones to merge into a record)."""
        return {name: getattr(self, name) for name in names if getattr(self, name) is not None}

    def validate(self) -> None:
        errors = _range_errors(self)
        if self.description is not None and not self.description.strip():
            errors.append(_error("description", "Must not be blank", "INVALID_VALUE"))
        if self.location is not None and not self.location.strip():
            errors.append(_error("location", "Must not be blank", "INVALID_VALUE"))
        if errors:
            raise ValidationError(errors=errors)


def vehicle_title(model_label: str | None, year: int | None) -> str:
    """Title of a vehicle ad, e.g. "Swift Dzire 2019"."""
    return f"{model_label or 'Vehicle'} {year if year is not None else ''}".strip()


def field_names(record_type: type) -> tuple[str, ...]:
    return tuple(f.name for f in fields(record_type))


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _range_errors(payload: AdDraft | AdPatch) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    for name in ("price", "area_sqft", "payload_capacity", "bedrooms", "bathrooms", "mileage", "seating_capacity"):
        value = getattr(payload, name)
        if value is not None and value < 0:
            errors.append(_error(name, "Must be >= 0", "INVALID_VALUE"))
    if payload.year is not None and payload.year < MIN_YEAR:
        errors.append(_error("year", f"Must be >= {MIN_YEAR}", "INVALID_VALUE"))
    if payload.axle_count is not None and not 1 <= payload.axle_count <= 10:
        errors.append(_error("axle_count", "Must be between 1 and 10", "INVALID_VALUE"))
    return errors
