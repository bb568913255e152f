from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ModelVehicleType(str, Enum):
    """Vehicle type declared on an inventory model."""

    SUV = "SUV"
    SEDAN = "Sedan"
    TRUCK = "Truck"
    COUPE = "Coupe"
    HATCHBACK = "Hatchback"
    CONVERTIBLE = "Convertible"
    TWO_WHEELER = "two-wheeler"
    MUV = "MUV"
    COMPACT_SUV = "Compact SUV"
    SUB_COMPACT_SUV = "Sub-Compact SUV"


@dataclass(frozen=True)
class Manufacturer:
    id: str
    name: str
    origin_country: str | None = None


@dataclass(frozen=True)
class VehicleModel:
    id: str
    name: str
    manufacturer_id: str
    vehicle_type: ModelVehicleType | None = None
    display_name: str | None = None
    # Commercial metadata stored on the model itself
    is_commercial_vehicle: bool = False
    commercial_vehicle_type: str | None = None
    commercial_body_type: str | None = None
    default_payload_capacity: Decimal | None = None
    default_payload_unit: str | None = None
    default_axle_count: int | None = None
    default_seating_capacity: int | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


@dataclass(frozen=True)
class VehicleVariant:
    id: str
    name: str
    model_id: str
    price: Decimal | None = None


@dataclass(frozen=True)
class FuelType:
    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class TransmissionType:
    id: str
    name: str
    description: str | None = None
