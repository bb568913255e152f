"""Commercial-vehicle classification of inventory models.

A model is commercial when it says so itself (``is_commercial_vehicle``) or
when its declared vehicle type is in ``COMMERCIAL_MODEL_TYPES``. Stored model
metadata always wins; the per-type tables below fill whatever is missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from marketplace_ads.domain.ads import BodyType, CommercialVehicleType
from marketplace_ads.domain.inventory import ModelVehicleType, VehicleModel

COMMERCIAL_MODEL_TYPES = frozenset({ModelVehicleType.TRUCK})

DEFAULT_PAYLOAD_UNIT = "kg"

COMMERCIAL_TYPE_BY_MODEL_TYPE: dict[ModelVehicleType, CommercialVehicleType] = {
    ModelVehicleType.TRUCK: CommercialVehicleType.TRUCK,
    ModelVehicleType.SUV: CommercialVehicleType.VAN,
    ModelVehicleType.SEDAN: CommercialVehicleType.VAN,
    ModelVehicleType.HATCHBACK: CommercialVehicleType.VAN,
    ModelVehicleType.COUPE: CommercialVehicleType.VAN,
    ModelVehicleType.CONVERTIBLE: CommercialVehicleType.VAN,
    ModelVehicleType.TWO_WHEELER: CommercialVehicleType.VAN,
    ModelVehicleType.MUV: CommercialVehicleType.VAN,
    ModelVehicleType.COMPACT_SUV: CommercialVehicleType.VAN,
    ModelVehicleType.SUB_COMPACT_SUV: CommercialVehicleType.VAN,
}

BODY_TYPE_BY_MODEL_TYPE: dict[ModelVehicleType, BodyType] = {
    ModelVehicleType.TRUCK: BodyType.FLATBED,
    ModelVehicleType.SUV: BodyType.BOX,
    ModelVehicleType.SEDAN: BodyType.PASSENGER,
    ModelVehicleType.HATCHBACK: BodyType.PASSENGER,
    ModelVehicleType.COUPE: BodyType.PASSENGER,
    ModelVehicleType.CONVERTIBLE: BodyType.PASSENGER,
    ModelVehicleType.TWO_WHEELER: BodyType.PASSENGER,
    ModelVehicleType.MUV: BodyType.PASSENGER,
    ModelVehicleType.COMPACT_SUV: BodyType.BOX,
    ModelVehicleType.SUB_COMPACT_SUV: BodyType.BOX,
}

# Payload in kg
PAYLOAD_BY_MODEL_TYPE: dict[ModelVehicleType, Decimal] = {
    ModelVehicleType.TRUCK: Decimal("5000"),
    ModelVehicleType.SUV: Decimal("1000"),
    ModelVehicleType.SEDAN: Decimal("500"),
    ModelVehicleType.HATCHBACK: Decimal("400"),
    ModelVehicleType.COUPE: Decimal("300"),
    ModelVehicleType.CONVERTIBLE: Decimal("300"),
    ModelVehicleType.TWO_WHEELER: Decimal("150"),
    ModelVehicleType.MUV: Decimal("800"),
    ModelVehicleType.COMPACT_SUV: Decimal("800"),
    ModelVehicleType.SUB_COMPACT_SUV: Decimal("600"),
}

AXLES_BY_MODEL_TYPE: dict[ModelVehicleType, int] = {
    ModelVehicleType.TWO_WHEELER: 1,
}

SEATS_BY_MODEL_TYPE: dict[ModelVehicleType, int] = {
    ModelVehicleType.TRUCK: 3,
    ModelVehicleType.SUV: 7,
    ModelVehicleType.SEDAN: 5,
    ModelVehicleType.HATCHBACK: 5,
    ModelVehicleType.COUPE: 4,
    ModelVehicleType.CONVERTIBLE: 4,
    ModelVehicleType.TWO_WHEELER: 2,
    ModelVehicleType.MUV: 8,
    ModelVehicleType.COMPACT_SUV: 5,
    ModelVehicleType.SUB_COMPACT_SUV: 5,
}

# Used when the model declares no vehicle type at all
FALLBACK_COMMERCIAL_TYPE = CommercialVehicleType.TRUCK
FALLBACK_BODY_TYPE = BodyType.FLATBED
FALLBACK_PAYLOAD = Decimal("1000")
FALLBACK_AXLES = 2
FALLBACK_SEATS = 5


@dataclass(frozen=True, slots=True)
class CommercialVehicleDefaults:
    is_commercial_vehicle: bool
    commercial_vehicle_type: CommercialVehicleType | None = None
    body_type: BodyType | None = None
    payload_capacity: Decimal | None = None
    payload_unit: str | None = None
    axle_count: int | None = None
    seating_capacity: int | None = None

    def as_draft_values(self) -> dict[str, object]:
        return {
            "commercial_vehicle_type": self.commercial_vehicle_type,
            "body_type": self.body_type,
            "payload_capacity": self.payload_capacity,
            "payload_unit": self.payload_unit,
            "axle_count": self.axle_count,
            "seating_capacity": self.seating_capacity,
        }


NOT_COMMERCIAL = CommercialVehicleDefaults(is_commercial_vehicle=False)


def is_commercial_model(model: VehicleModel) -> bool:
    return model.is_commercial_vehicle or model.vehicle_type in COMMERCIAL_MODEL_TYPES


def defaults_for_model(model: VehicleModel) -> CommercialVehicleDefaults:
    """Classify ``model`` and compute commercial defaults for it."""
    if not is_commercial_model(model):
        return NOT_COMMERCIAL

    kind = model.vehicle_type
    return CommercialVehicleDefaults(
        is_commercial_vehicle=True,
        commercial_vehicle_type=(
            _parse_enum(CommercialVehicleType, model.commercial_vehicle_type)
            or COMMERCIAL_TYPE_BY_MODEL_TYPE.get(kind, FALLBACK_COMMERCIAL_TYPE)
        ),
        body_type=(
            _parse_enum(BodyType, model.commercial_body_type)
            or BODY_TYPE_BY_MODEL_TYPE.get(kind, FALLBACK_BODY_TYPE)
        ),
        payload_capacity=(
            model.default_payload_capacity
            or PAYLOAD_BY_MODEL_TYPE.get(kind, FALLBACK_PAYLOAD)
        ),
        payload_unit=model.default_payload_unit or DEFAULT_PAYLOAD_UNIT,
        axle_count=model.default_axle_count or AXLES_BY_MODEL_TYPE.get(kind, FALLBACK_AXLES),
        seating_capacity=(
            model.default_seating_capacity or SEATS_BY_MODEL_TYPE.get(kind, FALLBACK_SEATS)
        ),
    )


def _parse_enum(enum_type, raw: str | None):
    if not raw:
        return None
    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        return None
