"""PostgreSQL implementation of InventoryResolver."""

from __future__ import annotations

import uuid
from typing import TypeVar

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from marketplace_ads.domain.errors import InfrastructureError, ReferenceNotFoundError
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.domain.inventory import (
    FuelType,
    Manufacturer,
    ModelVehicleType,
    TransmissionType,
    VehicleModel,
    VehicleVariant,
)
from marketplace_ads.infra.db.models import (
    FuelTypeRow,
    ManufacturerRow,
    TransmissionTypeRow,
    VehicleModelRow,
    VehicleVariantRow,
)
from marketplace_ads.ports.inventory_resolver import InventoryResolver

R = TypeVar("R")


class PostgresInventoryResolver(InventoryResolver):
    """
    Reads the inventory tables.

    Rows flagged ``is_active = false`` or ``is_deleted = true`` never resolve.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_manufacturer(self, manufacturer_id: str) -> Manufacturer:
        row = self._load(ManufacturerRow, "Manufacturer", manufacturer_id)
        return Manufacturer(id=str(row.id), name=row.name, origin_country=row.origin_country)

    def get_vehicle_model(self, model_id: str) -> VehicleModel:
        row = self._load(VehicleModelRow, "VehicleModel", model_id)
        return VehicleModel(
            id=str(row.id),
            name=row.name,
            manufacturer_id=str(row.manufacturer_id),
            vehicle_type=_model_vehicle_type(row.vehicle_type),
            display_name=row.display_name,
            is_commercial_vehicle=row.is_commercial_vehicle,
            commercial_vehicle_type=row.commercial_vehicle_type,
            commercial_body_type=row.commercial_body_type,
            default_payload_capacity=row.default_payload_capacity,
            default_payload_unit=row.default_payload_unit,
            default_axle_count=row.default_axle_count,
            default_seating_capacity=row.default_seating_capacity,
        )

    def get_vehicle_variant(self, variant_id: str) -> VehicleVariant:
        row = self._load(VehicleVariantRow, "VehicleVariant", variant_id)
        return VehicleVariant(id=str(row.id), name=row.name, model_id=str(row.model_id), price=row.price)

    def get_fuel_type(self, fuel_type_id: str) -> FuelType:
        row = self._load(FuelTypeRow, "FuelType", fuel_type_id)
        return FuelType(id=str(row.id), name=row.name, description=row.description)

    def get_transmission_type(self, transmission_type_id: str) -> TransmissionType:
        row = self._load(TransmissionTypeRow, "TransmissionType", transmission_type_id)
        return TransmissionType(id=str(row.id), name=row.name, description=row.description)

    def _load(self, model: type[R], reference: str, identifier: str) -> R:
        key = parse_id(identifier)
        if key is None:
            raise ReferenceNotFoundError(reference=reference, identifier=identifier)

        try:
            row = self._session.get(model, uuid.UUID(key))
        except (OperationalError, InterfaceError) as exc:
            self._session.rollback()
            raise InfrastructureError("Inventory store unavailable", reference=reference) from exc

        if row is None or not row.is_active or row.is_deleted:  # type: ignore[attr-defined]
            raise ReferenceNotFoundError(reference=reference, identifier=identifier)
        return row


def _model_vehicle_type(raw: str | None) -> ModelVehicleType | None:
    if raw is None:
        return None
    try:
        return ModelVehicleType(raw)
    except ValueError:
        return None
