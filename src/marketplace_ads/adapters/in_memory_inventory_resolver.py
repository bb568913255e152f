from __future__ import annotations

from typing import Iterable, TypeVar

from marketplace_ads.domain.errors import ReferenceNotFoundError
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.domain.inventory import (
    FuelType,
    Manufacturer,
    TransmissionType,
    VehicleModel,
    VehicleVariant,
)
from marketplace_ads.ports.inventory_resolver import InventoryResolver

T = TypeVar("T")


class InMemoryInventoryResolver(InventoryResolver):
    """
    Canonical contract implementation for tests.

    Entities listed in ``inactive_ids`` behave as deactivated or deleted:
    they exist but never resolve.
    """

    def __init__(
        self,
        manufacturers: Iterable[Manufacturer] = (),
        models: Iterable[VehicleModel] = (),
        variants: Iterable[VehicleVariant] = (),
        fuel_types: Iterable[FuelType] = (),
        transmission_types: Iterable[TransmissionType] = (),
        inactive_ids: Iterable[str] = (),
    ) -> None:
        self._manufacturers = {item.id: item for item in manufacturers}
        self._models = {item.id: item for item in models}
        self._variants = {item.id: item for item in variants}
        self._fuel_types = {item.id: item for item in fuel_types}
        self._transmission_types = {item.id: item for item in transmission_types}
        self._inactive_ids = set(inactive_ids)

    def get_manufacturer(self, manufacturer_id: str) -> Manufacturer:
        return self._resolve(self._manufacturers, "Manufacturer", manufacturer_id)

    def get_vehicle_model(self, model_id: str) -> VehicleModel:
        return self._resolve(self._models, "VehicleModel", model_id)

    def get_vehicle_variant(self, variant_id: str) -> VehicleVariant:
        return self._resolve(self._variants, "VehicleVariant", variant_id)

    def get_fuel_type(self, fuel_type_id: str) -> FuelType:
        return self._resolve(self._fuel_types, "FuelType", fuel_type_id)

    def get_transmission_type(self, transmission_type_id: str) -> TransmissionType:
        return self._resolve(self._transmission_types, "TransmissionType", transmission_type_id)

    def _resolve(self, entities: dict[str, T], reference: str, identifier: str) -> T:
        key = parse_id(identifier)
        entity = entities.get(key) if key else None
        if entity is None or key in self._inactive_ids:
            raise ReferenceNotFoundError(reference=reference, identifier=identifier)
        return entity
