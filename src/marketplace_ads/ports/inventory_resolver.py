from __future__ import annotations

from abc import ABC, abstractmethod

from marketplace_ads.domain.inventory import (
    FuelType,
    Manufacturer,
    TransmissionType,
    VehicleModel,
    VehicleVariant,
)


class InventoryResolver(ABC):
    """
    Port for the vehicle inventory (manufacturers, models, variants, fuel and
    transmission types).

    Every lookup raises ReferenceNotFoundError when the id is malformed,
    unknown, or points at an inactive or deleted entity. It never returns None.
    """

    @abstractmethod
    def get_manufacturer(self, manufacturer_id: str) -> Manufacturer: ...

    @abstractmethod
    def get_vehicle_model(self, model_id: str) -> VehicleModel: ...

    @abstractmethod
    def get_vehicle_variant(self, variant_id: str) -> VehicleVariant: ...

    @abstractmethod
    def get_fuel_type(self, fuel_type_id: str) -> FuelType: ...

    @abstractmethod
    def get_transmission_type(self, transmission_type_id: str) -> TransmissionType: ...
