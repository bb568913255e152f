from marketplace_ads.infra.db.models.ad import AdRow
from marketplace_ads.infra.db.models.base import Base
from marketplace_ads.infra.db.models.details import (
    CommercialVehicleAdRow,
    PropertyAdRow,
    VehicleAdRow,
)
from marketplace_ads.infra.db.models.inventory import (
    FuelTypeRow,
    ManufacturerRow,
    TransmissionTypeRow,
    VehicleModelRow,
    VehicleVariantRow,
)
from marketplace_ads.infra.db.models.user import UserRow

__all__ = [
    "AdRow",
    "Base",
    "CommercialVehicleAdRow",
    "FuelTypeRow",
    "ManufacturerRow",
    "PropertyAdRow",
    "TransmissionTypeRow",
    "UserRow",
    "VehicleAdRow",
    "VehicleModelRow",
    "VehicleVariantRow",
]
