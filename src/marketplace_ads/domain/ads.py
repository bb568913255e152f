from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union


class AdCategory(str, Enum):
    PROPERTY = "property"
    PRIVATE_VEHICLE = "private_vehicle"
    COMMERCIAL_VEHICLE = "commercial_vehicle"
    TWO_WHEELER = "two_wheeler"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    VILLA = "villa"
    PLOT = "plot"
    COMMERCIAL = "commercial"
    OFFICE = "office"
    SHOP = "shop"
    WAREHOUSE = "warehouse"


RESIDENTIAL_PROPERTY_TYPES = frozenset(
    {PropertyType.APARTMENT, PropertyType.HOUSE, PropertyType.VILLA}
)
NON_RESIDENTIAL_PROPERTY_TYPES = frozenset(
    {
        PropertyType.PLOT,
        PropertyType.COMMERCIAL,
        PropertyType.OFFICE,
        PropertyType.SHOP,
        PropertyType.WAREHOUSE,
    }
)


class VehicleType(str, Enum):
    TWO_WHEELER = "two_wheeler"
    FOUR_WHEELER = "four_wheeler"


class CommercialVehicleType(str, Enum):
    TRUCK = "truck"
    VAN = "van"
    BUS = "bus"
    TRACTOR = "tractor"
    TRAILER = "trailer"
    FORKLIFT = "forklift"


class BodyType(str, Enum):
    FLATBED = "flatbed"
    CONTAINER = "container"
    REFRIGERATED = "refrigerated"
    TANKER = "tanker"
    DUMP = "dump"
    PICKUP = "pickup"
    BOX = "box"
    PASSENGER = "passenger"


class Collection(str, Enum):
    """Storage collections making up the ad aggregate."""

    ADS = "ads"
    PROPERTY_ADS = "property_ads"
    VEHICLE_ADS = "vehicle_ads"
    COMMERCIAL_VEHICLE_ADS = "commercial_vehicle_ads"


# Each category owns exactly one detail collection.
DETAIL_COLLECTION_BY_CATEGORY: dict[AdCategory, Collection] = {
    AdCategory.PROPERTY: Collection.PROPERTY_ADS,
    AdCategory.PRIVATE_VEHICLE: Collection.VEHICLE_ADS,
    AdCategory.TWO_WHEELER: Collection.VEHICLE_ADS,
    AdCategory.COMMERCIAL_VEHICLE: Collection.COMMERCIAL_VEHICLE_ADS,
}

DETAIL_COLLECTIONS = (
    Collection.PROPERTY_ADS,
    Collection.VEHICLE_ADS,
    Collection.COMMERCIAL_VEHICLE_ADS,
)


@dataclass(frozen=True)
class Ad:
    """Base record shared by every category."""

    id: str
    description: str
    price: Decimal
    location: str
    category: AdCategory
    posted_by: str
    title: str = ""
    images: tuple[str, ...] = ()
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PropertyDetails:
    id: str
    ad_id: str
    property_type: PropertyType
    area_sqft: Decimal
    bedrooms: int | None = None
    bathrooms: int | None = None
    floor: int | None = None
    is_furnished: bool = False
    has_parking: bool = False
    has_garden: bool = False
    amenities: tuple[str, ...] = ()


@dataclass(frozen=True)
class VehicleDetails:
    """Detail record for PRIVATE_VEHICLE and TWO_WHEELER ads."""

    id: str
    ad_id: str
    vehicle_type: VehicleType
    manufacturer_id: str
    model_id: str
    year: int
    mileage: int
    transmission_type_id: str
    fuel_type_id: str
    color: str
    variant_id: str | None = None
    is_first_owner: bool = False
    has_insurance: bool = False
    has_rc_book: bool = False
    additional_features: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommercialVehicleDetails:
    """Detail record for COMMERCIAL_VEHICLE ads (superset of the vehicle fields)."""

    id: str
    ad_id: str
    commercial_vehicle_type: CommercialVehicleType
    body_type: BodyType
    manufacturer_id: str
    model_id: str
    year: int
    mileage: int
    transmission_type_id: str
    fuel_type_id: str
    color: str
    payload_capacity: Decimal
    payload_unit: str = "kg"
    axle_count: int = 2
    seating_capacity: int | None = None
    vehicle_type: VehicleType | None = None
    variant_id: str | None = None
    is_first_owner: bool = False
    has_insurance: bool = False
    has_rc_book: bool = False
    has_fitness: bool = False
    has_permit: bool = False
    additional_features: tuple[str, ...] = ()


AdDetail = Union[PropertyDetails, VehicleDetails, CommercialVehicleDetails]

DETAIL_TYPE_BY_COLLECTION: dict[Collection, type] = {
    Collection.PROPERTY_ADS: PropertyDetails,
    Collection.VEHICLE_ADS: VehicleDetails,
    Collection.COMMERCIAL_VEHICLE_ADS: CommercialVehicleDetails,
}


@dataclass(frozen=True)
class OwnerProfile:
    """Public part of the owning user's profile."""

    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class JoinedAd:
    """One row produced by a search plan: the base ad plus its left-joined records.

    Each detail list holds zero or one element.
    """

    ad: Ad
    owner: OwnerProfile | None = None
    property_details: list[PropertyDetails] = field(default_factory=list)
    vehicle_details: list[VehicleDetails] = field(default_factory=list)
    commercial_vehicle_details: list[CommercialVehicleDetails] = field(default_factory=list)

    @property
    def year(self) -> int | None:
        if self.vehicle_details:
            return self.vehicle_details[0].year
        if self.commercial_vehicle_details:
            return self.commercial_vehicle_details[0].year
        return None
