"""Read-side shapes returned by the ad use cases (and cached as-is)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from marketplace_ads.domain.ads import (
    Ad,
    CommercialVehicleDetails,
    OwnerProfile,
    PropertyDetails,
    VehicleDetails,
)
from marketplace_ads.domain.filters import Paging


@dataclass(frozen=True)
class InventoryRef:
    id: str
    name: str


@dataclass(frozen=True)
class InventorySummary:
    """Resolved inventory references of a vehicle ad; unresolvable ones are None."""

    manufacturer: InventoryRef | None = None
    model: InventoryRef | None = None
    variant: InventoryRef | None = None
    transmission_type: InventoryRef | None = None
    fuel_type: InventoryRef | None = None


@dataclass(frozen=True)
class AdView:
    """Denormalized ad: base record, owner, its category detail and inventory names."""

    ad: Ad
    owner: OwnerProfile | None = None
    property_details: PropertyDetails | None = None
    vehicle_details: VehicleDetails | None = None
    commercial_vehicle_details: CommercialVehicleDetails | None = None
    year: int | None = None
    inventory: InventorySummary | None = None


@dataclass(frozen=True)
class PaginatedAds:
    data: list[AdView] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    total_pages: int = 0
    has_next: bool = False
    has_prev: bool = False

    @classmethod
    def build(cls, data: list[AdView], total: int, paging: Paging) -> PaginatedAds:
        return cls(
            data=data,
            total=total,
            page=paging.page,
            limit=paging.limit,
            total_pages=math.ceil(total / paging.limit),
            has_next=paging.page * paging.limit < total,
            has_prev=paging.page > 1,
        )
