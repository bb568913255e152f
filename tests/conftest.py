"""Shared fixtures: a small inventory, owners and ad drafts for every category."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Iterator

import pytest

from marketplace_ads.adapters.in_memory_ad_store import InMemoryAdStore
from marketplace_ads.adapters.in_memory_cache_store import InMemoryCacheStore
from marketplace_ads.adapters.in_memory_inventory_resolver import InMemoryInventoryResolver
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor, Role
from marketplace_ads.domain.ad_payloads import AdDraft
from marketplace_ads.domain.ads import AdCategory, OwnerProfile, PropertyType, VehicleType
from marketplace_ads.domain.inventory import (
    FuelType,
    Manufacturer,
    ModelVehicleType,
    TransmissionType,
    VehicleModel,
    VehicleVariant,
)
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.create_ad import CreateAd
from marketplace_ads.use_cases.detect_commercial_vehicle import DetectCommercialVehicle

OWNER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"
ADMIN_ID = "33333333-3333-4333-8333-333333333333"

MARUTI_ID = "a0000000-0000-4000-8000-000000000001"
TATA_ID = "a0000000-0000-4000-8000-000000000002"
SWIFT_ID = "b0000000-0000-4000-8000-000000000001"
ACE_ID = "b0000000-0000-4000-8000-000000000002"
ACTIVA_ID = "b0000000-0000-4000-8000-000000000003"
SWIFT_VXI_ID = "c0000000-0000-4000-8000-000000000001"
PETROL_ID = "d0000000-0000-4000-8000-000000000001"
DIESEL_ID = "d0000000-0000-4000-8000-000000000002"
MANUAL_ID = "e0000000-0000-4000-8000-000000000001"


@pytest.fixture()
def owner() -> Actor:
    return Actor(user_id=OWNER_ID)


@pytest.fixture()
def other_user() -> Actor:
    return Actor(user_id=OTHER_USER_ID)


@pytest.fixture()
def admin() -> Actor:
    return Actor(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture()
def resolver() -> InMemoryInventoryResolver:
    """Maruti (Swift, Activa-style two-wheeler) and Tata (Ace, a commercial truck)."""
    return InMemoryInventoryResolver(
        manufacturers=[
            Manufacturer(id=MARUTI_ID, name="Maruti Suzuki"),
            Manufacturer(id=TATA_ID, name="Tata Motors"),
        ],
        models=[
            VehicleModel(
                id=SWIFT_ID,
                name="Swift",
                display_name="Swift VXi",
                manufacturer_id=MARUTI_ID,
                vehicle_type=ModelVehicleType.HATCHBACK,
            ),
            VehicleModel(
                id=ACE_ID,
                name="Ace Gold",
                manufacturer_id=TATA_ID,
                vehicle_type=ModelVehicleType.TRUCK,
                is_commercial_vehicle=True,
                default_axle_count=3,
                default_payload_capacity=Decimal("750"),
            ),
            VehicleModel(
                id=ACTIVA_ID,
                name="Activa",
                manufacturer_id=MARUTI_ID,
                vehicle_type=ModelVehicleType.TWO_WHEELER,
            ),
        ],
        variants=[VehicleVariant(id=SWIFT_VXI_ID, name="VXi", model_id=SWIFT_ID)],
        fuel_types=[
            FuelType(id=PETROL_ID, name="Petrol"),
            FuelType(id=DIESEL_ID, name="Diesel"),
        ],
        transmission_types=[TransmissionType(id=MANUAL_ID, name="Manual")],
    )


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    """Strictly increasing timestamps, one second apart."""
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks: Iterator[int] = iter(range(1_000_000))
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture()
def ad_store(clock: Callable[[], datetime]) -> InMemoryAdStore:
    return InMemoryAdStore(
        owners=[
            OwnerProfile(id=OWNER_ID, name="Asha", email="asha@example.com", phone="+91 1"),
            OwnerProfile(id=OTHER_USER_ID, name="Vikram"),
        ],
        clock=clock,
    )


@pytest.fixture()
def cache() -> AdsCache:
    return AdsCache(InMemoryCacheStore())


@pytest.fixture()
def view_builder(resolver: InMemoryInventoryResolver) -> AdViewBuilder:
    return AdViewBuilder(resolver)


@pytest.fixture()
def create_ad(
    ad_store: InMemoryAdStore,
    resolver: InMemoryInventoryResolver,
    view_builder: AdViewBuilder,
    cache: AdsCache,
) -> CreateAd:
    return CreateAd(
        ad_store=ad_store,
        resolver=resolver,
        detector=DetectCommercialVehicle(resolver),
        view_builder=view_builder,
        cache=cache,
    )


@pytest.fixture()
def property_draft() -> AdDraft:
    return AdDraft(
        category=AdCategory.PROPERTY,
        description="2BHK apartment with sea view",
        price=Decimal("4500000"),
        location="Bandra, Mumbai",
        images=("https://img.example.com/1.jpg",),
        property_type=PropertyType.APARTMENT,
        bedrooms=2,
        bathrooms=2,
        area_sqft=Decimal("950"),
        floor=7,
        has_parking=True,
        amenities=("lift", "gym"),
    )


@pytest.fixture()
def vehicle_draft() -> AdDraft:
    return AdDraft(
        category=AdCategory.PRIVATE_VEHICLE,
        description="Single owner, serviced on time",
        price=Decimal("650000"),
        location="Pune",
        vehicle_type=VehicleType.FOUR_WHEELER,
        manufacturer_id=MARUTI_ID,
        model_id=SWIFT_ID,
        variant_id=SWIFT_VXI_ID,
        year=2019,
        mileage=42000,
        transmission_type_id=MANUAL_ID,
        fuel_type_id=PETROL_ID,
        color="White",
        is_first_owner=True,
    )


@pytest.fixture()
def commercial_draft() -> AdDraft:
    """Commercial fields left unset: the Ace model supplies them."""
    return AdDraft(
        category=AdCategory.COMMERCIAL_VEHICLE,
        description="Mini truck, fitness certificate valid",
        price=Decimal("380000"),
        location="Nashik",
        manufacturer_id=TATA_ID,
        model_id=ACE_ID,
        year=2021,
        mileage=60000,
        transmission_type_id=MANUAL_ID,
        fuel_type_id=DIESEL_ID,
        color="Blue",
        has_fitness=True,
    )
