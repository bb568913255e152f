#!/usr/bin/env python3
"""
Seed users, vehicle inventory and ads with deterministic random data.

Features:
- Deterministic: fixed seed and name-derived UUIDs → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Ads are created through the CreateAd use case, so titles, commercial
  defaults and validation match what the API would produce

Usage:
    python scripts/seed_ads.py
"""

from __future__ import annotations

import random
import sys
import uuid
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from marketplace_ads.adapters.postgres_ad_store import PostgresAdStore
from marketplace_ads.adapters.postgres_inventory_resolver import PostgresInventoryResolver
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ad_payloads import AdDraft
from marketplace_ads.domain.ads import AdCategory, PropertyType, VehicleType
from marketplace_ads.infra.db.models import (
    AdRow,
    CommercialVehicleAdRow,
    FuelTypeRow,
    ManufacturerRow,
    PropertyAdRow,
    TransmissionTypeRow,
    UserRow,
    VehicleAdRow,
    VehicleModelRow,
    VehicleVariantRow,
)
from marketplace_ads.infra.db.session import get_session
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.create_ad import CreateAd, CreateAdRequest
from marketplace_ads.use_cases.detect_commercial_vehicle import DetectCommercialVehicle


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_PROPERTY_ADS = 20
NUM_VEHICLE_ADS = 20
NUM_TWO_WHEELER_ADS = 10
NUM_COMMERCIAL_ADS = 10

SEED_NAMESPACE = uuid.UUID("6f1d1f0e-8a53-4c36-9a53-0d6b1c2f7a10")


def seed_id(name: str) -> uuid.UUID:
    return uuid.uuid5(SEED_NAMESPACE, name)


# ==============================================================================
# Reference data
# ==============================================================================

USERS = [
    ("Asha Rao", "asha@example.com", "+91 90000 00001", "user"),
    ("Vikram Shah", "vikram@example.com", "+91 90000 00002", "user"),
    ("Meera Iyer", "meera@example.com", "+91 90000 00003", "user"),
    ("Ops Admin", "admin@example.com", None, "admin"),
]

FUEL_TYPES = ["Petrol", "Diesel", "CNG", "Electric"]
TRANSMISSIONS = ["Manual", "Automatic", "AMT"]

# manufacturer -> [(model, vehicle_type, display_name, commercial metadata or None)]
MODELS = {
    "Maruti Suzuki": [
        ("Swift", "Hatchback", "Swift", None),
        ("Dzire", "Sedan", "Swift Dzire", None),
        ("Brezza", "Compact SUV", None, None),
    ],
    "Hyundai": [
        ("Creta", "SUV", None, None),
        ("i20", "Hatchback", None, None),
    ],
    "Honda Motorcycle": [
        ("Activa 6G", "two-wheeler", None, None),
        ("Shine", "two-wheeler", None, None),
    ],
    "Tata Motors": [
        ("Ace Gold", "Truck", None, ("truck", "pickup", "750", "kg", 2, 2)),
        ("Signa 4825", "Truck", None, ("truck", "tanker", "25000", "kg", 3, 2)),
        ("Winger", "MUV", None, ("van", "passenger", "1000", "kg", 2, 13)),
    ],
}

CITIES = ["Mumbai", "Pune", "Bengaluru", "Delhi", "Hyderabad", "Chennai", "Kolkata"]
COLORS = ["White", "Silver", "Red", "Blue", "Black", "Grey"]


# ==============================================================================
# Inventory + users
# ==============================================================================


def seed_reference_rows(session) -> dict[str, list]:
    """Insert users and inventory rows; returns the ids the ad generators need."""
    users = [
        UserRow(id=seed_id(f"user:{email}"), name=name, email=email, phone=phone, role=role)
        for name, email, phone, role in USERS
    ]
    fuels = [FuelTypeRow(id=seed_id(f"fuel:{name}"), name=name) for name in FUEL_TYPES]
    transmissions = [
        TransmissionTypeRow(id=seed_id(f"transmission:{name}"), name=name)
        for name in TRANSMISSIONS
    ]
    session.add_all([*users, *fuels, *transmissions])

    models: list[VehicleModelRow] = []
    variants: list[VehicleVariantRow] = []
    for manufacturer_name, entries in MODELS.items():
        manufacturer = ManufacturerRow(
            id=seed_id(f"manufacturer:{manufacturer_name}"),
            name=manufacturer_name,
            origin_country="India",
        )
        session.add(manufacturer)
        for name, vehicle_type, display_name, commercial in entries:
            model = VehicleModelRow(
                id=seed_id(f"model:{manufacturer_name}:{name}"),
                name=name,
                display_name=display_name,
                manufacturer_id=manufacturer.id,
                vehicle_type=vehicle_type,
            )
            if commercial is not None:
                cv_type, body, payload, unit, axles, seats = commercial
                model.is_commercial_vehicle = True
                model.commercial_vehicle_type = cv_type
                model.commercial_body_type = body
                model.default_payload_capacity = Decimal(payload)
                model.default_payload_unit = unit
                model.default_axle_count = axles
                model.default_seating_capacity = seats
            models.append(model)
            variants.append(
                VehicleVariantRow(
                    id=seed_id(f"variant:{manufacturer_name}:{name}:base"),
                    name="Base",
                    model_id=model.id,
                )
            )

    session.add_all(models)
    session.add_all(variants)
    session.flush()

    return {
        "users": [row for row in users if row.role == "user"],
        "fuels": fuels,
        "transmissions": transmissions,
        "models": models,
        "variants": {row.model_id: row for row in variants},
    }


# ==============================================================================
# Ad drafts
# ==============================================================================


def property_draft() -> AdDraft:
    property_type = random.choice(list(PropertyType))
    residential = property_type in (PropertyType.APARTMENT, PropertyType.HOUSE, PropertyType.VILLA)
    bedrooms = random.randint(1, 5) if residential else None
    area = Decimal(random.randrange(400, 4000, 50))
    city = random.choice(CITIES)

    return AdDraft(
        category=AdCategory.PROPERTY,
        description=f"{property_type.value.title()} of {area} sqft in {city}",
        # Roughly 5k-15k per sqft, rounded to the nearest 10k
        price=(area * random.randint(5000, 15000) / 10000).quantize(Decimal("1")) * 10000,
        location=city,
        property_type=property_type,
        bedrooms=bedrooms,
        bathrooms=max(1, bedrooms - 1) if bedrooms else None,
        area_sqft=area,
        floor=random.randint(0, 20) if property_type is PropertyType.APARTMENT else None,
        is_furnished=random.random() < 0.4,
        has_parking=random.random() < 0.7,
        has_garden=property_type in (PropertyType.HOUSE, PropertyType.VILLA),
        amenities=tuple(random.sample(["gym", "pool", "lift", "security", "clubhouse"], k=2)),
    )


def vehicle_draft(refs: dict, category: AdCategory) -> AdDraft:
    """PRIVATE_VEHICLE, TWO_WHEELER or COMMERCIAL_VEHICLE draft from a fitting model."""
    if category is AdCategory.TWO_WHEELER:
        candidates = [m for m in refs["models"] if m.vehicle_type == "two-wheeler"]
    elif category is AdCategory.COMMERCIAL_VEHICLE:
        candidates = [m for m in refs["models"] if m.is_commercial_vehicle]
    else:
        candidates = [
            m
            for m in refs["models"]
            if m.vehicle_type != "two-wheeler" and not m.is_commercial_vehicle
        ]
    model = random.choice(candidates)

    year = random.choices(range(2012, 2025), weights=range(1, 14), k=1)[0]
    mileage = max(500, (2025 - year) * random.randint(4000, 15000))
    base_price = 80000 if category is AdCategory.TWO_WHEELER else 600000
    price = Decimal(base_price * random.randint(60, 140) // 100).quantize(Decimal("1"))
    if category is AdCategory.COMMERCIAL_VEHICLE:
        price *= 3

    return AdDraft(
        category=category,
        description=f"Well maintained, {mileage} km driven",
        price=price,
        location=random.choice(CITIES),
        vehicle_type=(
            VehicleType.FOUR_WHEELER if category is AdCategory.PRIVATE_VEHICLE else None
        ),
        manufacturer_id=str(model.manufacturer_id),
        model_id=str(model.id),
        variant_id=str(refs["variants"][model.id].id),
        year=year,
        mileage=mileage,
        transmission_type_id=str(random.choice(refs["transmissions"]).id),
        fuel_type_id=str(random.choice(refs["fuels"]).id),
        color=random.choice(COLORS),
        is_first_owner=random.random() < 0.5,
        has_insurance=random.random() < 0.8,
        has_rc_book=True,
        # Commercial fields left unset: the model's defaults fill them in
    )


# ==============================================================================
# Seeding
# ==============================================================================


def clear_tables(session) -> None:
    for row_type in (
        CommercialVehicleAdRow,
        VehicleAdRow,
        PropertyAdRow,
        AdRow,
        VehicleVariantRow,
        VehicleModelRow,
        ManufacturerRow,
        FuelTypeRow,
        TransmissionTypeRow,
        UserRow,
    ):
        deleted = session.query(row_type).delete()
        print(f"   {row_type.__tablename__}: deleted {deleted}")


def seed_ads(seed: int = RANDOM_SEED) -> None:
    random.seed(seed)

    print(f"🌱 Seeding ads (seed={seed})...")

    with get_session() as session:
        print("🗑️  Clearing existing data...")
        clear_tables(session)

        refs = seed_reference_rows(session)

        resolver = PostgresInventoryResolver(session)
        create_ad = CreateAd(
            ad_store=PostgresAdStore(session),
            resolver=resolver,
            detector=DetectCommercialVehicle(resolver),
            view_builder=AdViewBuilder(resolver),
        )

        plan = [
            (AdCategory.PROPERTY, NUM_PROPERTY_ADS),
            (AdCategory.PRIVATE_VEHICLE, NUM_VEHICLE_ADS),
            (AdCategory.TWO_WHEELER, NUM_TWO_WHEELER_ADS),
            (AdCategory.COMMERCIAL_VEHICLE, NUM_COMMERCIAL_ADS),
        ]
        created = []
        for category, count in plan:
            for _ in range(count):
                owner = random.choice(refs["users"])
                draft = (
                    property_draft()
                    if category is AdCategory.PROPERTY
                    else vehicle_draft(refs, category)
                )
                response = create_ad.execute(
                    CreateAdRequest(draft=draft, actor=Actor(user_id=str(owner.id)))
                )
                created.append(response.ad)

        print(f"✅ Successfully seeded {len(created)} ads!")

        print("\n📊 Sample ads:")
        for i, view in enumerate(created[:: max(1, len(created) // 5)][:5], 1):
            ad = view.ad
            print(f"   {i}. [{ad.category.value}] {ad.title or ad.description} - {ad.price:,.2f}")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_ads()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
