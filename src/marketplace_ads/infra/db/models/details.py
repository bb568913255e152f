"""Category detail tables.

Each row belongs to exactly one ``ads`` row through ``ad_id`` (unique). There is
no foreign key: the detail table is picked at runtime from the ad's category,
and the consistency scan reports rows whose ad is gone.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_ads.infra.db.models.base import Base


class PropertyAdRow(Base):
    __tablename__ = "property_ads"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    ad_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, unique=True)

    property_type: Mapped[str] = mapped_column(String(20), nullable=False)
    area_sqft: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2), nullable=False)
    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    floor: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_furnished: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_parking: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_garden: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    amenities: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, server_default="{}")


class VehicleAdRow(Base):
    __tablename__ = "vehicle_ads"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    ad_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, unique=True)

    vehicle_type: Mapped[str] = mapped_column(String(20), nullable=False)
    manufacturer_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    model_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    variant_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)
    transmission_type_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    fuel_type_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    color: Mapped[str] = mapped_column(String(50), nullable=False)

    is_first_owner: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_insurance: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_rc_book: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    additional_features: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, server_default="{}"
    )


class CommercialVehicleAdRow(Base):
    __tablename__ = "commercial_vehicle_ads"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    ad_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, unique=True)

    commercial_vehicle_type: Mapped[str] = mapped_column(String(20), nullable=False)
    body_type: Mapped[str] = mapped_column(String(20), nullable=False)
    vehicle_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    manufacturer_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    model_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    variant_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)
    transmission_type_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    fuel_type_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    color: Mapped[str] = mapped_column(String(50), nullable=False)

    payload_capacity: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False
    )
    payload_unit: Mapped[str] = mapped_column(String(10), nullable=False, server_default="kg")
    axle_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default="2")
    seating_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    is_first_owner: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_insurance: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_rc_book: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_fitness: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    has_permit: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    additional_features: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, server_default="{}"
    )
