from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from marketplace_ads.infra.db.models.base import Base


class _InventoryMixin:
    """Lifecycle flags shared by every inventory table."""

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true")
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")


class ManufacturerRow(_InventoryMixin, Base):
    __tablename__ = "manufacturers"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    origin_country: Mapped[str | None] = mapped_column(String(100), nullable=True)


class VehicleModelRow(_InventoryMixin, Base):
    __tablename__ = "vehicle_models"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(150), nullable=True)
    manufacturer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("manufacturers.id"), nullable=False, index=True
    )
    vehicle_type: Mapped[str | None] = mapped_column(String(30), nullable=True)

    is_commercial_vehicle: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false"
    )
    commercial_vehicle_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    commercial_body_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    default_payload_capacity: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=10, scale=2), nullable=True
    )
    default_payload_unit: Mapped[str | None] = mapped_column(String(10), nullable=True)
    default_axle_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_seating_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)


class VehicleVariantRow(_InventoryMixin, Base):
    __tablename__ = "vehicle_variants"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    model_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("vehicle_models.id"), nullable=False, index=True
    )
    price: Mapped[Decimal | None] = mapped_column(Numeric(precision=14, scale=2), nullable=True)


class FuelTypeRow(_InventoryMixin, Base):
    __tablename__ = "fuel_types"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class TransmissionTypeRow(_InventoryMixin, Base):
    __tablename__ = "transmission_types"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
