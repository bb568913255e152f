"""Tests for commercial-vehicle classification of inventory models."""

from __future__ import annotations

from decimal import Decimal

from marketplace_ads.domain.ads import BodyType, CommercialVehicleType
from marketplace_ads.domain.commercial_vehicle import (
    NOT_COMMERCIAL,
    defaults_for_model,
    is_commercial_model,
)
from marketplace_ads.domain.inventory import ModelVehicleType, VehicleModel


def _model(**kwargs) -> VehicleModel:
    return VehicleModel(id="m-1", name="Model", manufacturer_id="mf-1", **kwargs)


def test_truck_models_are_commercial_without_flag() -> None:
    assert is_commercial_model(_model(vehicle_type=ModelVehicleType.TRUCK))


def test_flagged_model_is_commercial_regardless_of_type() -> None:
    assert is_commercial_model(_model(vehicle_type=ModelVehicleType.MUV, is_commercial_vehicle=True))


def test_passenger_model_is_not_commercial() -> None:
    model = _model(vehicle_type=ModelVehicleType.SEDAN)

    assert not is_commercial_model(model)
    assert defaults_for_model(model) is NOT_COMMERCIAL


def test_truck_defaults_come_from_type_tables() -> None:
    defaults = defaults_for_model(_model(vehicle_type=ModelVehicleType.TRUCK))

    assert defaults.is_commercial_vehicle
    assert defaults.commercial_vehicle_type is CommercialVehicleType.TRUCK
    assert defaults.body_type is BodyType.FLATBED
    assert defaults.payload_capacity == Decimal("5000")
    assert defaults.payload_unit == "kg"
    assert defaults.axle_count == 2
    assert defaults.seating_capacity == 3


def test_stored_model_metadata_wins() -> None:
    defaults = defaults_for_model(
        _model(
            vehicle_type=ModelVehicleType.TRUCK,
            commercial_vehicle_type=" Van ",
            commercial_body_type="tanker",
            default_payload_capacity=Decimal("750"),
            default_payload_unit="ton",
            default_axle_count=3,
            default_seating_capacity=2,
        )
    )

    assert defaults.commercial_vehicle_type is CommercialVehicleType.VAN
    assert defaults.body_type is BodyType.TANKER
    assert defaults.payload_capacity == Decimal("750")
    assert defaults.payload_unit == "ton"
    assert defaults.axle_count == 3
    assert defaults.seating_capacity == 2


def test_unknown_stored_enum_falls_back_to_type_table() -> None:
    defaults = defaults_for_model(
        _model(vehicle_type=ModelVehicleType.TRUCK, commercial_body_type="spaceship")
    )

    assert defaults.body_type is BodyType.FLATBED


def test_flagged_model_without_type_uses_fallbacks() -> None:
    defaults = defaults_for_model(_model(is_commercial_vehicle=True))

    assert defaults.commercial_vehicle_type is CommercialVehicleType.TRUCK
    assert defaults.payload_capacity == Decimal("1000")
    assert defaults.axle_count == 2
    assert defaults.seating_capacity == 5


def test_as_draft_values_lists_commercial_fields() -> None:
    values = defaults_for_model(_model(vehicle_type=ModelVehicleType.TRUCK)).as_draft_values()

    assert set(values) == {
        "commercial_vehicle_type",
        "body_type",
        "payload_capacity",
        "payload_unit",
        "axle_count",
        "seating_capacity",
    }
