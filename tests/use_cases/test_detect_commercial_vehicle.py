"""Test suite for DetectCommercialVehicle use case."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest

from marketplace_ads.adapters.in_memory_inventory_resolver import InMemoryInventoryResolver
from marketplace_ads.domain.ads import CommercialVehicleType
from marketplace_ads.domain.commercial_vehicle import NOT_COMMERCIAL
from marketplace_ads.domain.errors import InfrastructureError
from marketplace_ads.ports.inventory_resolver import InventoryResolver
from marketplace_ads.use_cases.detect_commercial_vehicle import (
    DetectCommercialVehicle,
    DetectCommercialVehicleRequest,
)

from conftest import ACE_ID, SWIFT_ID


def test_commercial_model_gets_defaults(resolver: InMemoryInventoryResolver) -> None:
    defaults = DetectCommercialVehicle(resolver).execute(DetectCommercialVehicleRequest(model_id=ACE_ID))

    assert defaults.is_commercial_vehicle
    assert defaults.commercial_vehicle_type is CommercialVehicleType.TRUCK
    assert defaults.payload_capacity == Decimal("750")
    assert defaults.axle_count == 3


def test_passenger_model_is_not_commercial(resolver: InMemoryInventoryResolver) -> None:
    result = DetectCommercialVehicle(resolver).execute(DetectCommercialVehicleRequest(model_id=SWIFT_ID))

    assert result is NOT_COMMERCIAL


@pytest.mark.parametrize("model_id", [None, "", "not-a-uuid", "ffffffff-ffff-4fff-8fff-ffffffffffff"])
def test_missing_or_unknown_model_fails_open(resolver: InMemoryInventoryResolver, model_id) -> None:
    result = DetectCommercialVehicle(resolver).execute(DetectCommercialVehicleRequest(model_id=model_id))

    assert result is NOT_COMMERCIAL


def test_unavailable_inventory_fails_open() -> None:
    resolver = Mock(spec=InventoryResolver)
    resolver.get_vehicle_model.side_effect = InfrastructureError("Inventory store unavailable")

    result = DetectCommercialVehicle(resolver).execute(DetectCommercialVehicleRequest(model_id=ACE_ID))

    assert result is NOT_COMMERCIAL
