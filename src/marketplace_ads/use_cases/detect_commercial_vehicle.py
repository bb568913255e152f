from __future__ import annotations

import logging
from dataclasses import dataclass

from marketplace_ads.domain.commercial_vehicle import (
    NOT_COMMERCIAL,
    CommercialVehicleDefaults,
    defaults_for_model,
)
from marketplace_ads.domain.errors import InfrastructureError, ReferenceNotFoundError
from marketplace_ads.ports.inventory_resolver import InventoryResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DetectCommercialVehicleRequest:
    model_id: str | None


class DetectCommercialVehicle:
    """
    Classify a vehicle model as commercial or not and supply field defaults.

    Fails open: a model that cannot be resolved (unknown, inactive, or the
    inventory is unreachable) is reported as not commercial.
    """

    def __init__(self, resolver: InventoryResolver) -> None:
        self._resolver = resolver

    def execute(self, request: DetectCommercialVehicleRequest) -> CommercialVehicleDefaults:
        if not request.model_id:
            return NOT_COMMERCIAL

        try:
            model = self._resolver.get_vehicle_model(request.model_id)
        except ReferenceNotFoundError:
            logger.debug("Model not resolvable, treating as non-commercial", extra={"model_id": request.model_id})
            return NOT_COMMERCIAL
        except InfrastructureError:
            logger.warning(
                "Inventory unavailable during commercial detection",
                extra={"model_id": request.model_id},
                exc_info=True,
            )
            return NOT_COMMERCIAL

        return defaults_for_model(model)
