"""Denormalization of joined ad rows into ``AdView``s."""

from __future__ import annotations

from typing import Callable

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.ads import CommercialVehicleDetails, JoinedAd, VehicleDetails
from marketplace_ads.domain.errors import ReferenceNotFoundError
from marketplace_ads.domain.views import AdView, InventoryRef, InventorySummary
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.ports.inventory_resolver import InventoryResolver
from marketplace_ads.query.compiler import compile_lookup


class AdViewBuilder:
    """
    Turns plan rows into views, resolving inventory names for vehicle ads.

    Lookups are memoized per ``build_many`` call, so a page with twenty ads of
    the same model hits the resolver once per distinct id. A reference that
    no longer resolves is left out of the summary; infrastructure failures
    propagate.
    """

    def __init__(self, resolver: InventoryResolver) -> None:
        self._resolver = resolver

    def build(self, row: JoinedAd) -> AdView:
        return self.build_many([row])[0]

    def build_many(self, rows: list[JoinedAd]) -> list[AdView]:
        memo: dict[tuple[str, str], InventoryRef | None] = {}
        return [self._build(row, memo) for row in rows]

    def _build(self, row: JoinedAd, memo: dict[tuple[str, str], InventoryRef | None]) -> AdView:
        vehicle = row.vehicle_details[0] if row.vehicle_details else None
        commercial = row.commercial_vehicle_details[0] if row.commercial_vehicle_details else None
        detail = vehicle or commercial

        return AdView(
            ad=row.ad,
            owner=row.owner,
            property_details=row.property_details[0] if row.property_details else None,
            vehicle_details=vehicle,
            commercial_vehicle_details=commercial,
            year=row.year,
            inventory=self._summary(detail, memo) if detail is not None else None,
        )

    def _summary(
        self,
        detail: VehicleDetails | CommercialVehicleDetails,
        memo: dict[tuple[str, str], InventoryRef | None],
    ) -> InventorySummary:
        def ref(kind: str, identifier: str | None) -> InventoryRef | None:
            if identifier is None:
                return None
            key = (kind, identifier)
            if key not in memo:
                memo[key] = self._lookup(kind, identifier)
            return memo[key]

        return InventorySummary(
            manufacturer=ref("manufacturer", detail.manufacturer_id),
            model=ref("model", detail.model_id),
            variant=ref("variant", detail.variant_id),
            transmission_type=ref("transmission_type", detail.transmission_type_id),
            fuel_type=ref("fuel_type", detail.fuel_type_id),
        )

    def _lookup(self, kind: str, identifier: str) -> InventoryRef | None:
        resolvers: dict[str, Callable[[str], object]] = {
            "manufacturer": self._resolver.get_manufacturer,
            "model": self._resolver.get_vehicle_model,
            "variant": self._resolver.get_vehicle_variant,
            "transmission_type": self._resolver.get_transmission_type,
            "fuel_type": self._resolver.get_fuel_type,
        }
        try:
            entity = resolvers[kind](identifier)
        except ReferenceNotFoundError:
            return None
        name = getattr(entity, "label", None) or getattr(entity, "name")
        return InventoryRef(id=identifier, name=name)


def load_view(ad_store: AdStore, builder: AdViewBuilder, ad_id: str) -> AdView | None:
    """Fresh, uncached view of one ad."""
    rows = ad_store.run_plan(compile_lookup(ad_id))
    return builder.build(rows[0]) if rows else None


def invalidate_after_commit(ad_store: AdStore, cache: AdsCache | None, ad_id: str) -> None:
    """
    Drop the cached entries for ``ad_id`` once the store has committed.

    A read that misses between the write and the commit would otherwise
    re-cache the pre-write row.
    """
    if cache is not None:
        ad_store.after_commit(lambda: cache.invalidate(ad_id))
