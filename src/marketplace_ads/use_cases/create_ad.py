from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ad_payloads import AdDraft, vehicle_title, wire_name
from marketplace_ads.domain.ads import (
    DETAIL_COLLECTION_BY_CATEGORY,
    AdCategory,
    Collection,
    VehicleType,
)
from marketplace_ads.domain.errors import (
    InternalError,
    ReferenceNotFoundError,
    ValidationError,
)
from marketplace_ads.domain.ids import new_id, parse_id
from marketplace_ads.domain.inventory import VehicleModel
from marketplace_ads.domain.views import AdView
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.ports.inventory_resolver import InventoryResolver
from marketplace_ads.use_cases.ad_views import AdViewBuilder, invalidate_after_commit, load_view
from marketplace_ads.use_cases.detect_commercial_vehicle import (
    DetectCommercialVehicle,
    DetectCommercialVehicleRequest,
)
from marketplace_ads.use_cases.get_ad_by_id import invalid_id_error

logger = logging.getLogger(__name__)

VEHICLE_CATEGORIES = frozenset(
    {AdCategory.PRIVATE_VEHICLE, AdCategory.TWO_WHEELER, AdCategory.COMMERCIAL_VEHICLE}
)


@dataclass(frozen=True, slots=True)
class CreateAdRequest:
    draft: AdDraft
    actor: Actor


@dataclass(frozen=True, slots=True)
class CreateAdResponse:
    ad: AdView


def resolve_references(resolver: InventoryResolver, values: dict[str, str | None]) -> VehicleModel | None:
    """
    Resolve every inventory id in ``values`` (attribute -> id).

    Returns:
        The resolved vehicle model when ``model_id`` is among the values

    Raises:
        ValidationError: One entry per reference that does not resolve
    """
    lookups = {
        "manufacturer_id": resolver.get_manufacturer,
        "model_id": resolver.get_vehicle_model,
        "variant_id": resolver.get_vehicle_variant,
        "transmission_type_id": resolver.get_transmission_type,
        "fuel_type_id": resolver.get_fuel_type,
    }
    errors: list[dict[str, str]] = []
    model: VehicleModel | None = None

    for name, identifier in values.items():
        if identifier is None:
            continue
        try:
            entity = lookups[name](identifier)
        except ReferenceNotFoundError as exc:
            errors.append(
                {"field": wire_name(name), "message": exc.message, "code": exc.error_code}
            )
            continue
        if name == "model_id":
            model = entity  # type: ignore[assignment]

    if errors:
        raise ValidationError("Invalid inventory references", errors=errors)
    return model


class CreateAd:
    """
    Create an ad and its category detail record.

    Steps:
    1. Commercial detection: infer the category and fill unset commercial fields
    2. Validate the draft (aggregated field errors)
    3. Resolve every inventory reference (aggregated into one ValidationError)
    4. Write the base ad, then the detail record; if the detail write fails
       the base ad is deleted again
    5. Invalidate the cache once the store commits and return a fresh
       denormalized read
    """

    def __init__(
        self,
        ad_store: AdStore,
        resolver: InventoryResolver,
        detector: DetectCommercialVehicle,
        view_builder: AdViewBuilder,
        cache: AdsCache | None = None,
    ) -> None:
        self._ad_store = ad_store
        self._resolver = resolver
        self._detector = detector
        self._view_builder = view_builder
        self._cache = cache

    def execute(self, request: CreateAdRequest) -> CreateAdResponse:
        """
        Raises:
            ValidationError: Missing or invalid fields, or unresolvable references
            InfrastructureError: If the store is unavailable
        """
        posted_by = parse_id(request.actor.user_id)
        if posted_by is None:
            raise invalid_id_error("postedBy")

        draft = self._with_defaults(request.draft)
        draft.validate()

        title = ""
        if draft.category in VEHICLE_CATEGORIES:
            model = resolve_references(
                self._resolver,
                {
                    "manufacturer_id": draft.manufacturer_id,
                    "model_id": draft.model_id,
                    "variant_id": draft.variant_id,
                    "transmission_type_id": draft.transmission_type_id,
                    "fuel_type_id": draft.fuel_type_id,
                },
            )
            title = vehicle_title(model.label if model else None, draft.year)

        ad = draft.to_ad(ad_id=new_id(), posted_by=posted_by, title=title)
        collection = DETAIL_COLLECTION_BY_CATEGORY[draft.category]

        self._ad_store.insert(Collection.ADS, ad)
        try:
            self._ad_store.insert(collection, draft.to_detail(ad_id=ad.id, detail_id=new_id()))
        except Exception:
            logger.error(
                "Detail write failed, removing base ad",
                extra={"ad_id": ad.id, "collection": collection.value},
            )
            self._compensate(ad.id)
            raise

        invalidate_after_commit(self._ad_store, self._cache, ad.id)

        view = load_view(self._ad_store, self._view_builder, ad.id)
        if view is None:
            raise InternalError("Created ad could not be read back", ad_id=ad.id)

        logger.info("Ad created", extra={"ad_id": ad.id, "category": ad.category.value})
        return CreateAdResponse(ad=view)

    def _with_defaults(self, draft: AdDraft) -> AdDraft:
        if draft.category is AdCategory.TWO_WHEELER:
            draft = draft.fill_missing(vehicle_type=VehicleType.TWO_WHEELER)

        if draft.category not in (None, AdCategory.COMMERCIAL_VEHICLE) or not draft.model_id:
            return draft

        defaults = self._detector.execute(DetectCommercialVehicleRequest(model_id=draft.model_id))
        if not defaults.is_commercial_vehicle:
            return draft

        if draft.category is None:
            draft = replace(draft, category=AdCategory.COMMERCIAL_VEHICLE)
        return draft.fill_missing(**defaults.as_draft_values())

    def _compensate(self, ad_id: str) -> None:
        try:
            self._ad_store.delete_by_id(Collection.ADS, ad_id)
        except Exception:
            # Left for the consistency scan; the detail write error is re-raised by the caller
            logger.exception("Compensating delete failed", extra={"ad_id": ad_id})
