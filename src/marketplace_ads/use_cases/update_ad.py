from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ad_payloads import AdDraft, AdPatch, field_names, vehicle_title
from marketplace_ads.domain.ads import (
    DETAIL_COLLECTION_BY_CATEGORY,
    DETAIL_TYPE_BY_COLLECTION,
    Ad,
    Collection,
)
from marketplace_ads.domain.errors import (
    InternalError,
    NotFoundError,
    OrphanDataError,
    ReferenceNotFoundError,
    ValidationError,
)
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.domain.inventory import VehicleModel
from marketplace_ads.domain.views import AdView
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.ports.inventory_resolver import InventoryResolver
from marketplace_ads.use_cases.ad_views import AdViewBuilder, invalidate_after_commit, load_view
from marketplace_ads.use_cases.create_ad import VEHICLE_CATEGORIES, resolve_references
from marketplace_ads.use_cases.get_ad_by_id import invalid_id_error

logger = logging.getLogger(__name__)

BASE_PATCH_FIELDS = ("description", "price", "location", "images", "is_active")

REFERENCE_FIELDS = (
    "manufacturer_id",
    "model_id",
    "variant_id",
    "transmission_type_id",
    "fuel_type_id",
)


@dataclass(frozen=True, slots=True)
class UpdateAdRequest:
    ad_id: str
    patch: AdPatch
    actor: Actor


@dataclass(frozen=True, slots=True)
class UpdateAdResponse:
    ad: AdView


class UpdateAd:
    """
    Partially update an ad and its category detail record.

    Only the owner or an elevated role may update; anyone else gets the same
    NotFoundError as for a missing ad. The category never changes. The merged
    result is validated with the create rules, changed inventory references
    are resolved, and the title is recomputed when the model or year changes.
    """

    def __init__(
        self,
        ad_store: AdStore,
        resolver: InventoryResolver,
        view_builder: AdViewBuilder,
        cache: AdsCache | None = None,
    ) -> None:
        self._ad_store = ad_store
        self._resolver = resolver
        self._view_builder = view_builder
        self._cache = cache

    def execute(self, request: UpdateAdRequest) -> UpdateAdResponse:
        """
        Raises:
            ValidationError: Invalid id or fields, category change, bad references
            NotFoundError: Ad missing, or the actor may not manage it
            OrphanDataError: Detail fields sent for an ad lacking its detail record
        """
        ad_id = parse_id(request.ad_id)
        if ad_id is None:
            raise invalid_id_error()

        patch = request.patch
        patch.validate()

        ad = self._ad_store.find_by_id(Collection.ADS, ad_id)
        if not isinstance(ad, Ad) or not request.actor.can_manage(ad.posted_by):
            raise NotFoundError(resource="Ad", identifier=request.ad_id)

        if patch.category is not None and patch.category != ad.category:
            raise ValidationError(
                errors=[
                    {
                        "field": "category",
                        "message": "Category cannot be changed after creation",
                        "code": "IMMUTABLE",
                    }
                ]
            )

        collection = DETAIL_COLLECTION_BY_CATEGORY[ad.category]
        detail_type = DETAIL_TYPE_BY_COLLECTION[collection]
        detail_changes = patch.changes(
            [name for name in field_names(detail_type) if name not in ("id", "ad_id")]
        )
        base_changes = _normalized(patch.changes(BASE_PATCH_FIELDS))

        detail = self._ad_store.find_one_by_ad_id(collection, ad_id)
        if detail is None and detail_changes:
            raise OrphanDataError(
                "Ad has no detail record to update", ad_id=ad_id, collection=collection.value
            )

        merged_detail = {
            f.name: getattr(detail, f.name)
            for f in fields(detail_type)
            if detail is not None and f.name not in ("id", "ad_id")
        }
        merged_detail.update(detail_changes)
        if detail is not None:
            self._validate_merged(ad, base_changes, merged_detail)

        if ad.category in VEHICLE_CATEGORIES and detail is not None:
            changed_refs = {
                name: detail_changes[name] for name in REFERENCE_FIELDS if name in detail_changes
            }
            model = resolve_references(self._resolver, changed_refs) if changed_refs else None
            if "model_id" in detail_changes or "year" in detail_changes:
                base_changes["title"] = vehicle_title(
                    self._model_label(model, merged_detail["model_id"]),
                    merged_detail["year"],
                )

        self._ad_store.update_by_id(Collection.ADS, ad_id, base_changes)
        if detail is not None and detail_changes:
            self._ad_store.update_by_id(collection, detail.id, detail_changes)

        invalidate_after_commit(self._ad_store, self._cache, ad_id)

        view = load_view(self._ad_store, self._view_builder, ad_id)
        if view is None:
            raise InternalError("Updated ad could not be read back", ad_id=ad_id)

        logger.info(
            "Ad updated",
            extra={"ad_id": ad_id, "fields": sorted({*base_changes, *detail_changes})},
        )
        return UpdateAdResponse(ad=view)

    def _validate_merged(self, ad: Ad, base_changes: dict, merged_detail: dict) -> None:
        """Re-run the create rules against the record as it would look after the update."""
        AdDraft(
            category=ad.category,
            description=base_changes.get("description", ad.description),
            price=base_changes.get("price", ad.price),
            location=base_changes.get("location", ad.location),
            **merged_detail,
        ).validate()

    def _model_label(self, model: VehicleModel | None, model_id: str | None) -> str | None:
        if model is not None:
            return model.label
        if model_id is None:
            return None
        try:
            return self._resolver.get_vehicle_model(model_id).label
        except ReferenceNotFoundError:
            return None


def _normalized(changes: dict) -> dict:
    for name in ("description", "location"):
        if name in changes:
            changes[name] = changes[name].strip()
    if "images" in changes:
        changes["images"] = tuple(changes["images"])
    return changes
