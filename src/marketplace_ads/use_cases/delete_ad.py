from __future__ import annotations

import logging
from dataclasses import dataclass

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ads import Ad, Collection
from marketplace_ads.domain.errors import NotFoundError
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.use_cases.ad_views import invalidate_after_commit
from marketplace_ads.use_cases.get_ad_by_id import invalid_id_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteAdRequest:
    ad_id: str
    actor: Actor


@dataclass(frozen=True, slots=True)
class DeleteAdResponse:
    ad_id: str


class DeleteAd:
    """
    Hard-delete the base ad.

    The detail record is left in place; CheckAdConsistency reports and
    removes such orphans. Non-owners without an elevated role get NotFoundError.
    """

    def __init__(self, ad_store: AdStore, cache: AdsCache | None = None) -> None:
        self._ad_store = ad_store
        self._cache = cache

    def execute(self, request: DeleteAdRequest) -> DeleteAdResponse:
        ad_id = parse_id(request.ad_id)
        if ad_id is None:
            raise invalid_id_error()

        ad = self._ad_store.find_by_id(Collection.ADS, ad_id)
        if not isinstance(ad, Ad) or not request.actor.can_manage(ad.posted_by):
            raise NotFoundError(resource="Ad", identifier=request.ad_id)

        self._ad_store.delete_by_id(Collection.ADS, ad_id)

        invalidate_after_commit(self._ad_store, self._cache, ad_id)

        logger.info("Ad deleted", extra={"ad_id": ad_id, "actor": request.actor.user_id})
        return DeleteAdResponse(ad_id=ad_id)
