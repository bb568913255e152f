"""Out-of-band integrity scan of the ad aggregate.

Two kinds of orphans exist:

- an ad without the detail record its category requires (e.g. a crash
  between the base and the detail write)
- a detail record whose ad no longer exists (ad deletion does not cascade)

Never run implicitly on the read or write path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.ads import (
    DETAIL_COLLECTION_BY_CATEGORY,
    DETAIL_COLLECTIONS,
    Ad,
    Collection,
)
from marketplace_ads.domain.errors import OrphanDataError
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.use_cases.ad_views import invalidate_after_commit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckAdConsistencyRequest:
    cleanup: bool = False


@dataclass(frozen=True)
class ConsistencyReport:
    # Detail collection name -> ids
    ads_missing_details: dict[str, list[str]] = field(default_factory=dict)
    orphaned_details: dict[str, list[str]] = field(default_factory=dict)
    cleaned_up: bool = False

    @property
    def has_issues(self) -> bool:
        return any(self.ads_missing_details.values()) or any(self.orphaned_details.values())

    def raise_for_issues(self) -> None:
        """
        Raises:
            OrphanDataError: If the scan found any orphan
        """
        if not self.has_issues:
            return
        raise OrphanDataError(
            "Ad aggregate has orphaned records",
            ads_missing_details=self.ads_missing_details,
            orphaned_details=self.orphaned_details,
        )


class CheckAdConsistency:
    def __init__(self, ad_store: AdStore, cache: AdsCache | None = None) -> None:
        self._ad_store = ad_store
        self._cache = cache

    def execute(self, request: CheckAdConsistencyRequest) -> ConsistencyReport:
        ads = [ad for ad in self._ad_store.find_all(Collection.ADS) if isinstance(ad, Ad)]
        ad_ids = {ad.id for ad in ads}

        missing: dict[str, list[str]] = {}
        orphaned: dict[str, list[str]] = {}

        for collection in DETAIL_COLLECTIONS:
            details = self._ad_store.find_all(collection)
            owners = {detail.ad_id for detail in details}  # type: ignore[union-attr]

            missing[collection.value] = [
                ad.id
                for ad in ads
                if DETAIL_COLLECTION_BY_CATEGORY[ad.category] is collection and ad.id not in owners
            ]
            orphaned[collection.value] = [
                detail.id
                for detail in details
                if detail.ad_id not in ad_ids  # type: ignore[union-attr]
            ]

            if missing[collection.value] or orphaned[collection.value]:
                logger.warning(
                    "Orphaned ad records found",
                    extra={
                        "collection": collection.value,
                        "ads_missing_details": len(missing[collection.value]),
                        "orphaned_details": len(orphaned[collection.value]),
                    },
                )

        if request.cleanup:
            self._clean_up(missing, orphaned)

        return ConsistencyReport(
            ads_missing_details=missing,
            orphaned_details=orphaned,
            cleaned_up=request.cleanup,
        )

    def _clean_up(self, missing: dict[str, list[str]], orphaned: dict[str, list[str]]) -> None:
        for ad_ids in missing.values():
            for ad_id in ad_ids:
                self._ad_store.delete_by_id(Collection.ADS, ad_id)
                invalidate_after_commit(self._ad_store, self._cache, ad_id)

        for collection_name, detail_ids in orphaned.items():
            for detail_id in detail_ids:
                self._ad_store.delete_by_id(Collection(collection_name), detail_id)

        logger.info(
            "Orphaned ad records removed",
            extra={
                "ads": sum(len(ids) for ids in missing.values()),
                "details": sum(len(ids) for ids in orphaned.values()),
            },
        )
