"""Read-through cache for ad searches and single-ad lookups.

Every cache failure is logged and swallowed: a broken cache degrades to a
miss on reads and to a no-op on writes and invalidation, never to a failed
request. That covers any exception the store raises (connection errors,
serialization errors, bugs in a store implementation), not only
InfrastructureError.
"""

from __future__ import annotations

import logging

from pydantic import TypeAdapter

from marketplace_ads.cache import keys
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.domain.views import AdView, PaginatedAds
from marketplace_ads.ports.cache_store import CacheStore

logger = logging.getLogger(__name__)

_PAGE_ADAPTER = TypeAdapter(PaginatedAds)
_VIEW_ADAPTER = TypeAdapter(AdView)


class AdsCache:
    """
    Cache facade over a ``CacheStore``.

    Constructed once per process and shared by every use case that reads or
    writes ads.
    """

    def __init__(self, store: CacheStore) -> None:
        self._store = store

    def get_list(self, filters: AdFilters, paging: Paging, sorting: Sorting) -> PaginatedAds | None:
        if not keys.is_cacheable(filters):
            return None

        key = keys.list_key(filters, paging, sorting)
        try:
            cached = self._store.get(key)
            if cached is None:
                logger.debug("Ads list cache miss", extra={"cache_key": key})
                return None
            logger.debug("Ads list cache hit", extra={"cache_key": key})
            return _PAGE_ADAPTER.validate_python(cached)
        except Exception:
            logger.warning("Ads list cache read failed", extra={"cache_key": key}, exc_info=True)
            return None

    def set_list(
        self, filters: AdFilters, paging: Paging, sorting: Sorting, result: PaginatedAds
    ) -> bool:
        """Store a search result when the query is cacheable; True when stored."""
        if not keys.is_cacheable(filters):
            return False

        key = keys.list_key(filters, paging, sorting)
        ttl = keys.list_ttl(filters)
        try:
            self._store.set(key, _PAGE_ADAPTER.dump_python(result, mode="json"), ttl)
        except Exception:
            logger.warning("Ads list cache write failed", extra={"cache_key": key}, exc_info=True)
            return False
        return True

    def get_ad(self, ad_id: str) -> AdView | None:
        key = keys.ad_key(ad_id)
        try:
            cached = self._store.get(key)
            if cached is None:
                logger.debug("Ad cache miss", extra={"cache_key": key})
                return None
            logger.debug("Ad cache hit", extra={"cache_key": key})
            return _VIEW_ADAPTER.validate_python(cached)
        except Exception:
            logger.warning("Ad cache read failed", extra={"cache_key": key}, exc_info=True)
            return None

    def set_ad(self, view: AdView) -> None:
        key = keys.ad_key(view.ad.id)
        try:
            self._store.set(key, _VIEW_ADAPTER.dump_python(view, mode="json"), keys.AD_TTL_SECONDS)
        except Exception:
            logger.warning("Ad cache write failed", extra={"cache_key": key}, exc_info=True)

    def invalidate(self, ad_id: str) -> bool:
        """
        Drop the single-ad entry and the whole list namespace.

        Each key is deleted on its own, so one failing delete does not leave
        the remaining list entries behind.

        Returns:
            True when every delete succeeded
        """
        failed = 0
        if not self._delete(keys.ad_key(ad_id)):
            failed += 1

        try:
            list_keys = self._store.list_keys(keys.LIST_PREFIX)
        except Exception:
            logger.warning("Ads cache key listing failed", extra={"ad_id": ad_id}, exc_info=True)
            return False

        for key in list_keys:
            if not self._delete(key):
                failed += 1

        if failed:
            logger.warning(
                "Ads cache invalidation incomplete",
                extra={"ad_id": ad_id, "failed_deletes": failed},
            )
            return False

        logger.debug(
            "Ads cache invalidated",
            extra={"ad_id": ad_id, "list_keys_cleared": len(list_keys)},
        )
        return True

    def _delete(self, key: str) -> bool:
        try:
            self._store.delete(key)
        except Exception:
            logger.warning("Ads cache delete failed", extra={"cache_key": key}, exc_info=True)
            return False
        return True
