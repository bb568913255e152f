from __future__ import annotations

import logging
from dataclasses import dataclass

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.ads import AdCategory
from marketplace_ads.domain.errors import DomainError
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.infra.retry import Retry, call_with_retry
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.search_ads import SearchAds, SearchAdsRequest

logger = logging.getLogger(__name__)

# First page, default sort: the unfiltered list plus one list per category
POPULAR_QUERIES: tuple[AdFilters, ...] = (
    AdFilters(),
    *(AdFilters(category=category) for category in AdCategory),
)


@dataclass(frozen=True, slots=True)
class WarmUpAdsCacheResponse:
    warmed: int
    failed: int


class WarmUpAdsCache:
    """
    Operator-triggered pre-population of the popular list queries.

    Each query is run against the store (never served from the cache) and
    stored. A failing query is logged and skipped.
    """

    def __init__(
        self,
        ad_store: AdStore,
        view_builder: AdViewBuilder,
        cache: AdsCache,
        retry: Retry = call_with_retry,
    ) -> None:
        self._search = SearchAds(ad_store, view_builder, cache=None, retry=retry)
        self._cache = cache

    def execute(self) -> WarmUpAdsCacheResponse:
        warmed = failed = 0
        paging, sorting = Paging(), Sorting()

        for filters in POPULAR_QUERIES:
            try:
                response = self._search.execute(
                    SearchAdsRequest(filters=filters, paging=paging, sorting=sorting)
                )
            except DomainError:
                logger.warning(
                    "Warm-up query failed",
                    extra={"category": filters.category.value if filters.category else None},
                    exc_info=True,
                )
                failed += 1
                continue

            if self._cache.set_list(filters, paging, sorting, response.result):
                warmed += 1
            else:
                failed += 1

        logger.info("Ads cache warm-up finished", extra={"warmed": warmed, "failed": failed})
        return WarmUpAdsCacheResponse(warmed=warmed, failed=failed)
