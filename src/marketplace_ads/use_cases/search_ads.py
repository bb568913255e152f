from __future__ import annotations

from dataclasses import dataclass, field

from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.domain.views import PaginatedAds
from marketplace_ads.infra.retry import Retry, call_with_retry
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.query.compiler import compile_search
from marketplace_ads.use_cases.ad_views import AdViewBuilder


@dataclass(frozen=True, slots=True)
class SearchAdsRequest:
    filters: AdFilters = field(default_factory=AdFilters)
    paging: Paging = field(default_factory=Paging)
    sorting: Sorting = field(default_factory=Sorting)


@dataclass(frozen=True, slots=True)
class SearchAdsResponse:
    result: PaginatedAds
    from_cache: bool = False


class SearchAds:
    """
    Filtered, sorted, paginated search across every ad category.

    Validates the request, then serves it from the cache when possible.
    On a miss the compiled count and data plans run as two independent
    reads (the total may drift from the page under concurrent writes),
    rows are denormalized, and the page is cached if the query is cacheable.
    """

    def __init__(
        self,
        ad_store: AdStore,
        view_builder: AdViewBuilder,
        cache: AdsCache | None = None,
        retry: Retry = call_with_retry,
    ) -> None:
        self._ad_store = ad_store
        self._view_builder = view_builder
        self._cache = cache
        self._retry = retry

    def execute(self, request: SearchAdsRequest) -> SearchAdsResponse:
        """
        Execute ad search.

        Raises:
            FilterValidationError: If filter parameters are invalid
            PagingValidationError: If page, limit or sort parameters are invalid
            InfrastructureError: If the store stays unavailable after retries
        """
        request.filters.validate()
        request.paging.validate()
        request.sorting.validate()

        if self._cache is not None:
            cached = self._cache.get_list(request.filters, request.paging, request.sorting)
            if cached is not None:
                return SearchAdsResponse(result=cached, from_cache=True)

        compiled = compile_search(request.filters, request.paging, request.sorting)
        total = self._retry(lambda: self._ad_store.count(compiled.count_plan))
        rows = self._retry(lambda: self._ad_store.run_plan(compiled.data_plan))
        views = self._retry(lambda: self._view_builder.build_many(rows))

        result = PaginatedAds.build(views, total, request.paging)

        if self._cache is not None:
            self._cache.set_list(request.filters, request.paging, request.sorting, result)

        return SearchAdsResponse(result=result)
