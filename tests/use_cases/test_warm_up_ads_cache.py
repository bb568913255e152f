"""Test suite for WarmUpAdsCache use case."""

from __future__ import annotations

from unittest.mock import Mock

from marketplace_ads.adapters.in_memory_ad_store import InMemoryAdStore
from marketplace_ads.adapters.in_memory_cache_store import InMemoryCacheStore
from marketplace_ads.cache import keys
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ads import AdCategory
from marketplace_ads.domain.errors import InfrastructureError
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.ports.cache_store import CacheStore
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.create_ad import CreateAd, CreateAdRequest
from marketplace_ads.use_cases.warm_up_ads_cache import POPULAR_QUERIES, WarmUpAdsCache


def no_retry(operation):
    return operation()


def test_popular_queries_cover_every_category() -> None:
    assert len(POPULAR_QUERIES) == 5
    assert POPULAR_QUERIES[0] == AdFilters()
    assert {q.category for q in POPULAR_QUERIES[1:]} == set(AdCategory)


def test_warm_up_stores_every_popular_query(
    ad_store: InMemoryAdStore,
    view_builder: AdViewBuilder,
    cache: AdsCache,
    create_ad: CreateAd,
    owner: Actor,
    property_draft,
) -> None:
    created = create_ad.execute(CreateAdRequest(draft=property_draft, actor=owner)).ad

    response = WarmUpAdsCache(ad_store, view_builder, cache, retry=no_retry).execute()

    assert (response.warmed, response.failed) == (5, 0)
    cached = cache.get_list(AdFilters(category=AdCategory.PROPERTY), Paging(), Sorting())
    assert [view.ad.id for view in cached.data] == [created.ad.id]
    assert cache.get_list(AdFilters(category=AdCategory.TWO_WHEELER), Paging(), Sorting()).total == 0


def test_warm_up_bypasses_existing_entries(ad_store: InMemoryAdStore, view_builder: AdViewBuilder) -> None:
    store = InMemoryCacheStore()
    store.set(keys.list_key(AdFilters(), Paging(), Sorting()), {"stale": True}, ttl_seconds=60)

    WarmUpAdsCache(ad_store, view_builder, AdsCache(store), retry=no_retry).execute()

    assert store.get(keys.list_key(AdFilters(), Paging(), Sorting()))["total"] == 0


def test_failing_queries_are_counted(view_builder: AdViewBuilder, cache: AdsCache) -> None:
    store = Mock(spec=AdStore)
    store.count.side_effect = InfrastructureError("down")

    response = WarmUpAdsCache(store, view_builder, cache, retry=no_retry).execute()

    assert (response.warmed, response.failed) == (0, 5)


def test_failing_cache_writes_are_counted(ad_store: InMemoryAdStore, view_builder: AdViewBuilder) -> None:
    cache_store = Mock(spec=CacheStore)
    cache_store.set.side_effect = InfrastructureError("Cache write failed")

    response = WarmUpAdsCache(ad_store, view_builder, AdsCache(cache_store), retry=no_retry).execute()

    assert (response.warmed, response.failed) == (0, 5)
