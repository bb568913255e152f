"""Tests for the AdsCache read-through facade."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from marketplace_ads.adapters.in_memory_cache_store import InMemoryCacheStore
from marketplace_ads.cache import keys
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.ads import Ad, AdCategory, PropertyDetails, PropertyType
from marketplace_ads.domain.errors import InfrastructureError
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.domain.views import AdView, PaginatedAds
from marketplace_ads.ports.cache_store import CacheStore


@pytest.fixture()
def view() -> AdView:
    ad = Ad(
        id="ad-1",
        description="Sea view flat",
        price=Decimal("4500000.00"),
        location="Bandra, Mumbai",
        category=AdCategory.PROPERTY,
        posted_by="user-1",
        images=("a.jpg",),
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    details = PropertyDetails(
        id="d-1",
        ad_id="ad-1",
        property_type=PropertyType.APARTMENT,
        area_sqft=Decimal("950"),
        bedrooms=2,
        bathrooms=2,
        amenities=("gym",),
    )
    return AdView(ad=ad, property_details=details)


@pytest.fixture()
def store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture()
def cache(store: InMemoryCacheStore) -> AdsCache:
    return AdsCache(store)


@pytest.fixture()
def failing_store() -> Mock:
    store = Mock(spec=CacheStore)
    error = InfrastructureError("Cache unavailable")
    store.get.side_effect = error
    store.set.side_effect = error
    store.delete.side_effect = error
    store.list_keys.side_effect = error
    return store


# ==============================================================================
# Single ads
# ==============================================================================


def test_ad_round_trip(cache: AdsCache, view: AdView) -> None:
    cache.set_ad(view)

    assert cache.get_ad("ad-1") == view


def test_ad_is_stored_as_json_with_ad_ttl(view: AdView) -> None:
    store = Mock(spec=CacheStore)

    AdsCache(store).set_ad(view)

    key, value, ttl = store.set.call_args.args
    assert key == "ads:ad:ad-1"
    assert ttl == keys.AD_TTL_SECONDS
    assert value["ad"]["price"] == "4500000.00"
    assert value["ad"]["category"] == "property"


def test_ad_miss(cache: AdsCache) -> None:
    assert cache.get_ad("missing") is None


def test_malformed_entry_is_a_miss(cache: AdsCache, store: InMemoryCacheStore) -> None:
    store.set(keys.ad_key("ad-1"), {"ad": {"id": "ad-1"}}, ttl_seconds=60)

    assert cache.get_ad("ad-1") is None


# ==============================================================================
# Lists
# ==============================================================================


def test_list_round_trip(cache: AdsCache, view: AdView) -> None:
    filters = AdFilters(category=AdCategory.PROPERTY)
    page = PaginatedAds.build([view], 1, Paging())

    assert cache.set_list(filters, Paging(), Sorting(), page) is True
    assert cache.get_list(filters, Paging(), Sorting()) == page


def test_uncacheable_queries_are_never_stored(cache: AdsCache, store: InMemoryCacheStore) -> None:
    filters = AdFilters(search="villa")

    assert cache.set_list(filters, Paging(), Sorting(), PaginatedAds()) is False
    assert cache.get_list(filters, Paging(), Sorting()) is None
    assert store.list_keys(keys.LIST_PREFIX) == []


def test_list_uses_filter_dependent_ttl(view: AdView) -> None:
    store = Mock(spec=CacheStore)
    filters = AdFilters(category=AdCategory.PROPERTY, location="Pune", min_bedrooms=2)

    AdsCache(store).set_list(filters, Paging(), Sorting(), PaginatedAds())

    _, _, ttl = store.set.call_args.args
    assert ttl == keys.BASE_LIST_TTL_SECONDS


# ==============================================================================
# Invalidation
# ==============================================================================


def test_invalidate_drops_ad_and_every_list(cache: AdsCache, store: InMemoryCacheStore, view: AdView) -> None:
    cache.set_ad(view)
    cache.set_list(AdFilters(), Paging(), Sorting(), PaginatedAds())
    cache.set_list(AdFilters(), Paging(page=2), Sorting(), PaginatedAds())
    store.set("unrelated", 1, ttl_seconds=60)

    cache.invalidate("ad-1")

    assert cache.get_ad("ad-1") is None
    assert store.list_keys(keys.LIST_PREFIX) == []
    assert store.get("unrelated") == 1


# ==============================================================================
# Failures are swallowed
# ==============================================================================


def test_backend_failures_degrade_to_misses(failing_store: Mock, view: AdView) -> None:
    cache = AdsCache(failing_store)

    assert cache.get_ad("ad-1") is None
    assert cache.get_list(AdFilters(), Paging(), Sorting()) is None
    assert cache.set_list(AdFilters(), Paging(), Sorting(), PaginatedAds()) is False
    cache.set_ad(view)
    cache.invalidate("ad-1")
    assert cache.invalidate("ad-1") is False


@pytest.mark.parametrize(
    "error",
    [RuntimeError("dictionary changed size during iteration"), TypeError("not JSON serializable")],
)
def test_any_store_exception_is_swallowed(error: Exception, view: AdView) -> None:
    store = Mock(spec=CacheStore)
    store.get.side_effect = error
    store.set.side_effect = error
    store.delete.side_effect = error
    store.list_keys.side_effect = error
    cache = AdsCache(store)

    assert cache.get_ad("ad-1") is None
    assert cache.get_list(AdFilters(), Paging(), Sorting()) is None
    assert cache.set_list(AdFilters(), Paging(), Sorting(), PaginatedAds()) is False
    cache.set_ad(view)
    assert cache.invalidate("ad-1") is False


def test_one_failing_delete_does_not_stop_invalidation(store: InMemoryCacheStore) -> None:
    store.set("ads:list:a", 1, ttl_seconds=60)
    store.set("ads:list:b", 2, ttl_seconds=60)
    store.set("ads:list:c", 3, ttl_seconds=60)
    real_delete = store.delete

    def flaky_delete(key: str) -> None:
        if key == "ads:list:a":
            raise RuntimeError("delete failed")
        real_delete(key)

    store.delete = flaky_delete  # type: ignore[method-assign]

    assert AdsCache(store).invalidate("ad-1") is False
    assert store.list_keys(keys.LIST_PREFIX) == ["ads:list:a"]


def test_successful_invalidation_reports_true(cache: AdsCache) -> None:
    assert cache.invalidate("ad-1") is True
