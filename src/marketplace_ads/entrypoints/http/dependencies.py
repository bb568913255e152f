"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons (and the process-wide cache client) use lru_cache.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from marketplace_ads.adapters.in_memory_cache_store import InMemoryCacheStore
from marketplace_ads.adapters.postgres_ad_store import PostgresAdStore
from marketplace_ads.adapters.postgres_inventory_resolver import PostgresInventoryResolver
from marketplace_ads.adapters.redis_cache_store import RedisCacheStore
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.entrypoints.http.mappers.ads_mapper import AdsMapper
from marketplace_ads.infra.config import redis_socket_timeout_s, redis_url
from marketplace_ads.infra.db.session import get_session
from marketplace_ads.ports.ad_store import AdStore
from marketplace_ads.ports.cache_store import CacheStore
from marketplace_ads.ports.inventory_resolver import InventoryResolver
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.check_ad_consistency import CheckAdConsistency
from marketplace_ads.use_cases.create_ad import CreateAd
from marketplace_ads.use_cases.delete_ad import DeleteAd
from marketplace_ads.use_cases.detect_commercial_vehicle import DetectCommercialVehicle
from marketplace_ads.use_cases.get_ad_by_id import GetAdById
from marketplace_ads.use_cases.search_ads import SearchAds
from marketplace_ads.use_cases.update_ad import UpdateAd
from marketplace_ads.use_cases.warm_up_ads_cache import WarmUpAdsCache

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    FastAPI will:
    1. Call this function when a request starts
    2. Inject the session into the route
    3. Commit/rollback and close the session when the request ends

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


@lru_cache
def get_cache_store() -> CacheStore:
    """
    Process-wide cache client, constructed once.

    Redis when REDIS_URL is set, otherwise an in-process store.
    """
    url = redis_url()
    if url:
        logger.info("Using Redis cache store")
        return RedisCacheStore.from_url(url, socket_timeout=redis_socket_timeout_s())

    logger.info("REDIS_URL not set, using in-memory cache store")
    return InMemoryCacheStore()


def get_ads_cache(store: CacheStore = Depends(get_cache_store)) -> AdsCache:
    return AdsCache(store)


def get_ad_store(db: Session = Depends(get_db)) -> AdStore:
    return PostgresAdStore(session=db)


def get_inventory_resolver(db: Session = Depends(get_db)) -> InventoryResolver:
    return PostgresInventoryResolver(session=db)


def get_view_builder(
    resolver: InventoryResolver = Depends(get_inventory_resolver),
) -> AdViewBuilder:
    return AdViewBuilder(resolver)


def get_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor:
    """Caller identity set by the upstream auth layer (X-User-Id / X-User-Role)."""
    return AdsMapper.to_actor(x_user_id, x_user_role)


def get_search_ads_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    view_builder: AdViewBuilder = Depends(get_view_builder),
    cache: AdsCache = Depends(get_ads_cache),
) -> SearchAds:
    """
    Factory function that returns a configured SearchAds use case.

    Called per-request: fresh store, fresh use case, isolated session.
    """
    return SearchAds(ad_store=ad_store, view_builder=view_builder, cache=cache)


def get_ad_by_id_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    view_builder: AdViewBuilder = Depends(get_view_builder),
    cache: AdsCache = Depends(get_ads_cache),
) -> GetAdById:
    return GetAdById(ad_store=ad_store, view_builder=view_builder, cache=cache)


def get_create_ad_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    resolver: InventoryResolver = Depends(get_inventory_resolver),
    view_builder: AdViewBuilder = Depends(get_view_builder),
    cache: AdsCache = Depends(get_ads_cache),
) -> CreateAd:
    return CreateAd(
        ad_store=ad_store,
        resolver=resolver,
        detector=DetectCommercialVehicle(resolver),
        view_builder=view_builder,
        cache=cache,
    )


def get_update_ad_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    resolver: InventoryResolver = Depends(get_inventory_resolver),
    view_builder: AdViewBuilder = Depends(get_view_builder),
    cache: AdsCache = Depends(get_ads_cache),
) -> UpdateAd:
    return UpdateAd(ad_store=ad_store, resolver=resolver, view_builder=view_builder, cache=cache)


def get_delete_ad_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    cache: AdsCache = Depends(get_ads_cache),
) -> DeleteAd:
    return DeleteAd(ad_store=ad_store, cache=cache)


def get_warm_up_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    view_builder: AdViewBuilder = Depends(get_view_builder),
    cache: AdsCache = Depends(get_ads_cache),
) -> WarmUpAdsCache:
    return WarmUpAdsCache(ad_store=ad_store, view_builder=view_builder, cache=cache)


def get_consistency_use_case(
    ad_store: AdStore = Depends(get_ad_store),
    cache: AdsCache = Depends(get_ads_cache),
) -> CheckAdConsistency:
    return CheckAdConsistency(ad_store=ad_store, cache=cache)
