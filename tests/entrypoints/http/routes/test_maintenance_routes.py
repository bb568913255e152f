"""Test suite for the /v1/maintenance/ads routes (admin only)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace_ads.adapters.in_memory_ad_store import InMemoryAdStore
from marketplace_ads.adapters.in_memory_inventory_resolver import InMemoryInventoryResolver
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.ads import Ad, AdCategory, Collection
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.entrypoints.http.dependencies import (
    get_ad_store,
    get_ads_cache,
    get_inventory_resolver,
    get_warm_up_use_case,
)
from marketplace_ads.entrypoints.http.exception_handlers import register_exception_handlers
from marketplace_ads.entrypoints.http.routes.maintenance import router
from marketplace_ads.use_cases.ad_views import AdViewBuilder
from marketplace_ads.use_cases.warm_up_ads_cache import WarmUpAdsCache

from conftest import ADMIN_ID, OWNER_ID

ADMIN_HEADERS = {"X-User-Id": ADMIN_ID, "X-User-Role": "admin"}
ORPHAN_AD_ID = "f0000000-0000-4000-8000-000000000002"


@pytest.fixture
def app(ad_store: InMemoryAdStore, resolver: InMemoryInventoryResolver, cache: AdsCache) -> FastAPI:
    """Create a test FastAPI app with the maintenance router backed by in-memory adapters."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")

    test_app.dependency_overrides[get_ad_store] = lambda: ad_store
    test_app.dependency_overrides[get_inventory_resolver] = lambda: resolver
    test_app.dependency_overrides[get_ads_cache] = lambda: cache
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def orphan_ad(ad_store: InMemoryAdStore) -> str:
    """A vehicle ad whose detail record was never written."""
    return ad_store.insert(
        Collection.ADS,
        Ad(
            id=ORPHAN_AD_ID,
            description="Detail write crashed",
            price=Decimal("100000"),
            location="Pune",
            category=AdCategory.PRIVATE_VEHICLE,
            posted_by=OWNER_ID,
        ),
    )


# ==============================================================================
# Authorization
# ==============================================================================


@pytest.mark.parametrize(
    "method, path",
    [("post", "/v1/maintenance/ads/cache/warm-up"), ("get", "/v1/maintenance/ads/consistency")],
)
def test_maintenance_requires_admin(client: TestClient, method: str, path: str) -> None:
    response = client.request(method, path, headers={"X-User-Id": OWNER_ID})

    assert response.status_code == 403
    assert response.json() == {"detail": "Admin role required", "code": "FORBIDDEN"}


def test_maintenance_requires_identity(client: TestClient) -> None:
    response = client.get("/v1/maintenance/ads/consistency")

    assert response.status_code == 401


# ==============================================================================
# POST /cache/warm-up
# ==============================================================================


def test_warm_up_populates_cache(
    app: FastAPI,
    client: TestClient,
    ad_store: InMemoryAdStore,
    view_builder: AdViewBuilder,
    cache: AdsCache,
) -> None:
    app.dependency_overrides[get_warm_up_use_case] = lambda: WarmUpAdsCache(
        ad_store, view_builder, cache, retry=lambda operation: operation()
    )

    response = client.post("/v1/maintenance/ads/cache/warm-up", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"warmed": 5, "failed": 0}
    assert cache.get_list(AdFilters(), Paging(), Sorting()) is not None


# ==============================================================================
# GET /consistency
# ==============================================================================


def test_consistency_report_only(client: TestClient, orphan_ad: str) -> None:
    response = client.get("/v1/maintenance/ads/consistency", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["hasIssues"] is True
    assert data["cleanedUp"] is False
    assert data["adsMissingDetails"]["vehicle_ads"] == [orphan_ad]
    assert data["orphanedDetails"]["property_ads"] == []


def test_consistency_cleanup(client: TestClient, ad_store: InMemoryAdStore, orphan_ad: str) -> None:
    response = client.get(
        "/v1/maintenance/ads/consistency", params={"cleanup": "true"}, headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    assert response.json()["cleanedUp"] is True
    assert ad_store.find_by_id(Collection.ADS, orphan_ad) is None

    follow_up = client.get("/v1/maintenance/ads/consistency", headers=ADMIN_HEADERS).json()
    assert follow_up["hasIssues"] is False
