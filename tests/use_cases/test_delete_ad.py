"""Test suite for DeleteAd use case."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from marketplace_ads.adapters.in_memory_ad_store import InMemoryAdStore
from marketplace_ads.cache.ads_cache import AdsCache
from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.ads import Collection
from marketplace_ads.domain.errors import NotFoundError, ValidationError
from marketplace_ads.domain.views import AdView
from marketplace_ads.ports.cache_store import CacheStore
from marketplace_ads.use_cases.create_ad import CreateAd, CreateAdRequest
from marketplace_ads.use_cases.delete_ad import DeleteAd, DeleteAdRequest, DeleteAdResponse


@pytest.fixture()
def delete_ad(ad_store: InMemoryAdStore, cache: AdsCache) -> DeleteAd:
    return DeleteAd(ad_store=ad_store, cache=cache)


@pytest.fixture()
def property_ad(create_ad: CreateAd, owner: Actor, property_draft) -> AdView:
    return create_ad.execute(CreateAdRequest(draft=property_draft, actor=owner)).ad


def test_owner_deletes_base_ad_only(
    delete_ad: DeleteAd, ad_store: InMemoryAdStore, property_ad: AdView, owner: Actor
) -> None:
    """The detail record is left for the consistency scan."""
    response = delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))

    assert response == DeleteAdResponse(ad_id=property_ad.ad.id)
    assert ad_store.find_by_id(Collection.ADS, property_ad.ad.id) is None
    assert ad_store.find_one_by_ad_id(Collection.PROPERTY_ADS, property_ad.ad.id) is not None


def test_admin_may_delete_any_ad(delete_ad: DeleteAd, property_ad: AdView, admin: Actor) -> None:
    delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id.upper(), actor=admin))


def test_non_owner_gets_not_found(
    delete_ad: DeleteAd, ad_store: InMemoryAdStore, property_ad: AdView, other_user: Actor
) -> None:
    with pytest.raises(NotFoundError):
        delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=other_user))

    assert ad_store.find_by_id(Collection.ADS, property_ad.ad.id) is not None


def test_second_delete_gets_not_found(delete_ad: DeleteAd, property_ad: AdView, owner: Actor) -> None:
    delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))

    with pytest.raises(NotFoundError):
        delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))


def test_malformed_id(delete_ad: DeleteAd, owner: Actor) -> None:
    with pytest.raises(ValidationError):
        delete_ad.execute(DeleteAdRequest(ad_id="42", actor=owner))


def test_delete_invalidates_cache(
    delete_ad: DeleteAd, cache: AdsCache, property_ad: AdView, owner: Actor
) -> None:
    cache.set_ad(property_ad)

    delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))

    assert cache.get_ad(property_ad.ad.id) is None


def test_delete_succeeds_when_cache_store_breaks(
    ad_store: InMemoryAdStore, property_ad: AdView, owner: Actor
) -> None:
    store = Mock(spec=CacheStore)
    store.list_keys.side_effect = RuntimeError("dictionary changed size during iteration")
    delete_ad = DeleteAd(ad_store=ad_store, cache=AdsCache(store))

    response = delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))

    assert response.ad_id == property_ad.ad.id
    assert ad_store.find_by_id(Collection.ADS, property_ad.ad.id) is None
    store.delete.assert_called_once()


def test_delete_defers_invalidation_to_commit(
    delete_ad: DeleteAd,
    ad_store: InMemoryAdStore,
    cache: AdsCache,
    property_ad: AdView,
    owner: Actor,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    pending: list = []
    monkeypatch.setattr(ad_store, "after_commit", pending.append)
    cache.set_ad(property_ad)

    delete_ad.execute(DeleteAdRequest(ad_id=property_ad.ad.id, actor=owner))
    assert cache.get_ad(property_ad.ad.id) == property_ad

    for callback in pending:
        callback()
    assert cache.get_ad(property_ad.ad.id) is None
