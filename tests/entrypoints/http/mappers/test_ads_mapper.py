"""
Test suite for AdsMapper.

The mapper only translates between REST DTOs and domain models:
- Query params to domain filters, paging and sorting (Decimal conversion, id splitting)
- Write payloads to AdDraft / AdPatch
- Caller headers to an Actor
- Denormalized views to response DTOs (Decimal → str at the boundary)
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from marketplace_ads.domain.actor import Role
from marketplace_ads.domain.ad_payloads import AdDraft, AdPatch
from marketplace_ads.domain.ads import (
    Ad,
    AdCategory,
    BodyType,
    CommercialVehicleDetails,
    CommercialVehicleType,
    OwnerProfile,
    PropertyDetails,
    PropertyType,
)
from marketplace_ads.domain.errors import UnauthorizedError
from marketplace_ads.domain.filters import AdFilters
from marketplace_ads.domain.views import AdView, InventoryRef, InventorySummary, PaginatedAds
from marketplace_ads.entrypoints.http.dtos.ads import (
    AdsSearchQueryDTO,
    CreateAdRequestDTO,
    UpdateAdRequestDTO,
)
from marketplace_ads.entrypoints.http.mappers.ads_mapper import AdsMapper, split_ids
from marketplace_ads.use_cases.check_ad_consistency import ConsistencyReport
from marketplace_ads.use_cases.warm_up_ads_cache import WarmUpAdsCacheResponse

CREATED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def commercial_view() -> AdView:
    ad = Ad(
        id="ad-1",
        title="Ace Gold 2021",
        description="Mini truck",
        price=Decimal("380000.00"),
        location="Nashik",
        category=AdCategory.COMMERCIAL_VEHICLE,
        posted_by="u-1",
        images=("https://img.example.com/ace.jpg",),
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )
    details = CommercialVehicleDetails(
        id="cv-1",
        ad_id="ad-1",
        commercial_vehicle_type=CommercialVehicleType.TRUCK,
        body_type=BodyType.FLATBED,
        manufacturer_id="m-1",
        model_id="mo-1",
        year=2021,
        mileage=60000,
        transmission_type_id="t-1",
        fuel_type_id="f-1",
        color="Blue",
        payload_capacity=Decimal("750"),
        axle_count=3,
        has_fitness=True,
    )
    return AdView(
        ad=ad,
        owner=OwnerProfile(id="u-1", name="Asha"),
        commercial_vehicle_details=details,
        year=2021,
        inventory=InventorySummary(model=InventoryRef(id="mo-1", name="Ace Gold")),
    )


# ==============================================================================
# to_domain_filters() / to_domain_request() - Query → Domain
# ==============================================================================


def test_to_domain_filters_converts_decimal_strings() -> None:
    dto = AdsSearchQueryDTO(
        category=AdCategory.PROPERTY,
        min_price="1000000",
        max_price="2500000.50",
        min_area="500",
        max_payload="1000",
        location="Mumbai",
    )

    result = AdsMapper.to_domain_filters(dto)

    assert isinstance(result, AdFilters)
    assert result.category is AdCategory.PROPERTY
    assert result.price_min == Decimal("1000000")
    assert result.price_max == Decimal("2500000.50")
    assert result.min_area == Decimal("500")
    assert result.max_payload == Decimal("1000")
    assert result.location == "Mumbai"


def test_to_domain_filters_with_no_filters() -> None:
    result = AdsMapper.to_domain_filters(AdsSearchQueryDTO())

    assert result == AdFilters()
    assert result.active_fields() == []


def test_to_domain_filters_splits_id_lists() -> None:
    dto = AdsSearchQueryDTO(manufacturer_id=["m-1,m-2", "m-3"], fuel_type_id=[" f-1 "])

    result = AdsMapper.to_domain_filters(dto)

    assert result.manufacturer_ids == ("m-1", "m-2", "m-3")
    assert result.fuel_type_ids == ("f-1",)
    assert result.model_ids is None


def test_query_dto_accepts_camel_case_names() -> None:
    dto = AdsSearchQueryDTO.model_validate({"minPrice": "10", "sortOrder": "asc", "hasParking": True})

    assert dto.min_price == "10"
    assert dto.sort_order == "asc"
    assert dto.has_parking is True


def test_to_domain_request_normalizes_sort_order() -> None:
    dto = AdsSearchQueryDTO(page=3, limit=10, sort_by="price", sort_order="asc")

    request = AdsMapper.to_domain_request(dto)

    assert request.paging.page == 3
    assert request.paging.limit == 10
    assert request.sorting.sort_by == "price"
    assert request.sorting.sort_order == "ASC"


@pytest.mark.parametrize(
    "values, expected",
    [
        (None, None),
        ([], None),
        ([",", " "], None),
        (["a,b", "c"], ("a", "b", "c")),
        (["a, ,b"], ("a", "b")),
    ],
)
def test_split_ids(values, expected) -> None:
    assert split_ids(values) == expected


# ==============================================================================
# to_draft() / to_patch() - Payload → Domain
# ==============================================================================


def test_to_draft_converts_decimals_and_lists() -> None:
    dto = CreateAdRequestDTO(
        category=AdCategory.PROPERTY,
        description="2BHK",
        price="4500000.00",
        location="Bandra",
        property_type=PropertyType.APARTMENT,
        bedrooms=2,
        bathrooms=2,
        area_sqft="950",
        images=["https://img.example.com/1.jpg"],
        amenities=["lift"],
    )

    draft = AdsMapper.to_draft(dto)

    assert isinstance(draft, AdDraft)
    assert draft.price == Decimal("4500000.00")
    assert draft.area_sqft == Decimal("950")
    assert draft.payload_capacity is None
    assert draft.images == ("https://img.example.com/1.jpg",)
    assert draft.amenities == ("lift",)
    assert draft.additional_features == ()


def test_to_draft_accepts_camel_case_body() -> None:
    dto = CreateAdRequestDTO.model_validate(
        {"modelId": "mo-1", "payloadCapacity": "750.5", "axleCount": 3, "hasFitness": True}
    )

    draft = AdsMapper.to_draft(dto)

    assert draft.category is None
    assert draft.model_id == "mo-1"
    assert draft.payload_capacity == Decimal("750.5")
    assert draft.axle_count == 3
    assert draft.has_fitness is True


def test_to_patch_leaves_omitted_fields_unset() -> None:
    patch = AdsMapper.to_patch(UpdateAdRequestDTO(price="10.50", is_active=False))

    assert isinstance(patch, AdPatch)
    assert patch.price == Decimal("10.50")
    assert patch.is_active is False
    assert patch.images is None
    assert patch.amenities is None
    assert patch.changes(["price", "description", "is_active"]) == {
        "price": Decimal("10.50"),
        "is_active": False,
    }


def test_to_patch_keeps_empty_lists() -> None:
    patch = AdsMapper.to_patch(UpdateAdRequestDTO(images=[]))

    assert patch.images == ()


# ==============================================================================
# to_actor() - Headers → Actor
# ==============================================================================


def test_to_actor_defaults_to_user_role() -> None:
    actor = AdsMapper.to_actor(" u-1 ", None)

    assert actor.user_id == "u-1"
    assert actor.role is Role.USER


def test_to_actor_is_case_insensitive_on_role() -> None:
    assert AdsMapper.to_actor("u-1", "ADMIN").role is Role.ADMIN
    assert AdsMapper.to_actor("u-1", "super_admin").is_elevated


@pytest.mark.parametrize("user_id, role", [(None, None), ("", "user"), ("  ", None), ("u-1", "root")])
def test_to_actor_rejects_missing_identity_or_unknown_role(user_id, role) -> None:
    with pytest.raises(UnauthorizedError):
        AdsMapper.to_actor(user_id, role)


# ==============================================================================
# Responses - Domain → DTO
# ==============================================================================


def test_to_ad_response_converts_commercial_view(commercial_view: AdView) -> None:
    dto = AdsMapper.to_ad_response(commercial_view)

    assert dto.id == "ad-1"
    assert dto.price == "380000.00"
    assert dto.category == "commercial_vehicle"
    assert dto.images == ["https://img.example.com/ace.jpg"]
    assert dto.owner.name == "Asha"
    assert dto.property_details is None
    assert dto.vehicle_details is None

    details = dto.commercial_vehicle_details
    assert details.commercial_vehicle_type == "truck"
    assert details.body_type == "flatbed"
    assert details.payload_capacity == "750"
    assert details.payload_unit == "kg"
    assert details.axle_count == 3
    assert details.vehicle_type is None
    assert details.has_fitness is True

    assert dto.inventory.model.name == "Ace Gold"
    assert dto.inventory.manufacturer is None


def test_to_ad_response_serializes_with_camel_case(commercial_view: AdView) -> None:
    body = AdsMapper.to_ad_response(commercial_view).model_dump(by_alias=True, mode="json")

    assert body["postedBy"] == "u-1"
    assert body["isActive"] is True
    assert body["commercialVehicleDetails"]["payloadCapacity"] == "750"
    assert body["createdAt"].startswith("2026-01-01T00:00:00")


def test_to_ad_response_for_property_without_owner() -> None:
    ad = Ad(
        id="ad-2",
        description="Shop",
        price=Decimal("900000"),
        location="Pune",
        category=AdCategory.PROPERTY,
        posted_by="u-2",
    )
    details = PropertyDetails(
        id="p-1",
        ad_id="ad-2",
        property_type=PropertyType.SHOP,
        area_sqft=Decimal("120.5"),
        amenities=("power backup",),
    )

    dto = AdsMapper.to_ad_response(AdView(ad=ad, property_details=details))

    assert dto.owner is None
    assert dto.inventory is None
    assert dto.year is None
    assert dto.property_details.property_type == "shop"
    assert dto.property_details.area_sqft == "120.5"
    assert dto.property_details.amenities == ["power backup"]


def test_to_paginated_response_copies_metadata(commercial_view: AdView) -> None:
    result = PaginatedAds(
        data=[commercial_view], total=41, page=2, limit=20, total_pages=3, has_next=True, has_prev=True
    )

    dto = AdsMapper.to_paginated_response(result)

    assert len(dto.data) == 1
    assert (dto.total, dto.page, dto.limit, dto.total_pages) == (41, 2, 20, 3)
    assert dto.has_next and dto.has_prev


def test_maintenance_responses() -> None:
    report = ConsistencyReport(
        ads_missing_details={"vehicle_ads": ["ad-9"]},
        orphaned_details={"vehicle_ads": []},
        cleaned_up=True,
    )

    consistency = AdsMapper.to_consistency_response(report)
    warm_up = AdsMapper.to_warm_up_response(WarmUpAdsCacheResponse(warmed=4, failed=1))

    assert consistency.has_issues is True
    assert consistency.cleaned_up is True
    assert consistency.ads_missing_details == {"vehicle_ads": ["ad-9"]}
    assert (warm_up.warmed, warm_up.failed) == (4, 1)
