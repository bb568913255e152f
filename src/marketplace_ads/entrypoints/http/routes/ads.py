from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from marketplace_ads.domain.actor import Actor
from marketplace_ads.entrypoints.http.dependencies import (
    get_actor,
    get_ad_by_id_use_case,
    get_create_ad_use_case,
    get_delete_ad_use_case,
    get_search_ads_use_case,
    get_update_ad_use_case,
)
from marketplace_ads.entrypoints.http.dtos.ads import (
    AdResponseDTO,
    AdsSearchQueryDTO,
    CreateAdRequestDTO,
    DeleteAdResponseDTO,
    PaginatedAdsResponseDTO,
    UpdateAdRequestDTO,
)
from marketplace_ads.entrypoints.http.error_responses import ErrorResponse
from marketplace_ads.entrypoints.http.mappers.ads_mapper import AdsMapper
from marketplace_ads.use_cases.create_ad import CreateAd, CreateAdRequest
from marketplace_ads.use_cases.delete_ad import DeleteAd, DeleteAdRequest
from marketplace_ads.use_cases.get_ad_by_id import GetAdById, GetAdByIdRequest
from marketplace_ads.use_cases.search_ads import SearchAds
from marketplace_ads.use_cases.update_ad import UpdateAd, UpdateAdRequest


router = APIRouter(tags=["Ads"])

_ERRORS = {
    404: {"model": ErrorResponse, "description": "Ad not found"},
    422: {"model": ErrorResponse, "description": "Validation error"},
    503: {"model": ErrorResponse, "description": "Store unavailable"},
}


@router.get(
    "/ads",
    response_model=PaginatedAdsResponseDTO,
    summary="Search ads",
    description="""
    List and search active ads across all categories.

    ## Filters
    - All filters use AND semantics
    - Category sub-filters (property, vehicle, commercial vehicle) only
      restrict results when at least one of them is given
    - Id filters accept a single id, repeated params or comma-separated ids;
      malformed ids are ignored
    - `isActive` defaults to true

    ## Pagination
    - 1-based `page`, `limit` between 1 and 100 (default 20)
    - `sortBy`: createdAt (default), updatedAt, price, title, category

    ## Example
    ```
    GET /v1/ads?category=property&minPrice=1000000&location=Mumbai&limit=10
    ```
    """,
    responses={422: _ERRORS[422], 503: _ERRORS[503]},
)
def search_ads(
    query: Annotated[AdsSearchQueryDTO, Query()],
    use_case: SearchAds = Depends(get_search_ads_use_case),
) -> PaginatedAdsResponseDTO:
    """Search ads endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = AdsMapper.to_domain_request(query)

    # 2. Execute use case
    response = use_case.execute(request)

    # 3. Map to response
    return AdsMapper.to_paginated_response(response.result)


@router.get(
    "/ads/{ad_id}",
    response_model=AdResponseDTO,
    summary="Get ad by id",
    description="Fetch one ad with its owner, category details and inventory names.",
    responses=_ERRORS,
)
def get_ad(
    ad_id: str,
    use_case: GetAdById = Depends(get_ad_by_id_use_case),
) -> AdResponseDTO:
    response = use_case.execute(GetAdByIdRequest(ad_id=ad_id))
    return AdsMapper.to_ad_response(response.ad)


@router.post(
    "/ads",
    response_model=AdResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create ad",
    description="""
    Create an ad and its category detail record.

    - Monetary values and areas are decimal strings
    - Vehicle ads get their title from the model name and year
    - A commercial model fills missing commercial fields with its defaults
      and turns a payload without `category` into a commercial vehicle ad
    """,
    responses={401: {"model": ErrorResponse}, 422: _ERRORS[422], 503: _ERRORS[503]},
)
def create_ad(
    body: CreateAdRequestDTO,
    actor: Actor = Depends(get_actor),
    use_case: CreateAd = Depends(get_create_ad_use_case),
) -> AdResponseDTO:
    request = CreateAdRequest(draft=AdsMapper.to_draft(body), actor=actor)
    response = use_case.execute(request)
    return AdsMapper.to_ad_response(response.ad)


@router.patch(
    "/ads/{ad_id}",
    response_model=AdResponseDTO,
    summary="Update ad",
    description="Partially update an ad. Only the owner or an admin may update; the category is immutable.",
    responses={401: {"model": ErrorResponse}, **_ERRORS},
)
def update_ad(
    ad_id: str,
    body: UpdateAdRequestDTO,
    actor: Actor = Depends(get_actor),
    use_case: UpdateAd = Depends(get_update_ad_use_case),
) -> AdResponseDTO:
    request = UpdateAdRequest(ad_id=ad_id, patch=AdsMapper.to_patch(body), actor=actor)
    response = use_case.execute(request)
    return AdsMapper.to_ad_response(response.ad)


@router.delete(
    "/ads/{ad_id}",
    response_model=DeleteAdResponseDTO,
    summary="Delete ad",
    description="Hard-delete an ad. Only the owner or an admin may delete.",
    responses={401: {"model": ErrorResponse}, **_ERRORS},
)
def delete_ad(
    ad_id: str,
    actor: Actor = Depends(get_actor),
    use_case: DeleteAd = Depends(get_delete_ad_use_case),
) -> DeleteAdResponseDTO:
    response = use_case.execute(DeleteAdRequest(ad_id=ad_id, actor=actor))
    return DeleteAdResponseDTO(id=response.ad_id)
