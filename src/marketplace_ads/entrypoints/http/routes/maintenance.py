from fastapi import APIRouter, Depends

from marketplace_ads.domain.actor import Actor
from marketplace_ads.domain.errors import ForbiddenError
from marketplace_ads.entrypoints.http.dependencies import (
    get_actor,
    get_consistency_use_case,
    get_warm_up_use_case,
)
from marketplace_ads.entrypoints.http.dtos.ads import ConsistencyReportDTO, WarmUpResponseDTO
from marketplace_ads.entrypoints.http.error_responses import ErrorResponse
from marketplace_ads.entrypoints.http.mappers.ads_mapper import AdsMapper
from marketplace_ads.use_cases.check_ad_consistency import (
    CheckAdConsistency,
    CheckAdConsistencyRequest,
)
from marketplace_ads.use_cases.warm_up_ads_cache import WarmUpAdsCache


router = APIRouter(prefix="/maintenance/ads", tags=["Maintenance"])

_ADMIN_ERRORS = {
    401: {"model": ErrorResponse, "description": "Missing caller identity"},
    403: {"model": ErrorResponse, "description": "Admin role required"},
}


def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_elevated:
        raise ForbiddenError("Admin role required")
    return actor


@router.post(
    "/cache/warm-up",
    response_model=WarmUpResponseDTO,
    summary="Warm up the ads cache",
    description="Pre-populate the first page of the unfiltered list and of each category.",
    responses=_ADMIN_ERRORS,
)
def warm_up_cache(
    _: Actor = Depends(require_admin),
    use_case: WarmUpAdsCache = Depends(get_warm_up_use_case),
) -> WarmUpResponseDTO:
    return AdsMapper.to_warm_up_response(use_case.execute())


@router.get(
    "/consistency",
    response_model=ConsistencyReportDTO,
    summary="Scan for orphaned ad records",
    description="""
    Report ads missing their category detail record and detail records whose
    ad no longer exists. With `cleanup=true` both kinds are deleted.
    """,
    responses=_ADMIN_ERRORS,
)
def check_consistency(
    cleanup: bool = False,
    _: Actor = Depends(require_admin),
    use_case: CheckAdConsistency = Depends(get_consistency_use_case),
) -> ConsistencyReportDTO:
    report = use_case.execute(CheckAdConsistencyRequest(cleanup=cleanup))
    return AdsMapper.to_consistency_response(report)
