from __future__ import annotations

from decimal import Decimal

from marketplace_ads.domain.actor import Actor, Role
from marketplace_ads.domain.ad_payloads import AdDraft, AdPatch
from marketplace_ads.domain.errors import UnauthorizedError
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.domain.views import AdView, InventoryRef, InventorySummary, PaginatedAds
from marketplace_ads.entrypoints.http.dtos.ads import (
    AdResponseDTO,
    AdsSearchQueryDTO,
    CommercialVehicleDetailsDTO,
    ConsistencyReportDTO,
    CreateAdRequestDTO,
    InventoryRefDTO,
    InventorySummaryDTO,
    OwnerDTO,
    PaginatedAdsResponseDTO,
    PropertyDetailsDTO,
    UpdateAdRequestDTO,
    VehicleDetailsDTO,
    WarmUpResponseDTO,
)
from marketplace_ads.use_cases.check_ad_consistency import ConsistencyReport
from marketplace_ads.use_cases.search_ads import SearchAdsRequest
from marketplace_ads.use_cases.warm_up_ads_cache import WarmUpAdsCacheResponse

# Write-payload fields that are plain pass-through (no Decimal/tuple conversion)
_PASS_THROUGH_FIELDS = (
    "category",
    "description",
    "location",
    "property_type",
    "bedrooms",
    "bathrooms",
    "floor",
    "is_furnished",
    "has_parking",
    "has_garden",
    "vehicle_type",
    "manufacturer_id",
    "model_id",
    "variant_id",
    "year",
    "mileage",
    "transmission_type_id",
    "fuel_type_id",
    "color",
    "is_first_owner",
    "has_insurance",
    "has_rc_book",
    "commercial_vehicle_type",
    "body_type",
    "payload_unit",
    "axle_count",
    "seating_capacity",
    "has_fitness",
    "has_permit",
)

_DECIMAL_FIELDS = ("price", "area_sqft", "payload_capacity")


class AdsMapper:
    """Maps between REST DTOs and domain models for ads."""

    @staticmethod
    def to_domain_filters(dto: AdsSearchQueryDTO) -> AdFilters:
        """
        Converts query params to domain filters.

        Decimal strings become Decimal; id filters accept repeated params and
        comma-separated values.
        """
        return AdFilters(
            category=dto.category,
            search=dto.search,
            location=dto.location,
            price_min=_decimal(dto.min_price),
            price_max=_decimal(dto.max_price),
            posted_by=dto.posted_by,
            is_active=dto.is_active,
            property_type=dto.property_type,
            min_bedrooms=dto.min_bedrooms,
            max_bedrooms=dto.max_bedrooms,
            min_bathrooms=dto.min_bathrooms,
            max_bathrooms=dto.max_bathrooms,
            min_area=_decimal(dto.min_area),
            max_area=_decimal(dto.max_area),
            is_furnished=dto.is_furnished,
            has_parking=dto.has_parking,
            has_garden=dto.has_garden,
            vehicle_type=dto.vehicle_type,
            manufacturer_ids=split_ids(dto.manufacturer_id),
            model_ids=split_ids(dto.model_id),
            variant_ids=split_ids(dto.variant_id),
            transmission_type_ids=split_ids(dto.transmission_type_id),
            fuel_type_ids=split_ids(dto.fuel_type_id),
            color=dto.color,
            max_mileage=dto.max_mileage,
            is_first_owner=dto.is_first_owner,
            has_insurance=dto.has_insurance,
            has_rc_book=dto.has_rc_book,
            min_year=dto.min_year,
            max_year=dto.max_year,
            commercial_vehicle_type=dto.commercial_vehicle_type,
            body_type=dto.body_type,
            min_payload=_decimal(dto.min_payload),
            max_payload=_decimal(dto.max_payload),
            axle_count=dto.axle_count,
            has_fitness=dto.has_fitness,
            has_permit=dto.has_permit,
            min_seating=dto.min_seating,
            max_seating=dto.max_seating,
        )

    @staticmethod
    def to_domain_request(dto: AdsSearchQueryDTO) -> SearchAdsRequest:
        return SearchAdsRequest(
            filters=AdsMapper.to_domain_filters(dto),
            paging=Paging(page=dto.page, limit=dto.limit),
            sorting=Sorting(sort_by=dto.sort_by, sort_order=dto.sort_order.upper()),
        )

    @staticmethod
    def to_draft(dto: CreateAdRequestDTO) -> AdDraft:
        values = {name: getattr(dto, name) for name in _PASS_THROUGH_FIELDS}
        values.update({name: _decimal(getattr(dto, name)) for name in _DECIMAL_FIELDS})
        return AdDraft(
            **values,
            images=tuple(dto.images),
            amenities=tuple(dto.amenities),
            additional_features=tuple(dto.additional_features),
        )

    @staticmethod
    def to_patch(dto: UpdateAdRequestDTO) -> AdPatch:
        values = {name: getattr(dto, name) for name in _PASS_THROUGH_FIELDS}
        values.update({name: _decimal(getattr(dto, name)) for name in _DECIMAL_FIELDS})
        return AdPatch(
            **values,
            is_active=dto.is_active,
            images=_tuple(dto.images),
            amenities=_tuple(dto.amenities),
            additional_features=_tuple(dto.additional_features),
        )

    @staticmethod
    def to_actor(user_id: str | None, role: str | None) -> Actor:
        """
        Builds the caller identity forwarded by the upstream auth layer.

        Raises:
            UnauthorizedError: If the user id header is missing or the role is unknown
        """
        if not user_id or not user_id.strip():
            raise UnauthorizedError("Missing caller identity")
        try:
            parsed_role = Role((role or Role.USER.value).strip().lower())
        except ValueError:
            raise UnauthorizedError(f"Unknown role '{role}'") from None
        return Actor(user_id=user_id.strip(), role=parsed_role)

    @staticmethod
    def to_ad_response(view: AdView) -> AdResponseDTO:
        """Converts the denormalized view; Decimal → str at the boundary."""
        ad = view.ad
        return AdResponseDTO(
            id=ad.id,
            title=ad.title,
            description=ad.description,
            price=str(ad.price),
            images=list(ad.images),
            location=ad.location,
            category=ad.category.value,
            is_active=ad.is_active,
            posted_by=ad.posted_by,
            created_at=ad.created_at,
            updated_at=ad.updated_at,
            owner=(
                OwnerDTO(
                    id=view.owner.id,
                    name=view.owner.name,
                    email=view.owner.email,
                    phone=view.owner.phone,
                )
                if view.owner
                else None
            ),
            property_details=_property_details(view),
            vehicle_details=_vehicle_details(view),
            commercial_vehicle_details=_commercial_details(view),
            year=view.year,
            inventory=_inventory(view.inventory),
        )

    @staticmethod
    def to_paginated_response(result: PaginatedAds) -> PaginatedAdsResponseDTO:
        return PaginatedAdsResponseDTO(
            data=[AdsMapper.to_ad_response(view) for view in result.data],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
            has_next=result.has_next,
            has_prev=result.has_prev,
        )

    @staticmethod
    def to_warm_up_response(result: WarmUpAdsCacheResponse) -> WarmUpResponseDTO:
        return WarmUpResponseDTO(warmed=result.warmed, failed=result.failed)

    @staticmethod
    def to_consistency_response(report: ConsistencyReport) -> ConsistencyReportDTO:
        return ConsistencyReportDTO(
            ads_missing_details=report.ads_missing_details,
            orphaned_details=report.orphaned_details,
            has_issues=report.has_issues,
            cleaned_up=report.cleaned_up,
        )


def split_ids(values: list[str] | None) -> tuple[str, ...] | None:
    """["a,b", "c"] -> ("a", "b", "c"); nothing left -> None."""
    if not values:
        return None
    ids = tuple(
        part.strip() for value in values for part in value.split(",") if part.strip()
    )
    return ids or None


def _decimal(value: str | None) -> Decimal | None:
    return Decimal(value) if value else None


def _tuple(values: list[str] | None) -> tuple[str, ...] | None:
    return tuple(values) if values is not None else None


def _property_details(view: AdView) -> PropertyDetailsDTO | None:
    details = view.property_details
    if details is None:
        return None
    return PropertyDetailsDTO(
        id=details.id,
        property_type=details.property_type.value,
        area_sqft=str(details.area_sqft),
        bedrooms=details.bedrooms,
        bathrooms=details.bathrooms,
        floor=details.floor,
        is_furnished=details.is_furnished,
        has_parking=details.has_parking,
        has_garden=details.has_garden,
        amenities=list(details.amenities),
    )


def _vehicle_fields(details) -> dict:
    return dict(
        id=details.id,
        vehicle_type=details.vehicle_type.value if details.vehicle_type else None,
        manufacturer_id=details.manufacturer_id,
        model_id=details.model_id,
        variant_id=details.variant_id,
        year=details.year,
        mileage=details.mileage,
        transmission_type_id=details.transmission_type_id,
        fuel_type_id=details.fuel_type_id,
        color=details.color,
        is_first_owner=details.is_first_owner,
        has_insurance=details.has_insurance,
        has_rc_book=details.has_rc_book,
        additional_features=list(details.additional_features),
    )


def _vehicle_details(view: AdView) -> VehicleDetailsDTO | None:
    if view.vehicle_details is None:
        return None
    return VehicleDetailsDTO(**_vehicle_fields(view.vehicle_details))


def _commercial_details(view: AdView) -> CommercialVehicleDetailsDTO | None:
    details = view.commercial_vehicle_details
    if details is None:
        return None
    return CommercialVehicleDetailsDTO(
        **_vehicle_fields(details),
        commercial_vehicle_type=details.commercial_vehicle_type.value,
        body_type=details.body_type.value,
        payload_capacity=str(details.payload_capacity),
        payload_unit=details.payload_unit,
        axle_count=details.axle_count,
        seating_capacity=details.seating_capacity,
        has_fitness=details.has_fitness,
        has_permit=details.has_permit,
    )


def _ref(ref: InventoryRef | None) -> InventoryRefDTO | None:
    return InventoryRefDTO(id=ref.id, name=ref.name) if ref else None


def _inventory(summary: InventorySummary | None) -> InventorySummaryDTO | None:
    if summary is None:
        return None
    return InventorySummaryDTO(
        manufacturer=_ref(summary.manufacturer),
        model=_ref(summary.model),
        variant=_ref(summary.variant),
        transmission_type=_ref(summary.transmission_type),
        fuel_type=_ref(summary.fuel_type),
    )
