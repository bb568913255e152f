"""Tests for search filters, paging and sorting."""

from __future__ import annotations

from decimal import Decimal

import pytest

from marketplace_ads.domain.ads import AdCategory, BodyType, PropertyType
from marketplace_ads.domain.errors import FilterValidationError, PagingValidationError
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting, is_set


# ==============================================================================
# AdFilters
# ==============================================================================


def test_empty_filters_have_no_active_fields() -> None:
    filters = AdFilters()

    assert filters.active_fields() == []
    assert not filters.has_property_filters()
    assert not filters.has_vehicle_filters()
    assert not filters.has_commercial_filters()


def test_blank_strings_and_empty_tuples_are_not_active() -> None:
    filters = AdFilters(search="  ", location="", manufacturer_ids=())

    assert filters.active_fields() == []
    assert not filters.has_vehicle_filters()


def test_active_fields_lists_set_values_including_false_flags() -> None:
    filters = AdFilters(category=AdCategory.PROPERTY, has_parking=False, min_bedrooms=0)

    assert filters.active_fields() == ["category", "min_bedrooms", "has_parking"]


def test_category_sub_filter_predicates() -> None:
    assert AdFilters(property_type=PropertyType.VILLA).has_property_filters()
    assert AdFilters(color="White").has_vehicle_filters()
    assert AdFilters(model_ids=("x",)).has_vehicle_filters()
    assert AdFilters(body_type=BodyType.TANKER).has_commercial_filters()
    # Base fields never count as sub-filters
    assert not AdFilters(category=AdCategory.PRIVATE_VEHICLE).has_vehicle_filters()


def test_validate_accepts_consistent_ranges() -> None:
    AdFilters(
        price_min=Decimal("100"),
        price_max=Decimal("100"),
        min_year=2010,
        max_year=2020,
        axle_count=10,
    ).validate()


@pytest.mark.parametrize(
    "filters, message",
    [
        (AdFilters(price_min=Decimal("10"), price_max=Decimal("5")), "price_min cannot be greater than price_max"),
        (AdFilters(min_bedrooms=3, max_bedrooms=2), "min_bedrooms cannot be greater than max_bedrooms"),
        (AdFilters(min_seating=9, max_seating=2), "min_seating cannot be greater than max_seating"),
        (AdFilters(price_min=Decimal("-1")), "price_min must be >= 0"),
        (AdFilters(min_year=1899), "min_year must be >= 1900"),
        (AdFilters(max_mileage=-5), "max_mileage must be >= 0"),
        (AdFilters(axle_count=11), "axle_count must be between 1 and 10"),
    ],
)
def test_validate_rejects_invalid_filters(filters: AdFilters, message: str) -> None:
    with pytest.raises(FilterValidationError) as exc_info:
        filters.validate()

    assert exc_info.value.message == message


def test_validate_rejects_float_prices() -> None:
    with pytest.raises(FilterValidationError, match="no floats"):
        AdFilters(price_min=10.5).validate()  # type: ignore[arg-type]


# ==============================================================================
# Paging / Sorting
# ==============================================================================


def test_paging_offset_is_one_based() -> None:
    assert Paging(page=1, limit=20).offset == 0
    assert Paging(page=3, limit=10).offset == 20


@pytest.mark.parametrize("page, limit", [(0, 20), (1, 0), (1, 101)])
def test_paging_rejects_out_of_range_values(page: int, limit: int) -> None:
    with pytest.raises(PagingValidationError):
        Paging(page=page, limit=limit).validate()


def test_paging_accepts_limit_bounds() -> None:
    Paging(page=1, limit=1).validate()
    Paging(page=1, limit=100).validate()


def test_sorting_defaults_to_newest_first() -> None:
    sorting = Sorting()

    assert sorting.attribute == "created_at"
    assert sorting.descending


def test_sorting_order_is_case_insensitive() -> None:
    sorting = Sorting(sort_by="price", sort_order="asc")

    sorting.validate()
    assert sorting.attribute == "price"
    assert not sorting.descending


@pytest.mark.parametrize("sorting", [Sorting(sort_by="mileage"), Sorting(sort_order="UP")])
def test_sorting_rejects_unknown_values(sorting: Sorting) -> None:
    with pytest.raises(PagingValidationError):
        sorting.validate()


def test_is_set() -> None:
    assert is_set(0)
    assert is_set(False)
    assert not is_set(None)
    assert not is_set(" ")
    assert not is_set(())
