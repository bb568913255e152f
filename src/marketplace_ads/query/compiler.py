"""Compile ``AdFilters`` into search plans.

Stage order: full-text search, base match, owner join, the three detail
joins, then one detail match per category whose sub-filters are present.
The count plan stops there; the data plan adds sort, skip and limit.

Detail matches are only emitted when the caller set at least one
sub-filter of that category. Emitting them unconditionally would exclude
every ad lacking that detail collection (e.g. property ads have no
manufacturer). Ties on the sort key keep the store's natural order.
"""

from __future__ import annotations

from dataclasses import dataclass

from marketplace_ads.domain.ads import DETAIL_COLLECTIONS, Collection
from marketplace_ads.domain.filters import AdFilters, Paging, Sorting
from marketplace_ads.domain.ids import parse_id, parse_ids
from marketplace_ads.query.plan import (
    Condition,
    DetailJoin,
    DetailMatch,
    Limit,
    Match,
    Op,
    OwnerJoin,
    QueryPlan,
    Skip,
    Sort,
    Stage,
    TextSearch,
)


@dataclass(frozen=True, slots=True)
class CompiledSearch:
    count_plan: QueryPlan
    data_plan: QueryPlan


def compile_search(filters: AdFilters, paging: Paging, sorting: Sorting) -> CompiledSearch:
    """
    Build the count and data plans for a search.

    Precondition: filters, paging and sorting are validated by the caller.

    Returns:
        CompiledSearch whose plans share every stage except sort/skip/limit
    """
    stages: list[Stage] = []

    if filters.search and filters.search.strip():
        stages.append(TextSearch(term=filters.search.strip()))

    stages.append(Match(conditions=base_conditions(filters)))
    stages.append(OwnerJoin())
    stages.extend(DetailJoin(collection=collection) for collection in DETAIL_COLLECTIONS)

    detail_filters = (
        (Collection.PROPERTY_ADS, filters.has_property_filters(), property_conditions),
        (Collection.VEHICLE_ADS, filters.has_vehicle_filters(), vehicle_conditions),
        (Collection.COMMERCIAL_VEHICLE_ADS, filters.has_commercial_filters(), commercial_conditions),
    )
    for collection, requested, build in detail_filters:
        if not requested:
            continue
        conditions = build(filters)
        # All sub-filter values may have been dropped (e.g. malformed ids)
        if conditions:
            stages.append(DetailMatch(collection=collection, conditions=conditions))

    count_plan = QueryPlan(stages=tuple(stages))
    data_plan = count_plan.then(
        Sort(field=sorting.attribute, descending=sorting.descending),
        Skip(count=paging.offset),
        Limit(count=paging.limit),
    )
    return CompiledSearch(count_plan=count_plan, data_plan=data_plan)


def base_conditions(filters: AdFilters) -> tuple[Condition, ...]:
    is_active = True if filters.is_active is None else filters.is_active
    conditions = [Condition("is_active", Op.EQ, is_active)]

    if filters.category is not None:
        conditions.append(Condition("category", Op.EQ, filters.category))
    if filters.location and filters.location.strip():
        conditions.append(Condition("location", Op.ICONTAINS, filters.location.strip()))
    conditions.extend(_range("price", filters.price_min, filters.price_max))

    posted_by = parse_id(filters.posted_by)
    if posted_by is not None:
        conditions.append(Condition("posted_by", Op.EQ, posted_by))

    return tuple(conditions)


def property_conditions(filters: AdFilters) -> tuple[Condition, ...]:
    conditions: list[Condition] = []
    if filters.property_type is not None:
        conditions.append(Condition("property_type", Op.EQ, filters.property_type))
    conditions.extend(_range("bedrooms", filters.min_bedrooms, filters.max_bedrooms))
    conditions.extend(_range("bathrooms", filters.min_bathrooms, filters.max_bathrooms))
    conditions.extend(_range("area_sqft", filters.min_area, filters.max_area))
    conditions.extend(
        _flags(
            filters,
            ("is_furnished", "has_parking", "has_garden"),
        )
    )
    return tuple(conditions)


def vehicle_conditions(filters: AdFilters) -> tuple[Condition, ...]:
    conditions: list[Condition] = []
    if filters.vehicle_type is not None:
        conditions.append(Condition("vehicle_type", Op.EQ, filters.vehicle_type))

    id_filters = (
        ("manufacturer_id", filters.manufacturer_ids),
        ("model_id", filters.model_ids),
        ("variant_id", filters.variant_ids),
        ("transmission_type_id", filters.transmission_type_ids),
        ("fuel_type_id", filters.fuel_type_ids),
    )
    for field, raw_ids in id_filters:
        ids = parse_ids(raw_ids)
        if ids:
            conditions.append(Condition(field, Op.IN, ids))

    if filters.color and filters.color.strip():
        conditions.append(Condition("color", Op.ICONTAINS, filters.color.strip()))
    if filters.max_mileage is not None:
        conditions.append(Condition("mileage", Op.LTE, filters.max_mileage))
    conditions.extend(_flags(filters, ("is_first_owner", "has_insurance", "has_rc_book")))
    conditions.extend(_range("year", filters.min_year, filters.max_year))
    return tuple(conditions)


def commercial_conditions(filters: AdFilters) -> tuple[Condition, ...]:
    conditions: list[Condition] = []
    if filters.commercial_vehicle_type is not None:
        conditions.append(
            Condition("commercial_vehicle_type", Op.EQ, filters.commercial_vehicle_type)
        )
    if filters.body_type is not None:
        conditions.append(Condition("body_type", Op.EQ, filters.body_type))
    conditions.extend(_range("payload_capacity", filters.min_payload, filters.max_payload))
    if filters.axle_count is not None:
        conditions.append(Condition("axle_count", Op.EQ, filters.axle_count))
    conditions.extend(_flags(filters, ("has_fitness", "has_permit")))
    conditions.extend(_range("seating_capacity", filters.min_seating, filters.max_seating))
    return tuple(conditions)


def _range(field: str, low: object, high: object) -> list[Condition]:
    conditions = []
    if low is not None:
        conditions.append(Condition(field, Op.GTE, low))
    if high is not None:
        conditions.append(Condition(field, Op.LTE, high))
    return conditions


def _flags(filters: AdFilters, names: tuple[str, ...]) -> list[Condition]:
    return [
        Condition(name, Op.EQ, getattr(filters, name))
        for name in names
        if getattr(filters, name) is not None
    ]


def compile_lookup(ad_id: str) -> QueryPlan:
    """Plan fetching one ad by id with its owner and details, active or not."""
    return QueryPlan(
        stages=(
            Match(conditions=(Condition("id", Op.EQ, ad_id),)),
            OwnerJoin(),
            *(DetailJoin(collection=collection) for collection in DETAIL_COLLECTIONS),
            Limit(count=1),
        )
    )
