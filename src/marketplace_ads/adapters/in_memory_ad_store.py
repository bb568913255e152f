from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable

from marketplace_ads.domain.ads import Ad, AdDetail, Collection, JoinedAd, OwnerProfile
from marketplace_ads.domain.errors import NotFoundError
from marketplace_ads.ports.ad_store import AdRecord, AdStore
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
    TextSearch,
)

# JoinedAd attribute holding the rows joined from each detail collection
JOINED_ATTRIBUTE: dict[Collection, str] = {
    Collection.PROPERTY_ADS: "property_details",
    Collection.VEHICLE_ADS: "vehicle_details",
    Collection.COMMERCIAL_VEHICLE_ADS: "commercial_vehicle_details",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryAdStore(AdStore):
    """
    Canonical contract implementation for tests.

    - Stores every collection in insertion order
    - Evaluates plan stages in order, row by row
    - Sorting is stable: equal sort keys keep insertion order
    - Text search requires every term to appear in title, description or location
    """

    def __init__(
        self,
        owners: list[OwnerProfile] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._records: dict[Collection, dict[str, AdRecord]] = {
            collection: {} for collection in Collection
        }
        self._owners: dict[str, OwnerProfile] = {owner.id: owner for owner in owners or []}
        self._clock = clock

    def add_owner(self, owner: OwnerProfile) -> None:
        self._owners[owner.id] = owner

    def insert(self, collection: Collection, record: AdRecord) -> str:
        if isinstance(record, Ad):
            now = self._clock()
            record = replace(
                record,
                created_at=record.created_at or now,
                updated_at=record.updated_at or now,
            )
        self._records[collection][record.id] = record
        return record.id

    def find_by_id(self, collection: Collection, record_id: str) -> AdRecord | None:
        return self._records[collection].get(record_id)

    def find_one_by_ad_id(self, collection: Collection, ad_id: str) -> AdDetail | None:
        for record in self._records[collection].values():
            if getattr(record, "ad_id", None) == ad_id:
                return record  # type: ignore[return-value]
        return None

    def update_by_id(
        self, collection: Collection, record_id: str, patch: dict[str, Any]
    ) -> AdRecord:
        record = self._records[collection].get(record_id)
        if record is None:
            raise NotFoundError(resource=collection.value, identifier=record_id)

        if isinstance(record, Ad):
            patch = {**patch, "updated_at": self._clock()}
        updated = replace(record, **patch)
        self._records[collection][record_id] = updated
        return updated

    def delete_by_id(self, collection: Collection, record_id: str) -> bool:
        return self._records[collection].pop(record_id, None) is not None

    def find_all(self, collection: Collection) -> list[AdRecord]:
        return list(self._records[collection].values())

    def run_plan(self, plan: QueryPlan) -> list[JoinedAd]:
        return self._evaluate(plan)

    def count(self, plan: QueryPlan) -> int:
        return len(self._evaluate(plan))

    # ------------------------------------------------------------------
    # Plan evaluation
    # ------------------------------------------------------------------

    def _evaluate(self, plan: QueryPlan) -> list[JoinedAd]:
        rows = [JoinedAd(ad=ad) for ad in self._records[Collection.ADS].values()]  # type: ignore[arg-type]

        for stage in plan.stages:
            if isinstance(stage, TextSearch):
                rows = [row for row in rows if self._matches_text(row.ad, stage.term)]
            elif isinstance(stage, Match):
                rows = [row for row in rows if _satisfies(row.ad, stage.conditions)]
            elif isinstance(stage, OwnerJoin):
                rows = [replace(row, owner=self._owners.get(row.ad.posted_by)) for row in rows]
            elif isinstance(stage, DetailJoin):
                rows = [self._join(row, stage.collection) for row in rows]
            elif isinstance(stage, DetailMatch):
                attribute = JOINED_ATTRIBUTE[stage.collection]
                rows = [
                    row
                    for row in rows
                    if any(_satisfies(detail, stage.conditions) for detail in getattr(row, attribute))
                ]
            elif isinstance(stage, Sort):
                rows = _sorted(rows, stage)
            elif isinstance(stage, Skip):
                rows = rows[stage.count :]
            elif isinstance(stage, Limit):
                rows = rows[: stage.count]
            else:
                raise TypeError(f"Unsupported plan stage: {stage!r}")

        return rows

    def _join(self, row: JoinedAd, collection: Collection) -> JoinedAd:
        detail = self.find_one_by_ad_id(collection, row.ad.id)
        return replace(row, **{JOINED_ATTRIBUTE[collection]: [detail] if detail else []})

    @staticmethod
    def _matches_text(ad: Ad, term: str) -> bool:
        haystack = f"{ad.title} {ad.description} {ad.location}".lower()
        return all(token in haystack for token in term.lower().split())


def _satisfies(record: object, conditions: tuple[Condition, ...]) -> bool:
    return all(_check(getattr(record, c.field, None), c) for c in conditions)


def _check(value: Any, condition: Condition) -> bool:
    if value is None:
        return False
    if condition.op is Op.EQ:
        return value == condition.value
    if condition.op is Op.GTE:
        return value >= condition.value
    if condition.op is Op.LTE:
        return value <= condition.value
    if condition.op is Op.IN:
        return value in condition.value
    if condition.op is Op.ICONTAINS:
        return str(condition.value).lower() in str(value).lower()
    raise ValueError(f"Unsupported operator: {condition.op}")


def _sorted(rows: list[JoinedAd], stage: Sort) -> list[JoinedAd]:
    # Rows missing the sort key go last in either direction
    present = [row for row in rows if getattr(row.ad, stage.field) is not None]
    missing = [row for row in rows if getattr(row.ad, stage.field) is None]
    present.sort(key=lambda row: getattr(row.ad, stage.field), reverse=stage.descending)
    return present + missing
