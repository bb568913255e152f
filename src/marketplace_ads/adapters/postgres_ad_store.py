"""PostgreSQL implementation of AdStore."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import fields
from enum import Enum
from typing import Any, Callable, Iterator

from sqlalchemy import Text, delete, event, func, literal_column, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement, Select

from marketplace_ads.domain.ads import (
    DETAIL_TYPE_BY_COLLECTION,
    Ad,
    AdCategory,
    AdDetail,
    BodyType,
    Collection,
    CommercialVehicleType,
    JoinedAd,
    OwnerProfile,
    PropertyType,
    VehicleType,
)
from marketplace_ads.domain.errors import (
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from marketplace_ads.domain.ids import parse_id
from marketplace_ads.infra.db.models import (
    AdRow,
    Base,
    CommercialVehicleAdRow,
    PropertyAdRow,
    UserRow,
    VehicleAdRow,
)
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

ROW_BY_COLLECTION: dict[Collection, type[Base]] = {
    Collection.ADS: AdRow,
    Collection.PROPERTY_ADS: PropertyAdRow,
    Collection.VEHICLE_ADS: VehicleAdRow,
    Collection.COMMERCIAL_VEHICLE_ADS: CommercialVehicleAdRow,
}

RECORD_TYPE_BY_COLLECTION: dict[Collection, type] = {
    Collection.ADS: Ad,
    **DETAIL_TYPE_BY_COLLECTION,
}

JOINED_ATTRIBUTE: dict[Collection, str] = {
    Collection.PROPERTY_ADS: "property_details",
    Collection.VEHICLE_ADS: "vehicle_details",
    Collection.COMMERCIAL_VEHICLE_ADS: "commercial_vehicle_details",
}

_UUID_FIELDS = frozenset(
    {
        "id",
        "ad_id",
        "posted_by",
        "manufacturer_id",
        "model_id",
        "variant_id",
        "transmission_type_id",
        "fuel_type_id",
    }
)

_ENUM_FIELDS: dict[str, type[Enum]] = {
    "category": AdCategory,
    "property_type": PropertyType,
    "vehicle_type": VehicleType,
    "commercial_vehicle_type": CommercialVehicleType,
    "body_type": BodyType,
}

_LIST_FIELDS = frozenset({"images", "amenities", "additional_features"})

_SERVER_DEFAULTED = frozenset({"created_at", "updated_at"})

# Matches the GIN expression index created by the initial migration
_SEARCH_CONFIG = literal_column("'english'::regconfig")


def search_vector() -> ColumnElement[Any]:
    separator = literal_column("' '", Text)
    document = AdRow.title + separator + AdRow.description + separator + AdRow.location
    return func.to_tsvector(_SEARCH_CONFIG, document)


FOREIGN_KEY_VIOLATION = "23503"

# Named in the initial migration and on AdRow
_FIELD_BY_CONSTRAINT = {"fk_ads_posted_by_users": "postedBy"}


def integrity_error(exc: IntegrityError) -> DomainError:
    """Translate a constraint violation into the matching domain error."""
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    sqlstate = getattr(exc.orig, "sqlstate", None)

    field = _FIELD_BY_CONSTRAINT.get(constraint)
    if field is not None and sqlstate == FOREIGN_KEY_VIOLATION:
        return ValidationError(
            errors=[
                {
                    "field": field,
                    "message": "Referenced user does not exist",
                    "code": "REFERENCE_NOT_FOUND",
                }
            ]
        )
    return ConflictError("Ad record violates a store constraint", constraint=constraint)


class PostgresAdStore(AdStore):
    """
    PostgreSQL implementation of AdStore.

    - One table per collection, rows converted to and from domain dataclasses
    - A plan becomes a single SELECT with LEFT OUTER JOINs; the count plan
      becomes SELECT count(ads.id) over the same joins and filters
    - Writes are flushed, not committed: the request-scoped session commits
    - OperationalError/InterfaceError roll back and surface as InfrastructureError;
      IntegrityError rolls back and surfaces as ValidationError or ConflictError
    - after_commit callbacks run on the session's after_commit event and are
      dropped when the session rolls back
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize store with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session
        self._pending: list[Callable[[], None]] = []
        self._listening = False

    def insert(self, collection: Collection, record: AdRecord) -> str:
        row = self._to_row(collection, record)
        with self._guard():
            self._session.add(row)
            self._session.flush()
        return str(row.id)

    def find_by_id(self, collection: Collection, record_id: str) -> AdRecord | None:
        key = parse_id(record_id)
        if key is None:
            return None
        with self._guard():
            row = self._session.get(ROW_BY_COLLECTION[collection], uuid.UUID(key))
        return self._to_domain(collection, row) if row is not None else None

    def find_one_by_ad_id(self, collection: Collection, ad_id: str) -> AdDetail | None:
        key = parse_id(ad_id)
        if key is None:
            return None
        model = ROW_BY_COLLECTION[collection]
        query = select(model).where(model.ad_id == uuid.UUID(key)).limit(1)
        with self._guard():
            row = self._session.execute(query).scalars().first()
        return self._to_domain(collection, row) if row is not None else None  # type: ignore[return-value]

    def update_by_id(
        self, collection: Collection, record_id: str, patch: dict[str, Any]
    ) -> AdRecord:
        key = parse_id(record_id)
        model = ROW_BY_COLLECTION[collection]
        with self._guard():
            row = self._session.get(model, uuid.UUID(key)) if key else None
            if row is None:
                raise NotFoundError(resource=collection.value, identifier=record_id)

            for name, value in patch.items():
                setattr(row, name, _to_column(name, value))
            if collection is Collection.ADS:
                # onupdate only fires when some column changed
                row.updated_at = func.now()
            self._session.flush()
            # Load the server-computed updated_at
            self._session.refresh(row)
        return self._to_domain(collection, row)

    def delete_by_id(self, collection: Collection, record_id: str) -> bool:
        key = parse_id(record_id)
        if key is None:
            return False
        model = ROW_BY_COLLECTION[collection]
        with self._guard():
            result = self._session.execute(delete(model).where(model.id == uuid.UUID(key)))
        return bool(result.rowcount)

    def after_commit(self, callback: Callable[[], None]) -> None:
        if not self._listening:
            event.listen(self._session, "after_commit", self._run_pending)
            event.listen(self._session, "after_rollback", self._drop_pending)
            self._listening = True
        self._pending.append(callback)

    def _run_pending(self, session: Session) -> None:
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback()

    def _drop_pending(self, session: Session) -> None:
        self._pending = []

    def find_all(self, collection: Collection) -> list[AdRecord]:
        with self._guard():
            rows = self._session.execute(select(ROW_BY_COLLECTION[collection])).scalars().all()
        return [self._to_domain(collection, row) for row in rows]

    def run_plan(self, plan: QueryPlan) -> list[JoinedAd]:
        query, entities = self.build_select(plan)
        with self._guard():
            result_rows = self._session.execute(query).all()
        return [self._to_joined(dict(zip(entities, result_row))) for result_row in result_rows]

    def count(self, plan: QueryPlan) -> int:
        query = self.build_count(plan)
        with self._guard():
            return self._session.execute(query).scalar() or 0

    # ------------------------------------------------------------------
    # Plan translation
    # ------------------------------------------------------------------

    def build_select(self, plan: QueryPlan) -> tuple[Select[Any], list[str]]:
        """
        Translate a data plan into a SELECT.

        Returns:
            The statement and the key of each selected entity, in column order
            ("ad", "owner" or a detail collection name)
        """
        query: Select[Any] = select(AdRow)
        entities = ["ad"]

        for stage in plan.stages:
            if isinstance(stage, OwnerJoin):
                query = query.add_columns(UserRow).outerjoin(UserRow, UserRow.id == AdRow.posted_by)
                entities.append("owner")
            elif isinstance(stage, DetailJoin):
                model = ROW_BY_COLLECTION[stage.collection]
                query = query.add_columns(model).outerjoin(model, model.ad_id == AdRow.id)
                entities.append(stage.collection.value)
            elif isinstance(stage, Sort):
                column = getattr(AdRow, stage.field)
                query = query.order_by(column.desc() if stage.descending else column.asc())
            elif isinstance(stage, Skip):
                query = query.offset(stage.count)
            elif isinstance(stage, Limit):
                query = query.limit(stage.count)

        return query.where(*self._where(plan)), entities

    def build_count(self, plan: QueryPlan) -> Select[Any]:
        """Translate a count plan into SELECT count(ads.id) over the same joins."""
        query: Select[Any] = select(func.count(AdRow.id)).select_from(AdRow)

        for stage in plan.stages:
            if isinstance(stage, OwnerJoin):
                query = query.outerjoin(UserRow, UserRow.id == AdRow.posted_by)
            elif isinstance(stage, DetailJoin):
                model = ROW_BY_COLLECTION[stage.collection]
                query = query.outerjoin(model, model.ad_id == AdRow.id)

        return query.where(*self._where(plan))

    def _where(self, plan: QueryPlan) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        for stage in plan.stages:
            if isinstance(stage, TextSearch):
                clauses.append(
                    search_vector().op("@@")(func.plainto_tsquery(_SEARCH_CONFIG, stage.term))
                )
            elif isinstance(stage, Match):
                clauses.extend(_clause(AdRow, condition) for condition in stage.conditions)
            elif isinstance(stage, DetailMatch):
                model = ROW_BY_COLLECTION[stage.collection]
                clauses.append(model.id.is_not(None))
                clauses.extend(_clause(model, condition) for condition in stage.conditions)
        return clauses

    # ------------------------------------------------------------------
    # Row <-> domain conversion
    # ------------------------------------------------------------------

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError) as exc:
            self._session.rollback()
            raise InfrastructureError("Ad store unavailable") from exc
        except IntegrityError as exc:
            self._session.rollback()
            raise integrity_error(exc) from exc
        except SQLAlchemyError:
            # Leave the session usable for compensating writes
            self._session.rollback()
            raise

    def _to_row(self, collection: Collection, record: AdRecord) -> Base:
        values = {
            f.name: _to_column(f.name, getattr(record, f.name))
            for f in fields(record)
            if not (f.name in _SERVER_DEFAULTED and getattr(record, f.name) is None)
        }
        return ROW_BY_COLLECTION[collection](**values)

    def _to_domain(self, collection: Collection, row: Base) -> AdRecord:
        record_type = RECORD_TYPE_BY_COLLECTION[collection]
        return record_type(
            **{f.name: _from_column(f.name, getattr(row, f.name)) for f in fields(record_type)}
        )

    def _to_joined(self, values: dict[str, Any]) -> JoinedAd:
        owner_row = values.get("owner")
        details: dict[str, list[Any]] = {}
        for collection, attribute in JOINED_ATTRIBUTE.items():
            row = values.get(collection.value)
            details[attribute] = [self._to_domain(collection, row)] if row is not None else []

        return JoinedAd(
            ad=self._to_domain(Collection.ADS, values["ad"]),  # type: ignore[arg-type]
            owner=(
                OwnerProfile(
                    id=str(owner_row.id),
                    name=owner_row.name,
                    email=owner_row.email,
                    phone=owner_row.phone,
                )
                if owner_row is not None
                else None
            ),
            **details,
        )


def _clause(model: type[Base], condition: Condition) -> ColumnElement[bool]:
    column = getattr(model, condition.field)

    if condition.op is Op.EQ:
        return column == _to_column(condition.field, condition.value)
    if condition.op is Op.GTE:
        return column >= condition.value
    if condition.op is Op.LTE:
        return column <= condition.value
    if condition.op is Op.IN:
        return column.in_([_to_column(condition.field, value) for value in condition.value])
    if condition.op is Op.ICONTAINS:
        return column.ilike(f"%{_escape_like(str(condition.value))}%", escape="\\")
    raise ValueError(f"Unsupported operator: {condition.op}")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_column(name: str, value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if name in _UUID_FIELDS:
        return uuid.UUID(str(value))
    if name in _LIST_FIELDS:
        return list(value)
    return value


def _from_column(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name in _UUID_FIELDS:
        return str(value)
    if name in _ENUM_FIELDS:
        return _ENUM_FIELDS[name](value)
    if name in _LIST_FIELDS:
        return tuple(value)
    return value
