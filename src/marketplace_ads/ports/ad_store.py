from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from marketplace_ads.domain.ads import Ad, AdDetail, Collection, JoinedAd
from marketplace_ads.query.plan import QueryPlan

AdRecord = Ad | AdDetail


class AdStore(ABC):
    """
    Port for the ad collections (base ads plus the three detail collections).

    Records are domain dataclasses; ``collection`` tells the adapter which
    one is meant. Each individual insert/update/delete is atomic on its own.

    Contract (Preconditions):
        - Plans come from the query compiler and are trusted as well-formed
        - Ids are canonical UUID strings; adapters return None for unknown ids

    Failures reaching the underlying store surface as InfrastructureError.
    """

    @abstractmethod
    def insert(self, collection: Collection, record: AdRecord) -> str:
        """
        Insert a record and return its id.

        Base ads get ``created_at``/``updated_at`` stamped by the store.
        """
        ...

    @abstractmethod
    def find_by_id(self, collection: Collection, record_id: str) -> AdRecord | None: ...

    @abstractmethod
    def find_one_by_ad_id(self, collection: Collection, ad_id: str) -> AdDetail | None:
        """Detail record of ``collection`` owned by ``ad_id``, if any."""
        ...

    @abstractmethod
    def update_by_id(
        self, collection: Collection, record_id: str, patch: dict[str, Any]
    ) -> AdRecord:
        """
        Apply ``patch`` (attribute -> new value) and return the updated record.

        Raises:
            NotFoundError: If no record has ``record_id``
        """
        ...

    @abstractmethod
    def delete_by_id(self, collection: Collection, record_id: str) -> bool:
        """Delete one record; returns False when there was nothing to delete."""
        ...

    @abstractmethod
    def find_all(self, collection: Collection) -> list[AdRecord]:
        """Every record of a collection, used by maintenance scans only."""
        ...

    @abstractmethod
    def run_plan(self, plan: QueryPlan) -> list[JoinedAd]:
        """Execute a data plan (filters, joins, sort, skip, limit)."""
        ...

    @abstractmethod
    def count(self, plan: QueryPlan) -> int:
        """Number of base ads matched by a count plan."""
        ...

    def after_commit(self, callback: Callable[[], None]) -> None:
        """
        Run ``callback`` once the writes made so far are durable.

        Stores that apply each write immediately run it right away.
        Transactional stores defer it until their transaction commits, and
        drop it if the transaction rolls back.
        """
        callback()
