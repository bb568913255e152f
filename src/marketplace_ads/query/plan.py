"""Store-independent, multi-stage query plans over the ad collections.

A plan is an ordered tuple of stages. Store adapters interpret it: the
in-memory store evaluates it row by row, the Postgres store turns it into a
single SELECT with outer joins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from marketplace_ads.domain.ads import Collection


class Op(str, Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    IN = "in"
    ICONTAINS = "icontains"  # case-insensitive substring


@dataclass(frozen=True, slots=True)
class Condition:
    field: str
    op: Op
    value: Any


@dataclass(frozen=True, slots=True)
class TextSearch:
    """Full-text match over title, description and location."""

    term: str


@dataclass(frozen=True, slots=True)
class Match:
    """Conditions on the base ad."""

    conditions: tuple[Condition, ...]


@dataclass(frozen=True, slots=True)
class OwnerJoin:
    """Left-outer join of the owning user's public profile."""


@dataclass(frozen=True, slots=True)
class DetailJoin:
    """Left-outer join of a detail collection on ``ad_id == Ad.id``."""

    collection: Collection


@dataclass(frozen=True, slots=True)
class DetailMatch:
    """Requires the joined detail of ``collection`` to exist and satisfy every condition."""

    collection: Collection
    conditions: tuple[Condition, ...]


@dataclass(frozen=True, slots=True)
class Sort:
    field: str
    descending: bool = True


@dataclass(frozen=True, slots=True)
class Skip:
    count: int


@dataclass(frozen=True, slots=True)
class Limit:
    count: int


Stage = Union[TextSearch, Match, OwnerJoin, DetailJoin, DetailMatch, Sort, Skip, Limit]


@dataclass(frozen=True, slots=True)
class QueryPlan:
    stages: tuple[Stage, ...]

    def then(self, *stages: Stage) -> QueryPlan:
        return QueryPlan(stages=self.stages + stages)

    def stages_of(self, kind: type) -> list[Any]:
        return [stage for stage in self.stages if isinstance(stage, kind)]
