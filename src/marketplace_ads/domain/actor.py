from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


ELEVATED_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


@dataclass(frozen=True, slots=True)
class Actor:
    """Caller identity handed over by the upstream auth layer."""

    user_id: str
    role: Role = Role.USER

    @property
    def is_elevated(self) -> bool:
        return self.role in ELEVATED_ROLES

    def can_manage(self, owner_id: str) -> bool:
        return self.is_elevated or self.user_id == owner_id
