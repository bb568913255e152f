from __future__ import annotations

import uuid
from typing import Iterable


def new_id() -> str:
    return str(uuid.uuid4())


def parse_id(value: object) -> str | None:
    """Canonical string form of a UUID-shaped id, or None when it does not parse."""
    if value is None:
        return None
    try:
        return str(uuid.UUID(str(value).strip()))
    except ValueError:
        return None


def parse_ids(values: Iterable[object] | None) -> tuple[str, ...]:
    """Parse every id, silently dropping the malformed ones."""
    if not values:
        return ()
    parsed = (parse_id(value) for value in values)
    return tuple(value for value in parsed if value is not None)
