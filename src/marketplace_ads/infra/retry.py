"""Bounded retries for infrastructure failures."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

from marketplace_ads.domain.errors import InfrastructureError
from marketplace_ads.infra.config import infra_retry_attempts, infra_retry_base_delay_s

logger = logging.getLogger(__name__)

T = TypeVar("T")

Retry = Callable[[Callable[[], Any]], Any]


def call_with_retry(
    operation: Callable[[], T],
    *,
    attempts: int | None = None,
    base_delay: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run ``operation``, retrying InfrastructureError with exponential backoff.

    Any other exception propagates immediately. After the last attempt the
    InfrastructureError is re-raised unchanged.

    Args:
        operation: Zero-argument callable to run
        attempts: Total attempts (defaults to INFRA_RETRY_ATTEMPTS)
        base_delay: First backoff delay in seconds, doubled on every retry
        sleep: Injected for tests
    """
    max_attempts = attempts if attempts is not None else infra_retry_attempts()
    delay = base_delay if base_delay is not None else infra_retry_base_delay_s()

    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except InfrastructureError:
            if attempt >= max_attempts:
                raise
            wait = delay * (2 ** (attempt - 1))
            logger.warning(
                "Infrastructure call failed, retrying",
                extra={"attempt": attempt, "max_attempts": max_attempts, "wait_s": wait},
            )
            sleep(wait)

    # max_attempts is always >= 1, the loop returns or raises
    raise InfrastructureError("Retry loop exhausted")
