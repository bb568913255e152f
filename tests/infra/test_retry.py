"""Tests for bounded retries of infrastructure calls."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from marketplace_ads.domain.errors import InfrastructureError, NotFoundError
from marketplace_ads.infra.retry import call_with_retry


def test_returns_first_success_without_sleeping() -> None:
    sleep = Mock()

    assert call_with_retry(lambda: 42, attempts=3, base_delay=0.1, sleep=sleep) == 42
    sleep.assert_not_called()


def test_retries_infrastructure_errors_with_exponential_backoff() -> None:
    operation = Mock(side_effect=[InfrastructureError("down"), InfrastructureError("down"), "ok"])
    sleep = Mock()

    assert call_with_retry(operation, attempts=3, base_delay=0.1, sleep=sleep) == "ok"
    assert operation.call_count == 3
    assert [c.args[0] for c in sleep.call_args_list] == [0.1, 0.2]


def test_reraises_after_last_attempt() -> None:
    error = InfrastructureError("still down")
    operation = Mock(side_effect=error)
    sleep = Mock()

    with pytest.raises(InfrastructureError) as exc_info:
        call_with_retry(operation, attempts=2, base_delay=0.5, sleep=sleep)

    assert exc_info.value is error
    assert operation.call_count == 2
    sleep.assert_called_once_with(0.5)


def test_domain_errors_are_not_retried() -> None:
    operation = Mock(side_effect=NotFoundError("Ad", "x"))
    sleep = Mock()

    with pytest.raises(NotFoundError):
        call_with_retry(operation, attempts=3, base_delay=0.1, sleep=sleep)

    assert operation.call_count == 1
    sleep.assert_not_called()


def test_defaults_come_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INFRA_RETRY_ATTEMPTS", "2")
    monkeypatch.setenv("INFRA_RETRY_BASE_DELAY_S", "0.25")
    operation = Mock(side_effect=InfrastructureError("down"))
    sleep = Mock()

    with pytest.raises(InfrastructureError):
        call_with_retry(operation, sleep=sleep)

    assert operation.call_count == 2
    sleep.assert_called_once_with(0.25)
