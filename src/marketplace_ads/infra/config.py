from __future__ import annotations

import os


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def redis_url() -> str | None:
    return os.getenv("REDIS_URL") or None


def db_statement_timeout_ms() -> int:
    return int(os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000"))


def db_connect_timeout_s() -> int:
    return int(os.getenv("DB_CONNECT_TIMEOUT_S", "5"))


def redis_socket_timeout_s() -> float:
    return float(os.getenv("REDIS_SOCKET_TIMEOUT_S", "1.0"))


def infra_retry_attempts() -> int:
    return max(1, int(os.getenv("INFRA_RETRY_ATTEMPTS", "3")))


def infra_retry_base_delay_s() -> float:
    return float(os.getenv("INFRA_RETRY_BASE_DELAY_S", "0.1"))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
