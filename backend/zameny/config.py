from __future__ import annotations

import os
from functools import lru_cache


DEFAULT_REPLACEMENTS_URL = "https://vgpgk.ru/raspisanie/vgpgk-zameny-1-korpus.doc"
DEFAULT_SCHEDULE_URL = "https://vgpgk.ru/raspisanie/1-korpus_1-smena_1-semestr_2022.xls"

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@lru_cache
def replacements_url() -> str:
    return os.getenv("ZAMENY_REPLACEMENTS_URL", DEFAULT_REPLACEMENTS_URL)


@lru_cache
def schedule_url() -> str:
    return os.getenv("ZAMENY_SCHEDULE_URL", DEFAULT_SCHEDULE_URL)


@lru_cache
def http_timeout() -> float:
    return float(os.getenv("ZAMENY_HTTP_TIMEOUT", "30"))


@lru_cache
def http_retries() -> int:
    return int(os.getenv("ZAMENY_HTTP_RETRIES", "2"))


@lru_cache
def http_backoff() -> float:
    return float(os.getenv("ZAMENY_HTTP_BACKOFF", "1.0"))


@lru_cache
def user_agent() -> str:
    return os.getenv("ZAMENY_USER_AGENT", "zameny/0.1")


def strict_distribution() -> bool:
    return _env_flag("ZAMENY_STRICT_DISTRIBUTION")


@lru_cache
def antiword_command() -> str:
    return os.getenv("ZAMENY_ANTIWORD", "antiword")
