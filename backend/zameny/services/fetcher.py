from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from zameny import config
from zameny.errors import FetchError


LOGGER = logging.getLogger(__name__)

RETRY_STATUSES = {429, 500, 502, 503, 504}


@dataclass(frozen=True)
class HttpConfig:
    user_agent: str
    timeout_seconds: float
    max_retries: int
    backoff_base_seconds: float

    @classmethod
    def from_env(cls) -> "HttpConfig":
        return cls(
            user_agent=config.user_agent(),
            timeout_seconds=config.http_timeout(),
            max_retries=config.http_retries(),
            backoff_base_seconds=config.http_backoff(),
        )


class HttpClient:
    def __init__(
        self,
        http_config: Optional[HttpConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = http_config or HttpConfig.from_env()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def get(self, url: str, *, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        last_exc: Optional[BaseException] = None
        for attempt in range(1, self.config.max_retries + 2):
            try:
                resp = self.session.get(
                    url,
                    timeout=self.config.timeout_seconds,
                    headers=headers,
                )
                if resp.status_code in RETRY_STATUSES:
                    raise requests.HTTPError(f"HTTP {resp.status_code}", response=resp)
                resp.raise_for_status()
                return resp
            except requests.RequestException as exc:
                last_exc = exc
                response = getattr(exc, "response", None)
                if response is not None and response.status_code not in RETRY_STATUSES:
                    break
                if attempt >= self.config.max_retries + 1:
                    break
                backoff = self.config.backoff_base_seconds * (2 ** (attempt - 1))
                LOGGER.warning("Ошибка запроса %s (попытка %d): %s", url, attempt, exc)
                time.sleep(backoff)
        raise FetchError(url, f"request failed: {last_exc}")

    def fetch_bytes(self, url: str) -> bytes:
        LOGGER.info("Скачивание файла с URL: %s", url)
        resp = self.get(url)
        LOGGER.debug("Получено %d байт (%s)", len(resp.content), resp.headers.get("Content-Type"))
        return resp.content


def fetch_bytes(url: str, client: Optional[HttpClient] = None) -> bytes:
    return (client or HttpClient()).fetch_bytes(url)


__all__ = ["HttpClient", "HttpConfig", "RETRY_STATUSES", "fetch_bytes"]
