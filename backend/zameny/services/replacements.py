from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from zameny import config
from zameny.errors import ExtractionError
from zameny.parsing import ReplacementsPipeline, get_parsing_pipeline
from zameny.parsing.pipeline import ParseReport

from .extraction import extract_plain_text
from .fetcher import HttpClient


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ReplacementsResult:
    source: Optional[str]
    groups: Dict[str, List[str]]
    mismatches: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_report(cls, report: ParseReport, source: Optional[str]) -> "ReplacementsResult":
        payload = report.to_dict()
        return cls(source=source, groups=payload["groups"], mismatches=payload["mismatches"])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "groups": self.groups,
            "mismatches": self.mismatches,
        }


class ReplacementsService:
    def __init__(self, client: Optional[HttpClient] = None) -> None:
        self._client = client

    @property
    def client(self) -> HttpClient:
        if self._client is None:
            self._client = HttpClient()
        return self._client

    def _pipeline(self, strict: Optional[bool]) -> ReplacementsPipeline:
        return get_parsing_pipeline(strict)

    def load_text(self, url: Optional[str] = None) -> str:
        payload = self.client.fetch_bytes(url or config.replacements_url())
        return extract_plain_text(payload)

    def load_file(self, path: Path) -> str:
        try:
            payload = Path(path).read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Не удалось прочитать файл {path}: {exc}") from exc
        return extract_plain_text(payload)

    def parse_text(
        self,
        text: str,
        *,
        source: Optional[str] = None,
        strict: Optional[bool] = None,
    ) -> ReplacementsResult:
        report = self._pipeline(strict).parse_report(text)
        if report.mismatches:
            LOGGER.info("Блоков с несовпадением групп и замен: %d", len(report.mismatches))
        return ReplacementsResult.from_report(report, source)

    def fetch_replacements(
        self,
        url: Optional[str] = None,
        *,
        strict: Optional[bool] = None,
    ) -> ReplacementsResult:
        source = url or config.replacements_url()
        text = self.load_text(source)
        return self.parse_text(text, source=source, strict=strict)

    def read_replacements(
        self,
        path: Path,
        *,
        strict: Optional[bool] = None,
    ) -> ReplacementsResult:
        text = self.load_file(path)
        return self.parse_text(text, source=str(path), strict=strict)


__all__ = ["ReplacementsResult", "ReplacementsService"]
