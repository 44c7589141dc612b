from __future__ import annotations

from functools import lru_cache
from typing import Optional

from zameny import config

from .classifier import ClassifiedLine, LineKind, classify_line, find_group_ids
from .formatting import format_replacement
from .pipeline import (
    DistributionMismatch,
    ParseReport,
    ReplacementMap,
    ReplacementsPipeline,
    distribute_replacements,
)


@lru_cache(maxsize=None)
def _cached_pipeline(strict: bool) -> ReplacementsPipeline:
    return ReplacementsPipeline(strict=strict)


def get_parsing_pipeline(strict: Optional[bool] = None) -> ReplacementsPipeline:
    if strict is None:
        strict = config.strict_distribution()
    return _cached_pipeline(strict)


def parse_replacements(text: str, *, strict: Optional[bool] = None) -> ReplacementMap:
    pipeline = get_parsing_pipeline(strict)
    return pipeline.parse_content(text)


__all__ = [
    "ClassifiedLine",
    "DistributionMismatch",
    "LineKind",
    "ParseReport",
    "ReplacementMap",
    "ReplacementsPipeline",
    "classify_line",
    "distribute_replacements",
    "find_group_ids",
    "format_replacement",
    "get_parsing_pipeline",
    "parse_replacements",
]
