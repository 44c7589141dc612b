"""Single-pass state machine turning bulletin text into per-group replacements."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from zameny import config
from zameny.errors import DistributionMismatchError

from .classifier import ClassifiedLine, LineKind, classify_line
from .formatting import format_replacement


LOGGER = logging.getLogger(__name__)

ReplacementMap = Dict[str, List[str]]
MismatchCallback = Callable[["DistributionMismatch"], None]

PRACTICE_ENTRY = "Практика"


@dataclass
class DistributionMismatch:
    """Groups and replacements of one block that could not be paired."""

    groups: List[str]
    replacements: List[str]
    unassigned_groups: List[str]
    dropped_replacements: List[str]

    def describe(self) -> str:
        return (
            f"групп: {len(self.groups)}, замен: {len(self.replacements)}; "
            f"без замен: {', '.join(self.unassigned_groups) or '—'}; "
            f"отброшено: {len(self.dropped_replacements)}"
        )

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class ParseContext:
    """Transient state of one parse pass."""

    groups: List[str] = field(default_factory=list)
    replacements: List[str] = field(default_factory=list)
    buffer: List[str] = field(default_factory=list)

    def has_buffer(self) -> bool:
        return bool(self.buffer)

    def flush_buffer(self) -> None:
        if self.buffer:
            self.replacements.append(format_replacement(" ".join(self.buffer)))
        self.buffer = []

    def reset(self) -> None:
        self.groups = []
        self.replacements = []
        self.buffer = []


@dataclass
class ParseReport:
    groups: ReplacementMap
    mismatches: List[DistributionMismatch] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "groups": self.groups,
            "mismatches": [mismatch.to_dict() for mismatch in self.mismatches],
        }


def distribute_replacements(
    result: ReplacementMap,
    groups: Sequence[str],
    replacements: Sequence[str],
) -> Optional[DistributionMismatch]:
    """Pair ``groups`` with ``replacements`` by position.

    Extra groups get nothing and extra replacements are dropped; in both
    cases the leftovers are returned as a :class:`DistributionMismatch`.
    """

    paired = min(len(groups), len(replacements))
    for index in range(paired):
        result.setdefault(groups[index], []).append(replacements[index])

    if len(groups) == len(replacements):
        return None
    return DistributionMismatch(
        groups=list(groups),
        replacements=list(replacements),
        unassigned_groups=list(groups[paired:]),
        dropped_replacements=list(replacements[paired:]),
    )


class ReplacementsPipeline:
    """Parses extracted bulletin text into ``{group: [entries]}``.

    In strict mode a block whose group count differs from its replacement
    count raises :class:`DistributionMismatchError`; otherwise the mismatch is
    logged and recorded on the report.
    """

    def __init__(
        self,
        *,
        strict: Optional[bool] = None,
        on_mismatch: Optional[MismatchCallback] = None,
    ) -> None:
        self.strict = config.strict_distribution() if strict is None else strict
        self.on_mismatch = on_mismatch

    def parse_content(self, content: str) -> ReplacementMap:
        return self.parse_report(content).groups

    def parse_report(self, content: str) -> ParseReport:
        report = ParseReport(groups={})
        context = ParseContext()

        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line:
                continue
            self._consume_line(context, classify_line(line), report)

        self._flush_block(context, report)

        LOGGER.info("Парсинг завершен, найдено групп: %d", len(report.groups))
        return report

    def _consume_line(
        self,
        context: ParseContext,
        line: ClassifiedLine,
        report: ParseReport,
    ) -> None:
        kind = line.kind

        if kind is LineKind.SECTION_BREAK:
            self._flush_block(context, report)
            context.reset()
            return

        if kind is LineKind.PRACTICE:
            if context.groups:
                report.groups.setdefault(context.groups[-1], []).append(PRACTICE_ENTRY)
            return

        if kind is LineKind.GROUP_HEADER:
            self._flush_block(context, report)
            context.reset()
            context.groups.extend(line.groups)
            for group in line.groups:
                report.groups.setdefault(group, [])
            return

        if kind is LineKind.SPECIAL_REPLACEMENT:
            context.flush_buffer()
            context.replacements.append(line.payload or line.text)
            return

        if kind is LineKind.REPLACEMENT:
            context.flush_buffer()
            context.buffer.append(line.payload or line.text)
            return

        # продолжение записи, перенесённой на следующую строку
        if context.has_buffer():
            context.buffer.append(line.text)
        else:
            LOGGER.debug("Пропущена строка вне записи: %s", line.text)

    def _flush_block(self, context: ParseContext, report: ParseReport) -> None:
        context.flush_buffer()
        if not context.replacements:
            return

        mismatch = distribute_replacements(report.groups, context.groups, context.replacements)
        if mismatch is None:
            return

        LOGGER.warning("Несовпадение числа групп и замен: %s", mismatch.describe())
        if self.strict:
            raise DistributionMismatchError(mismatch)
        report.mismatches.append(mismatch)
        if self.on_mismatch:
            self.on_mismatch(mismatch)


__all__ = [
    "DistributionMismatch",
    "ParseContext",
    "ParseReport",
    "ReplacementMap",
    "ReplacementsPipeline",
    "distribute_replacements",
]
