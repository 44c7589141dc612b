"""Line classification for replacement bulletins."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple


# "1 корпус 2 смена"
SHIFT_PATTERN = re.compile(r"^\d\sкорпус\s\d\sсмена$")
# "Отделение информатики"
DEPARTMENT_PATTERN = re.compile(r"^Отделение\s[А-Яа-я]+$")
PRACTICE_PATTERN = re.compile(r"^Практика$")

# Шифры групп: ИС-101, ИСП-201 (подгруппа), КС-301, СА-101, ПС-401
GROUP_PATTERN = re.compile(
    r"(И[А-Я]{1,2}-\d{3}(?:\s*\([^)]+\))?)"
    r"|(К[А-Я]{1,2}-\d{3})"
    r"|(С[А-Я]{1,2}-\d{3})"
    r"|(ПС-\d{3})"
)

SPECIAL_REPLACEMENT_PATTERN = re.compile(r"^(УП\..*)$")
REPLACEMENT_PATTERN = re.compile(r"^\s*(\d\sп\..*)$")


class LineKind(str, Enum):
    SECTION_BREAK = "section_break"
    PRACTICE = "practice"
    GROUP_HEADER = "group_header"
    SPECIAL_REPLACEMENT = "special_replacement"
    REPLACEMENT = "replacement"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class ClassifiedLine:
    """A single bulletin line tagged with its category."""

    kind: LineKind
    text: str
    groups: Tuple[str, ...] = ()
    payload: Optional[str] = None


LineRule = Callable[[str], Optional[ClassifiedLine]]


def _match_section_break(line: str) -> Optional[ClassifiedLine]:
    if SHIFT_PATTERN.match(line) or DEPARTMENT_PATTERN.match(line):
        return ClassifiedLine(LineKind.SECTION_BREAK, line)
    return None


def _match_practice(line: str) -> Optional[ClassifiedLine]:
    if PRACTICE_PATTERN.match(line):
        return ClassifiedLine(LineKind.PRACTICE, line, payload="Практика")
    return None


def _match_group_header(line: str) -> Optional[ClassifiedLine]:
    groups = find_group_ids(line)
    if groups:
        return ClassifiedLine(LineKind.GROUP_HEADER, line, groups=tuple(groups))
    return None


def _match_special_replacement(line: str) -> Optional[ClassifiedLine]:
    match = SPECIAL_REPLACEMENT_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.SPECIAL_REPLACEMENT, line, payload=match.group(1))
    return None


def _match_replacement(line: str) -> Optional[ClassifiedLine]:
    match = REPLACEMENT_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.REPLACEMENT, line, payload=match.group(1))
    return None


# Порядок важен: первое совпадение выигрывает.
RULES: List[LineRule] = [
    _match_section_break,
    _match_practice,
    _match_group_header,
    _match_special_replacement,
    _match_replacement,
]


def find_group_ids(line: str) -> List[str]:
    """Return every group code found in ``line`` in left-to-right order."""

    return [match.group(0) for match in GROUP_PATTERN.finditer(line)]


def classify_line(line: str) -> ClassifiedLine:
    """Classify one trimmed, non-empty line.

    Lines that match none of the known shapes are reported as
    ``CONTINUATION``; classification itself never fails.
    """

    for rule in RULES:
        result = rule(line)
        if result is not None:
            return result
    return ClassifiedLine(LineKind.CONTINUATION, line, payload=line)


__all__ = [
    "ClassifiedLine",
    "LineKind",
    "RULES",
    "classify_line",
    "find_group_ids",
]
