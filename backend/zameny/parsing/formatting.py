"""Normalisation of raw replacement entries."""

from __future__ import annotations

import re
from typing import List


FIELD_SPLIT = re.compile(r"\s+")
COMMA_SPLIT = re.compile(r",\s*")
ROOM_SUFFIX = re.compile(r".*\d{3}")
# "Математика (Иванов, 205)" или "(305)": запись уже приведена к итоговому виду
NORMALIZED_TAIL = re.compile(r"^[^,]*\([^()]*\)$")

NONE_MARKER = "нет"


def split_fields(text: str) -> List[str]:
    """Split on ``,\\s*`` dropping trailing empty fields.

    An empty string yields ``[""]``; a string made only of separators yields
    an empty list.
    """

    if not text:
        return [""]
    parts = COMMA_SPLIT.split(text)
    while parts and not parts[-1]:
        parts.pop()
    return parts


def format_replacement(replacement: str) -> str:
    """Приводит сырую строку замены к виду "N п. Предмет (Преподаватель, ауд.)".

    Returns the input unchanged when it cannot be split into at least a
    period number and the ``п.`` marker.
    """

    parts = FIELD_SPLIT.split(replacement.strip(), maxsplit=2)
    if len(parts) < 2:
        return replacement

    prefix = f"{parts[0]} {parts[1]}"
    rest = parts[2] if len(parts) > 2 else ""

    if NORMALIZED_TAIL.match(rest):
        return f"{prefix} {rest}"

    rest_parts = split_fields(rest)

    if len(rest_parts) >= 2:
        subject = rest_parts[0]
        teacher_room = rest_parts[1]
        if len(rest_parts) > 2:
            teacher_room += ", " + rest_parts[2]
        return f"{prefix} {subject} ({teacher_room})"
    if len(rest_parts) == 1 and ROOM_SUFFIX.fullmatch(rest):
        return f"{prefix} ({rest})"
    if rest == NONE_MARKER:
        return f"{prefix} {NONE_MARKER}"
    # "1 п. Охрана" и прочие свободные пометки
    return f"{prefix} {rest}"


__all__ = ["format_replacement", "split_fields"]
