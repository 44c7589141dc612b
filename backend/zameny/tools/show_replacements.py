from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from zameny import config
from zameny.errors import ZamenyError
from zameny.services.replacements import ReplacementsResult, ReplacementsService


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Скачать бюллетень замен и вывести замены по группам.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        help="Адрес файла замен (default: %s)" % config.replacements_url(),
    )
    source.add_argument(
        "--input",
        type=Path,
        help="Локальный .doc/.docx/.txt файл вместо скачивания",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Завершиться с ошибкой, если число групп и замен в блоке не совпадает.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Сохранить результат в JSON",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Включить подробный лог.",
    )
    return parser.parse_args(argv)


def _export_results(path: Path, result: ReplacementsResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")


def print_replacements(result: ReplacementsResult) -> None:
    print("Замены по группам:")
    for group, entries in result.groups.items():
        print(f"Группа: {group}")
        for entry in entries:
            print(f"- {entry}")

    if result.mismatches:
        print(f"\nБлоков с несовпадением групп и замен: {len(result.mismatches)}")
        for mismatch in result.mismatches:
            missing = ", ".join(mismatch["unassigned_groups"]) or "—"
            print(
                f"  группы: {', '.join(mismatch['groups'])}; "
                f"без замен: {missing}; отброшено замен: {len(mismatch['dropped_replacements'])}"
            )


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if not args.verbose else logging.DEBUG,
        format="%(levelname)s %(message)s",
    )

    service = ReplacementsService()
    try:
        if args.input:
            result = service.read_replacements(args.input, strict=args.strict)
        else:
            result = service.fetch_replacements(args.url, strict=args.strict)
    except ZamenyError as exc:
        LOGGER.error("Ошибка при выполнении: %s", exc)
        return 1

    print_replacements(result)

    if args.output:
        _export_results(args.output, result)
        print(f"\nSaved detailed results to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
