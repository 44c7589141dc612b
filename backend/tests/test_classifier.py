import pytest

from zameny.parsing.classifier import LineKind, classify_line, find_group_ids


@pytest.mark.parametrize(
    "line",
    ["1 корпус 2 смена", "Отделение информатики", "Отделение Строительное"],
)
def test_section_break_lines(line):
    assert classify_line(line).kind is LineKind.SECTION_BREAK


def test_department_header_with_trailing_text_is_not_a_break():
    assert classify_line("Отделение информатики и связи").kind is LineKind.CONTINUATION


def test_practice_marker_requires_exact_line():
    assert classify_line("Практика").kind is LineKind.PRACTICE
    assert classify_line("Практика учебная").kind is LineKind.CONTINUATION


def test_group_header_collects_all_codes_in_order():
    line = classify_line("ИС-101, КС-202 СА-303 ПС-404")
    assert line.kind is LineKind.GROUP_HEADER
    assert line.groups == ("ИС-101", "КС-202", "СА-303", "ПС-404")


def test_group_code_with_qualifier():
    assert find_group_ids("ИСП-201 (1 подгр.), ИС-102") == ["ИСП-201 (1 подгр.)", "ИС-102"]


@pytest.mark.parametrize("line", ["ИС-10", "ИС101", "ПК-101", "is-101"])
def test_malformed_group_codes_do_not_match(line):
    assert classify_line(line).kind is not LineKind.GROUP_HEADER


def test_group_header_wins_over_replacement():
    line = classify_line("1 п. Математика, ИС-101")
    assert line.kind is LineKind.GROUP_HEADER
    assert line.groups == ("ИС-101",)


def test_special_replacement_keeps_whole_line():
    line = classify_line("УП.Заменить на практику")
    assert line.kind is LineKind.SPECIAL_REPLACEMENT
    assert line.payload == "УП.Заменить на практику"


def test_replacement_start():
    line = classify_line("3 п. Физика, Петров")
    assert line.kind is LineKind.REPLACEMENT
    assert line.payload == "3 п. Физика, Петров"


@pytest.mark.parametrize("line", ["12 п. Физика", "1п. Физика", "п. Физика"])
def test_replacement_requires_single_digit_and_space(line):
    assert classify_line(line).kind is LineKind.CONTINUATION


def test_section_break_checked_before_everything_else():
    assert classify_line("2 корпус 1 смена").kind is LineKind.SECTION_BREAK
