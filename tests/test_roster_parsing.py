import pytest

from core.grader import parse_class_count, parse_grade, parse_number, parse_roster_row
from utils.error_handler import ClassCountError, GradingError, RosterParseError


def test_class_count_is_read_from_second_header_row():
    rows = [["Title"], ["Total de aulas no semestre: 60"], ["header"]]
    assert parse_class_count(rows) == 60


def test_class_count_keeps_decimal_part():
    rows = [["Title"], ["Aulas: 12.5"]]
    assert parse_class_count(rows) == 12.5


@pytest.mark.parametrize("rows", [
    [["Title"]],
    [["Title"], []],
    [["Title"], ["Total de aulas 60"]],
    [["Title"], ["Total de aulas:60"]],
    [["Title"], ["Total de aulas: sessenta"]],
    [["Title"], ["Total de aulas: "]],
    [["Title"], ["Total de aulas: 0"]],
    [["Title"], ["Total de aulas: -4"]],
])
def test_malformed_class_count_is_rejected(rows):
    with pytest.raises(ClassCountError):
        parse_class_count(rows)


def test_class_count_error_is_a_grading_error():
    assert issubclass(ClassCountError, GradingError)
    assert issubclass(RosterParseError, GradingError)


@pytest.mark.parametrize("value, expected", [
    ("6", 6.0),
    (" 7 ", 7.0),
    ("7.5", 7.5),
    ("7,5", 7.5),
    (3, 3.0),
    (2.25, 2.25),
])
def test_parse_number_accepts_numeric_cells(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", ["", "   ", None, "abc", "nan", "inf", True])
def test_parse_number_rejects_non_numeric_cells(value):
    with pytest.raises(RosterParseError):
        parse_number(value, row_number=5, column="D")


def test_parse_grade_truncates_decimals():
    assert parse_grade("7.9") == 7
    assert parse_grade("8,5") == 8
    assert parse_grade("10") == 10


def test_roster_row_reads_columns_c_to_f():
    row = parse_roster_row(["1", "Eduardo", "3", "75", "80", "68.5", "", ""], row_number=4)
    assert row.row_number == 4
    assert row.absences == 3
    assert (row.p1, row.p2, row.p3) == (75, 80, 68)


def test_roster_row_error_names_the_cell():
    with pytest.raises(RosterParseError) as excinfo:
        parse_roster_row(["1", "Eduardo", "3", "75", "oitenta", "68"], row_number=9)
    assert excinfo.value.row_number == 9
    assert excinfo.value.column == "E"
    assert "E9" in str(excinfo.value)


def test_short_row_reports_missing_cell():
    with pytest.raises(RosterParseError) as excinfo:
        parse_roster_row(["1", "Eduardo", "3", "75"], row_number=7)
    assert excinfo.value.column == "E"
    assert "Missing value" in str(excinfo.value)


def test_grades_are_optional_once_absences_exceed_limit():
    row = parse_roster_row(["1", "Eduardo", "6", "7", "n/a"], row_number=4, total_classes=20)
    assert row.absences == 6
    assert (row.p1, row.p2, row.p3) == (7, None, None)


def test_grades_are_required_within_absence_limit():
    with pytest.raises(RosterParseError) as excinfo:
        parse_roster_row(["1", "Eduardo", "5", "7", "n/a"], row_number=4, total_classes=20)
    assert excinfo.value.column == "E"
