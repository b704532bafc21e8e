"""Core logic for grading the attendance roster and writing results back."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

import config
from utils.logger import get_logger
from utils.error_handler import ClassCountError, RosterParseError
from services.sheets_api import Rows, SheetsService

logger = get_logger()


class Status(str, Enum):
    """Outcome written to the status column."""
    FAILED_BY_ABSENCE = "Reprovado por Falta"
    FAILED_BY_GRADE = "Reprovado por Nota"
    FINAL_EXAM = "Exame Final"
    APPROVED = "Aprovado"


@dataclass(frozen=True)
class RosterRow:
    """One student's inputs, as read from columns C to F.

    Grades are None only for students already failed by absence whose grade
    cells are blank or not numeric.
    """
    row_number: int
    absences: float
    p1: Optional[int]
    p2: Optional[int]
    p3: Optional[int]


@dataclass(frozen=True)
class GradeResult:
    row: RosterRow
    status: Status
    absence_percent: int
    # None when the student failed by absence and grades were not evaluated
    mean_grade: Optional[int]
    final_grade: int


def column_letter(index: int) -> str:
    """Converts a zero-based column index to its A1 letter (single letters only)."""
    return chr(ord('A') + index)


def parse_number(value: Any, row_number: int | None = None, column: str | None = None) -> float:
    """Reads a cell value as a finite number.

    Accepts numbers as returned by the API and numeric text, with either
    '.' or ',' as decimal separator.

    Raises:
        RosterParseError: If the value is empty or not numeric.
    """
    if isinstance(value, bool):
        raise RosterParseError(f"Expected a number, got {value!r}", row_number, column)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", ".") if value is not None else ""
        if not text:
            raise RosterParseError("Expected a number, got an empty cell", row_number, column)
        try:
            number = float(text)
        except ValueError as e:
            raise RosterParseError(f"Expected a number, got {value!r}", row_number, column) from e
    if not math.isfinite(number):
        raise RosterParseError(f"Expected a finite number, got {value!r}", row_number, column)
    return number


def parse_grade(value: Any, row_number: int | None = None, column: str | None = None) -> int:
    """Reads a grade cell, keeping only its integer part."""
    return int(parse_number(value, row_number, column))


def parse_class_count(rows: Rows) -> float:
    """Extracts the total number of classes from the "<label>: <N>" header cell.

    Raises:
        ClassCountError: If the header cell is missing or malformed.
    """
    try:
        cell = rows[config.CLASS_COUNT_ROW][0]
    except IndexError as e:
        raise ClassCountError(
            f"Header row {config.CLASS_COUNT_ROW + 1} has no class count cell."
        ) from e

    parts = str(cell).split(config.CLASS_COUNT_SEPARATOR)
    if len(parts) < 2:
        raise ClassCountError(
            f"Class count cell {cell!r} is not in the form '<label>{config.CLASS_COUNT_SEPARATOR}<number>'."
        )
    try:
        total = parse_number(parts[1], config.CLASS_COUNT_ROW + 1, "A")
    except RosterParseError as e:
        raise ClassCountError(f"Class count cell {cell!r} does not hold a number.") from e
    if total <= 0:
        raise ClassCountError(f"Class count must be positive, got {parts[1]!r}.")
    return total


def parse_roster_row(cells: Sequence[Any], row_number: int,
                     total_classes: Optional[float] = None) -> RosterRow:
    """Builds a RosterRow from one row of raw cells.

    The absences cell is always required. When `total_classes` is given and
    the student is over the absence limit, unreadable grade cells are kept
    as None instead of failing, since those grades are never evaluated.

    Raises:
        RosterParseError: If a required cell is missing or not numeric.
    """
    def cell(index: int) -> Any:
        if index >= len(cells):
            raise RosterParseError("Missing value", row_number, column_letter(index))
        return cells[index]

    absences_index = config.ABSENCES_COLUMN_INDEX
    absences = parse_number(cell(absences_index), row_number, column_letter(absences_index))
    failed_by_absence = (total_classes is not None
                         and absence_percent(absences, total_classes) > config.MAX_ABSENCE_PERCENT)

    grades: List[Optional[int]] = []
    for index in range(config.FIRST_GRADE_COLUMN_INDEX,
                       config.FIRST_GRADE_COLUMN_INDEX + config.GRADE_COUNT):
        try:
            grades.append(parse_grade(cell(index), row_number, column_letter(index)))
        except RosterParseError:
            if not failed_by_absence:
                raise
            grades.append(None)
    p1, p2, p3 = grades
    return RosterRow(row_number=row_number, absences=absences, p1=p1, p2=p2, p3=p3)


def absence_percent(absences: float, total_classes: float) -> int:
    return math.ceil(absences * 100 / total_classes)


def mean_grade(p1: int, p2: int, p3: int) -> int:
    """Rounded-up sum of the three grades divided by GRADE_DIVISOR.

    This is the roster's own formula, not an arithmetic mean.
    """
    return math.ceil((p1 + p2 + p3) / config.GRADE_DIVISOR)


def classify(row: RosterRow, total_classes: float) -> GradeResult:
    """Applies the grading rule to one student.

    Failing by absence takes precedence over any grade outcome.
    """
    percent = absence_percent(row.absences, total_classes)
    if percent > config.MAX_ABSENCE_PERCENT:
        return GradeResult(row, Status.FAILED_BY_ABSENCE, percent, None, 0)

    if row.p1 is None or row.p2 is None or row.p3 is None:
        raise RosterParseError("Missing grade", row.row_number)
    mean = mean_grade(row.p1, row.p2, row.p3)
    if mean < config.FAIL_BELOW:
        return GradeResult(row, Status.FAILED_BY_GRADE, percent, mean, 0)
    if mean < config.PASS_FROM:
        return GradeResult(row, Status.FINAL_EXAM, percent, mean, config.MAX_GRADE - mean)
    return GradeResult(row, Status.APPROVED, percent, mean, 0)


class Grader:
    """Reads the roster, grades every student and writes the result columns."""

    def __init__(
        self,
        sheets_service: SheetsService,
        spreadsheet_id: str = config.SPREADSHEET_ID,
        sheet_range: str = config.SHEET_RANGE,
        status_column: str = config.STATUS_COLUMN,
        final_grade_column: str = config.FINAL_GRADE_COLUMN,
        header_rows: int = config.HEADER_ROWS,
    ):
        """Initializes the Grader.

        Args:
            sheets_service: Object exposing `get_values` and `update_values`.
            spreadsheet_id: Spreadsheet holding the roster.
            sheet_range: Range (usually a sheet name) to read.
            status_column: Column receiving the status values.
            final_grade_column: Column receiving the final approval grades.
            header_rows: Rows before the first student.
        """
        self.sheets_service = sheets_service
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self.status_column = status_column
        self.final_grade_column = final_grade_column
        self.header_rows = header_rows
        logger.debug(f"Grader initialized for spreadsheet {spreadsheet_id}, range '{sheet_range}'.")

    def run(self) -> List[GradeResult]:
        """Performs one read, grades in memory, then writes both result columns.

        Returns:
            One GradeResult per student row, in sheet order. Empty if the
            range holds no data.

        Raises:
            GradingError: If the class count or a roster cell is malformed.
                Nothing is written in that case.
            APIError: If the read or either write fails.
        """
        rows = self.sheets_service.get_values(self.spreadsheet_id, self.sheet_range)
        if not rows:
            logger.info("No data found.")
            return []

        results = self.grade_rows(rows)
        if not results:
            logger.warning(f"Range '{self.sheet_range}' holds only header rows. Nothing to write.")
            return results

        self.write_results(results)
        return results

    def grade_rows(self, rows: Rows) -> List[GradeResult]:
        """Parses and classifies every row after the header rows."""
        total_classes = parse_class_count(rows)
        logger.debug(f"Total number of classes: {total_classes:g}")

        logger.info("Faltas, P1, P2, P3:")
        results = []
        for index, cells in enumerate(rows[self.header_rows:], start=self.header_rows):
            raw = [cells[i] if i < len(cells) else "" for i in range(
                config.ABSENCES_COLUMN_INDEX, config.FIRST_GRADE_COLUMN_INDEX + config.GRADE_COUNT)]
            logger.info(", ".join(str(value) for value in raw))

            row = parse_roster_row(cells, row_number=index + 1, total_classes=total_classes)
            result = classify(row, total_classes)
            logger.debug(f"Row {row.row_number}: {result.status.value} (final grade {result.final_grade})")
            results.append(result)
        return results

    def write_results(self, results: List[GradeResult]) -> None:
        """Writes the status column, then the final approval grade column."""
        statuses = [[result.status.value] for result in results]
        response = self.sheets_service.update_values(
            self.spreadsheet_id, self._column_range(self.status_column, len(results)), statuses
        )
        logger.info(f"Status column response: {response}")

        final_grades = [[result.final_grade] for result in results]
        response = self.sheets_service.update_values(
            self.spreadsheet_id, self._column_range(self.final_grade_column, len(results)), final_grades
        )
        logger.info(f"Final grade column response: {response}")

    def _column_range(self, column: str, count: int) -> str:
        first = self.header_rows + 1
        return f"{column}{first}:{column}{self.header_rows + count}"
