import os
import tempfile

# Keep test runs from writing into the project's logs/ directory
os.environ.setdefault("GRADER_LOG_FILE", os.path.join(tempfile.gettempdir(), "sheets_grader_tests.log"))

import pytest

from utils.error_handler import APIError

SPREADSHEET_ID = "test-spreadsheet"
SHEET_RANGE = "engenharia_de_software"


class FakeSheetsService:
    """In-memory stand-in for SheetsService that records every call."""

    def __init__(self, rows=None, fail_on_range=None):
        self.rows = rows if rows is not None else []
        self.fail_on_range = fail_on_range
        self.reads = []
        self.writes = []

    def get_values(self, spreadsheet_id, range_name):
        self.reads.append((spreadsheet_id, range_name))
        return [list(row) for row in self.rows]

    def update_values(self, spreadsheet_id, range_name, values, value_input_option="USER_ENTERED"):
        if self.fail_on_range and range_name.startswith(self.fail_on_range):
            raise APIError(f"Failed to update range '{range_name}': 403", status_code=403, service="sheets")
        self.writes.append((spreadsheet_id, range_name, values, value_input_option))
        return {"spreadsheetId": spreadsheet_id, "updatedRange": range_name, "updatedCells": len(values)}


def make_roster(students, total_classes=20):
    """Builds sheet rows with the three header rows followed by students.

    Each student is (absences, p1, p2, p3), written as text like the API returns.
    """
    header = [
        ["Engenharia de Software"],
        [f"Total de aulas no semestre: {total_classes}"],
        ["Matricula", "Aluno", "Faltas", "P1", "P2", "P3", "Situação", "Nota para Aprovação Final"],
    ]
    body = [
        [str(index + 1), f"Aluno {index + 1}"] + [str(value) for value in student]
        for index, student in enumerate(students)
    ]
    return header + body


@pytest.fixture
def roster():
    return make_roster([
        (6, 8, 7, 9),
        (2, 4, 3, 2),
        (1, 6, 5, 7),
        (0, 10, 9, 10),
    ])


@pytest.fixture
def fake_sheets(roster):
    return FakeSheetsService(roster)
