import importlib
import sys
from unittest import mock

import pytest

import main
from conftest import FakeSheetsService, make_roster
from core.grader import GradeResult, RosterRow, Status
from ui import cli
from utils.error_handler import APIError, AuthenticationError


@pytest.fixture
def patched(monkeypatch):
    service = FakeSheetsService(make_roster([(0, 50, 50, 50), (9, 70, 70, 70)]))
    monkeypatch.setattr(main.auth, "get_credentials", mock.Mock(return_value=mock.Mock()))
    monkeypatch.setattr(main, "SheetsService", mock.Mock(return_value=service))
    return service


def test_successful_run_exits_zero_and_writes(patched):
    assert main.main() == main.EXIT_OK
    assert [write[1] for write in patched.writes] == ["G4:G5", "H4:H5"]
    assert patched.writes[0][2] == [["Exame Final"], ["Reprovado por Falta"]]


def test_empty_sheet_exits_zero(patched):
    patched.rows = []
    assert main.main() == main.EXIT_OK
    assert patched.writes == []


def test_authorization_failure_exits_nonzero(monkeypatch):
    monkeypatch.setattr(main.auth, "get_credentials", mock.Mock(side_effect=AuthenticationError("denied")))
    sheets = mock.Mock()
    monkeypatch.setattr(main, "SheetsService", sheets)
    assert main.main() == main.EXIT_FAILURE
    sheets.assert_not_called()


def test_missing_secrets_exits_nonzero(monkeypatch):
    monkeypatch.setattr(main.auth, "get_credentials", mock.Mock(side_effect=FileNotFoundError("credentials.json")))
    assert main.main() == main.EXIT_FAILURE


def test_write_failure_exits_nonzero(patched):
    patched.fail_on_range = "H"
    assert main.main() == main.EXIT_FAILURE
    assert [write[1] for write in patched.writes] == ["G4:G5"]


def test_malformed_roster_exits_nonzero(patched):
    patched.rows[1] = ["no class count here"]
    assert main.main() == main.EXIT_FAILURE
    assert patched.writes == []


def test_read_failure_exits_nonzero(patched, monkeypatch):
    monkeypatch.setattr(patched, "get_values", mock.Mock(side_effect=APIError("quota", 429, "sheets")))
    assert main.main() == main.EXIT_FAILURE


def test_results_table_has_one_line_per_student():
    results = [
        GradeResult(RosterRow(4, 6, 8, 7, 9), Status.FAILED_BY_ABSENCE, 30, None, 0),
        GradeResult(RosterRow(5, 0, 50, 50, 50), Status.FINAL_EXAM, 0, 5, 5),
    ]
    table = cli.build_results_table(results)
    assert table.row_count == 2
    assert len(table.columns) == 9


def test_ctrl_c_exits_with_interrupted_status(monkeypatch):
    monkeypatch.setattr(main.auth, "get_credentials", mock.Mock(side_effect=KeyboardInterrupt))
    assert main.main() == main.EXIT_INTERRUPTED


def test_revoked_token_exits_nonzero(monkeypatch, patched):
    monkeypatch.setattr(patched, "get_values", mock.Mock(
        side_effect=AuthenticationError("Google rejected the saved token")))
    assert main.main() == main.EXIT_FAILURE


def test_invalid_env_override_exits_before_running(monkeypatch, capsys):
    monkeypatch.setenv("GRADER_API_MAX_ATTEMPTS", "three")
    monkeypatch.delitem(sys.modules, "config", raising=False)
    monkeypatch.delitem(sys.modules, "main", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        importlib.import_module("main")

    assert excinfo.value.code == 1
    assert "GRADER_API_MAX_ATTEMPTS" in capsys.readouterr().err
