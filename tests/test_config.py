import pytest

import config
from utils.error_handler import ConfigError


def test_int_override_is_read_from_environment(monkeypatch):
    monkeypatch.setenv("GRADER_OAUTH_PORT", "8081")
    assert config._int_from_env("GRADER_OAUTH_PORT", "0") == 8081


def test_int_override_falls_back_to_default(monkeypatch):
    monkeypatch.delenv("GRADER_OAUTH_PORT", raising=False)
    assert config._int_from_env("GRADER_OAUTH_PORT", "0") == 0


def test_invalid_int_override_raises_config_error(monkeypatch):
    monkeypatch.setenv("GRADER_DEBUG", "yes")
    with pytest.raises(ConfigError, match="GRADER_DEBUG"):
        config._int_from_env("GRADER_DEBUG", "0")


def test_defaults_match_roster_layout():
    assert config.HEADER_ROWS == 3
    assert config.MAX_ABSENCE_PERCENT == 25
    assert config.GRADE_DIVISOR == 30
    assert (config.STATUS_COLUMN, config.FINAL_GRADE_COLUMN) == ("G", "H")
