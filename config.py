"""Configuration settings for the Sheets Attendance Grader."""

import os
import logging
from typing import Final, List

from utils.error_handler import ConfigError


def _int_from_env(name: str, default: str) -> int:
    """Reads an integer override from the environment."""
    raw = os.environ.get(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"Environment variable {name} must be an integer, got {raw!r}") from e


# Debug flag: 1 = debug mode (verbose logging), 0 = production mode
DEBUG: Final[int] = _int_from_env("GRADER_DEBUG", "0")

# --- Google API Settings ---

# If modifying these scopes, delete the token file.
SCOPES: Final[List[str]] = [
    "https://www.googleapis.com/auth/spreadsheets",
]

# --- File Paths ---
# Application registration downloaded from Google Cloud Console
CLIENT_SECRETS_FILE: Final[str] = os.environ.get("CLIENT_SECRETS_PATH", "credentials.json")
# Token file lives next to the secrets file (or in the working directory)
_token_dir = os.path.dirname(CLIENT_SECRETS_FILE) if os.path.dirname(CLIENT_SECRETS_FILE) else '.'
TOKEN_FILE: Final[str] = os.path.join(_token_dir, "token.json")
# Port for the local OAuth redirect server, 0 picks any free port
OAUTH_PORT: Final[int] = _int_from_env("GRADER_OAUTH_PORT", "0")

LOG_DIR: Final[str] = "logs"
LOG_FILE: Final[str] = os.environ.get("GRADER_LOG_FILE", os.path.join(LOG_DIR, "grader_app.log"))

# --- Spreadsheet Settings ---

# https://docs.google.com/spreadsheets/d/1NNPU9egmEDJnytlAscxKQsUt4Q0kq4YtoNWIvkWF8rQ/edit
SPREADSHEET_ID: Final[str] = os.environ.get(
    "GRADER_SPREADSHEET_ID", "1NNPU9egmEDJnytlAscxKQsUt4Q0kq4YtoNWIvkWF8rQ"
)
SHEET_RANGE: Final[str] = os.environ.get("GRADER_SHEET_RANGE", "engenharia_de_software")

# Written values are parsed as if typed into the cell by a user
VALUE_INPUT_OPTION: Final[str] = "USER_ENTERED"

# Total attempts per Sheets call; 1 disables retrying
API_MAX_ATTEMPTS: Final[int] = _int_from_env("GRADER_API_MAX_ATTEMPTS", "1")

# --- Roster Layout ---

HEADER_ROWS: Final[int] = 3
# Header row holding "<label>: <N>" with the total number of classes
CLASS_COUNT_ROW: Final[int] = 1
CLASS_COUNT_SEPARATOR: Final[str] = ": "

ABSENCES_COLUMN_INDEX: Final[int] = 2  # C
FIRST_GRADE_COLUMN_INDEX: Final[int] = 3  # D, E, F
GRADE_COUNT: Final[int] = 3

STATUS_COLUMN: Final[str] = "G"
FINAL_GRADE_COLUMN: Final[str] = "H"

# --- Grading Rules ---

MAX_ABSENCE_PERCENT: Final[int] = 25
# Sum of the three grades is divided by this before rounding up
GRADE_DIVISOR: Final[int] = 30
FAIL_BELOW: Final[int] = 5
PASS_FROM: Final[int] = 7
MAX_GRADE: Final[int] = 10

# --- Logging Configuration ---
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
# Structured log format for the file handler
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'
