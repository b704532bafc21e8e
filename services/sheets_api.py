"""Wrapper for Google Sheets API interactions."""

from typing import Any, Dict, List

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

import config
from utils.logger import get_logger
from utils.error_handler import APIError, AuthenticationError
from utils.retry import retry_on_exception
from api_clients import build_service

logger = get_logger()

# Only rate limits, server errors and dropped connections are worth another attempt.
RETRYABLE_SHEETS_ERRORS = (HttpError, TimeoutError, ConnectionError)
RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)

def should_retry_sheets(e: Exception) -> bool:
    """Predicate for the retry decorator to check specific HttpError status codes."""
    if isinstance(e, HttpError):
        return e.resp.status in RETRYABLE_STATUS_CODES
    return isinstance(e, (TimeoutError, ConnectionError))

# Failures below the HTTP layer: DNS, refused or dropped connections, token endpoint unreachable
NETWORK_ERRORS = (TimeoutError, ConnectionError, httplib2.HttpLib2Error, TransportError)

Rows = List[List[Any]]

class SheetsService:
    """Provides read and write access to spreadsheet cell values."""

    SERVICE_NAME = 'sheets'
    VERSION = 'v4'

    def __init__(self, credentials: Credentials):
        """Initializes the SheetsService.

        Args:
            credentials: Google OAuth 2.0 credentials.

        Raises:
            AuthenticationError: If credentials are unusable.
            APIError: If the Sheets service cannot be built.
        """
        logger.debug("Initializing SheetsService...")
        self.service: Resource = build_service(self.SERVICE_NAME, self.VERSION, credentials)
        logger.debug("SheetsService initialized successfully.")

    def get_values(self, spreadsheet_id: str, range_name: str) -> Rows:
        """Reads a range as rows of cell values.

        Trailing empty rows and cells are omitted by the API, so rows may be
        shorter than the range width.

        Returns:
            The rows of the range, or an empty list if it holds no values.

        Raises:
            APIError: If the API call fails.
            AuthenticationError: If the saved token can no longer be refreshed.
        """
        logger.info(f"Reading range '{range_name}' from spreadsheet {spreadsheet_id}...")
        try:
            response = self._execute_get(spreadsheet_id, range_name)
        except HttpError as e:
            logger.error(f"Failed to read range '{range_name}': {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError(
                f"Failed to read range '{range_name}': {e.resp.status}",
                status_code=e.resp.status,
                service=self.SERVICE_NAME
            ) from e
        except RefreshError as e:
            raise self._token_rejected(e) from e
        except NETWORK_ERRORS as e:
            logger.error(f"Network error reading range '{range_name}': {e}", exc_info=config.DEBUG)
            raise APIError(f"Network error reading range '{range_name}': {e}", service=self.SERVICE_NAME) from e

        rows = response.get('values', [])
        logger.debug(f"Read {len(rows)} rows from '{range_name}'.")
        return rows

    def update_values(self, spreadsheet_id: str, range_name: str, values: Rows,
                      value_input_option: str = config.VALUE_INPUT_OPTION) -> Dict[str, Any]:
        """Writes rows of values into an A1 range.

        Returns:
            The raw UpdateValuesResponse.

        Raises:
            APIError: If the API call fails.
            AuthenticationError: If the saved token can no longer be refreshed.
        """
        logger.debug(f"Writing {len(values)} rows to '{range_name}' ({value_input_option}).")
        try:
            response = self._execute_update(spreadsheet_id, range_name, values, value_input_option)
        except HttpError as e:
            logger.error(f"Failed to update range '{range_name}': {e.resp.status} {e.content}", exc_info=config.DEBUG)
            raise APIError(
                f"Failed to update range '{range_name}': {e.resp.status}",
                status_code=e.resp.status,
                service=self.SERVICE_NAME
            ) from e
        except RefreshError as e:
            raise self._token_rejected(e) from e
        except NETWORK_ERRORS as e:
            logger.error(f"Network error updating range '{range_name}': {e}", exc_info=config.DEBUG)
            raise APIError(f"Network error updating range '{range_name}': {e}", service=self.SERVICE_NAME) from e

        logger.info(f"Updated {response.get('updatedCells', 0)} cells in '{range_name}'.")
        return response

    def _token_rejected(self, error: RefreshError) -> AuthenticationError:
        """Builds the error for a cached token Google no longer accepts."""
        logger.error(f"Access token refresh failed: {error}", exc_info=config.DEBUG)
        return AuthenticationError(
            f"Google rejected the saved token ({error}). "
            f"Delete {config.TOKEN_FILE} and run again to re-authorize."
        )

    @retry_on_exception(exceptions=RETRYABLE_SHEETS_ERRORS, max_attempts=config.API_MAX_ATTEMPTS,
                        retry_if=should_retry_sheets)
    def _execute_get(self, spreadsheet_id: str, range_name: str) -> Dict[str, Any]:
        return self.service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=range_name
        ).execute()

    @retry_on_exception(exceptions=RETRYABLE_SHEETS_ERRORS, max_attempts=config.API_MAX_ATTEMPTS,
                        retry_if=should_retry_sheets)
    def _execute_update(self, spreadsheet_id: str, range_name: str, values: Rows,
                        value_input_option: str) -> Dict[str, Any]:
        return self.service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=range_name,
            valueInputOption=value_input_option,
            body={'values': values}
        ).execute()
