"""Handles OAuth 2.0 authorization for the Google Sheets API."""

import json
import os
from typing import List, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

import config
from utils.logger import get_logger
from utils.error_handler import AuthenticationError

logger = get_logger()

def load_saved_credentials(token_file: str = config.TOKEN_FILE,
                           scopes: List[str] = config.SCOPES) -> Optional[Credentials]:
    """Reads previously authorized credentials from the token file.

    No network call is made. The access token is fetched lazily by the HTTP
    transport on the first request.

    Returns:
        The stored credentials, or None if the file is missing or unusable.
    """
    if not os.path.exists(token_file):
        logger.debug(f"No token file at {token_file}.")
        return None
    try:
        creds = Credentials.from_authorized_user_file(token_file, scopes)
    except (ValueError, OSError) as e:
        logger.warning(f"Error loading token file {token_file}: {e}. Proceeding with re-authorization.")
        return None
    if not creds.valid and not creds.refresh_token:
        logger.warning(f"Token file {token_file} holds no refresh token. Proceeding with re-authorization.")
        return None
    logger.debug(f"Loaded credentials from {token_file}")
    return creds

def save_credentials(creds: Credentials,
                     token_file: str = config.TOKEN_FILE,
                     client_secrets_file: str = config.CLIENT_SECRETS_FILE) -> None:
    """Serializes credentials to a file readable by `load_saved_credentials`.

    Client id and secret come from the application registration file so the
    token file stays valid even if the flow omitted them.

    Raises:
        AuthenticationError: If the registration file has no `installed` or `web` entry.
        OSError: If either file cannot be read or written.
    """
    with open(client_secrets_file, "r", encoding="utf-8") as secrets:
        keys = json.load(secrets)
    key = keys.get("installed") or keys.get("web")
    if not key:
        raise AuthenticationError(
            f"{client_secrets_file} has no 'installed' or 'web' client configuration."
        )
    payload = {
        "type": "authorized_user",
        "client_id": key.get("client_id"),
        "client_secret": key.get("client_secret"),
        "refresh_token": creds.refresh_token,
    }
    with open(token_file, "w", encoding="utf-8") as token:
        json.dump(payload, token)
    logger.debug(f"Token saved to {token_file}")

def get_credentials(token_file: str = config.TOKEN_FILE,
                    client_secrets_file: str = config.CLIENT_SECRETS_FILE,
                    scopes: List[str] = config.SCOPES,
                    port: int = config.OAUTH_PORT) -> Credentials:
    """Gets usable Google API credentials, authorizing interactively if needed.

    A cached token is returned as-is. Otherwise the installed-app flow runs a
    local server for the consent redirect and the resulting refresh token is
    persisted for future runs.

    Returns:
        Credentials: Google OAuth 2.0 credentials.

    Raises:
        FileNotFoundError: If the application registration file is missing.
        AuthenticationError: If the authorization flow fails or is cancelled.
    """
    logger.info(f"Checking for token file: {token_file}")
    creds = load_saved_credentials(token_file, scopes)
    if creds:
        logger.info("Using cached token; skipping authorization.")
        return creds

    logger.info("No usable cached token. Starting OAuth flow...")
    if not os.path.exists(client_secrets_file):
        logger.critical(f"{client_secrets_file} not found. Cannot initiate OAuth flow.")
        logger.critical("Download the OAuth client file from Google Cloud Console and place it in the working directory.")
        raise FileNotFoundError(f"{client_secrets_file} not found.")

    try:
        flow = InstalledAppFlow.from_client_secrets_file(client_secrets_file, scopes)
        creds = flow.run_local_server(port=port)
    except Exception as e:
        logger.error(f"OAuth flow failed: {e}", exc_info=config.DEBUG)
        raise AuthenticationError(f"OAuth flow failed: {e}") from e

    if not creds:
        raise AuthenticationError("OAuth flow completed but no credentials were obtained.")
    logger.info("Authorization successful.")

    try:
        save_credentials(creds, token_file, client_secrets_file)
    except OSError as e:
        logger.warning(f"Failed to save new token to {token_file}: {e}")
    return creds
