"""Factory function for creating Google API service clients."""

from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError
from google.oauth2.credentials import Credentials

import config
from utils.logger import get_logger
from utils.error_handler import APIError, AuthenticationError

logger = get_logger()

def build_service(service_name: str, version: str, credentials: Credentials) -> Resource:
    """Builds and returns a Google API service client.

    Credentials without a current access token are accepted as long as they
    carry a refresh token; the transport refreshes them on first use.

    Args:
        service_name: The name of the service (e.g., 'sheets').
        version: The version of the service (e.g., 'v4').
        credentials: Google OAuth 2.0 credentials.

    Returns:
        Resource: The Google API service client resource object.

    Raises:
        AuthenticationError: If credentials are unusable or the API rejects them.
        APIError: If the service fails to build.
    """
    if not credentials or not (credentials.valid or credentials.refresh_token):
        logger.error(f"Attempted to build service '{service_name}' with unusable credentials.")
        raise AuthenticationError(f"Unusable credentials provided for service '{service_name}'. Please re-authorize.")

    logger.debug(f"Building service client for {service_name} {version}...")
    try:
        service = build(service_name, version, credentials=credentials, cache_discovery=False)
    except HttpError as e:
        logger.error(
            f"Failed to build service '{service_name}' {version} due to HTTP error: {e.resp.status} {e.content}",
            exc_info=config.DEBUG
        )
        if e.resp.status in (401, 403):
            raise AuthenticationError(
                f"Authentication/Authorization error building service '{service_name}': {e.resp.status}. "
                "Check permissions and credentials."
            ) from e
        raise APIError(
            f"Failed to build service '{service_name}' {version} due to HTTP error {e.resp.status}.",
            status_code=e.resp.status,
            service=service_name
        ) from e
    except Exception as e:
        logger.error(
            f"An unexpected error occurred while building service '{service_name}' {version}: {e}",
            exc_info=config.DEBUG
        )
        raise APIError(f"Unexpected error building service '{service_name}': {e}", service=service_name) from e

    logger.info(f"Successfully built service client for {service_name} {version}.")
    return service
