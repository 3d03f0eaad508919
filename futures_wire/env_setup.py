"""Environment configuration setup utilities.

This module loads the endpoint configuration handed to the transport layer
from a .env file or the process environment.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from futures_wire.errors import ValidationError
from futures_wire.helpers import DEFAULT_RECV_WINDOW, DEFAULT_REST_URL, DEFAULT_WS_URL

log = logging.getLogger(__name__)


def setup_environment() -> tuple[str, str, str, int]:
    """Load and return environment variables for the futures endpoints.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables. Reads environment-specific variables
    based on the ENVIRONMENT variable (defaults to 'production').

    Returns:
        Tuple:
            - environment: The lower-cased environment name
            - rest_endpoint: The REST API base URL
            - ws_endpoint: The WebSocket stream base URL
            - recv_window: Signed request validity window in milliseconds

    Raises:
        ValidationError: If the receive window is not an integer

    """
    env_file_path = Path(".env")
    if env_file_path.exists():
        log.info("Loading environment variables from .env file")
        load_dotenv(env_file_path)
    else:
        log.info(".env file not found. Falling back to Bash Environment variables.")

    environment = os.getenv("ENVIRONMENT", "production").lower()
    log.info("Using %s environment", environment)

    suffix = environment.upper()
    rest_endpoint = os.environ.get(f"FUTURES_REST_ENDPOINT_{suffix}", DEFAULT_REST_URL)
    ws_endpoint = os.environ.get(f"FUTURES_WS_ENDPOINT_{suffix}", DEFAULT_WS_URL)
    try:
        recv_window = int(
            os.environ.get(f"FUTURES_RECV_WINDOW_{suffix}", str(DEFAULT_RECV_WINDOW))
        )
    except ValueError as e:
        raise ValidationError(f"Invalid FUTURES_RECV_WINDOW_{suffix}: {e}") from e

    return environment, rest_endpoint, ws_endpoint, recv_window
