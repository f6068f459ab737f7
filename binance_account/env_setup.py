"""Environment configuration setup utilities.

This module provides functions for loading environment variables from .env files
and configuring the SDK for local development.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from binance_account.config import DEFAULT_RECV_WINDOW, Config
from binance_account.errors import ValidationError

log = logging.getLogger(__name__)


def setup_environment() -> tuple[Config, str | None, str | None]:
    """Load and return environment variables for API configuration.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables. Reads environment-specific variables
    based on the ENVIRONMENT variable (defaults to 'production'). The
    'testnet' environment defaults to the testnet endpoint.

    Returns:
        Tuple:
            - config: Endpoint and default receive window
            - api_key: The API key sent in the X-MBX-APIKEY header, if set
            - secret_key: The secret used to sign requests, if set

    Raises:
        ValidationError: If the receive window variable is not an integer.

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

    defaults = Config.testnet() if environment == "testnet" else Config()

    api_endpoint = os.environ.get(
        f"BINANCE_API_ENDPOINT_{suffix}", defaults.rest_api_endpoint
    )
    api_key = os.environ.get(f"BINANCE_API_KEY_{suffix}")
    secret_key = os.environ.get(f"BINANCE_SECRET_KEY_{suffix}")
    try:
        recv_window = int(
            os.environ.get(f"BINANCE_RECV_WINDOW_{suffix}", str(DEFAULT_RECV_WINDOW))
        )
    except ValueError as e:
        raise ValidationError(f"Invalid BINANCE_RECV_WINDOW_{suffix}: {e}") from e

    config = Config(rest_api_endpoint=api_endpoint, recv_window=recv_window)
    return (config, api_key, secret_key)
