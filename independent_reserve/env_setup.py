"""Environment configuration setup utilities.

This module provides functions for loading environment variables from .env files
and configuring the SDK for local development.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from independent_reserve.helpers import DEFAULT_API_URL

log = logging.getLogger(__name__)

ENV_PREFIX = "INDEPENDENT_RESERVE"


@dataclass(frozen=True)
class Environment:
    """Client settings read from the process environment."""

    name: str
    api_url: str
    api_key: str | None
    api_secret: str | None
    volume_tables_file: Path | None

    def __repr__(self) -> str:
        secret = None if self.api_secret is None else "***"
        return (
            f"Environment(name={self.name!r}, api_url={self.api_url!r}, "
            f"api_key={self.api_key!r}, api_secret={secret!r}, "
            f"volume_tables_file={self.volume_tables_file!r})"
        )


def setup_environment(env_file: str | Path = ".env") -> Environment:
    """Load and return environment variables for the API configuration.

    Loads environment variables from a .env file if present, otherwise falls
    back to system environment variables. Reads environment-specific variables
    based on the ENVIRONMENT variable (defaults to 'production'):

        INDEPENDENT_RESERVE_API_URL_<ENV>
        INDEPENDENT_RESERVE_API_KEY_<ENV>
        INDEPENDENT_RESERVE_API_SECRET_<ENV>
        INDEPENDENT_RESERVE_VOLUME_TABLES_<ENV>

    Unset or empty credentials are returned as None.
    """
    env_file_path = Path(env_file)
    if env_file_path.exists():
        log.info("Loading environment variables from %s", env_file_path)
        load_dotenv(env_file_path)
    else:
        log.info("%s not found. Falling back to process environment variables.", env_file_path)

    environment = os.getenv("ENVIRONMENT", "production").lower()
    log.info("Using %s environment", environment)
    suffix = environment.upper()

    def read(name: str) -> str | None:
        return os.environ.get(f"{ENV_PREFIX}_{name}_{suffix}") or None

    volume_tables = read("VOLUME_TABLES")

    return Environment(
        name=environment,
        api_url=read("API_URL") or DEFAULT_API_URL,
        api_key=read("API_KEY"),
        api_secret=read("API_SECRET"),
        volume_tables_file=Path(volume_tables) if volume_tables else None,
    )
