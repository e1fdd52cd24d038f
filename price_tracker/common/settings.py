"""
Runtime Settings

Reads deployment settings from the environment. A .env file in the
project root is loaded first when present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_DATABASE_URL, DEFAULT_REQUEST_TIMEOUT


@dataclass
class Settings:
    """Resolved runtime settings."""
    database_url: str = DEFAULT_DATABASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from environment variables.

    Variables:
        TRACKER_DATABASE_URL: SQLAlchemy URL for the tracked product store
        TRACKER_REQUEST_TIMEOUT: Product page request timeout in seconds

    Raises:
        ValueError: If TRACKER_REQUEST_TIMEOUT is not a positive number
    """
    load_dotenv(env_file or Path(__file__).parent.parent.parent / ".env")

    timeout_raw = os.getenv("TRACKER_REQUEST_TIMEOUT")
    timeout = DEFAULT_REQUEST_TIMEOUT
    if timeout_raw:
        timeout = float(timeout_raw)
        if timeout <= 0:
            raise ValueError(f"TRACKER_REQUEST_TIMEOUT must be positive, got {timeout_raw}")

    return Settings(
        database_url=os.getenv("TRACKER_DATABASE_URL") or DEFAULT_DATABASE_URL,
        request_timeout=timeout,
    )
