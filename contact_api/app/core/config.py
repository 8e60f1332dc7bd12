"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started without any configuration; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Contact Management API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only console logging is
    # configured.
    log_file: str = os.getenv("LOG_FILE", "")

    # All routers are mounted below this prefix, e.g. ``/api/users``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Path to the SQLite database.  A relative path is resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "contacts.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
