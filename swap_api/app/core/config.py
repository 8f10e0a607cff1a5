"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started against a local MongoDB instance without any
setup.  In a production deployment override these via environment
variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Swap Orders API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Routes are mounted at the root (``/users``, ``/products``...) unless
    # a prefix such as ``/api/v1`` is configured.
    api_prefix: str = os.getenv("API_PREFIX", "")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    # The log file is rotated once it reaches ``LOG_MAX_BYTES``.
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))
    mongodb_log_level: str = os.getenv("MONGODB_LOG_LEVEL", "WARNING")
    access_log: bool = _env_flag("ACCESS_LOG", "true")

    # Connection string for the backing document store.  The database
    # name is taken from the URI path when ``MONGODB_DATABASE`` is unset.
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017/swap_orders")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "")
    mongodb_timeout_ms: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # When enabled, swap orders may only reference users and products
    # that exist at the time the order is written.
    verify_references: bool = _env_flag("VERIFY_REFERENCES")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
