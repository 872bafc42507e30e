"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can start
without any configuration; in that case data is kept in the in‑memory
document store and is lost on restart.  In a production deployment set
at least ``MONGODB_URI`` and ``JWT_SECRET``.
"""

import os
from dataclasses import dataclass


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Suvidhaa API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Session tokens are signed with this secret and stay valid for seven
    # days unless ACCESS_TOKEN_EXPIRE_MINUTES says otherwise.
    secret_key: str = os.getenv("JWT_SECRET", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))

    # MongoDB connection string and database name.  When no URI is given
    # the in‑memory store is used instead.
    mongodb_uri: str = os.getenv("MONGODB_URI", "")
    mongodb_db: str = os.getenv("MONGODB_DB", "suvidhaa")
    use_in_memory_store: bool = _flag("USE_IN_MEMORY_STORE")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # When enabled, booking status changes must follow the allowed
    # transition table and may only be made by the booking's customer or
    # its provider.  Disabled by default: any authenticated caller may
    # set any status.
    strict_booking_policy: bool = _flag("STRICT_BOOKING_POLICY")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables should
# be set before importing this module.
settings = Settings()
