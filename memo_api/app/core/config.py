"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration.  In a production deployment you
should at least override ``SECRET_KEY`` and ``CORS_ORIGINS``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Memo API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Prefix under which the memo routes are mounted.  The frontend
    # expects ``http://<host>:8000/api/memos``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Name of the cookie carrying the session token.  The token is
    # issued by an external login service; this API only verifies it.
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "token")

    # Comma‑separated list of frontend origins allowed to call the API
    # with credentials (cookies).
    cors_origins: str = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")

    # Path or connection string for the SQLite database.  If a relative
    # path is provided, it will be resolved relative to the project root
    # by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "memo.db")

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
