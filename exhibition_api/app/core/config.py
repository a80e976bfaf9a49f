"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  Tests
and embedders may construct their own ``Settings`` instance and pass
it to ``create_app`` to run an isolated registry.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Supported values for ``Settings.product_delete_mode``.
DELETE_MODE_HARD = "hard"
DELETE_MODE_TOMBSTONE = "tombstone"
DELETE_MODES = {DELETE_MODE_HARD, DELETE_MODE_TOMBSTONE}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Exhibition Registry API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path to the SQLite file holding the four key-value collections.  A
    # relative path is resolved against the package root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "exhibition.db")

    # ``hard`` removes a deleted product with its comments and likes;
    # ``tombstone`` keeps the record with ``deleted_at`` set and hides it.
    product_delete_mode: str = os.getenv("PRODUCT_DELETE_MODE", DELETE_MODE_HARD)

    # When enabled, operations that act on behalf of a username require the
    # caller identity to match the one recorded when that user registered.
    enforce_caller_binding: bool = _env_flag("ENFORCE_CALLER_BINDING")

    def __post_init__(self) -> None:
        self.product_delete_mode = self.product_delete_mode.lower()
        if self.product_delete_mode not in DELETE_MODES:
            raise ValueError(
                f"Unsupported product delete mode {self.product_delete_mode!r}; "
                f"expected one of {sorted(DELETE_MODES)}"
            )


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables should
# be set before importing this module.
settings = Settings()
