"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. Environment variables, e.g. ``HOTZENPLOTZ_BACKEND_URL=https://api/data``
  2. A ``.env`` file in the working directory

Field ``backend_url`` maps to ``HOTZENPLOTZ_BACKEND_URL`` and so on.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hotzenplotz.models.config import DEFAULT_STORAGE_PREFIX, StoreConfig


class Settings(BaseSettings):
    """hotzenplotz settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOTZENPLOTZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Backend ===
    backend_url: str = "/"
    origin: str = ""  # Resolves a relative backend_url; empty = backend_url must be absolute
    http_timeout_seconds: float = Field(default=20.0, gt=0)

    # === Cache behaviour ===
    persist_locally: bool = False
    check_revision: bool = True
    deduplicate_requests: bool = False
    storage_prefix: str = DEFAULT_STORAGE_PREFIX
    store_db_path: str = "data/hotzenplotz.db"

    # === App Config ===
    debug: bool = False
    app_env: str = "development"
    log_level: str = "INFO"

    def to_store_config(self) -> StoreConfig:
        """Project the cache-related fields onto a StoreConfig."""
        return StoreConfig(
            backend_url=self.backend_url,
            persist_locally=self.persist_locally,
            debug=self.debug,
            check_revision=self.check_revision,
            deduplicate_requests=self.deduplicate_requests,
            storage_prefix=self.storage_prefix,
        )
