"""Application settings and configuration.

This module defines all configuration options for the player store.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Player store settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files, or
    passed explicitly by field name when constructing a store in code.
    """

    # Storage backing file
    storage_path: str = Field(default="storage.db", alias="STORAGE_PATH")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    sqlite_busy_timeout: float = Field(default=30.0, alias="SQLITE_BUSY_TIMEOUT")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Username cache behaviour
    prime_username_cache: bool = Field(default=True, alias="PRIME_USERNAME_CACHE")

    # Login hooks
    clear_nickname_on_change: bool = Field(default=False, alias="CLEAR_NICKNAME_ON_CHANGE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL, deriving it from the storage path if unset.

        Returns:
            An explicit DATABASE_URL when configured, otherwise a SQLite URL
            pointing at ``storage_path``.
        """
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.storage_path}"


settings = Settings()
