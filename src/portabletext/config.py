"""Configuration management for the Portable Text toolkit."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTABLETEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Validation defaults (see ValidationOptions.from_settings)
    require_keys: bool = False
    check_mark_def_refs: bool = False
    allow_empty_text: bool = True

    # Output
    indent: Optional[int] = None

    # Logging
    log_level: str = "WARNING"


settings = Settings()
