"""Library configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Envali settings loaded from ENVALI_* environment variables."""

    # External content
    CONTENT_DIR: str = "content/envali"

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Engine
    MAX_NESTING_DEPTH: int = Field(default=64, ge=1)
    DEFAULT_SEVERITY: Literal["recoverable", "unrecoverable", "runtime"] = "recoverable"

    model_config = {"env_prefix": "ENVALI_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
