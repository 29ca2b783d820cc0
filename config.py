"""
Configuration for Magick Flow.

Settings are read from MAGICK_FLOW_* environment variables by
pydantic-settings and cached for the lifetime of the process. Nested
sections use a double underscore, e.g. ``MAGICK_FLOW_MAGICK__COMMAND=magick``
or ``MAGICK_FLOW_HISTORY__BUFFER_SIZE=500``.
"""

from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import CommandConstants, HistoryConstants, SystemConstants


class SystemConfig(BaseModel):
    """Logging and debug settings"""

    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT)
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return value


class MagickConfig(BaseModel):
    """External tool settings"""

    command: str = Field(default=CommandConstants.DEFAULT_COMMAND, min_length=1)
    cwd: str = Field(default="", description="Working directory for commands (empty = inherit)")


class ApiConfig(BaseModel):
    """HTTP server settings"""

    host: str = SystemConstants.DEFAULT_HOST
    port: int = Field(default=SystemConstants.DEFAULT_PORT, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class HistoryConfig(BaseModel):
    """Execution history settings"""

    buffer_size: int = Field(
        default=HistoryConstants.DEFAULT_BUFFER_SIZE,
        ge=HistoryConstants.MIN_BUFFER_SIZE,
        le=HistoryConstants.MAX_BUFFER_SIZE,
    )


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix=SystemConstants.ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = "development"
    system: SystemConfig = Field(default_factory=SystemConfig)
    magick: MagickConfig = Field(default_factory=MagickConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings"""
    return Settings()
