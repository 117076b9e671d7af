"""Pydantic configuration models for vault-sources."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

DB_PATH_ENV = "VAULT_SOURCES_DB_PATH"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Path("~/vault-sources/vault-sources.sqlite")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class LimitsConfig(BaseModel):
    """Paging limits applied at the tool/CLI boundary."""

    default_page_size: int = Field(default=100, ge=1)
    max_page_size: int = Field(default=500, ge=1)

    @model_validator(mode="after")
    def validate_sizes(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds max_page_size ({self.max_page_size})"
            )
        return self

    def clamp(self, limit: int | None) -> int:
        """Requested page size, defaulted and capped."""
        if limit is None:
            return self.default_page_size
        return max(1, min(int(limit), self.max_page_size))


class LedgerConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @model_validator(mode="after")
    def apply_env_overrides(self):
        """VAULT_SOURCES_DB_PATH wins over the config file."""
        env_path = os.getenv(DB_PATH_ENV)
        if env_path:
            self.paths.db_path = Path(env_path).expanduser()
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "LedgerConfig":
        """Create config from dict, accepting string paths."""
        if "paths" in data and isinstance(data["paths"], dict):
            if isinstance(data["paths"].get("db_path"), str):
                data["paths"]["db_path"] = Path(data["paths"]["db_path"])
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
