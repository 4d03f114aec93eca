from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MAPSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="MAP Score Projections API")
    environment: Literal["dev", "test", "staging", "prod"] = Field(default="dev")
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    norms_file: Optional[Path] = Field(
        default=None,
        description="YAML file overriding the built-in percentile table and grade-equivalent curve",
    )
    preload_norms: bool = Field(
        default=True,
        description="Load and validate reference tables at startup so bad data fails fast",
    )

    @field_validator("norms_file", mode="before")
    @classmethod
    def _normalize_blank_path(cls, value: object) -> Optional[str | Path]:
        if value in (None, "", b""):
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        if isinstance(value, Path):
            return value
        raise TypeError("MAPSCORE_NORMS_FILE must be a filesystem path")

    @computed_field(return_type=bool)
    def is_production(self) -> bool:
        return self.environment == "prod"

    @model_validator(mode="after")
    def _no_debug_in_production(self) -> "Settings":
        if self.is_production:
            self.debug = False
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
