from __future__ import annotations
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", alias="KMERKLE_LOG_LEVEL"
    )

    # Default for `kmerkle build` when --format is not given
    output_format: Literal["text", "json"] = Field(
        default="text", alias="KMERKLE_OUTPUT_FORMAT"
    )

    # Log messages longer than this are clipped (leaves may be huge)
    max_log_chars: int = Field(default=512, ge=16, alias="KMERKLE_MAX_LOG_CHARS")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):  # type: ignore[override]
        return v.upper() if isinstance(v, str) else v

    class Config:
        env_file = ".env"
        case_sensitive = False


def get_settings() -> Settings:
    """Read settings from the environment at call time."""
    return Settings()
