# Copyright (c) 2025, arraymap contributors
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = (
    "ArraymapSettings",
    "settings",
)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class ArraymapSettings(BaseSettings, frozen=True):
    """Package settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ARRAYMAP_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    COPY_ON_WRITE: bool = Field(
        default=True,
        description=(
            "Copy the backing list and index on every mutating operation. "
            "When disabled, handles share and mutate the same storage."
        ),
    )
    STRICT: bool = Field(
        default=False,
        description=(
            "Raise on unknown or duplicate identities instead of skipping "
            "them in update/add/remove batches."
        ),
    )
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Level applied to the 'arraymap' logger on import.",
    )

    @field_validator("LOG_LEVEL", mode="before")
    def _validate_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, "
                f"not {value!r}"
            )
        return level


# Module-level settings used for defaults
settings = ArraymapSettings()
