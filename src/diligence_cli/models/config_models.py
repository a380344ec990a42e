"""Configuration models for Diligence CLI."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Local storage configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (defaults to data dir)"
    )


class RecurrenceConfig(BaseModel):
    """Recurring task generation settings."""

    horizon_days: int = Field(default=90, ge=1)
    completion_topup_days: int = Field(default=30, ge=1)
    cleanup_after_days: int = Field(default=30, ge=0)
    instance_cap: int = Field(default=100, ge=1)
    resume_from_last_generated: bool = Field(default=True)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    date_format: str = Field(default="%b %d, %Y")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("pretty", "table", "json", "yaml"):
            raise ValueError(f"unsupported output format: {v}")
        return v


class AppConfig(BaseModel):
    """Main Diligence configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    recurrence: RecurrenceConfig = Field(default_factory=RecurrenceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
