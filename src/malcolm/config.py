"""Typed settings loader for the exchange viewer."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import AddressError, ConfigError
from .models import Address


class ViewerSettings(BaseSettings):
    """Viewer settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    from_address: str = Field(default="8000", alias="MALCOLM_FROM")
    to_address: str = Field(default="localhost:5009", alias="MALCOLM_TO")
    history_capacity: int = Field(default=100, alias="MALCOLM_HISTORY_CAPACITY")
    initial_level: int = Field(default=3, alias="MALCOLM_INITIAL_LEVEL")
    body_preview_length: int = Field(default=512, alias="MALCOLM_BODY_PREVIEW_LENGTH")
    storage_path: Path = Field(default=Path("./exchanges"), alias="MALCOLM_STORAGE_PATH")
    log_file: Path | None = Field(default=None, alias="MALCOLM_LOG_FILE")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="MALCOLM_LOG_LEVEL",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat an empty env value as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> ViewerSettings:
        """Check numeric bounds and that both addresses parse."""
        if self.history_capacity <= 0:
            raise ValueError("MALCOLM_HISTORY_CAPACITY must be > 0.")
        if not (1 <= self.initial_level <= 6):
            raise ValueError("MALCOLM_INITIAL_LEVEL must be between 1 and 6.")
        if self.body_preview_length < 4:
            raise ValueError("MALCOLM_BODY_PREVIEW_LENGTH must be >= 4.")
        for name, raw in (("MALCOLM_FROM", self.from_address), ("MALCOLM_TO", self.to_address)):
            try:
                Address.parse(raw)
            except AddressError as exc:
                raise ValueError(f"{name} is invalid: {exc}") from exc
        return self

    @property
    def from_addr(self) -> Address:
        return Address.parse(self.from_address)

    @property
    def to_addr(self) -> Address:
        return Address.parse(self.to_address)

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging."""
        return {
            "from": str(self.from_addr),
            "to": str(self.to_addr),
            "history_capacity": self.history_capacity,
            "initial_level": self.initial_level,
            "body_preview_length": self.body_preview_length,
            "storage_path": str(self.storage_path),
            "log_file": str(self.log_file) if self.log_file else None,
            "log_level": self.log_level,
        }


def load_settings() -> ViewerSettings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return ViewerSettings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
