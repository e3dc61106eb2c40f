from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppFileConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    config_version: int = Field(default=1, ge=1)
    backups: Dict[str, Any] = Field(default_factory=lambda: {"max_backups_per_file": 10})


class UiConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    theme: str = "light"
    confirm_on_exit: bool = True
    # Pause before clear/import replace state, so Tk can drop focus from entry widgets first.
    settle_delay_ms: int = Field(default=200, ge=0, le=5000)
    always_on_top: bool = False
    geometry: str = "1100x760"

    @field_validator("theme")
    @classmethod
    def _theme(cls, v: str) -> str:
        v = str(v or "").strip().lower()
        if v not in {"light", "dark"}:
            raise ValueError("theme must be 'light' or 'dark'")
        return v


class ExportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    default_filename: str = Field(default="PrivacyInfo.xcprivacy", min_length=1)
    sort_keys: bool = True


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    log_dir: str = "logs"
    level: str = "INFO"
    event_log_enabled: bool = True
    include_tracebacks: bool = False

    @field_validator("level")
    @classmethod
    def _level(cls, v: str) -> str:
        v = str(v or "").strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("invalid log level")
        return v


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    app: AppFileConfig = Field(default_factory=AppFileConfig)
    ui: UiConfig = Field(default_factory=UiConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
