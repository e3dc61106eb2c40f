from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from mkprivacy.core.config.io import (
    ReadResult,
    atomic_write_json,
    read_json_file,
    recover_from_corrupt,
    snapshot_last_known_good,
)
from mkprivacy.core.config.models import AppConfig, AppFileConfig, ExportConfig, LoggingConfig, UiConfig
from mkprivacy.core.config.paths import ConfigFsPaths
from mkprivacy.core.errors import ConfigError

CONFIG_FILES: Dict[str, type[BaseModel]] = {
    "app.json": AppFileConfig,
    "ui.json": UiConfig,
    "export.json": ExportConfig,
    "logging.json": LoggingConfig,
}


class ConfigManager:
    def __init__(self, *, fs: Optional[ConfigFsPaths] = None, logger=None, read_only: bool = False):  # noqa: ANN001
        self.fs = fs or ConfigFsPaths(".")
        self.logger = logger
        self.read_only = read_only
        self._cfg: Optional[AppConfig] = None

    # ---------- public API ----------
    def load_all(self) -> AppConfig:
        if not self.read_only:
            os.makedirs(self.fs.config_dir, exist_ok=True)
            os.makedirs(self.fs.backups_dir, exist_ok=True)
            os.makedirs(self.fs.last_known_good_dir, exist_ok=True)

        files = self._load_raw_files()
        max_backups = int(((files.get("app.json") or {}).get("backups") or {}).get("max_backups_per_file", 10))
        files = self._ensure_defaults(files, max_backups=max_backups)

        cfg = self._validate_all(files)
        self._cfg = cfg

        if not self.read_only:
            snapshot_last_known_good(self.fs.config_dir, self.fs.last_known_good_dir, CONFIG_FILES)
        return cfg

    def get(self) -> AppConfig:
        if self._cfg is None:
            raise ConfigError("Config not loaded.")
        return self._cfg

    def save(self, filename: str, data: Dict[str, Any]) -> AppConfig:
        """
        Validate one config file, then write it atomically with a pre-write backup.
        """
        if self.read_only:
            raise ConfigError("Config manager is read-only.")
        model = CONFIG_FILES.get(filename)
        if model is None:
            raise ConfigError("Unknown config file.", file=filename)
        if not isinstance(data, dict):
            raise ConfigError("Config data must be an object.", file=filename)
        try:
            model.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"{filename} invalid: {e}", file=filename) from e
        max_backups = int((self.get().app.backups or {}).get("max_backups_per_file", 10))
        atomic_write_json(self.fs.file(filename), data, self.fs.backups_dir, max_backups=max_backups)
        return self.load_all()

    # ---------- internals ----------
    def _load_raw_files(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for name in CONFIG_FILES:
            path = self.fs.file(name)
            rr: ReadResult = read_json_file(path)
            if rr.ok:
                out[name] = rr.data
                continue
            if rr.error and rr.error.startswith("corrupt_json") and not self.read_only:
                data, recovered = recover_from_corrupt(path, self.fs.backups_dir, self.fs.last_known_good_dir, max_backups=10)
                if self.logger:
                    self.logger.warning("Corrupt config %s -> recovered=%s", name, recovered)
                out[name] = data
                continue
            # missing or unreadable: defaults later
            out[name] = {}
        return out

    def _ensure_defaults(self, files: Dict[str, Dict[str, Any]], *, max_backups: int) -> Dict[str, Dict[str, Any]]:
        out = dict(files)
        for name, model in CONFIG_FILES.items():
            if out.get(name):
                continue
            dflt = model().model_dump()
            out[name] = dflt
            if self.logger:
                self.logger.info("Missing config %s; creating defaults.", name)
            if not self.read_only:
                atomic_write_json(self.fs.file(name), dflt, self.fs.backups_dir, max_backups=max_backups)
        return out

    def _validate_all(self, files: Dict[str, Dict[str, Any]]) -> AppConfig:
        try:
            return AppConfig(
                app=AppFileConfig.model_validate(files.get("app.json") or {}),
                ui=UiConfig.model_validate(files.get("ui.json") or {}),
                export=ExportConfig.model_validate(files.get("export.json") or {}),
                logging=LoggingConfig.model_validate(files.get("logging.json") or {}),
            )
        except PydanticValidationError as e:
            raise ConfigError(str(e)) from e

