from __future__ import annotations

from mkprivacy.core.config.manager import CONFIG_FILES, ConfigManager
from mkprivacy.core.config.models import AppConfig
from mkprivacy.core.config.paths import ConfigFsPaths

__all__ = ["AppConfig", "CONFIG_FILES", "ConfigFsPaths", "ConfigManager"]
