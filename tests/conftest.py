from __future__ import annotations

import os

import pytest

from mkprivacy.core.config.manager import ConfigManager
from mkprivacy.core.config.paths import ConfigFsPaths
from mkprivacy.core.events import EventLogger
from mkprivacy.core.store import ManifestStore

from .helpers.manifest_builders import build_manifest_plist


@pytest.fixture
def tmp_config_root(tmp_path):
    """
    Provides an isolated root with config/ under tmp_path.
    """
    fs = ConfigFsPaths(root=str(tmp_path))
    os.makedirs(fs.config_dir, exist_ok=True)
    return fs


@pytest.fixture
def config_manager(tmp_config_root):
    cm = ConfigManager(fs=tmp_config_root, logger=None, read_only=False)
    cm.load_all()
    return cm


@pytest.fixture
def event_log_path(tmp_path):
    return str(tmp_path / "logs" / "session.jsonl")


@pytest.fixture
def store(event_log_path):
    return ManifestStore(event_logger=EventLogger(path=event_log_path), session_id="s1")


@pytest.fixture
def manifest_file(tmp_path):
    path = tmp_path / "PrivacyInfo.xcprivacy"
    path.write_bytes(build_manifest_plist())
    return str(path)
