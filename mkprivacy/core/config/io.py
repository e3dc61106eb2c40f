from __future__ import annotations

import json
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class ReadResult:
    ok: bool
    data: Dict[str, Any]
    error: Optional[str] = None


def _stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S", time.gmtime())


def read_json_file(path: str) -> ReadResult:
    """
    error is one of: "missing", "corrupt_json:<detail>", "not_object", or the OSError text.
    """
    if not os.path.exists(path):
        return ReadResult(ok=False, data={}, error="missing")
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except json.JSONDecodeError as e:
        return ReadResult(ok=False, data={}, error=f"corrupt_json:{e}")
    except OSError as e:
        return ReadResult(ok=False, data={}, error=str(e))
    if not isinstance(obj, dict):
        return ReadResult(ok=False, data={}, error="not_object")
    return ReadResult(ok=True, data=obj)


def atomic_write_bytes(path: str, data: bytes, *, suffix: str = ".tmp") -> None:
    """
    Write to a sibling temp file, then os.replace() it over `path`.
    Readers never see a half-written file.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_", suffix=suffix, dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            try:
                os.remove(tmp)
            except OSError:
                pass


def _prune(backups_dir: str, base: str, keep: int) -> None:
    mine = [os.path.join(backups_dir, n) for n in os.listdir(backups_dir) if n.startswith(base + ".")]
    mine.sort(key=os.path.getmtime, reverse=True)
    for stale in mine[max(0, keep) :]:
        try:
            os.remove(stale)
        except OSError:
            pass


def backup_file(path: str, backups_dir: str, *, reason: str, max_backups: int = 10) -> Optional[str]:
    """Copy `path` to backups/<name>.<stamp>.<reason>.json; keeps the newest `max_backups` per file."""
    if not os.path.exists(path):
        return None
    os.makedirs(backups_dir, exist_ok=True)
    base = os.path.basename(path)
    dest = os.path.join(backups_dir, f"{base}.{_stamp()}.{reason}.json")
    try:
        shutil.copy2(path, dest)
    except OSError:
        return None
    _prune(backups_dir, base, max_backups)
    return dest


def atomic_write_json(path: str, data: Dict[str, Any], backups_dir: str, *, max_backups: int = 10) -> None:
    backup_file(path, backups_dir, reason="prewrite", max_backups=max_backups)
    text = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True) + "\n"
    atomic_write_bytes(path, text.encode("utf-8"), suffix=".json")


def recover_from_corrupt(path: str, backups_dir: str, last_known_good_dir: str, *, max_backups: int = 10) -> Tuple[Dict[str, Any], bool]:
    """
    Move a corrupt file aside and restore last_known_good/<name> if present.
    Returns (data, recovered).
    """
    os.makedirs(backups_dir, exist_ok=True)
    base = os.path.basename(path)
    if os.path.exists(path):
        try:
            shutil.move(path, os.path.join(backups_dir, f"{base}.{_stamp()}.corrupt.json"))
        except OSError:
            pass
    good = read_json_file(os.path.join(last_known_good_dir, base))
    if not good.ok:
        return {}, False
    atomic_write_json(path, good.data, backups_dir, max_backups=max_backups)
    return good.data, True


def snapshot_last_known_good(config_dir: str, last_known_good_dir: str, names: Iterable[str]) -> None:
    """Copy the named config files that currently exist into last_known_good/."""
    os.makedirs(last_known_good_dir, exist_ok=True)
    for name in names:
        src = os.path.join(config_dir, name)
        if not os.path.isfile(src):
            continue
        try:
            shutil.copy2(src, os.path.join(last_known_good_dir, name))
        except OSError:
            pass
