from __future__ import annotations

import json
import sys

from mkprivacy.core.config import ConfigFsPaths, ConfigManager


def main() -> None:
    root = sys.argv[1] if len(sys.argv) > 1 else "."
    cm = ConfigManager(fs=ConfigFsPaths(root), logger=None, read_only=True)
    cfg = cm.load_all()
    print(json.dumps(cfg.model_dump(), indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
