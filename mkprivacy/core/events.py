from __future__ import annotations

import json
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EventLogger:
    """
    Append-only JSONL log of edit-session events (imports, mutations, exports).
    """

    path: str = os.path.join("logs", "session.jsonl")
    _lock: threading.Lock = threading.Lock()

    def log(self, session_id: str, event_type: str, details: Optional[Dict[str, Any]] = None) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        payload = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "session_id": session_id,
            "event": event_type,
            "details": details or {},
        }
        line = json.dumps(payload, ensure_ascii=False)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def tail(self, n: int = 50) -> list[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        out = []
        with open(self.path, "r", encoding="utf-8") as f:
            lines = f.readlines()
        for line in lines[-max(1, int(n)) :]:
            try:
                out.append(json.loads(line))
            except json.JSONDecodeError:
                continue
        return out
