from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

# (delay_ms, callback) -> handle; Tk's `after` fits this shape.
Scheduler = Callable[[int, Callable[[], None]], Any]


@dataclass(frozen=True)
class UiSettings:
    theme: str = "light"
    confirm_on_exit: bool = True
    settle_delay_ms: int = 200
    always_on_top: bool = False
    geometry: str = "1100x760"
    export_filename: str = "PrivacyInfo.xcprivacy"


def run_now(_delay_ms: int, callback: Callable[[], None]) -> None:
    callback()
