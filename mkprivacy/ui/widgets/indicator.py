from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Tuple

from mkprivacy.core.validator import ManifestWarnings

LEVEL_COLORS = {
    "ok": "#2e7d32",
    "warn": "#f9a825",
    "error": "#c62828",
    "neutral": "#999999",
}


def warnings_status(warnings: ManifestWarnings) -> Tuple[str, str, str]:
    """
    (value, level, detail) for the sidebar indicator.
    detail lists each active warning on its own line.
    """
    messages = [m for m, _pane in warnings.messages()]
    if not messages:
        return "none", "ok", ""
    return str(len(messages)), "warn", "\n".join(f"• {m}" for m in messages)


class StatusIndicator(ttk.Frame):
    """
    Colored dot + text; hovering shows the detail text, if any.
    Color is supplemental; text carries meaning.
    """

    def __init__(self, master, *, label: str, width: int = 10):  # noqa: ANN001
        super().__init__(master)
        self._detail = ""
        self._tip: Optional[tk.Toplevel] = None

        ttk.Label(self, text=label).grid(row=0, column=0, padx=(0, 6), sticky="w")
        self._canvas = tk.Canvas(self, width=width, height=width, highlightthickness=0)
        self._dot = self._canvas.create_oval(1, 1, width - 1, width - 1, fill=LEVEL_COLORS["neutral"], outline="#666666")
        self._canvas.grid(row=0, column=1, padx=(0, 6), sticky="w")
        self._value = ttk.Label(self, text="")
        self._value.grid(row=0, column=2, sticky="w")
        self.columnconfigure(2, weight=1)

        self.bind("<Enter>", lambda _e: self._show_tip())
        self.bind("<Leave>", lambda _e: self._hide_tip())

    def set(self, *, value: str, level: str, detail: str = "") -> None:
        """
        level: ok|warn|error|neutral
        """
        self._canvas.itemconfigure(self._dot, fill=LEVEL_COLORS.get(level, LEVEL_COLORS["neutral"]))
        self._value.configure(text=value)
        self._detail = detail
        if self._tip is not None:
            self._hide_tip()
            self._show_tip()

    def show_warnings(self, warnings: ManifestWarnings) -> None:
        value, level, detail = warnings_status(warnings)
        self.set(value=value, level=level, detail=detail)

    def value(self) -> str:
        return str(self._value.cget("text"))

    def detail(self) -> str:
        return self._detail

    def _show_tip(self) -> None:
        if not self._detail or self._tip is not None:
            return
        tip = tk.Toplevel(self)
        tip.wm_overrideredirect(True)
        tip.wm_geometry(f"+{self.winfo_rootx()}+{self.winfo_rooty() + self.winfo_height() + 4}")
        ttk.Label(tip, text=self._detail, justify="left", padding=(6, 4), relief="solid", wraplength=360).grid(row=0, column=0)
        self._tip = tip

    def _hide_tip(self) -> None:
        if self._tip is not None:
            self._tip.destroy()
            self._tip = None
