from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from mkprivacy.core.store import ManifestStore


class PrivacyTrackingPane(ttk.Frame):
    def __init__(self, master, *, store: ManifestStore, on_error):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.store = store
        self._on_error = on_error

        ttk.Label(
            self,
            text="Does the app or third-party SDK use data for tracking as defined under the App Tracking Transparency framework?",
            wraplength=640,
            justify="left",
        ).grid(row=0, column=0, sticky="w")

        self._var = tk.BooleanVar(master=self, value=False)
        self._toggle = ttk.Checkbutton(self, text="Yes, the app or third-party SDK uses data for tracking", variable=self._var, command=self._on_toggle)
        self._toggle.grid(row=1, column=0, sticky="w", pady=12)

        ttk.Label(
            self,
            text="For more information, see User Privacy and Data Use (developer.apple.com/app-store/user-privacy-and-data-use).",
            foreground="#666666",
            wraplength=640,
            justify="left",
        ).grid(row=2, column=0, sticky="w")

        self.columnconfigure(0, weight=1)

    def _on_toggle(self) -> None:
        try:
            self.store.set_tracking(bool(self._var.get()))
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def refresh(self) -> None:
        self._var.set(self.store.tracking)
