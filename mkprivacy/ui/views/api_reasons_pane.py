from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Dict, List, Optional

from mkprivacy.core.manifest.catalog import REQUIRED_REASON_APIS, required_reason_api
from mkprivacy.core.store import ManifestStore


class RequiredReasonsApisPane(ttk.Frame):
    def __init__(self, master, *, store: ManifestStore, on_error):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.store = store
        self._on_error = on_error
        self._keys: List[str] = []
        self._selected: Optional[str] = None
        self._reason_vars: Dict[str, tk.BooleanVar] = {}

        ttk.Label(
            self,
            text="Declare the approved reasons for each category of required-reason API the app or SDK uses.",
            wraplength=640,
            justify="left",
        ).grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 8))

        self._list = tk.Listbox(self, height=10, width=30, exportselection=False)
        self._list.grid(row=1, column=0, sticky="nsw")
        self._list.bind("<<ListboxSelect>>", lambda _e: self._on_select())

        self._detail = ttk.Frame(self, padding=(12, 0))
        self._detail.grid(row=1, column=1, sticky="nsew")

        self.columnconfigure(1, weight=1)
        self.rowconfigure(1, weight=1)

    def _on_select(self) -> None:
        sel = self._list.curselection()
        self._selected = self._keys[int(sel[0])] if sel else None
        self._build_detail()

    def _build_detail(self) -> None:
        for child in self._detail.winfo_children():
            child.destroy()
        self._reason_vars = {}
        key = self._selected
        if key is None:
            ttk.Label(self._detail, text="Select an API category").grid(row=0, column=0, sticky="w")
            return

        declared = self.store.api_reasons.get(key, ())
        api = required_reason_api(key)
        if api is None:
            ttk.Label(self._detail, text=key, font=("TkDefaultFont", 12, "bold")).grid(row=0, column=0, sticky="w", pady=(0, 8))
            ttk.Label(self._detail, text="Unrecognized API category. Reasons: " + (", ".join(declared) or "none")).grid(row=1, column=0, sticky="w")
            ttk.Button(self._detail, text="Remove", command=lambda: self._remove(key)).grid(row=2, column=0, sticky="w", pady=(8, 0))
            return

        ttk.Label(self._detail, text=f"{api.icon} {api.name}", font=("TkDefaultFont", 12, "bold")).grid(row=0, column=0, sticky="w", pady=(0, 8))
        for i, reason in enumerate(api.reasons):
            var = tk.BooleanVar(master=self, value=reason.code in declared)
            ttk.Checkbutton(
                self._detail,
                text=f"{reason.code}  {reason.summary}",
                variable=var,
                command=lambda code=reason.code: self._on_toggle(key, code),
            ).grid(row=1 + i, column=0, sticky="w", pady=(0, 2))
            self._reason_vars[reason.code] = var
        extra = [r for r in declared if api.reason(r) is None]
        if extra:
            ttk.Label(self._detail, text="Other declared reasons: " + ", ".join(extra), foreground="#666666").grid(
                row=1 + len(api.reasons), column=0, sticky="w", pady=(6, 0)
            )

    def _on_toggle(self, key: str, code: str) -> None:
        try:
            self.store.toggle_api_reason(key, code, bool(self._reason_vars[code].get()))
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def _remove(self, key: str) -> None:
        try:
            self.store.remove_api_type(key)
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def refresh(self) -> None:
        declared = self.store.api_reasons
        known = sorted(REQUIRED_REASON_APIS.values(), key=lambda a: a.name)
        self._keys = [a.key for a in known] + [k for k in declared if k not in REQUIRED_REASON_APIS]

        self._list.delete(0, "end")
        for key in self._keys:
            api = required_reason_api(key)
            label = f"{api.icon} {api.name}" if api else key
            count = len(declared.get(key, ()))
            self._list.insert("end", f"{label} ({count})" if count else label)

        if self._selected not in self._keys:
            self._selected = None
        if self._selected is not None:
            self._list.selection_set(self._keys.index(self._selected))
        self._build_detail()

    def select(self, key: str) -> None:
        if key in self._keys:
            self._list.selection_clear(0, "end")
            self._list.selection_set(self._keys.index(key))
            self._selected = key
            self._build_detail()
