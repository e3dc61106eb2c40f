from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from mkprivacy.core.errors import MkPrivacyError
from mkprivacy.core.store import ManifestStore
from mkprivacy.ui.widgets.modal_dialogs import TextEntryDialog


class TrackingDomainsPane(ttk.Frame):
    def __init__(self, master, *, store: ManifestStore, on_error):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.store = store
        self._on_error = on_error

        ttk.Label(
            self,
            text="Internet domains the app or third-party SDK connects to that engage in tracking.",
            wraplength=640,
            justify="left",
        ).grid(row=0, column=0, columnspan=4, sticky="w", pady=(0, 8))

        self._list = tk.Listbox(self, height=12, exportselection=False)
        self._list.grid(row=1, column=0, columnspan=3, sticky="nsew")
        self._list.bind("<Double-Button-1>", lambda _e: self._edit_selected())
        y = ttk.Scrollbar(self, orient="vertical", command=self._list.yview)
        self._list.configure(yscrollcommand=y.set)
        y.grid(row=1, column=3, sticky="ns")

        ttk.Button(self, text="Add…", command=self._add).grid(row=2, column=0, sticky="w", pady=(6, 0))
        ttk.Button(self, text="Edit…", command=self._edit_selected).grid(row=2, column=1, sticky="w", pady=(6, 0))
        ttk.Button(self, text="Remove", command=self._remove_selected).grid(row=2, column=2, sticky="w", pady=(6, 0))

        self._status = ttk.Label(self, text="", foreground="#c62828")
        self._status.grid(row=3, column=0, columnspan=4, sticky="w", pady=(4, 0))

        self.columnconfigure(2, weight=1)
        self.rowconfigure(1, weight=1)

    def _selected_index(self) -> int | None:
        sel = self._list.curselection()
        if not sel:
            return None
        return int(sel[0])

    def _ask(self, *, title: str, initial: str = "") -> str | None:
        dlg = TextEntryDialog(self.winfo_toplevel(), title=title, prompt="Domain:", initial=initial)
        self.wait_window(dlg)
        return dlg.result()

    def _add(self) -> None:
        value = self._ask(title="Add tracking domain")
        if value is None:
            return
        self._apply(lambda: self.store.add_tracking_domain(value))

    def _edit_selected(self) -> None:
        idx = self._selected_index()
        if idx is None:
            return
        value = self._ask(title="Edit tracking domain", initial=self.store.tracking_domains[idx])
        if value is None:
            return
        self._apply(lambda: self.store.update_tracking_domain(idx, value))

    def _remove_selected(self) -> None:
        idx = self._selected_index()
        if idx is None:
            return
        self._apply(lambda: self.store.remove_tracking_domain(idx))

    def _apply(self, action) -> None:  # noqa: ANN001
        try:
            action()
            self._status.configure(text="")
        except MkPrivacyError as e:
            self._status.configure(text=e.user_message)
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def refresh(self) -> None:
        selected = self._selected_index()
        self._list.delete(0, "end")
        for domain in self.store.tracking_domains:
            self._list.insert("end", domain)
        if selected is not None and selected < self._list.size():
            self._list.selection_set(selected)

    def items(self) -> list[str]:
        return list(self._list.get(0, "end"))
