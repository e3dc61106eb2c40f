from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional

from mkprivacy.core.manifest.catalog import (
    CollectionPurpose,
    categories_by_display_name,
    data_type_name,
    is_known_data_type,
)
from mkprivacy.core.store import ManifestStore

UNRECOGNIZED = "unrecognized"


def _mark(flag: bool) -> str:
    return "✓" if flag else ""


class CollectedDataTypesPane(ttk.Frame):
    """
    Catalog of data types grouped by category, with an editor for the
    selected type's flags and purposes.
    """

    def __init__(self, master, *, store: ManifestStore, on_error):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.store = store
        self._on_error = on_error
        self._selected_key: Optional[str] = None

        self._tree = ttk.Treeview(self, columns=("collected", "linked", "tracking", "purposes"), show="tree headings", height=18)
        self._tree.heading("#0", text="Data type")
        self._tree.heading("collected", text="Collected")
        self._tree.heading("linked", text="Linked")
        self._tree.heading("tracking", text="Tracking")
        self._tree.heading("purposes", text="Purposes")
        self._tree.column("#0", width=240, anchor="w")
        for col in ("collected", "linked", "tracking"):
            self._tree.column(col, width=70, anchor="center")
        self._tree.column("purposes", width=70, anchor="e")
        self._tree.grid(row=0, column=0, sticky="nsew")
        self._tree.bind("<<TreeviewSelect>>", lambda _e: self._on_select())

        y = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=y.set)
        y.grid(row=0, column=1, sticky="ns")

        for category in categories_by_display_name():
            parent = f"cat:{category.value}"
            self._tree.insert("", "end", iid=parent, text=f"{category.icon} {category.display_name}", open=False)
            for key in category.data_types:
                self._tree.insert(parent, "end", iid=f"{category.value}|{key}", text=data_type_name(key))

        self._build_detail()

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

    def _build_detail(self) -> None:
        detail = ttk.Frame(self, padding=(12, 0))
        detail.grid(row=0, column=2, sticky="nsew")

        self._title = ttk.Label(detail, text="Select a data type", font=("TkDefaultFont", 12, "bold"))
        self._title.grid(row=0, column=0, sticky="w", pady=(0, 8))

        self._collected = tk.BooleanVar(master=self, value=False)
        self._linked = tk.BooleanVar(master=self, value=False)
        self._tracking = tk.BooleanVar(master=self, value=False)

        self._collected_btn = ttk.Checkbutton(detail, text="Collected by the app", variable=self._collected, command=self._on_collected)
        self._linked_btn = ttk.Checkbutton(detail, text="Linked to the user's identity", variable=self._linked, command=self._on_linked)
        self._tracking_btn = ttk.Checkbutton(detail, text="Used for tracking", variable=self._tracking, command=self._on_tracking)
        self._collected_btn.grid(row=1, column=0, sticky="w")
        self._linked_btn.grid(row=2, column=0, sticky="w")
        self._tracking_btn.grid(row=3, column=0, sticky="w")

        ttk.Label(detail, text="Purposes").grid(row=4, column=0, sticky="w", pady=(10, 2))
        self._purpose_vars: Dict[str, tk.BooleanVar] = {}
        self._purpose_btns: Dict[str, ttk.Checkbutton] = {}
        for i, purpose in enumerate(CollectionPurpose):
            var = tk.BooleanVar(master=self, value=False)
            btn = ttk.Checkbutton(detail, text=purpose.display_name, variable=var, command=lambda p=purpose: self._on_purpose(p))
            btn.grid(row=5 + i, column=0, sticky="w")
            self._purpose_vars[purpose.value] = var
            self._purpose_btns[purpose.value] = btn

        self._hint = ttk.Label(detail, text="", foreground="#b26a00", wraplength=260, justify="left")
        self._hint.grid(row=5 + len(CollectionPurpose), column=0, sticky="w", pady=(10, 0))

    # ---------- events ----------
    def _on_select(self) -> None:
        sel = self._tree.selection()
        if not sel or "|" not in str(sel[0]):
            self._selected_key = None
        else:
            self._selected_key = str(sel[0]).split("|", 1)[1]
        self._refresh_detail()

    def _on_collected(self) -> None:
        key = self._selected_key
        if key is None:
            return
        try:
            if self._collected.get():
                self.store.add_data_type(key)
            elif key in self.store.data_types:
                self.store.remove_data_type(key)
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def _on_linked(self) -> None:
        if self._selected_key is None:
            return
        try:
            self.store.set_data_type_linked(self._selected_key, bool(self._linked.get()))
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def _on_tracking(self) -> None:
        if self._selected_key is None:
            return
        try:
            self.store.set_data_type_tracking(self._selected_key, bool(self._tracking.get()))
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    def _on_purpose(self, purpose: CollectionPurpose) -> None:
        if self._selected_key is None:
            return
        try:
            self.store.set_purpose(self._selected_key, purpose, bool(self._purpose_vars[purpose.value].get()))
        except Exception as e:  # noqa: BLE001
            self._on_error(e)

    # ---------- rendering ----------
    def refresh(self) -> None:
        data_types = self.store.data_types
        for category in categories_by_display_name():
            count = 0
            for key in category.data_types:
                dt = data_types.get(key)
                iid = f"{category.value}|{key}"
                if dt is None:
                    self._tree.item(iid, values=("", "", "", ""))
                    continue
                count += 1
                self._tree.item(iid, values=(_mark(True), _mark(dt.is_linked), _mark(dt.is_tracking), str(len(dt.purposes))))
            self._tree.item(f"cat:{category.value}", values=(str(count) if count else "", "", "", ""))

        unknown = [k for k in data_types if not is_known_data_type(k)]
        if self._tree.exists(UNRECOGNIZED):
            self._tree.delete(UNRECOGNIZED)
        if unknown:
            self._tree.insert("", "end", iid=UNRECOGNIZED, text="Unrecognized", open=True, values=(str(len(unknown)), "", "", ""))
            for key in unknown:
                dt = data_types[key]
                self._tree.insert(
                    UNRECOGNIZED,
                    "end",
                    iid=f"{UNRECOGNIZED}|{key}",
                    text=key,
                    values=(_mark(True), _mark(dt.is_linked), _mark(dt.is_tracking), str(len(dt.purposes))),
                )
        self._refresh_detail()

    def _refresh_detail(self) -> None:
        key = self._selected_key
        dt = self.store.data_types.get(key) if key else None
        collected = dt is not None

        self._title.configure(text=data_type_name(key) if key else "Select a data type")
        self._collected.set(collected)
        self._linked.set(bool(dt and dt.is_linked))
        self._tracking.set(bool(dt and dt.is_tracking))
        purposes = set(dt.purposes) if dt else set()
        for value, var in self._purpose_vars.items():
            var.set(value in purposes)

        self._collected_btn.configure(state=("normal" if key else "disabled"))
        edit_state = "normal" if collected else "disabled"
        for btn in (self._linked_btn, self._tracking_btn, *self._purpose_btns.values()):
            btn.configure(state=edit_state)

        self._hint.configure(text=("Select at least one purpose." if collected and not purposes else ""))

    def select(self, key: str) -> None:
        for iid in self._iids_for(key):
            self._tree.see(iid)
            self._tree.selection_set(iid)
            self._selected_key = key
            self._refresh_detail()
            return

    def _iids_for(self, key: str) -> list[str]:
        out = []
        for parent in self._tree.get_children(""):
            for iid in self._tree.get_children(parent):
                if str(iid).split("|", 1)[-1] == key:
                    out.append(str(iid))
        return out

    def row_values(self, key: str) -> tuple:
        iids = self._iids_for(key)
        if not iids:
            return ()
        return tuple(self._tree.item(iids[0], "values"))
