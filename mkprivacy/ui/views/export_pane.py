from __future__ import annotations

from tkinter import ttk
from tkinter.scrolledtext import ScrolledText

from mkprivacy.ui.ui_events import UiController


class ExportPane(ttk.Frame):
    def __init__(self, master, *, controller: UiController, on_copy, on_save):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.controller = controller

        header = ttk.Frame(self)
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Property list preview").grid(row=0, column=0, sticky="w")
        ttk.Button(header, text="Copy to Clipboard", command=on_copy).grid(row=0, column=1, padx=(6, 0))
        ttk.Button(header, text="Save As…", command=on_save).grid(row=0, column=2, padx=(6, 0))
        header.columnconfigure(0, weight=1)

        self._text = ScrolledText(self, height=24, wrap="none", font=("TkFixedFont", 10))
        self._text.grid(row=1, column=0, sticky="nsew", pady=(6, 0))
        self._text.configure(state="disabled")

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

    def refresh(self) -> None:
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("end", self.controller.plist_text())
        self._text.configure(state="disabled")

    def text(self) -> str:
        return self._text.get("1.0", "end").rstrip("\n")
