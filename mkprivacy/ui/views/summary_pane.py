from __future__ import annotations

from tkinter import ttk
from tkinter.scrolledtext import ScrolledText

from mkprivacy.core.store import ManifestStore
from mkprivacy.core.summarizer import summary_lines


class SummaryPane(ttk.Frame):
    def __init__(self, master, *, store: ManifestStore, on_go_to):  # noqa: ANN001
        super().__init__(master, padding=(12, 10))
        self.store = store
        self._on_go_to = on_go_to

        ttk.Label(self, text="Summary", font=("TkDefaultFont", 16, "bold")).grid(row=0, column=0, sticky="w", pady=(0, 8))

        self._warnings = ttk.Frame(self)
        self._warnings.grid(row=1, column=0, sticky="ew")

        self._text = ScrolledText(self, height=20, wrap="word")
        self._text.grid(row=2, column=0, sticky="nsew", pady=(8, 0))
        self._text.configure(state="disabled")

        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

    def refresh(self) -> None:
        for child in self._warnings.winfo_children():
            child.destroy()
        warnings = self.store.warnings
        for row, (message, pane) in enumerate(warnings.messages()):
            ttk.Label(self._warnings, text=f"⚠ {message}", foreground="#b26a00").grid(row=row, column=0, sticky="w", pady=(0, 4))
            ttk.Button(self._warnings, text="Go to…", command=lambda p=pane: self._on_go_to(p)).grid(row=row, column=1, sticky="e", padx=(8, 0))
        self._warnings.columnconfigure(0, weight=1)

        # Warnings are rendered above with navigation buttons; skip them in the text body.
        lines = summary_lines(self.store.manifest, warnings)
        body = [ln for ln in lines if not ln.startswith("Warning: ")]
        while body and not body[0]:
            body.pop(0)
        self._text.configure(state="normal")
        self._text.delete("1.0", "end")
        self._text.insert("end", "\n".join(body))
        self._text.configure(state="disabled")

    def text(self) -> str:
        return self._text.get("1.0", "end").strip()
