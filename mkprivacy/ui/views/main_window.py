from __future__ import annotations

import os
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Dict

from mkprivacy.core.errors import MkPrivacyError
from mkprivacy.core.validator import Pane
from mkprivacy.ui.ui_events import UiController
from mkprivacy.ui.ui_models import UiSettings
from mkprivacy.ui.views.api_reasons_pane import RequiredReasonsApisPane
from mkprivacy.ui.views.data_types_pane import CollectedDataTypesPane
from mkprivacy.ui.views.domains_pane import TrackingDomainsPane
from mkprivacy.ui.views.export_pane import ExportPane
from mkprivacy.ui.views.summary_pane import SummaryPane
from mkprivacy.ui.views.tracking_pane import PrivacyTrackingPane
from mkprivacy.ui.widgets.indicator import StatusIndicator

SIDEBAR: tuple[tuple[Pane, str], ...] = (
    (Pane.SUMMARY, "Summary"),
    (Pane.PRIVACY_TRACKING, "Privacy Tracking"),
    (Pane.TRACKING_DOMAINS, "Tracking Domains"),
    (Pane.COLLECTED_DATA_TYPES, "Collected Data Types"),
    (Pane.REQUIRED_REASONS_APIS, "Required Reasons APIs"),
    (Pane.EXPORT, "Export"),
)

FILE_TYPES = [("Privacy manifest", "*.xcprivacy"), ("Property list", "*.plist"), ("All files", "*")]


class MainWindow(ttk.Frame):
    def __init__(self, master: tk.Tk, *, controller: UiController, config: UiSettings, logger):  # noqa: ANN001
        super().__init__(master)
        self.master = master
        self.controller = controller
        self.store = controller.store
        self.cfg = config
        self.logger = logger
        self.current: Pane = Pane.SUMMARY

        self._build()
        self._unsubscribe = self.store.subscribe(lambda _store: self.refresh())
        self.show_pane(Pane.SUMMARY)

    def _build(self) -> None:
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)
        self._build_menu()

        self._banner = ttk.Label(self, text="", foreground="#c62828")
        self._banner.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 0))

        sidebar = ttk.Frame(self, padding=(8, 6))
        sidebar.grid(row=1, column=0, sticky="ns")
        self._sidebar = tk.Listbox(sidebar, height=len(SIDEBAR), width=24, exportselection=False, activestyle="none")
        for _pane, label in SIDEBAR:
            self._sidebar.insert("end", label)
        self._sidebar.grid(row=0, column=0, sticky="nsew")
        self._sidebar.bind("<<ListboxSelect>>", lambda _e: self._on_sidebar_select())
        self.warnings_ind = StatusIndicator(sidebar, label="Warnings")
        self.warnings_ind.grid(row=1, column=0, sticky="ew", pady=(10, 0))
        sidebar.rowconfigure(0, weight=1)

        content = ttk.Frame(self)
        content.grid(row=1, column=1, sticky="nsew")
        content.rowconfigure(0, weight=1)
        content.columnconfigure(0, weight=1)

        self.panes: Dict[Pane, ttk.Frame] = {
            Pane.SUMMARY: SummaryPane(content, store=self.store, on_go_to=self.show_pane),
            Pane.PRIVACY_TRACKING: PrivacyTrackingPane(content, store=self.store, on_error=self._ui_error),
            Pane.TRACKING_DOMAINS: TrackingDomainsPane(content, store=self.store, on_error=self._ui_error),
            Pane.COLLECTED_DATA_TYPES: CollectedDataTypesPane(content, store=self.store, on_error=self._ui_error),
            Pane.REQUIRED_REASONS_APIS: RequiredReasonsApisPane(content, store=self.store, on_error=self._ui_error),
            Pane.EXPORT: ExportPane(content, controller=self.controller, on_copy=self._on_copy, on_save=self._on_save_as),
        }
        for pane in self.panes.values():
            pane.grid(row=0, column=0, sticky="nsew")
            pane.grid_remove()

        self.columnconfigure(1, weight=1)
        self.rowconfigure(1, weight=1)

    def _build_menu(self) -> None:
        menubar = tk.Menu(self.master)
        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="New", command=self._on_new)
        file_menu.add_command(label="Open…", command=self._on_open)
        file_menu.add_command(label="Save As…", command=self._on_save_as)
        file_menu.add_separator()
        file_menu.add_command(label="Copy to Clipboard", command=self._on_copy)
        menubar.add_cascade(label="File", menu=file_menu)

        window_menu = tk.Menu(menubar, tearoff=False)
        self._on_top = tk.BooleanVar(master=self, value=bool(self.cfg.always_on_top))
        window_menu.add_checkbutton(label="Always on Top", variable=self._on_top, command=self._apply_on_top)
        menubar.add_cascade(label="Window", menu=window_menu)

        self.master.configure(menu=menubar)
        self._apply_on_top()

    # ---------- navigation ----------
    def show_pane(self, pane: Pane) -> None:
        self.panes[self.current].grid_remove()
        self.current = pane
        self.panes[pane].grid()
        index = [p for p, _ in SIDEBAR].index(pane)
        self._sidebar.selection_clear(0, "end")
        self._sidebar.selection_set(index)
        self.refresh()

    def _on_sidebar_select(self) -> None:
        sel = self._sidebar.curselection()
        if sel:
            self.show_pane(SIDEBAR[int(sel[0])][0])

    def refresh(self) -> None:
        try:
            self.panes[self.current].refresh()
            self.warnings_ind.show_warnings(self.store.warnings)
            name = os.path.basename(self.controller.current_path) if self.controller.current_path else "Untitled"
            self.master.title(f"mkprivacy - {name}")
        except Exception as e:  # noqa: BLE001
            self._ui_error(e)

    # ---------- actions ----------
    def _drop_focus(self) -> None:
        # Entry widgets must not hold focus while state is replaced.
        try:
            self._sidebar.focus_set()
        except tk.TclError:
            pass

    def _on_new(self) -> None:
        self._drop_focus()
        self.controller.new_document(on_done=lambda: self.show_pane(Pane.PRIVACY_TRACKING))

    def _on_open(self) -> None:
        from tkinter.filedialog import askopenfilename

        path = askopenfilename(title="Open privacy manifest", filetypes=FILE_TYPES)
        if not path:
            return
        self._drop_focus()
        try:
            self.controller.open_file(path, on_done=lambda: self.show_pane(Pane.SUMMARY))
        except MkPrivacyError as e:
            messagebox.showerror("Unable to open", e.user_message)
        except Exception as e:  # noqa: BLE001
            self._ui_error(e)

    def _on_save_as(self) -> None:
        from tkinter.filedialog import asksaveasfilename

        initial = os.path.basename(self.controller.current_path) if self.controller.current_path else self.cfg.export_filename
        path = asksaveasfilename(title="Save privacy manifest", initialfile=initial, defaultextension=".xcprivacy", filetypes=FILE_TYPES)
        if not path:
            return
        try:
            self.controller.save_as(path)
            self.refresh()
        except MkPrivacyError as e:
            messagebox.showerror("Unable to save", e.user_message)
        except Exception as e:  # noqa: BLE001
            self._ui_error(e)

    def _on_copy(self) -> None:
        try:
            self.controller.copy_to_clipboard()
            self._set_banner("")
        except MkPrivacyError as e:
            self._set_banner(e.user_message)

    def _apply_on_top(self) -> None:
        try:
            self.master.attributes("-topmost", bool(self._on_top.get()))
        except tk.TclError:
            pass

    def _set_banner(self, text: str) -> None:
        self._banner.configure(text=text or "")

    def _ui_error(self, exc: BaseException) -> None:
        if isinstance(exc, MkPrivacyError):
            messagebox.showerror("Error", exc.user_message)
            return
        if self.logger is not None:
            self.logger.exception("UI callback error: %s", exc)
        messagebox.showerror("UI error", "UI error - see logs.")

    def destroy(self) -> None:
        self._unsubscribe()
        super().destroy()
