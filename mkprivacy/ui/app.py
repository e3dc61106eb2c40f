from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

from mkprivacy.core.error_reporter import ErrorReporter
from mkprivacy.core.errors import MkPrivacyError
from mkprivacy.core.store import ManifestStore
from mkprivacy.ui.ui_events import UiController
from mkprivacy.ui.ui_models import UiSettings
from mkprivacy.ui.views.main_window import MainWindow


def ui_settings_from(config) -> UiSettings:  # noqa: ANN001
    """
    Convert the pydantic app config to the UI-side dataclass.
    """
    ui = getattr(config, "ui", None)
    export = getattr(config, "export", None)
    if ui is None:
        return UiSettings()
    return UiSettings(
        theme=str(ui.theme),
        confirm_on_exit=bool(ui.confirm_on_exit),
        settle_delay_ms=int(ui.settle_delay_ms),
        always_on_top=bool(ui.always_on_top),
        geometry=str(ui.geometry),
        export_filename=str(getattr(export, "default_filename", "PrivacyInfo.xcprivacy")),
    )


def run_desktop_ui(*, store: ManifestStore, config, logger, error_reporter: Optional[ErrorReporter] = None, path: Optional[str] = None) -> None:  # noqa: ANN001
    """
    Start the Tkinter editor over a ManifestStore.
    """
    cfg = ui_settings_from(config)

    root = tk.Tk()
    try:
        style = ttk.Style(root)
        if cfg.theme == "dark":
            try:
                style.theme_use("clam")
            except tk.TclError:
                pass

        def copy_to_clipboard(text: str) -> None:
            root.clipboard_clear()
            root.clipboard_append(text)
            root.update()

        controller = UiController(
            store,
            scheduler=root.after,
            settle_delay_ms=cfg.settle_delay_ms,
            clipboard=copy_to_clipboard,
            error_reporter=error_reporter,
        )
        app = MainWindow(root, controller=controller, config=cfg, logger=logger)

        if path:
            try:
                controller.open_file(path, on_done=app.refresh)
            except MkPrivacyError as e:
                messagebox.showerror("Unable to open", e.user_message)

        def on_close() -> None:
            if cfg.confirm_on_exit and not messagebox.askokcancel("Quit", "Quit mkprivacy? Unsaved changes will be lost."):
                return
            root.destroy()

        root.protocol("WM_DELETE_WINDOW", on_close)
        root.geometry(cfg.geometry)
        root.mainloop()
    finally:
        try:
            root.destroy()
        except tk.TclError:
            pass
