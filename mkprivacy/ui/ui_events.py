from __future__ import annotations

import logging
from typing import Callable, Optional

from mkprivacy.core.error_reporter import ErrorReporter, normalize_exception
from mkprivacy.core.errors import ClipboardError, MkPrivacyError
from mkprivacy.core.manifest.models import PrivacyManifest
from mkprivacy.core.plist_io import load_manifest, manifest_as_plist_text, save_manifest
from mkprivacy.core.store import ManifestStore
from mkprivacy.ui.ui_models import Scheduler, run_now

log = logging.getLogger("mkprivacy.ui")


class UiController:
    """
    Thin controller for the UI: file, clipboard and bulk-replace actions over
    a ManifestStore. Designed to be unit-testable without Tk.
    """

    def __init__(
        self,
        store: ManifestStore,
        *,
        scheduler: Scheduler = run_now,
        settle_delay_ms: int = 200,
        clipboard: Optional[Callable[[str], None]] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.settle_delay_ms = max(0, int(settle_delay_ms))
        self.clipboard = clipboard
        self.error_reporter = error_reporter
        self.current_path: Optional[str] = None

    def new_document(self, on_done: Optional[Callable[[], None]] = None) -> None:
        def apply() -> None:
            self.store.clear()
            self.current_path = None
            if on_done is not None:
                on_done()

        self.scheduler(self.settle_delay_ms, apply)

    def import_manifest(self, manifest: PrivacyManifest, on_done: Optional[Callable[[], None]] = None) -> None:
        def apply() -> None:
            self.store.import_manifest(manifest)
            if on_done is not None:
                on_done()

        self.scheduler(self.settle_delay_ms, apply)

    def open_file(self, path: str, on_done: Optional[Callable[[], None]] = None) -> None:
        """
        Parse now so decode errors reach the caller; state is replaced after
        the settle delay.
        """
        try:
            manifest = load_manifest(path)
        except MkPrivacyError as e:
            self._report(e, subsystem="import", path=path)
            raise

        def done() -> None:
            self.current_path = path
            if on_done is not None:
                on_done()

        self.import_manifest(manifest, on_done=done)

    def save_as(self, path: str) -> None:
        try:
            save_manifest(self.store.manifest, path, sort_keys=self.store.sort_keys)
        except (OSError, TypeError, ValueError, OverflowError) as e:
            raise self._report(e, subsystem="export", path=path) from e
        self.current_path = path

    def plist_text(self) -> str:
        """Preview text; unlike export it is not recorded in the session log."""
        return manifest_as_plist_text(self.store.manifest, sort_keys=self.store.sort_keys)

    def copy_to_clipboard(self) -> str:
        text = self.store.export_text()
        if self.clipboard is None:
            raise ClipboardError("No clipboard is available.")
        try:
            self.clipboard(text)
        except Exception as e:  # noqa: BLE001 - Tk raises TclError
            raise self._report(e, subsystem="clipboard") from e
        log.info("Copied privacy manifest to clipboard (%d chars)", len(text))
        return text

    def _report(self, exc: BaseException, *, subsystem: str, **ctx) -> MkPrivacyError:  # noqa: ANN003
        if self.error_reporter is not None:
            return self.error_reporter.report_exception(exc, subsystem=subsystem, context=ctx)
        return normalize_exception(exc, subsystem=subsystem, context=ctx)
