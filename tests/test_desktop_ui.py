from __future__ import annotations

import pytest

from mkprivacy.core.error_reporter import ErrorReporter
from mkprivacy.core.errors import ClipboardError, ManifestDecodeError, ManifestEncodeError
from mkprivacy.core.store import ManifestStore
from mkprivacy.ui.ui_events import UiController

from .helpers.manifest_builders import build_manifest, build_manifest_plist, dt


class FakeScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))
        return f"after#{len(self.calls)}"

    def flush(self):
        pending, self.calls = self.calls, []
        for _delay, cb in pending:
            cb()


def test_clear_waits_for_settle_delay():
    store = ManifestStore()
    store.set_tracking(True)
    sched = FakeScheduler()
    c = UiController(store, scheduler=sched, settle_delay_ms=200)
    done = []
    c.new_document(on_done=lambda: done.append(True))
    assert [d for d, _ in sched.calls] == [200]
    assert store.tracking is True
    sched.flush()
    assert store.tracking is False
    assert done == [True]


def test_open_file_parses_now_and_imports_later(tmp_path):
    path = tmp_path / "PrivacyInfo.xcprivacy"
    path.write_bytes(build_manifest_plist())
    store = ManifestStore()
    sched = FakeScheduler()
    c = UiController(store, scheduler=sched, settle_delay_ms=150)
    c.open_file(str(path))
    assert store.manifest.tracking is False
    assert c.current_path is None
    sched.flush()
    assert store.manifest.tracking is True
    assert c.current_path == str(path)


def test_open_bad_file_raises_and_is_reported(tmp_path):
    path = tmp_path / "bad.xcprivacy"
    path.write_bytes(b"nope")
    reporter = ErrorReporter(path=str(tmp_path / "errors.jsonl"))
    sched = FakeScheduler()
    c = UiController(ManifestStore(), scheduler=sched, error_reporter=reporter)
    with pytest.raises(ManifestDecodeError):
        c.open_file(str(path))
    assert sched.calls == []
    assert reporter.tail(1)[0]["subsystem"] == "import"


def test_import_manifest_uses_delay_and_run_now_default():
    store = ManifestStore()
    c = UiController(store)
    c.import_manifest(build_manifest(data_types=[dt("Health")]))
    assert len(store.data_types) == 1


def test_copy_to_clipboard_and_missing_clipboard():
    store = ManifestStore()
    store.set_tracking(True)
    copied = []
    c = UiController(store, clipboard=copied.append)
    text = c.copy_to_clipboard()
    assert copied == [text]
    assert "<key>NSPrivacyTracking</key>" in text

    with pytest.raises(ClipboardError):
        UiController(store).copy_to_clipboard()

    def broken(_text):
        raise RuntimeError("clipboard locked")

    with pytest.raises(ClipboardError):
        UiController(store, clipboard=broken).copy_to_clipboard()


def test_save_as_writes_file_and_sets_path(tmp_path):
    store = ManifestStore()
    store.add_tracking_domain("a.example")
    c = UiController(store)
    target = tmp_path / "PrivacyInfo.xcprivacy"
    c.save_as(str(target))
    assert c.current_path == str(target)
    assert b"a.example" in target.read_bytes()
    assert c.plist_text() == target.read_text(encoding="utf-8")


def test_main_window_smoke():
    # Headless-safe: if Tk cannot initialize (e.g. CI without display), skip.
    try:
        import tkinter as tk
        from tkinter import TclError
    except Exception:
        pytest.skip("tkinter not available")

    try:
        root = tk.Tk()
    except TclError:
        pytest.skip("Tk cannot initialize (headless)")

    try:
        from mkprivacy.core.validator import Pane
        from mkprivacy.ui.ui_models import UiSettings
        from mkprivacy.ui.views.main_window import MainWindow

        store = ManifestStore()
        sched = FakeScheduler()
        c = UiController(store, scheduler=sched)
        mw = MainWindow(root, controller=c, config=UiSettings(confirm_on_exit=False), logger=None)
        assert mw.warnings_ind.value() == "none"

        store.set_tracking(True)
        assert mw.warnings_ind.value() == "1"
        assert "No collected data types have been marked" in mw.warnings_ind.detail()
        assert "does use data for tracking" in mw.panes[Pane.SUMMARY].text()

        store.add_tracking_domain("ads.example.com")
        mw.show_pane(Pane.TRACKING_DOMAINS)
        assert mw.panes[Pane.TRACKING_DOMAINS].items() == ["ads.example.com"]

        store.add_data_type("NSPrivacyCollectedDataTypeDeviceID")
        mw.show_pane(Pane.COLLECTED_DATA_TYPES)
        assert mw.panes[Pane.COLLECTED_DATA_TYPES].row_values("NSPrivacyCollectedDataTypeDeviceID")[0]

        mw.show_pane(Pane.EXPORT)
        assert "NSPrivacyTrackingDomains" in mw.panes[Pane.EXPORT].text()

        mw.show_pane(Pane.REQUIRED_REASONS_APIS)
        mw.panes[Pane.REQUIRED_REASONS_APIS].select("NSPrivacyAccessedAPICategoryDiskSpace")

        mw._on_new()
        sched.flush()
        assert store.tracking is False
        assert mw.current is Pane.PRIVACY_TRACKING
        mw.destroy()
    finally:
        try:
            root.destroy()
        except Exception:
            pass


def test_ui_settings_from_app_config():
    pytest.importorskip("tkinter")
    from mkprivacy.core.config.models import AppConfig, ExportConfig, UiConfig
    from mkprivacy.ui.app import ui_settings_from

    cfg = AppConfig(ui=UiConfig(theme="dark", settle_delay_ms=50), export=ExportConfig(default_filename="Sdk.xcprivacy"))
    ui = ui_settings_from(cfg)
    assert ui.theme == "dark"
    assert ui.settle_delay_ms == 50
    assert ui.export_filename == "Sdk.xcprivacy"
    assert ui_settings_from(object()).settle_delay_ms == 200


def test_save_as_encoding_failure_writes_nothing(tmp_path):
    store = ManifestStore()
    store.add_tracking_domain("ads\x01.example")
    reporter = ErrorReporter(path=str(tmp_path / "logs" / "errors.jsonl"))
    c = UiController(store, error_reporter=reporter)
    target = tmp_path / "out" / "PrivacyInfo.xcprivacy"
    with pytest.raises(ManifestEncodeError):
        c.save_as(str(target))
    assert not target.exists()
    assert c.current_path is None
    assert reporter.tail(1)[0]["subsystem"] == "export"
    # the preview shows the failure inline instead of raising
    assert "control characters" in c.plist_text()


def test_warnings_status_lists_active_warnings():
    pytest.importorskip("tkinter")
    from mkprivacy.core.validator import validate
    from mkprivacy.ui.widgets.indicator import warnings_status

    assert warnings_status(validate(build_manifest())) == ("none", "ok", "")
    value, level, detail = warnings_status(validate(build_manifest(domains=["a.example"], data_types=[dt("Name", purposes=[])])))
    assert (value, level) == ("2", "warn")
    assert detail.splitlines() == [
        "• Tracking domains have been added, without tracking enabled.",
        "• No collection purpose selected for a collected data type.",
    ]
