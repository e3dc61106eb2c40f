from __future__ import annotations

import pytest

from mkprivacy.core.errors import ValidationError
from mkprivacy.core.manifest.catalog import CollectionCategory, CollectionPurpose
from mkprivacy.core.store import ManifestStore

from .helpers.log_assertions import events_named, read_jsonl
from .helpers.manifest_builders import build_manifest, dt

DEVICE_ID = "NSPrivacyCollectedDataTypeDeviceID"
NAME = "NSPrivacyCollectedDataTypeName"
BOOT = "NSPrivacyAccessedAPICategorySystemBootTime"


def test_new_store_is_empty_and_clean():
    s = ManifestStore()
    assert s.manifest == build_manifest()
    assert s.warnings.is_active is False
    assert s.summary().is_empty


def test_tracking_toggle_revalidates():
    s = ManifestStore()
    s.set_tracking(True)
    assert s.manifest.tracking is True
    assert s.warnings.tracking_but_no_tracking_data_types is True
    s.add_data_type(DEVICE_ID)
    s.set_data_type_tracking(DEVICE_ID, True)
    assert s.warnings.tracking_but_no_tracking_data_types is False
    s.set_tracking(False)
    assert s.warnings.not_tracking_but_tracking_data_types is True


def test_tracking_domains_edit_cycle():
    s = ManifestStore()
    assert s.add_tracking_domain(" ads.example.com ") == 0
    assert s.add_tracking_domain("ads.example.com") == 1
    assert s.tracking_domains == ("ads.example.com", "ads.example.com")
    assert s.warnings.not_tracking_but_tracking_domains is True
    s.update_tracking_domain(1, "metrics.example.com")
    s.remove_tracking_domain(0)
    assert s.manifest.tracking_domains == ("metrics.example.com",)

    with pytest.raises(ValidationError):
        s.add_tracking_domain("   ")
    with pytest.raises(ValidationError):
        s.update_tracking_domain(5, "x.example")
    with pytest.raises(ValidationError):
        s.remove_tracking_domain(-1)


def test_data_type_lifecycle_and_purpose_order():
    s = ManifestStore()
    entry = s.add_data_type(NAME)
    assert entry.purposes == ()
    assert s.warnings.data_type_purpose_required_count == 1
    assert s.add_data_type(NAME) is entry

    s.set_purpose(NAME, CollectionPurpose.OTHER, True)
    s.set_purpose(NAME, "NSPrivacyCollectedDataTypePurposeAnalytics", True)
    s.set_purpose(NAME, CollectionPurpose.OTHER, True)
    assert s.data_type(NAME).purposes == (CollectionPurpose.ANALYTICS.value, CollectionPurpose.OTHER.value)
    assert s.warnings.data_type_purpose_required is False

    s.set_data_type_linked(NAME, True)
    assert s.summary().linked == (CollectionCategory.CONTACT_INFO,)
    assert [d.type for d in s.data_types_in(CollectionCategory.CONTACT_INFO)] == [NAME]

    s.set_purpose(NAME, CollectionPurpose.OTHER, False)
    assert s.data_type(NAME).purposes == (CollectionPurpose.ANALYTICS.value,)

    s.remove_data_type(NAME)
    assert s.manifest.collected_data_types == ()
    with pytest.raises(ValidationError):
        s.data_type(NAME)


def test_data_type_errors():
    s = ManifestStore()
    with pytest.raises(ValidationError):
        s.add_data_type("NSPrivacyCollectedDataTypeTelepathy")
    with pytest.raises(ValidationError):
        s.set_data_type_linked(NAME, True)
    s.add_data_type(NAME)
    with pytest.raises(ValidationError):
        s.set_purpose(NAME, "Marketing", True)


def test_api_reasons_edit_cycle():
    s = ManifestStore()
    s.toggle_api_reason(BOOT, "35F9.1", True)
    s.toggle_api_reason(BOOT, "8FFB.1", True)
    s.toggle_api_reason(BOOT, "35F9.1", True)
    assert s.api_reasons == {BOOT: ("35F9.1", "8FFB.1")}
    assert s.manifest.accessed_api_types[0].reasons == ("35F9.1", "8FFB.1")

    s.toggle_api_reason(BOOT, "35F9.1", False)
    s.toggle_api_reason(BOOT, "8FFB.1", False)
    assert s.api_reasons == {}
    assert s.manifest.accessed_api_types == ()

    s.set_api_reasons(BOOT, ["3D61.1", "", "3D61.1"])
    assert s.api_reasons[BOOT] == ("3D61.1",)
    s.remove_api_type(BOOT)
    assert s.api_reasons == {}

    with pytest.raises(ValidationError):
        s.set_api_reasons("NSPrivacyAccessedAPICategoryTeleport", ["X.1"])
    with pytest.raises(ValidationError):
        s.remove_api_type(BOOT)


class RecordingLogger:
    def __init__(self):
        self.warnings = []

    def debug(self, *_a, **_k): ...

    def warning(self, msg, *args, **_k):
        self.warnings.append(msg % args)


def test_import_replaces_state_and_keeps_unknown_entries():
    log = RecordingLogger()
    s = ManifestStore(logger=log)
    s.add_tracking_domain("old.example")
    m = build_manifest(
        tracking=True,
        domains=["a.example"],
        data_types=[dt("DeviceID", tracking=True), dt("Telepathy"), dt("DeviceID", tracking=True, linked=True)],
        api_reasons={"Teleport": ["X.1"], "DiskSpace": ["E174.1"]},
    )
    s.import_manifest(m)
    assert any("NSPrivacyCollectedDataTypeTelepathy" in w for w in log.warnings)

    assert s.tracking_domains == ("a.example",)
    # later duplicate wins
    assert s.data_type(DEVICE_ID).is_linked is True
    assert len(s.manifest.collected_data_types) == 2
    assert "NSPrivacyAccessedAPICategoryTeleport" in s.api_reasons
    s.set_api_reasons("NSPrivacyAccessedAPICategoryTeleport", ["X.2"])
    assert s.api_reasons["NSPrivacyAccessedAPICategoryTeleport"] == ("X.2",)


def test_clear_resets_everything():
    s = ManifestStore()
    s.import_manifest(build_manifest(tracking=True, domains=["a.example"], data_types=[dt("Name", purposes=[])], api_reasons={"DiskSpace": ["E174.1"]}))
    assert s.warnings.is_active
    s.clear()
    assert s.manifest == build_manifest()
    assert s.warnings.is_active is False


def test_listeners_fire_after_commit_and_unsubscribe():
    s = ManifestStore()
    seen = []
    unsubscribe = s.subscribe(lambda st: seen.append(st.manifest.tracking))
    s.set_tracking(True)
    unsubscribe()
    unsubscribe()
    s.set_tracking(False)
    assert seen == [True]


def test_session_events_are_logged(store, event_log_path):
    assert store.event_logger.tail() == []
    store.set_tracking(True)
    store.add_data_type(DEVICE_ID)
    text = store.export_text()
    assert "NSPrivacyTracking" in text

    objs = read_jsonl(event_log_path)
    assert store.event_logger.tail(1)[0]["event"] == "export"
    assert [o["event"] for o in objs] == ["set_tracking", "add_data_type", "export"]
    assert all(o["session_id"] == "s1" for o in objs)
    assert events_named(objs, "add_data_type")[0]["details"] == {"data_type": DEVICE_ID}
