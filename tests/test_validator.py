from __future__ import annotations

from mkprivacy.core.validator import ManifestWarnings, Pane, validate

from .helpers.manifest_builders import build_manifest, dt


def test_empty_manifest_has_no_warnings():
    w = validate(build_manifest())
    assert w == ManifestWarnings()
    assert w.is_active is False
    assert w.messages() == []


def test_tracking_without_tracking_data_types():
    w = validate(build_manifest(tracking=True, data_types=[dt("Name"), dt("CrashData")]))
    assert w.tracking_but_no_tracking_data_types is True
    assert w.not_tracking_but_tracking_data_types is False
    assert w.is_active is True


def test_tracking_with_tracking_data_type_is_clean():
    w = validate(build_manifest(tracking=True, data_types=[dt("DeviceID", tracking=True)]))
    assert w.tracking_but_no_tracking_data_types is False
    assert w.not_tracking_but_tracking_data_types is False
    assert w.is_active is False


def test_not_tracking_but_tracking_data_types():
    w = validate(build_manifest(tracking=False, data_types=[dt("DeviceID", tracking=True), dt("Name")]))
    assert w.not_tracking_but_tracking_data_types is True
    assert w.tracking_but_no_tracking_data_types is False


def test_tracking_mismatch_rules_are_mutually_exclusive():
    for tracking in (True, False):
        for flags in ([], [False], [True], [True, False]):
            types = [dt(s, tracking=f) for s, f in zip(("Name", "Health"), flags)]
            w = validate(build_manifest(tracking=tracking, data_types=types))
            assert not (w.tracking_but_no_tracking_data_types and w.not_tracking_but_tracking_data_types)


def test_domains_without_tracking():
    w = validate(build_manifest(tracking=False, domains=["ads.example.com"]))
    assert w.not_tracking_but_tracking_domains is True
    assert validate(build_manifest(tracking=True, domains=["ads.example.com"])).not_tracking_but_tracking_domains is False


def test_purpose_required_count_is_exact():
    types = [dt("Name", purposes=[]), dt("Health", purposes=[]), dt("CrashData"), dt("UserID", purposes=[])]
    w = validate(build_manifest(data_types=types))
    assert w.data_type_purpose_required is True
    assert w.data_type_purpose_required_count == 3


def test_explicit_data_type_map_is_used_over_manifest_list():
    manifest = build_manifest(tracking=True)
    entry = dt("DeviceID", tracking=True)
    w = validate(manifest, {entry.type: entry})
    assert w.tracking_but_no_tracking_data_types is False


def test_messages_point_to_panes_and_pluralize():
    single = validate(build_manifest(data_types=[dt("Name", purposes=[])]))
    assert single.messages() == [("No collection purpose selected for a collected data type.", Pane.COLLECTED_DATA_TYPES)]

    many = validate(build_manifest(domains=["x.example"], data_types=[dt("Name", purposes=[]), dt("Health", purposes=[])]))
    texts = [m for m, _ in many.messages()]
    assert "Tracking domains have been added, without tracking enabled." in texts
    assert "No collection purpose selected for 2 collected data types." in texts
    assert (texts[0], many.messages()[0][1]) == ("Tracking domains have been added, without tracking enabled.", Pane.TRACKING_DOMAINS)


def test_validate_is_recomputed_from_scratch():
    m = build_manifest(tracking=True)
    first = validate(m)
    second = validate(build_manifest(tracking=True, data_types=[dt("DeviceID", tracking=True)]))
    assert first.tracking_but_no_tracking_data_types is True
    assert second.tracking_but_no_tracking_data_types is False
    assert validate(m) == first
