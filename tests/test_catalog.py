from __future__ import annotations

from mkprivacy.core.manifest.catalog import (
    PURPOSE_ORDER,
    REQUIRED_REASON_APIS,
    CollectionCategory,
    CollectionPurpose,
    categories_by_display_name,
    categories_for,
    data_type_name,
    is_known_data_type,
    required_reason_api,
)


def test_every_data_type_belongs_to_exactly_one_category():
    seen = {}
    for cat in CollectionCategory:
        assert cat.data_types, cat
        for key in cat.data_types:
            assert key.startswith("NSPrivacyCollectedDataType")
            assert key not in seen, f"{key} in {seen.get(key)} and {cat}"
            seen[key] = cat
    assert all(categories_for(key) == [cat] for key, cat in seen.items())


def test_category_display_names():
    assert CollectionCategory.HEALTH_AND_FITNESS.display_name == "Health & Fitness"
    assert CollectionCategory.CONTACTS_INFO.display_name == "Contacts"
    assert str(CollectionCategory.LOCATION_INFO) == "Location"
    names = [c.display_name for c in categories_by_display_name()]
    assert names == sorted(names)
    assert len(names) == 16


def test_membership_checks():
    assert CollectionCategory.IDENTIFIERS.contains("NSPrivacyCollectedDataTypeDeviceID")
    assert not CollectionCategory.IDENTIFIERS.contains("NSPrivacyCollectedDataTypeName")
    assert is_known_data_type("NSPrivacyCollectedDataTypePhotosorVideos")
    assert not is_known_data_type("NSPrivacyCollectedDataTypeTelepathy")
    assert categories_for("NSPrivacyCollectedDataTypeTelepathy") == []


def test_data_type_names_fall_back_to_key():
    assert data_type_name("NSPrivacyCollectedDataTypeCrashData") == "Crash Data"
    assert data_type_name("SomethingElse") == "SomethingElse"


def test_purposes_are_full_plist_keys_in_export_order():
    assert CollectionPurpose.ANALYTICS.value == "NSPrivacyCollectedDataTypePurposeAnalytics"
    assert CollectionPurpose("NSPrivacyCollectedDataTypePurposeOther") is CollectionPurpose.OTHER
    assert PURPOSE_ORDER[0] == CollectionPurpose.THIRD_PARTY_ADVERTISING.value
    assert PURPOSE_ORDER[-1] == CollectionPurpose.OTHER.value
    assert str(CollectionPurpose.APP_FUNCTIONALITY) == "App Functionality"


def test_required_reason_apis_and_reason_codes():
    assert len(REQUIRED_REASON_APIS) == 5
    api = required_reason_api("NSPrivacyAccessedAPICategoryUserDefaults")
    assert api is not None
    assert [r.code for r in api.reasons] == ["CA92.1", "1C8F.1", "C56D.1", "AC6B.1"]
    assert api.reason("CA92.1") is not None
    assert api.reason("0000.0") is None
    assert required_reason_api("NSPrivacyAccessedAPICategoryTeleport") is None
    for key, entry in REQUIRED_REASON_APIS.items():
        assert entry.key == key
        assert entry.reasons
