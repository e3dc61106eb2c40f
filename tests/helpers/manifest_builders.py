from __future__ import annotations

import plistlib
from typing import Any, Dict, Iterable, List, Optional

from mkprivacy.core.manifest.catalog import DATA_TYPE_PREFIX, PURPOSE_PREFIX, API_CATEGORY_PREFIX
from mkprivacy.core.manifest.models import CollectedDataType, PrivacyManifest


def dt(
    suffix: str,
    *,
    linked: bool = False,
    tracking: bool = False,
    purposes: Iterable[str] = ("AppFunctionality",),
) -> CollectedDataType:
    """Build a data type from short names, e.g. dt("Health", purposes=["Analytics"])."""
    return CollectedDataType(
        type=DATA_TYPE_PREFIX + suffix,
        is_linked=linked,
        is_tracking=tracking,
        purposes=tuple(PURPOSE_PREFIX + p for p in purposes),
    )


def build_manifest(
    *,
    tracking: bool = False,
    domains: Iterable[str] = (),
    data_types: Iterable[CollectedDataType] = (),
    api_reasons: Optional[Dict[str, List[str]]] = None,
) -> PrivacyManifest:
    return PrivacyManifest.model_validate(
        {
            "tracking": tracking,
            "tracking_domains": list(domains),
            "collected_data_types": list(data_types),
            "accessed_api_types": [
                {"type": API_CATEGORY_PREFIX + name, "reasons": reasons} for name, reasons in (api_reasons or {}).items()
            ],
        }
    )


def build_manifest_plist(overrides: Optional[Dict[str, Any]] = None, *, fmt=plistlib.FMT_XML) -> bytes:  # noqa: ANN001
    """A realistic SDK manifest, as Xcode writes it."""
    doc: Dict[str, Any] = {
        "NSPrivacyTracking": True,
        "NSPrivacyTrackingDomains": ["metrics.example.com"],
        "NSPrivacyCollectedDataTypes": [
            {
                "NSPrivacyCollectedDataType": "NSPrivacyCollectedDataTypeDeviceID",
                "NSPrivacyCollectedDataTypeLinked": False,
                "NSPrivacyCollectedDataTypeTracking": True,
                "NSPrivacyCollectedDataTypePurposes": [
                    "NSPrivacyCollectedDataTypePurposeThirdPartyAdvertising",
                    "NSPrivacyCollectedDataTypePurposeAnalytics",
                ],
            },
            {
                "NSPrivacyCollectedDataType": "NSPrivacyCollectedDataTypeCrashData",
                "NSPrivacyCollectedDataTypeLinked": False,
                "NSPrivacyCollectedDataTypeTracking": False,
                "NSPrivacyCollectedDataTypePurposes": ["NSPrivacyCollectedDataTypePurposeAppFunctionality"],
            },
        ],
        "NSPrivacyAccessedAPITypes": [
            {
                "NSPrivacyAccessedAPIType": "NSPrivacyAccessedAPICategorySystemBootTime",
                "NSPrivacyAccessedAPITypeReasons": ["35F9.1", "8FFB.1"],
            },
            {
                "NSPrivacyAccessedAPIType": "NSPrivacyAccessedAPICategoryFileTimestamp",
                "NSPrivacyAccessedAPITypeReasons": ["C617.1"],
            },
        ],
    }
    if overrides:
        doc.update(overrides)
    return plistlib.dumps(doc, fmt=fmt)
