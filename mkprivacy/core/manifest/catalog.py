from __future__ import annotations

"""
Fixed Apple tables for privacy manifests.

Collected data type keys, the App Store "nutrition label" categories they roll
up into, collection purposes, and the required-reason API categories with
their approved reason codes. Keys are the literal plist strings Xcode expects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

DATA_TYPE_PREFIX = "NSPrivacyCollectedDataType"
PURPOSE_PREFIX = "NSPrivacyCollectedDataTypePurpose"
API_CATEGORY_PREFIX = "NSPrivacyAccessedAPICategory"


class CollectionCategory(str, Enum):
    BODY = "body"
    BROWSING_HISTORY = "browsingHistory"
    CONTACT_INFO = "contactInfo"
    CONTACTS_INFO = "contactsInfo"
    DIAGNOSTICS = "diagnostics"
    FINANCIAL_INFO = "financialInfo"
    HEALTH_AND_FITNESS = "healthAndFitness"
    IDENTIFIERS = "identifiers"
    LOCATION_INFO = "locationInfo"
    OTHER_DATA_TYPES = "otherDataTypes"
    PURCHASES = "purchases"
    SEARCH_HISTORY = "searchHistory"
    SENSITIVE_INFO = "sensitiveInfo"
    SURROUNDINGS = "surroundings"
    USAGE_DATA = "usageData"
    USER_CONTENT = "userContent"

    @property
    def display_name(self) -> str:
        return _CATEGORIES[self].display_name

    @property
    def icon(self) -> str:
        return _CATEGORIES[self].icon

    @property
    def data_types(self) -> Tuple[str, ...]:
        return tuple(key for key, _name in _CATEGORIES[self].members)

    def contains(self, data_type: str) -> bool:
        return data_type in _MEMBERSHIP[self]

    def __str__(self) -> str:
        return self.display_name


class CollectionPurpose(str, Enum):
    THIRD_PARTY_ADVERTISING = PURPOSE_PREFIX + "ThirdPartyAdvertising"
    DEVELOPER_ADVERTISING = PURPOSE_PREFIX + "DeveloperAdvertising"
    ANALYTICS = PURPOSE_PREFIX + "Analytics"
    PRODUCT_PERSONALIZATION = PURPOSE_PREFIX + "ProductPersonalization"
    APP_FUNCTIONALITY = PURPOSE_PREFIX + "AppFunctionality"
    OTHER = PURPOSE_PREFIX + "Other"

    @property
    def display_name(self) -> str:
        return _PURPOSE_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_PURPOSE_NAMES: Dict[CollectionPurpose, str] = {
    CollectionPurpose.THIRD_PARTY_ADVERTISING: "Third-Party Advertising",
    CollectionPurpose.DEVELOPER_ADVERTISING: "Developer's Advertising or Marketing",
    CollectionPurpose.ANALYTICS: "Analytics",
    CollectionPurpose.PRODUCT_PERSONALIZATION: "Product Personalization",
    CollectionPurpose.APP_FUNCTIONALITY: "App Functionality",
    CollectionPurpose.OTHER: "Other Purposes",
}

# Export order for purposes inside a data type entry.
PURPOSE_ORDER: Tuple[str, ...] = tuple(p.value for p in CollectionPurpose)


@dataclass(frozen=True)
class _CategoryInfo:
    display_name: str
    icon: str
    members: Tuple[Tuple[str, str], ...]


def _members(*pairs: Tuple[str, str]) -> Tuple[Tuple[str, str], ...]:
    return tuple((DATA_TYPE_PREFIX + suffix, name) for suffix, name in pairs)


_CATEGORIES: Dict[CollectionCategory, _CategoryInfo] = {
    CollectionCategory.BODY: _CategoryInfo("Body", "✋", _members(("Hands", "Hands"), ("Head", "Head"))),
    CollectionCategory.BROWSING_HISTORY: _CategoryInfo("Browsing History", "\U0001f310", _members(("BrowsingHistory", "Browsing History"))),
    CollectionCategory.CONTACT_INFO: _CategoryInfo(
        "Contact Info",
        "\U0001f464",
        _members(
            ("Name", "Name"),
            ("EmailAddress", "Email Address"),
            ("PhoneNumber", "Phone Number"),
            ("PhysicalAddress", "Physical Address"),
            ("OtherUserContactInfo", "Other User Contact Info"),
        ),
    ),
    CollectionCategory.CONTACTS_INFO: _CategoryInfo("Contacts", "\U0001f4c7", _members(("Contacts", "Contacts"))),
    CollectionCategory.DIAGNOSTICS: _CategoryInfo(
        "Diagnostics",
        "⚙",
        _members(("CrashData", "Crash Data"), ("PerformanceData", "Performance Data"), ("OtherDiagnosticData", "Other Diagnostic Data")),
    ),
    CollectionCategory.FINANCIAL_INFO: _CategoryInfo(
        "Financial Info",
        "\U0001f4b3",
        _members(("PaymentInfo", "Payment Info"), ("CreditInfo", "Credit Info"), ("OtherFinancialInfo", "Other Financial Info")),
    ),
    CollectionCategory.HEALTH_AND_FITNESS: _CategoryInfo("Health & Fitness", "❤", _members(("Health", "Health"), ("Fitness", "Fitness"))),
    CollectionCategory.IDENTIFIERS: _CategoryInfo("Identifiers", "\U0001f194", _members(("UserID", "User ID"), ("DeviceID", "Device ID"))),
    CollectionCategory.LOCATION_INFO: _CategoryInfo(
        "Location",
        "\U0001f4cd",
        _members(("PreciseLocation", "Precise Location"), ("CoarseLocation", "Coarse Location")),
    ),
    CollectionCategory.OTHER_DATA_TYPES: _CategoryInfo("Other Data", "…", _members(("OtherDataTypes", "Other Data Types"))),
    CollectionCategory.PURCHASES: _CategoryInfo("Purchases", "\U0001f6cd", _members(("PurchaseHistory", "Purchase History"))),
    CollectionCategory.SEARCH_HISTORY: _CategoryInfo("Search History", "\U0001f50d", _members(("SearchHistory", "Search History"))),
    CollectionCategory.SENSITIVE_INFO: _CategoryInfo("Sensitive Info", "\U0001f441", _members(("SensitiveInfo", "Sensitive Info"))),
    CollectionCategory.SURROUNDINGS: _CategoryInfo("Surroundings", "\U0001f4e1", _members(("EnvironmentScanning", "Environment Scanning"))),
    CollectionCategory.USAGE_DATA: _CategoryInfo(
        "Usage Data",
        "\U0001f4ca",
        _members(("ProductInteraction", "Product Interaction"), ("AdvertisingData", "Advertising Data"), ("OtherUsageData", "Other Usage Data")),
    ),
    CollectionCategory.USER_CONTENT: _CategoryInfo(
        "User Content",
        "\U0001f5bc",
        _members(
            ("EmailsOrTextMessages", "Emails or Text Messages"),
            ("PhotosorVideos", "Photos or Videos"),
            ("AudioData", "Audio Data"),
            ("GameplayContent", "Gameplay Content"),
            ("CustomerSupport", "Customer Support"),
            ("OtherUserContent", "Other User Content"),
        ),
    ),
}

_MEMBERSHIP: Dict[CollectionCategory, FrozenSet[str]] = {cat: frozenset(key for key, _ in info.members) for cat, info in _CATEGORIES.items()}

_DATA_TYPE_NAMES: Dict[str, str] = {key: name for info in _CATEGORIES.values() for key, name in info.members}


def is_known_data_type(key: str) -> bool:
    return key in _DATA_TYPE_NAMES


def data_type_name(key: str) -> str:
    """Display name for a data type key; unknown keys are shown verbatim."""
    return _DATA_TYPE_NAMES.get(key, key)


def categories_for(data_type: str) -> List[CollectionCategory]:
    return [cat for cat in CollectionCategory if cat.contains(data_type)]


def categories_by_display_name() -> List[CollectionCategory]:
    return sorted(CollectionCategory, key=lambda c: c.display_name)


# ---- Required-reason APIs ----
@dataclass(frozen=True)
class ApiReason:
    code: str
    summary: str


@dataclass(frozen=True)
class RequiredReasonAPI:
    key: str
    name: str
    icon: str
    reasons: Tuple[ApiReason, ...]

    def reason(self, code: str) -> Optional[ApiReason]:
        for r in self.reasons:
            if r.code == code:
                return r
        return None


FILE_TIMESTAMP_APIS = RequiredReasonAPI(
    key=API_CATEGORY_PREFIX + "FileTimestamp",
    name="File Timestamp APIs",
    icon="\U0001f552",
    reasons=(
        ApiReason("DDA9.1", "Display file timestamps to the person using the device."),
        ApiReason("C617.1", "Access timestamps, size or other metadata of files inside the app container, app group container or CloudKit container."),
        ApiReason("3B52.1", "Access timestamps, size or other metadata of files or directories the user specifically granted access to."),
        ApiReason("0A2A.1", "Third-party SDK wrapper function around file timestamp APIs, called by the app."),
    ),
)

SYSTEM_BOOT_TIME_APIS = RequiredReasonAPI(
    key=API_CATEGORY_PREFIX + "SystemBootTime",
    name="System Boot Time APIs",
    icon="⏱",
    reasons=(
        ApiReason("35F9.1", "Measure the time elapsed between events within the app or perform calculations to enable timers."),
        ApiReason("8FFB.1", "Calculate absolute timestamps for events that occurred within the app."),
        ApiReason("3D61.1", "Include system boot time in an optional bug report the person chooses to submit."),
    ),
)

DISK_SPACE_APIS = RequiredReasonAPI(
    key=API_CATEGORY_PREFIX + "DiskSpace",
    name="Disk Space APIs",
    icon="\U0001f4be",
    reasons=(
        ApiReason("85F4.1", "Display disk space information to the person using the device."),
        ApiReason("E174.1", "Check whether there is sufficient disk space to write files."),
        ApiReason("7D9E.1", "Include disk space information in an optional bug report the person chooses to submit."),
        ApiReason("B728.1", "Health research app detecting low disk space that affects research data collection."),
    ),
)

ACTIVE_KEYBOARD_APIS = RequiredReasonAPI(
    key=API_CATEGORY_PREFIX + "ActiveKeyboards",
    name="Active Keyboard APIs",
    icon="⌨",
    reasons=(
        ApiReason("3EC4.1", "Custom keyboard app determining the active keyboards on the device."),
        ApiReason("54BD.1", "Customize the user interface based on the active keyboards on the device."),
    ),
)

USER_DEFAULTS_APIS = RequiredReasonAPI(
    key=API_CATEGORY_PREFIX + "UserDefaults",
    name="User Defaults APIs",
    icon="\U0001f5c4",
    reasons=(
        ApiReason("CA92.1", "Access user defaults to read and write information that is only accessible to the app itself."),
        ApiReason("1C8F.1", "Access user defaults shared by apps, extensions and App Clips in the same App Group."),
        ApiReason("C56D.1", "Third-party SDK wrapper function around user defaults APIs, called by the app."),
        ApiReason("AC6B.1", "Read the com.apple.configuration.managed key set by MDM, or write the com.apple.feedback.managed key."),
    ),
)

REQUIRED_REASON_APIS: Dict[str, RequiredReasonAPI] = {
    api.key: api
    for api in (
        ACTIVE_KEYBOARD_APIS,
        DISK_SPACE_APIS,
        FILE_TIMESTAMP_APIS,
        SYSTEM_BOOT_TIME_APIS,
        USER_DEFAULTS_APIS,
    )
}


def required_reason_api(key: str) -> Optional[RequiredReasonAPI]:
    return REQUIRED_REASON_APIS.get(key)
