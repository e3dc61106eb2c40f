from __future__ import annotations

from mkprivacy.core.manifest.catalog import (
    REQUIRED_REASON_APIS,
    CollectionCategory,
    CollectionPurpose,
    RequiredReasonAPI,
)
from mkprivacy.core.manifest.models import AccessedAPIType, CollectedDataType, PrivacyManifest

__all__ = [
    "AccessedAPIType",
    "CollectedDataType",
    "CollectionCategory",
    "CollectionPurpose",
    "PrivacyManifest",
    "REQUIRED_REASON_APIS",
    "RequiredReasonAPI",
]
