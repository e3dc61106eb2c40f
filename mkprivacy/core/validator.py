from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple

from mkprivacy.core.manifest.models import CollectedDataType, PrivacyManifest


class Pane(str, Enum):
    """Editor panes a warning can point the user to."""

    SUMMARY = "summary"
    PRIVACY_TRACKING = "privacy_tracking"
    TRACKING_DOMAINS = "tracking_domains"
    COLLECTED_DATA_TYPES = "collected_data_types"
    REQUIRED_REASONS_APIS = "required_reasons_apis"
    EXPORT = "export"


@dataclass(frozen=True)
class ManifestWarnings:
    tracking_but_no_tracking_data_types: bool = False
    not_tracking_but_tracking_data_types: bool = False
    not_tracking_but_tracking_domains: bool = False
    data_type_purpose_required: bool = False
    data_type_purpose_required_count: int = 0

    @property
    def is_active(self) -> bool:
        return (
            self.tracking_but_no_tracking_data_types
            or self.not_tracking_but_tracking_data_types
            or self.not_tracking_but_tracking_domains
            or self.data_type_purpose_required
        )

    def messages(self) -> List[Tuple[str, Pane]]:
        out: List[Tuple[str, Pane]] = []
        if self.tracking_but_no_tracking_data_types:
            out.append(("No collected data types have been marked for use with tracking yet.", Pane.COLLECTED_DATA_TYPES))
        if self.not_tracking_but_tracking_data_types:
            out.append(("Some collected data types have been marked for use with tracking.", Pane.COLLECTED_DATA_TYPES))
        if self.not_tracking_but_tracking_domains:
            out.append(("Tracking domains have been added, without tracking enabled.", Pane.TRACKING_DOMAINS))
        if self.data_type_purpose_required:
            if self.data_type_purpose_required_count > 1:
                msg = f"No collection purpose selected for {self.data_type_purpose_required_count} collected data types."
            else:
                msg = "No collection purpose selected for a collected data type."
            out.append((msg, Pane.COLLECTED_DATA_TYPES))
        return out


def validate(manifest: PrivacyManifest, data_types: Optional[Mapping[str, CollectedDataType]] = None) -> ManifestWarnings:
    """
    Derive advisory warnings from the current manifest.

    `data_types` is the editor's keyed map; when omitted the manifest's own
    list is used. Every call starts from scratch.
    """
    entries: Iterable[CollectedDataType] = data_types.values() if data_types is not None else manifest.collected_data_types
    entries = list(entries)

    any_tracking = any(dt.is_tracking for dt in entries)
    missing_purposes = sum(1 for dt in entries if not dt.purposes)

    return ManifestWarnings(
        tracking_but_no_tracking_data_types=bool(manifest.tracking and not any_tracking),
        not_tracking_but_tracking_data_types=bool(not manifest.tracking and any_tracking),
        not_tracking_but_tracking_domains=bool(not manifest.tracking and manifest.tracking_domains),
        data_type_purpose_required=missing_purposes > 0,
        data_type_purpose_required_count=missing_purposes,
    )
