from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from mkprivacy.core.manifest.catalog import (
    CollectionCategory,
    RequiredReasonAPI,
    required_reason_api,
)
from mkprivacy.core.manifest.models import CollectedDataType, PrivacyManifest
from mkprivacy.core.validator import ManifestWarnings, validate


@dataclass(frozen=True)
class SummarizedCategories:
    tracking: Tuple[CollectionCategory, ...] = ()
    linked: Tuple[CollectionCategory, ...] = ()
    not_linked: Tuple[CollectionCategory, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.tracking or self.linked or self.not_linked)


def _sorted(categories: Set[CollectionCategory]) -> Tuple[CollectionCategory, ...]:
    return tuple(sorted(categories, key=lambda c: c.display_name))


def summarize_data_collection_categories(manifest: PrivacyManifest) -> SummarizedCategories:
    """
    Project collected data types onto App Store label categories.

    A tracking data type lands in `tracking` and also in exactly one of
    `linked` / `not_linked`.
    """
    tracking: Set[CollectionCategory] = set()
    linked: Set[CollectionCategory] = set()
    not_linked: Set[CollectionCategory] = set()

    def insert(category: CollectionCategory, data_type: CollectedDataType) -> None:
        if data_type.is_tracking:
            tracking.add(category)
        if data_type.is_linked:
            linked.add(category)
        else:
            not_linked.add(category)

    for data_type in manifest.collected_data_types:
        for category in CollectionCategory:
            if category.contains(data_type.type):
                insert(category, data_type)

    return SummarizedCategories(tracking=_sorted(tracking), linked=_sorted(linked), not_linked=_sorted(not_linked))


def summarize_required_reasons_apis(manifest: PrivacyManifest) -> List[RequiredReasonAPI]:
    found = {}
    for api_type in manifest.accessed_api_types:
        api = required_reason_api(api_type.type)
        if api is not None:
            found[api.key] = api
    return sorted(found.values(), key=lambda a: a.name)


def summary_lines(manifest: PrivacyManifest, warnings: Optional[ManifestWarnings] = None) -> List[str]:
    warnings = warnings if warnings is not None else validate(manifest)
    lines: List[str] = []

    for message, _pane in warnings.messages():
        lines.append(f"Warning: {message}")
    if lines:
        lines.append("")

    if manifest.tracking:
        lines.append("The app or 3rd-party SDK indicates that it does use data for tracking.")
    else:
        lines.append("The app or 3rd-party SDK indicates that it does not use data for tracking.")

    count = len(manifest.tracking_domains)
    if count == 1:
        lines.append("There is an Internet domain engaged in tracking.")
    elif count > 1:
        lines.append(f"There are {count} Internet domains engaged in tracking.")

    cats = summarize_data_collection_categories(manifest)
    sections = (
        ("Data Used to Track You", "The following data may be used to track you across apps and websites owned by other companies:", cats.tracking),
        ("Data Linked to You", "The following data may be collected and linked to your identity:", cats.linked),
        ("Data Not Linked to You", "The following may be collected but is not linked to your identity:", cats.not_linked),
    )
    for title, blurb, items in sections:
        if not items:
            continue
        lines.append("")
        lines.append(title)
        lines.append(blurb)
        for category in items:
            lines.append(f"  {category.icon} {category.display_name}")
    if cats.is_empty:
        lines.append("")
        lines.append("Data Not Collected")
        lines.append("The developer does not collect any data from this app.")

    apis = summarize_required_reasons_apis(manifest)
    if apis:
        lines.append("")
        lines.append("Required Reasons APIs")
        for api in apis:
            lines.append(f"  {api.icon} {api.name}")

    return lines
