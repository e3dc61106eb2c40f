from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from mkprivacy.core.errors import ValidationError
from mkprivacy.core.events import EventLogger
from mkprivacy.core.manifest.catalog import (
    PURPOSE_ORDER,
    CollectionCategory,
    CollectionPurpose,
    is_known_data_type,
    required_reason_api,
)
from mkprivacy.core.manifest.models import AccessedAPIType, CollectedDataType, PrivacyManifest
from mkprivacy.core.plist_io import manifest_as_plist_text
from mkprivacy.core.summarizer import SummarizedCategories, summarize_data_collection_categories
from mkprivacy.core.validator import ManifestWarnings, validate

Listener = Callable[["ManifestStore"], None]


def _order_purposes(purposes: Iterable[str]) -> Tuple[str, ...]:
    wanted = list(dict.fromkeys(purposes))
    known = [p for p in PURPOSE_ORDER if p in wanted]
    extra = [p for p in wanted if p not in PURPOSE_ORDER]
    return tuple(known + extra)


def _clean_reasons(reasons: Iterable[str]) -> List[str]:
    out: List[str] = []
    for r in reasons:
        code = str(r or "").strip()
        if code and code not in out:
            out.append(code)
    return out


class ManifestStore:
    """
    Working state of one edit session.

    Collected data types and API reasons are kept in keyed maps; the
    PrivacyManifest is reassembled and revalidated after every mutation.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        event_logger: Optional[EventLogger] = None,
        session_id: Optional[str] = None,
        sort_keys: bool = True,
    ):
        self.logger = logger or logging.getLogger("mkprivacy.store")
        self.event_logger = event_logger
        self.session_id = session_id or uuid.uuid4().hex
        self.sort_keys = sort_keys

        self._tracking = False
        self._domains: List[str] = []
        self._data_types: Dict[str, CollectedDataType] = {}
        self._api_reasons: Dict[str, List[str]] = {}
        self._listeners: List[Listener] = []

        self._manifest = PrivacyManifest()
        self._warnings = validate(self._manifest, self._data_types)

    # ---------- read access ----------
    @property
    def manifest(self) -> PrivacyManifest:
        return self._manifest

    @property
    def warnings(self) -> ManifestWarnings:
        return self._warnings

    @property
    def tracking(self) -> bool:
        return self._tracking

    @property
    def tracking_domains(self) -> Tuple[str, ...]:
        return tuple(self._domains)

    @property
    def data_types(self) -> Dict[str, CollectedDataType]:
        return dict(self._data_types)

    @property
    def api_reasons(self) -> Dict[str, Tuple[str, ...]]:
        return {k: tuple(v) for k, v in self._api_reasons.items()}

    def data_type(self, key: str) -> CollectedDataType:
        try:
            return self._data_types[key]
        except KeyError:
            raise ValidationError("Unknown collected data type.", data_type=key) from None

    def data_types_in(self, category: CollectionCategory) -> List[CollectedDataType]:
        return [dt for key, dt in self._data_types.items() if category.contains(key)]

    def summary(self) -> SummarizedCategories:
        return summarize_data_collection_categories(self._manifest)

    def export_text(self) -> str:
        text = manifest_as_plist_text(self._manifest, sort_keys=self.sort_keys)
        self._event("export", {"chars": len(text)})
        return text

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    # ---------- tracking ----------
    def set_tracking(self, enabled: bool) -> None:
        self._tracking = bool(enabled)
        self._commit("set_tracking", {"tracking": self._tracking})

    def add_tracking_domain(self, domain: str) -> int:
        self._domains.append(self._clean_domain(domain))
        index = len(self._domains) - 1
        self._commit("add_tracking_domain", {"index": index})
        return index

    def update_tracking_domain(self, index: int, domain: str) -> None:
        self._check_domain_index(index)
        self._domains[index] = self._clean_domain(domain)
        self._commit("update_tracking_domain", {"index": index})

    def remove_tracking_domain(self, index: int) -> None:
        self._check_domain_index(index)
        del self._domains[index]
        self._commit("remove_tracking_domain", {"index": index})

    # ---------- collected data types ----------
    def add_data_type(self, key: str) -> CollectedDataType:
        existing = self._data_types.get(key)
        if existing is not None:
            return existing
        if not is_known_data_type(key):
            raise ValidationError("Unknown collected data type.", data_type=key)
        entry = CollectedDataType(type=key)
        self._data_types[key] = entry
        self._commit("add_data_type", {"data_type": key})
        return entry

    def remove_data_type(self, key: str) -> None:
        self.data_type(key)
        del self._data_types[key]
        self._commit("remove_data_type", {"data_type": key})

    def set_data_type_linked(self, key: str, linked: bool) -> None:
        self._replace_data_type(key, is_linked=bool(linked))
        self._commit("set_data_type_linked", {"data_type": key, "linked": bool(linked)})

    def set_data_type_tracking(self, key: str, tracking: bool) -> None:
        self._replace_data_type(key, is_tracking=bool(tracking))
        self._commit("set_data_type_tracking", {"data_type": key, "tracking": bool(tracking)})

    def set_purpose(self, key: str, purpose: Union[str, CollectionPurpose], enabled: bool) -> None:
        try:
            value = CollectionPurpose(purpose).value
        except ValueError:
            raise ValidationError("Unknown collection purpose.", purpose=str(purpose)) from None
        current = list(self.data_type(key).purposes)
        if enabled and value not in current:
            current.append(value)
        elif not enabled and value in current:
            current.remove(value)
        self._replace_data_type(key, purposes=_order_purposes(current))
        self._commit("set_purpose", {"data_type": key, "purpose": value, "enabled": bool(enabled)})

    # ---------- required-reason APIs ----------
    def set_api_reasons(self, api_key: str, reasons: Iterable[str]) -> None:
        self._check_api_key(api_key)
        cleaned = _clean_reasons(reasons)
        if cleaned:
            self._api_reasons[api_key] = cleaned
        else:
            self._api_reasons.pop(api_key, None)
        self._commit("set_api_reasons", {"api_type": api_key, "reasons": list(cleaned)})

    def toggle_api_reason(self, api_key: str, reason: str, enabled: bool) -> None:
        current = list(self._api_reasons.get(api_key, []))
        code = str(reason or "").strip()
        if enabled and code not in current:
            current.append(code)
        elif not enabled and code in current:
            current.remove(code)
        self.set_api_reasons(api_key, current)

    def remove_api_type(self, api_key: str) -> None:
        if api_key not in self._api_reasons:
            raise ValidationError("Unknown required-reason API.", api_type=api_key)
        del self._api_reasons[api_key]
        self._commit("remove_api_type", {"api_type": api_key})

    # ---------- bulk replacement ----------
    def clear(self) -> None:
        self._tracking = False
        self._domains = []
        self._data_types = {}
        self._api_reasons = {}
        self._commit("clear", {})

    def import_manifest(self, manifest: PrivacyManifest) -> None:
        data_types: Dict[str, CollectedDataType] = {}
        for dt in manifest.collected_data_types:
            data_types[dt.type] = dt
        api_reasons: Dict[str, List[str]] = {}
        for api in manifest.accessed_api_types:
            api_reasons[api.type] = list(api.reasons)

        unknown = [k for k in data_types if not is_known_data_type(k)]
        if unknown:
            self.logger.warning("Imported manifest has unrecognized data types: %s", ", ".join(sorted(unknown)))

        self._tracking = bool(manifest.tracking)
        self._domains = list(manifest.tracking_domains)
        self._data_types = data_types
        self._api_reasons = api_reasons
        self._commit(
            "import",
            {
                "data_types": len(data_types),
                "api_types": len(api_reasons),
                "tracking_domains": len(self._domains),
            },
        )

    # ---------- internals ----------
    def _clean_domain(self, domain: str) -> str:
        value = str(domain or "").strip()
        if not value:
            raise ValidationError("Tracking domain cannot be empty.")
        return value

    def _check_domain_index(self, index: int) -> None:
        if not 0 <= int(index) < len(self._domains):
            raise ValidationError("Unknown tracking domain.", index=index)

    def _check_api_key(self, api_key: str) -> None:
        if api_key in self._api_reasons or required_reason_api(api_key) is not None:
            return
        raise ValidationError("Unknown required-reason API.", api_type=api_key)

    def _replace_data_type(self, key: str, **changes: Any) -> None:
        self._data_types[key] = self.data_type(key).model_copy(update=changes)

    def _assemble(self) -> PrivacyManifest:
        return PrivacyManifest(
            tracking=self._tracking,
            tracking_domains=tuple(self._domains),
            collected_data_types=tuple(self._data_types.values()),
            accessed_api_types=tuple(AccessedAPIType(type=k, reasons=tuple(v)) for k, v in self._api_reasons.items()),
        )

    def _commit(self, event: str, details: Dict[str, Any]) -> None:
        self._manifest = self._assemble()
        self._warnings = validate(self._manifest, self._data_types)
        self.logger.debug("%s %s (warnings active=%s)", event, details, self._warnings.is_active)
        self._event(event, details)
        for listener in list(self._listeners):
            listener(self)

    def _event(self, event: str, details: Dict[str, Any]) -> None:
        if self.event_logger is None:
            return
        try:
            self.event_logger.log(self.session_id, event, details)
        except OSError as e:
            self.logger.warning("Session event log unavailable: %s", e)
