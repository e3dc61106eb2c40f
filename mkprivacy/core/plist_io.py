from __future__ import annotations

import logging
import plistlib
from typing import Any
from xml.parsers.expat import ExpatError

from pydantic import ValidationError as PydanticValidationError

from mkprivacy.core.config.io import atomic_write_bytes
from mkprivacy.core.errors import ManifestDecodeError
from mkprivacy.core.manifest.models import PrivacyManifest

ENCODE_FAILED = "Failed to encode property list."

log = logging.getLogger("mkprivacy.plist")


def manifest_from_plist_bytes(data: bytes) -> PrivacyManifest:
    """
    Parse an XML or binary property list into a manifest.
    The format is detected by plistlib.
    """
    try:
        obj: Any = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError, KeyError, IndexError) as e:
        raise ManifestDecodeError(error=str(e) or e.__class__.__name__) from e
    if not isinstance(obj, dict):
        raise ManifestDecodeError("The property list root must be a dictionary.", root_type=type(obj).__name__)
    try:
        return PrivacyManifest.from_plist_dict(obj)
    except PydanticValidationError as e:
        raise ManifestDecodeError(error=str(e), error_count=e.error_count()) from e


def load_manifest(path: str) -> PrivacyManifest:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ManifestDecodeError("Unable to read the privacy manifest file.", path=path, error=str(e)) from e
    manifest = manifest_from_plist_bytes(data)
    log.info("Loaded privacy manifest from %s (%d data types, %d API types)", path, len(manifest.collected_data_types), len(manifest.accessed_api_types))
    return manifest


def manifest_as_plist_bytes(manifest: PrivacyManifest, *, sort_keys: bool = True) -> bytes:
    return plistlib.dumps(manifest.to_plist_dict(), fmt=plistlib.FMT_XML, sort_keys=sort_keys)


def manifest_as_plist_text(manifest: PrivacyManifest, *, sort_keys: bool = True) -> str:
    """
    XML property list text for the manifest.
    Encoding failures come back as the message text instead of raising.
    """
    try:
        data = manifest_as_plist_bytes(manifest, sort_keys=sort_keys)
    except Exception as e:  # noqa: BLE001
        log.warning("Property list encoding failed: %s", e)
        return str(e) or ENCODE_FAILED
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return ENCODE_FAILED


def save_manifest(manifest: PrivacyManifest, path: str, *, sort_keys: bool = True) -> None:
    atomic_write_bytes(path, manifest_as_plist_bytes(manifest, sort_keys=sort_keys), suffix=".xcprivacy")
    log.info("Saved privacy manifest to %s", path)
