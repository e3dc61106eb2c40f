from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _dedupe(values: Tuple[str, ...]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for v in values:
        if v in seen:
            continue
        seen.add(v)
        out.append(v)
    return tuple(out)


class CollectedDataType(BaseModel):
    """
    One NSPrivacyCollectedDataTypes entry.
    An empty purpose set is allowed here; the validator flags it.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    type: str = Field(alias="NSPrivacyCollectedDataType", min_length=1)
    is_linked: bool = Field(default=False, alias="NSPrivacyCollectedDataTypeLinked")
    is_tracking: bool = Field(default=False, alias="NSPrivacyCollectedDataTypeTracking")
    purposes: Tuple[str, ...] = Field(default=(), alias="NSPrivacyCollectedDataTypePurposes")

    @field_validator("purposes")
    @classmethod
    def _unique_purposes(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _dedupe(v)


class AccessedAPIType(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    type: str = Field(alias="NSPrivacyAccessedAPIType", min_length=1)
    reasons: Tuple[str, ...] = Field(default=(), alias="NSPrivacyAccessedAPITypeReasons")


class PrivacyManifest(BaseModel):
    """
    Contents of a PrivacyInfo.xcprivacy property list.

    Python field names are used in code; aliases are the plist keys and are
    used for import/export.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    tracking: bool = Field(default=False, alias="NSPrivacyTracking")
    tracking_domains: Tuple[str, ...] = Field(default=(), alias="NSPrivacyTrackingDomains")
    collected_data_types: Tuple[CollectedDataType, ...] = Field(default=(), alias="NSPrivacyCollectedDataTypes")
    accessed_api_types: Tuple[AccessedAPIType, ...] = Field(default=(), alias="NSPrivacyAccessedAPITypes")

    @classmethod
    def from_plist_dict(cls, data: Dict[str, Any]) -> "PrivacyManifest":
        return cls.model_validate(data)

    def to_plist_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
