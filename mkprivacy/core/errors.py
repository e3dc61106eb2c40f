from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class MkPrivacyError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": dict(self.context or {}),
        }


# ---- Core types ----
class ConfigError(MkPrivacyError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)


class ValidationError(MkPrivacyError):
    def __init__(self, user_message: str = "Invalid request.", **ctx: Any):
        super().__init__("validation_error", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class ManifestDecodeError(MkPrivacyError):
    def __init__(self, user_message: str = "The file is not a valid privacy manifest.", **ctx: Any):
        super().__init__("manifest_decode_error", user_message, severity=Severity.ERROR, recoverable=True, context=ctx)


class ManifestEncodeError(MkPrivacyError):
    def __init__(self, user_message: str = "Failed to encode property list.", **ctx: Any):
        super().__init__("manifest_encode_error", user_message, severity=Severity.ERROR, recoverable=True, context=ctx)


class ClipboardError(MkPrivacyError):
    def __init__(self, user_message: str = "Unable to copy to the clipboard.", **ctx: Any):
        super().__init__("clipboard_error", user_message, severity=Severity.WARN, recoverable=True, context=ctx)
