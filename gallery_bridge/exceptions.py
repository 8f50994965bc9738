"""
Exception classes for the gallery field bridge

None of these escape SchemaExtender.extend or GalleryResolver.resolve. They
are raised at the smallest unit of work (a location rule, a field, a group,
a stored value) and caught at that unit's boundary, where the unit is
skipped and the pass continues.
"""

from typing import Any


class BridgeError(Exception):
    """Base exception class for all bridge-related exceptions"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Host environment
# ============================================================================


class MissingDependencyError(BridgeError):
    """Raised when a required host capability is not available"""

    def __init__(self, capability: str, message: str | None = None):
        super().__init__(
            message=message or f"Required host capability '{capability}' is not available",
            details={"capability": capability},
        )


# ============================================================================
# Malformed host records
# ============================================================================


class MalformedRecordError(BridgeError):
    """Raised when a field group, field, rule or stored value has an unexpected shape"""

    def __init__(self, unit: str, reason: str, details: dict[str, Any] | None = None):
        error_details = details or {}
        error_details["unit"] = unit
        super().__init__(message=f"Malformed {unit}: {reason}", details=error_details)
        self.unit = unit
        self.reason = reason


class SerializedValueError(MalformedRecordError):
    """Raised when a serialized meta value cannot be decoded"""

    def __init__(self, reason: str, offset: int | None = None):
        details = {"offset": offset} if offset is not None else {}
        super().__init__(unit="serialized value", reason=reason, details=details)
