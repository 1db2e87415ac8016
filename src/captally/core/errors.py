"""captally error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Extension (recoverable, the extension is skipped)
- 4xxx: Invocation (fatal, bad command arguments)
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Extension (3xxx)
    EXTENSION_MANIFEST_UNPARSABLE = 3001
    EXTENSION_MANIFEST_NOT_MAPPING = 3002
    EXTENSION_FIELD_UNTYPED = 3003
    EXTENSION_KIND_MISSING = 3004
    EXTENSION_NOT_FOUND = 3005
    EXTENSION_DUPLICATE_ID = 3006

    # Invocation (4xxx)
    INVOCATION_UNKNOWN_CATEGORY = 4001
    INVOCATION_UNKNOWN_ORDER = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CaptallyError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CaptallyError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MalformedExtension(CaptallyError):
    """A single extension could not be turned into a record.

    Never fatal for a corpus run: the loader skips the extension and reports it.
    """

    @property
    def extension_id(self) -> str | None:
        return self.details.get("extension_id")

    @classmethod
    def unparsable_manifest(cls, extension_id: str, reason: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_MANIFEST_UNPARSABLE,
            message=f"Manifest of '{extension_id}' is neither TOML nor JSON: {reason}",
            details={"extension_id": extension_id, "reason": reason},
        )

    @classmethod
    def not_a_mapping(cls, extension_id: str, found: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_MANIFEST_NOT_MAPPING,
            message=f"Manifest of '{extension_id}' must be a table/object, got {found}",
            details={"extension_id": extension_id, "found": found},
        )

    @classmethod
    def untyped_field(cls, extension_id: str, field: str, found: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_FIELD_UNTYPED,
            message=f"Manifest field '{field}' of '{extension_id}' must be a string, got {found}",
            details={"extension_id": extension_id, "field": field, "found": found},
        )

    @classmethod
    def missing_kind(cls, extension_id: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_KIND_MISSING,
            message=f"Cannot tell whether '{extension_id}' is a theme or a language extension",
            details={"extension_id": extension_id},
        )

    @classmethod
    def not_found(cls, extension_id: str, path: str, reason: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_NOT_FOUND,
            message=f"Extension '{extension_id}' not readable at {path}: {reason}",
            details={"extension_id": extension_id, "path": path, "reason": reason},
        )

    @classmethod
    def duplicate_id(cls, extension_id: str, path: str) -> "MalformedExtension":
        return cls(
            code=ErrorCode.EXTENSION_DUPLICATE_ID,
            message=f"Extension id '{extension_id}' already seen, ignoring {path}",
            details={"extension_id": extension_id, "path": path},
        )


class InvocationError(CaptallyError):
    """Bad command arguments. Fatal before any analysis runs."""

    @classmethod
    def unknown_category(cls, category: str, choices: list[str]) -> "InvocationError":
        return cls(
            code=ErrorCode.INVOCATION_UNKNOWN_CATEGORY,
            message=f"Unknown count category '{category}'. Choose from: {', '.join(choices)}",
            details={"category": category, "choices": choices},
        )

    @classmethod
    def unknown_order(cls, order: str, choices: list[str]) -> "InvocationError":
        return cls(
            code=ErrorCode.INVOCATION_UNKNOWN_ORDER,
            message=f"Unknown sort order '{order}'. Choose from: {', '.join(choices)}",
            details={"order": order, "choices": choices},
        )


class InternalError(CaptallyError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
