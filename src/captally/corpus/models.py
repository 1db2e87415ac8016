"""Typed records for one scanned extension corpus.

An ExtensionSource is the raw, unparsed content of one extension directory as
read from disk. The builder turns it into an ExtensionRecord, the normalized
shape every query runs against.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


# ============================================================================
# ENUMS
# ============================================================================


class ExtensionKind(StrEnum):
    """What an extension contributes."""

    LANGUAGE = "language"
    THEME = "theme"


class ManifestFormat(StrEnum):
    """Format the manifest text actually parsed as (not its file name)."""

    JSON = "json"
    TOML = "toml"


class ThemeSchema(StrEnum):
    """Theme family format, detected from the top-level $schema marker.

    INVALID covers unparsable files and missing or unrecognised markers.
    """

    INVALID = "invalid"
    V1 = "v1"
    V2 = "v2"


class GitProviderKind(StrEnum):
    GITHUB = "github"
    GITLAB = "gitlab"
    OTHER = "other"
    NONE = "none"


# ============================================================================
# VALUE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class GitProvider:
    """Hosting provider of an extension's repository.

    ``host`` is set only for OTHER, where it names the unrecognised host.
    """

    kind: GitProviderKind
    host: str | None = None

    @classmethod
    def none(cls) -> GitProvider:
        return cls(GitProviderKind.NONE)

    @property
    def label(self) -> str:
        """Bucket label: 'github', 'gitlab', 'none', or the host for OTHER."""
        if self.kind is GitProviderKind.OTHER and self.host:
            return self.host
        return self.kind.value


@dataclass(frozen=True, slots=True)
class LanguageSource:
    """Raw files of one ``languages/<name>/`` directory."""

    directory: str
    config_text: str | None = None
    query_texts: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExtensionSource:
    """Raw files of one extension directory, before any parsing."""

    extension_id: str
    path: str
    manifest_filename: str
    manifest_text: str
    theme_texts: dict[str, str] = field(default_factory=dict)
    languages: tuple[LanguageSource, ...] = ()
    fallback_repository: str | None = None


# ============================================================================
# RECORDS
# ============================================================================


@dataclass(frozen=True, slots=True)
class ExtensionRecord:
    """Normalized view of one extension.

    ``kind`` decides which capture set may be populated: languages carry
    ``captures_used``, themes carry ``captures_supported`` and ``theme_schema``.
    """

    id: str
    kind: ExtensionKind
    manifest_format: ManifestFormat
    git_provider: GitProvider = field(default_factory=GitProvider.none)
    theme_schema: ThemeSchema | None = None
    captures_used: frozenset[str] = frozenset()
    captures_supported: frozenset[str] = frozenset()
    name: str | None = None
    version: str | None = None
    repository: str | None = None
    source_path: str | None = None
    languages: tuple[str, ...] = ()
    themes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is ExtensionKind.LANGUAGE:
            if self.captures_supported:
                raise ValueError(f"language '{self.id}' cannot support theme captures")
            if self.theme_schema is not None:
                raise ValueError(f"language '{self.id}' cannot have a theme schema")
        elif self.captures_used:
            raise ValueError(f"theme '{self.id}' cannot use captures")
        # Accept any iterable of names, store as frozenset
        object.__setattr__(self, "captures_used", frozenset(self.captures_used))
        object.__setattr__(self, "captures_supported", frozenset(self.captures_supported))
        if self.kind is ExtensionKind.THEME and self.theme_schema is None:
            object.__setattr__(self, "theme_schema", ThemeSchema.INVALID)

    @property
    def is_language(self) -> bool:
        return self.kind is ExtensionKind.LANGUAGE

    @property
    def is_theme(self) -> bool:
        return self.kind is ExtensionKind.THEME

    def to_dict(self) -> dict[str, Any]:
        """Serialize for `captally show`."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "kind": self.kind.value,
            "manifest_format": self.manifest_format.value,
            "git_provider": self.git_provider.label,
            "repository": self.repository,
            "source_path": self.source_path,
        }
        if self.is_language:
            data["languages"] = list(self.languages)
            data["captures_used"] = sorted(self.captures_used)
        else:
            data["theme_schema"] = self.theme_schema.value if self.theme_schema else None
            data["themes"] = list(self.themes)
            data["captures_supported"] = sorted(self.captures_supported)
        return data
