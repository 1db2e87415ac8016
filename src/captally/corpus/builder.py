"""Extension Record Builder: one ExtensionSource in, one ExtensionRecord out."""

from __future__ import annotations

import tomllib
from typing import Any

import structlog

from captally.core.errors import MalformedExtension
from captally.corpus.manifest import (
    ManifestParseError,
    detect_git_provider,
    parse_manifest_text,
)
from captally.corpus.models import (
    ExtensionKind,
    ExtensionRecord,
    ExtensionSource,
    LanguageSource,
    ThemeSchema,
)
from captally.corpus.queries import extract_capture_names
from captally.corpus.themes import combine_schemas, scan_theme_text

log = structlog.get_logger()

# Manifest keys whose presence alone says what an extension provides
_LANGUAGE_HINT_KEYS = ("languages", "grammars")
_THEME_HINT_KEYS = ("themes",)

_STRING_FIELDS = ("id", "name", "version", "repository")


def build_record(source: ExtensionSource) -> ExtensionRecord:
    """Normalize one extension into a record.

    Raises:
        MalformedExtension: If the manifest does not parse, is not a mapping,
            has a non-string id/name/version/repository, or nothing tells
            whether the extension is a theme or a language.
    """
    ext_id = source.extension_id
    try:
        manifest_format, manifest = parse_manifest_text(source.manifest_text)
    except ManifestParseError as e:
        raise MalformedExtension.unparsable_manifest(ext_id, str(e)) from e

    if not isinstance(manifest, dict):
        raise MalformedExtension.not_a_mapping(ext_id, type(manifest).__name__)

    for key in _STRING_FIELDS:
        value = manifest.get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedExtension.untyped_field(ext_id, key, type(value).__name__)

    kind = _resolve_kind(source, manifest)
    repository = manifest.get("repository") or source.fallback_repository

    common: dict[str, Any] = {
        "id": ext_id,
        "kind": kind,
        "manifest_format": manifest_format,
        "git_provider": detect_git_provider(repository),
        "name": manifest.get("name"),
        "version": manifest.get("version"),
        "repository": repository,
        "source_path": source.path,
    }

    if kind is ExtensionKind.LANGUAGE:
        names, captures = _scan_languages(ext_id, source.languages)
        record = ExtensionRecord(
            **common,
            languages=tuple(names),
            captures_used=frozenset(captures),
        )
    else:
        schema, theme_names, captures = _scan_themes(source.theme_texts)
        record = ExtensionRecord(
            **common,
            theme_schema=schema,
            themes=tuple(theme_names),
            captures_supported=frozenset(captures),
        )

    log.debug(
        "extension_built",
        extension_id=ext_id,
        kind=kind.value,
        manifest=manifest_format.value,
        captures=len(record.captures_used) + len(record.captures_supported),
    )
    return record


def _resolve_kind(source: ExtensionSource, manifest: dict[str, Any]) -> ExtensionKind:
    # Payload on disk wins over manifest hints; languages before themes
    if source.languages:
        return ExtensionKind.LANGUAGE
    if source.theme_texts:
        return ExtensionKind.THEME
    if any(manifest.get(key) for key in _LANGUAGE_HINT_KEYS):
        return ExtensionKind.LANGUAGE
    if any(manifest.get(key) for key in _THEME_HINT_KEYS):
        return ExtensionKind.THEME
    raise MalformedExtension.missing_kind(source.extension_id)


def _scan_languages(
    ext_id: str, languages: tuple[LanguageSource, ...]
) -> tuple[list[str], set[str]]:
    names: list[str] = []
    captures: set[str] = set()
    for language in languages:
        names.append(_language_name(ext_id, language))
        for filename, text in sorted(language.query_texts.items()):
            found = extract_capture_names(text)
            log.debug(
                "query_scanned",
                extension_id=ext_id,
                language=language.directory,
                file=filename,
                captures=len(found),
            )
            captures |= found
    return names, captures


def _language_name(ext_id: str, language: LanguageSource) -> str:
    """Display name from config.toml, falling back to the directory name."""
    if language.config_text is None:
        return language.directory
    try:
        config = tomllib.loads(language.config_text)
    except tomllib.TOMLDecodeError as e:
        log.warning(
            "language_config_unparsable",
            extension_id=ext_id,
            language=language.directory,
            error=str(e),
        )
        return language.directory
    name = config.get("name")
    return name if isinstance(name, str) and name else language.directory


def _scan_themes(theme_texts: dict[str, str]) -> tuple[ThemeSchema, list[str], set[str]]:
    schemas: list[ThemeSchema] = []
    theme_names: list[str] = []
    captures: set[str] = set()
    for filename, text in sorted(theme_texts.items()):
        scan = scan_theme_text(text, filename=filename)
        schemas.append(scan.schema)
        theme_names.extend(scan.theme_names)
        captures |= scan.captures
    return combine_schemas(schemas), theme_names, captures
