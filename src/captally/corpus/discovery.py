"""Corpus discovery: locate extension directories and read their raw files.

Two layouts are recognised:

Registry layout
    ``<root>/extensions.toml`` maps each extension id to a table with a
    ``submodule`` path and an optional ``path`` inside it. ``<root>/.gitmodules``
    (if present) provides each submodule's clone URL, used when a manifest has
    no ``repository`` field.

Flat layout
    Every immediate sub-directory of ``<root>`` holding a manifest is an
    extension named after its directory.

Reading is the only I/O in a run. It is independent per extension and may run
on a thread pool; results are returned sorted by id.
"""

from __future__ import annotations

import configparser
import tomllib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

import structlog

from captally.config.constants import (
    GITMODULES_FILENAME,
    LANGUAGE_CONFIG_FILENAME,
    LANGUAGES_DIR,
    MANIFEST_FILENAMES,
    THEME_FILE_SUFFIX,
    THEMES_DIR,
)
from captally.config.models import CorpusConfig
from captally.core.errors import MalformedExtension
from captally.corpus.models import ExtensionSource, LanguageSource

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ExtensionLocation:
    """Where one extension lives, before anything is read."""

    extension_id: str
    path: Path
    repository_url: str | None = None


@dataclass
class DiscoveryResult:
    sources: list[ExtensionSource]
    failures: list[MalformedExtension]


def locate_extensions(root: Path, config: CorpusConfig) -> list[ExtensionLocation]:
    """List extension directories under a corpus root.

    Raises:
        FileNotFoundError: If root is not a directory.
        tomllib.TOMLDecodeError: If the registry file exists but is not TOML.
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Corpus root is not a directory: {root}")

    registry = root / config.registry_file
    if registry.is_file():
        return _locate_from_registry(root, registry)
    return _locate_flat(root)


def _locate_from_registry(root: Path, registry: Path) -> list[ExtensionLocation]:
    entries = tomllib.loads(registry.read_text(encoding="utf-8"))
    submodule_urls = _read_gitmodules(root / GITMODULES_FILENAME)

    locations: list[ExtensionLocation] = []
    for ext_id, entry in entries.items():
        if not isinstance(entry, dict) or not isinstance(entry.get("submodule"), str):
            log.warning("registry_entry_invalid", extension_id=ext_id)
            # Still listed so the skip is reported, not silently lost
            locations.append(ExtensionLocation(ext_id, root / ext_id))
            continue
        submodule = entry["submodule"]
        subpath = entry.get("path")
        if not isinstance(subpath, str):
            subpath = ""
        locations.append(
            ExtensionLocation(
                extension_id=ext_id,
                path=root / submodule / subpath,
                repository_url=submodule_urls.get(submodule.rstrip("/")),
            )
        )
    log.debug("registry_loaded", registry=str(registry), extensions=len(locations))
    return locations


def _locate_flat(root: Path) -> list[ExtensionLocation]:
    locations = [
        ExtensionLocation(child.name, child)
        for child in sorted(root.iterdir())
        if child.is_dir() and any((child / name).is_file() for name in MANIFEST_FILENAMES)
    ]
    log.debug("flat_layout_scanned", root=str(root), extensions=len(locations))
    return locations


def _read_gitmodules(path: Path) -> dict[str, str]:
    """Map submodule path -> url from a .gitmodules file."""
    if not path.is_file():
        return {}
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        log.warning("gitmodules_unparsable", path=str(path), error=str(e))
        return {}
    urls: dict[str, str] = {}
    for section in parser.sections():
        sub_path = parser.get(section, "path", fallback=None)
        url = parser.get(section, "url", fallback=None)
        if sub_path and url:
            urls[sub_path.rstrip("/")] = url
    return urls


def read_extension(location: ExtensionLocation, config: CorpusConfig) -> ExtensionSource:
    """Read every file the builder needs for one extension.

    Raises:
        MalformedExtension: If the directory or its manifest is missing or unreadable.
    """
    ext_id = location.extension_id
    path = location.path
    if not path.is_dir():
        raise MalformedExtension.not_found(ext_id, str(path), "directory does not exist")

    manifest_path = next(
        (path / name for name in MANIFEST_FILENAMES if (path / name).is_file()), None
    )
    if manifest_path is None:
        raise MalformedExtension.not_found(ext_id, str(path), "no manifest file")

    try:
        manifest_text = manifest_path.read_text(encoding="utf-8")
        theme_texts = _read_themes(path / THEMES_DIR)
        languages = _read_languages(path / LANGUAGES_DIR, config.query_files)
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedExtension.not_found(ext_id, str(path), str(e)) from e

    return ExtensionSource(
        extension_id=ext_id,
        path=str(path),
        manifest_filename=manifest_path.name,
        manifest_text=manifest_text,
        theme_texts=theme_texts,
        languages=languages,
        fallback_repository=location.repository_url,
    )


def _read_themes(themes_dir: Path) -> dict[str, str]:
    if not themes_dir.is_dir():
        return {}
    return {
        p.name: p.read_text(encoding="utf-8")
        for p in sorted(themes_dir.iterdir())
        if p.is_file() and p.suffix == THEME_FILE_SUFFIX
    }


def _read_languages(languages_dir: Path, query_files: list[str]) -> tuple[LanguageSource, ...]:
    if not languages_dir.is_dir():
        return ()
    languages: list[LanguageSource] = []
    for lang_dir in sorted(languages_dir.iterdir()):
        if not lang_dir.is_dir():
            continue
        config_path = lang_dir / LANGUAGE_CONFIG_FILENAME
        config_text = config_path.read_text(encoding="utf-8") if config_path.is_file() else None
        query_texts: dict[str, str] = {}
        for name in query_files:
            query_path = lang_dir / name
            if not query_path.is_file():
                continue
            try:
                query_texts[name] = query_path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                log.warning("query_file_undecodable", path=str(query_path), error=str(e))
        languages.append(LanguageSource(lang_dir.name, config_text, query_texts))
    return tuple(languages)


def _read_one(
    location: ExtensionLocation, config: CorpusConfig
) -> ExtensionSource | MalformedExtension:
    try:
        return read_extension(location, config)
    except MalformedExtension as e:
        return e


def discover_sources(root: Path, config: CorpusConfig) -> DiscoveryResult:
    """Locate and read every extension under root.

    Unreadable extensions are returned as failures rather than raised.
    """
    locations = locate_extensions(root, config)

    if config.max_workers > 1 and len(locations) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            outcomes = list(pool.map(lambda loc: _read_one(loc, config), locations))
    else:
        outcomes = [_read_one(loc, config) for loc in locations]

    sources = sorted(
        (o for o in outcomes if isinstance(o, ExtensionSource)),
        key=lambda s: (s.extension_id, s.path),
    )
    failures = [o for o in outcomes if isinstance(o, MalformedExtension)]
    return DiscoveryResult(sources=sources, failures=failures)
