"""Manifest parsing and repository host classification.

The manifest format is decided by which parser accepts the text, not by the
file name: a JSON document saved as ``extension.toml`` is still classified as
JSON. TOML is tried first because it is the current manifest format.
"""

from __future__ import annotations

import json
import re
import tomllib
from typing import Any
from urllib.parse import urlsplit

from captally.config.constants import GITHUB_HOST, GITLAB_HOST
from captally.corpus.models import GitProvider, GitProviderKind, ManifestFormat

# git@github.com:owner/repo.git
_SCP_LIKE_URL = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):")


class ManifestParseError(ValueError):
    """Neither TOML nor JSON accepted the manifest text."""

    def __init__(self, toml_error: str, json_error: str) -> None:
        self.toml_error = toml_error
        self.json_error = json_error
        super().__init__(f"TOML: {toml_error}; JSON: {json_error}")


def parse_manifest_text(text: str) -> tuple[ManifestFormat, Any]:
    """Parse manifest text into a value tree, trying TOML then JSON.

    Returns:
        The format that succeeded and the parsed value. TOML always yields a
        dict; JSON may yield any value, the caller validates the shape.

    Raises:
        ManifestParseError: If both parsers reject the text.
    """
    try:
        return ManifestFormat.TOML, tomllib.loads(text)
    except tomllib.TOMLDecodeError as toml_err:
        try:
            return ManifestFormat.JSON, json.loads(text)
        except json.JSONDecodeError as json_err:
            raise ManifestParseError(str(toml_err), str(json_err)) from json_err


def repository_host(url: str | None) -> str | None:
    """Extract the lower-cased host of a repository URL.

    Understands scheme URLs (``https://``, ``ssh://``, ``git://``) and
    scp-like SSH addresses (``git@host:owner/repo``).
    """
    if not url:
        return None
    url = url.strip()
    if m := _SCP_LIKE_URL.match(url):
        return m.group("host").lower()
    if "://" not in url:
        # Bare "github.com/owner/repo"
        url = "https://" + url
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def detect_git_provider(url: str | None) -> GitProvider:
    """Classify a repository URL as GitHub, GitLab, Other(host) or None."""
    host = repository_host(url)
    if host is None:
        return GitProvider.none()
    if host == GITHUB_HOST or host.endswith("." + GITHUB_HOST):
        return GitProvider(GitProviderKind.GITHUB)
    if host == GITLAB_HOST or host.endswith("." + GITLAB_HOST):
        return GitProvider(GitProviderKind.GITLAB)
    return GitProvider(GitProviderKind.OTHER, host)
