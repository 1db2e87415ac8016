"""Configuration constants.

This module contains values that should NOT be user-configurable: file-format
markers of the extension ecosystem and the fixed weights of the scoring formula.

For configurable values, see models.py (CorpusConfig, AnalysisConfig, etc.).
"""

# =============================================================================
# Extension Layout
# =============================================================================

MANIFEST_FILENAMES = ("extension.toml", "extension.json")
"""Manifest file names, in lookup order."""

LANGUAGES_DIR = "languages"
"""Sub-directory holding one directory per language (config.toml + query files)."""

LANGUAGE_CONFIG_FILENAME = "config.toml"
"""Per-language configuration file."""

THEMES_DIR = "themes"
"""Sub-directory holding theme family JSON files."""

THEME_FILE_SUFFIX = ".json"
"""Only files with this suffix under THEMES_DIR are theme files."""

GITMODULES_FILENAME = ".gitmodules"
"""Submodule table of a registry checkout; supplies fallback repository URLs."""

# =============================================================================
# Theme Schema Markers
# =============================================================================
# The top-level "$schema" value identifies the theme family format.

THEME_SCHEMA_KEY = "$schema"

THEME_SCHEMA_V1_URL = "https://zed.dev/schema/themes/v0.1.0.json"
THEME_SCHEMA_V2_URL = "https://zed.dev/schema/themes/v0.2.0.json"

# =============================================================================
# Git Hosts
# =============================================================================

GITHUB_HOST = "github.com"
GITLAB_HOST = "gitlab.com"

# =============================================================================
# Capture Extraction
# =============================================================================

CAPTURE_NAME_QUERY = "(capture (identifier) @name)"
"""tree-sitter-query pattern selecting the identifier of every @capture."""

PRIVATE_CAPTURE_PREFIX = "_"
"""Captures starting with this prefix are query-internal helpers, not highlights."""

# =============================================================================
# Scoring
# =============================================================================

DEPTH_WEIGHT = 7
"""Weight of the per-capture theme support depth in languages-by-theme-support."""

BREADTH_WEIGHT = 3
"""Weight of the theme support breadth in languages-by-theme-support."""
