"""Record fixtures for analysis tests."""

import pytest

from captally.corpus.index import CorpusIndex
from captally.corpus.models import (
    ExtensionKind,
    ExtensionRecord,
    GitProvider,
    GitProviderKind,
    ManifestFormat,
    ThemeSchema,
)


@pytest.fixture
def scenario_records() -> list[ExtensionRecord]:
    """L1 uses keyword+string, L2 keyword; T1 styles keyword, T2 keyword+string+comment."""
    github = GitProvider(GitProviderKind.GITHUB)
    return [
        ExtensionRecord(
            id="l1",
            kind=ExtensionKind.LANGUAGE,
            manifest_format=ManifestFormat.TOML,
            git_provider=github,
            captures_used=frozenset({"keyword", "string"}),
        ),
        ExtensionRecord(
            id="l2",
            kind=ExtensionKind.LANGUAGE,
            manifest_format=ManifestFormat.JSON,
            git_provider=GitProvider(GitProviderKind.OTHER, "codeberg.org"),
            captures_used=frozenset({"keyword"}),
        ),
        ExtensionRecord(
            id="t1",
            kind=ExtensionKind.THEME,
            manifest_format=ManifestFormat.TOML,
            git_provider=github,
            theme_schema=ThemeSchema.V2,
            captures_supported=frozenset({"keyword"}),
        ),
        ExtensionRecord(
            id="t2",
            kind=ExtensionKind.THEME,
            manifest_format=ManifestFormat.TOML,
            theme_schema=ThemeSchema.V1,
            captures_supported=frozenset({"keyword", "string", "comment"}),
        ),
    ]


@pytest.fixture
def scenario_index(scenario_records: list[ExtensionRecord]) -> CorpusIndex:
    return CorpusIndex.build(scenario_records)
