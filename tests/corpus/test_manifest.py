"""Tests for manifest trial-parsing and git provider detection."""

import pytest

from captally.corpus.manifest import (
    ManifestParseError,
    detect_git_provider,
    parse_manifest_text,
    repository_host,
)
from captally.corpus.models import GitProviderKind, ManifestFormat


class TestParseManifestText:
    """Format is decided by which parser accepts the text."""

    def test_given_toml_text_when_parsed_then_toml(self) -> None:
        fmt, value = parse_manifest_text('id = "zig"\nname = "Zig"\n')

        assert fmt is ManifestFormat.TOML
        assert value == {"id": "zig", "name": "Zig"}

    def test_given_json_text_when_parsed_then_json(self) -> None:
        fmt, value = parse_manifest_text('{"id": "zig", "version": "1.0.0"}')

        assert fmt is ManifestFormat.JSON
        assert value == {"id": "zig", "version": "1.0.0"}

    def test_given_json_array_when_parsed_then_value_returned_unvalidated(self) -> None:
        """Shape checks belong to the builder, not the parser."""
        fmt, value = parse_manifest_text("[1, 2]")

        assert fmt is ManifestFormat.JSON
        assert value == [1, 2]

    def test_given_empty_text_when_parsed_then_empty_toml_table(self) -> None:
        fmt, value = parse_manifest_text("")

        assert fmt is ManifestFormat.TOML
        assert value == {}

    def test_given_garbage_when_parsed_then_both_errors_reported(self) -> None:
        with pytest.raises(ManifestParseError) as exc_info:
            parse_manifest_text("id = = {not valid")

        assert exc_info.value.toml_error
        assert exc_info.value.json_error


class TestRepositoryHost:
    """Host extraction from repository URLs."""

    @pytest.mark.parametrize(
        ("url", "host"),
        [
            ("https://github.com/owner/repo", "github.com"),
            ("https://GitHub.com/owner/repo.git", "github.com"),
            ("git@gitlab.com:owner/repo.git", "gitlab.com"),
            ("ssh://git@codeberg.org/owner/repo", "codeberg.org"),
            ("sr.ht/~owner/repo", "sr.ht"),
            ("", None),
            (None, None),
        ],
    )
    def test_given_url_when_host_extracted_then_lowercase_host(
        self, url: str | None, host: str | None
    ) -> None:
        assert repository_host(url) == host


class TestDetectGitProvider:
    """Provider classification tests."""

    @pytest.mark.parametrize(
        ("url", "kind", "label"),
        [
            ("https://github.com/zed-industries/zed", GitProviderKind.GITHUB, "github"),
            ("https://gist.github.com/x", GitProviderKind.GITHUB, "github"),
            ("https://gitlab.com/owner/repo", GitProviderKind.GITLAB, "gitlab"),
            ("https://codeberg.org/owner/repo", GitProviderKind.OTHER, "codeberg.org"),
            (None, GitProviderKind.NONE, "none"),
        ],
    )
    def test_given_url_when_detected_then_bucketed(
        self, url: str | None, kind: GitProviderKind, label: str
    ) -> None:
        provider = detect_git_provider(url)

        assert provider.kind is kind
        assert provider.label == label

    def test_given_lookalike_host_when_detected_then_other(self) -> None:
        """Only github.com and its subdomains count as GitHub."""
        provider = detect_git_provider("https://notgithub.com/owner/repo")

        assert provider.kind is GitProviderKind.OTHER
        assert provider.host == "notgithub.com"
