"""Tests for the capture analysis engine."""

import pytest

from captally.analysis.captures import (
    captures_by_theme_support,
    captures_by_usage,
    language_theme_support_score,
    languages_by_theme_support,
    languages_using_capture,
    themes_by_capture_support,
    themes_supporting_capture,
)
from captally.analysis.ranking import RankedEntry, SortOrder
from captally.corpus.index import CorpusIndex
from captally.corpus.models import ExtensionKind, ExtensionRecord, ManifestFormat


def _pairs(entries: list[RankedEntry]) -> list[tuple[str, int | float]]:
    return [(e.key, e.score) for e in entries]


class TestScenario:
    """Two languages, two themes."""

    def test_given_scenario_when_captures_by_usage_desc_then_keyword_then_string(
        self, scenario_index: CorpusIndex
    ) -> None:
        entries = captures_by_usage(scenario_index, SortOrder.DESC, 10)

        assert _pairs(entries) == [("keyword", 2), ("string", 1)]

    def test_given_scenario_when_themes_supporting_keyword_counted_then_two(
        self, scenario_index: CorpusIndex
    ) -> None:
        assert len(themes_supporting_capture(scenario_index, "keyword")) == 2

    def test_given_scenario_when_themes_by_capture_support_then_unused_ignored(
        self, scenario_index: CorpusIndex
    ) -> None:
        """T2's 'comment' support does not count; no language uses it."""
        entries = themes_by_capture_support(scenario_index, SortOrder.DESC, 10)

        assert _pairs(entries) == [("t2", 2), ("t1", 1)]


class TestCaptureRankings:
    """Capture-keyed rankings."""

    def test_given_include_unused_when_ranked_then_theme_only_captures_at_zero(
        self, scenario_index: CorpusIndex
    ) -> None:
        entries = captures_by_usage(scenario_index, SortOrder.DESC, 0, include_unused=True)

        assert _pairs(entries) == [("keyword", 2), ("string", 1), ("comment", 0)]

    def test_given_theme_support_when_ranked_then_counts_themes(
        self, scenario_index: CorpusIndex
    ) -> None:
        entries = captures_by_theme_support(scenario_index, SortOrder.ASC, 0)

        assert _pairs(entries) == [("comment", 1), ("string", 1), ("keyword", 2)]

    def test_given_include_unsupported_when_ranked_then_unstyled_used_captures_at_zero(
        self,
    ) -> None:
        index = CorpusIndex.build(
            [
                ExtensionRecord(
                    id="lang",
                    kind=ExtensionKind.LANGUAGE,
                    manifest_format=ManifestFormat.TOML,
                    captures_used=frozenset({"keyword", "label"}),
                ),
                ExtensionRecord(
                    id="theme",
                    kind=ExtensionKind.THEME,
                    manifest_format=ManifestFormat.TOML,
                    captures_supported=frozenset({"keyword"}),
                ),
            ]
        )

        plain = captures_by_theme_support(index, SortOrder.DESC, 0)
        full = captures_by_theme_support(index, SortOrder.DESC, 0, include_unsupported=True)

        assert _pairs(plain) == [("keyword", 1)]
        assert _pairs(full) == [("keyword", 1), ("label", 0)]

    def test_given_limit_when_ranked_then_truncated(self, scenario_index: CorpusIndex) -> None:
        assert _pairs(captures_by_usage(scenario_index, "desc", 1)) == [("keyword", 2)]


class TestMembership:
    """Membership queries and their agreement with rankings."""

    def test_given_capture_when_languages_listed_then_sorted_ids(
        self, scenario_index: CorpusIndex
    ) -> None:
        assert languages_using_capture(scenario_index, "keyword") == ["l1", "l2"]
        assert themes_supporting_capture(scenario_index, "string") == ["t2"]

    def test_given_unknown_capture_when_queried_then_empty_not_error(
        self, scenario_index: CorpusIndex
    ) -> None:
        assert languages_using_capture(scenario_index, "does.not.exist") == []
        assert themes_supporting_capture(scenario_index, "does.not.exist") == []

    def test_given_rankings_when_compared_then_scores_equal_member_counts(
        self, scenario_index: CorpusIndex
    ) -> None:
        for entry in captures_by_usage(scenario_index, SortOrder.DESC, 0):
            assert entry.score == len(languages_using_capture(scenario_index, entry.key))
        for entry in captures_by_theme_support(scenario_index, SortOrder.DESC, 0):
            assert entry.score == len(themes_supporting_capture(scenario_index, entry.key))


class TestLanguageThemeSupport:
    """Depth and breadth scoring of languages."""

    def test_given_scenario_when_scored_then_formula_applied(
        self, scenario_index: CorpusIndex
    ) -> None:
        # l1: U={keyword, string}, support 2+1=3, depth=(3/2)/2=0.75, breadth=2
        # l2: U={keyword}, support 2, depth=(2/1)/1=2, breadth=2
        assert language_theme_support_score(scenario_index, "l1") == pytest.approx(
            7 * 0.75 + 3 * 2
        )
        assert language_theme_support_score(scenario_index, "l2") == pytest.approx(7 * 2 + 3 * 2)

    def test_given_scenario_when_ranked_then_l2_first(self, scenario_index: CorpusIndex) -> None:
        entries = languages_by_theme_support(scenario_index, SortOrder.DESC, 10)

        assert [e.key for e in entries] == ["l2", "l1"]
        assert all(isinstance(e.score, float) for e in entries)

    def test_given_language_without_captures_when_scored_then_zero(self) -> None:
        """No captures: depth component is 0 and nothing supports it."""
        index = CorpusIndex.build(
            [
                ExtensionRecord(
                    id="bare", kind=ExtensionKind.LANGUAGE, manifest_format=ManifestFormat.TOML
                )
            ]
        )

        assert language_theme_support_score(index, "bare") == 0

    def test_given_no_themes_when_ranked_then_every_language_scores_zero(self) -> None:
        index = CorpusIndex.build(
            [
                ExtensionRecord(
                    id="x",
                    kind=ExtensionKind.LANGUAGE,
                    manifest_format=ManifestFormat.TOML,
                    captures_used=frozenset({"keyword"}),
                )
            ]
        )

        assert _pairs(languages_by_theme_support(index, SortOrder.DESC, 10)) == [("x", 0.0)]


class TestThemeCaptureSupport:
    """Theme scores are bounded by the used capture set."""

    def test_given_scenario_when_scored_then_within_bounds(
        self, scenario_index: CorpusIndex
    ) -> None:
        for entry in themes_by_capture_support(scenario_index, SortOrder.DESC, 0):
            record = scenario_index.records[entry.key]
            assert 0 <= entry.score <= len(record.captures_supported)
            assert entry.score <= len(scenario_index.used_captures)

    def test_given_same_index_when_queried_twice_then_identical(
        self, scenario_index: CorpusIndex
    ) -> None:
        first = themes_by_capture_support(scenario_index, SortOrder.ASC, 0)
        second = themes_by_capture_support(scenario_index, SortOrder.ASC, 0)

        assert first == second


class TestLanguageThemeSupportTies:
    """Equal scores reached through different capture counts."""

    @pytest.fixture
    def tied_index(self) -> CorpusIndex:
        """Seven themes; 'a' and 'b' both score 7 * 11/25 + 3 * 7.

        a: 5 captures, a1 styled by every theme, a2..a5 by t1 only (support 11).
        b: 15 captures, b1..b14 styled by every theme, b15 by t1 only (support 99).
        """
        a_captures = [f"a{i}" for i in range(1, 6)]
        b_captures = [f"b{i}" for i in range(1, 16)]
        themes = [
            ExtensionRecord(
                id="t1",
                kind=ExtensionKind.THEME,
                manifest_format=ManifestFormat.JSON,
                captures_supported=frozenset(a_captures + b_captures),
            )
        ]
        themes += [
            ExtensionRecord(
                id=f"t{i}",
                kind=ExtensionKind.THEME,
                manifest_format=ManifestFormat.JSON,
                captures_supported=frozenset(["a1", *b_captures[:14]]),
            )
            for i in range(2, 8)
        ]
        languages = [
            ExtensionRecord(
                id=ext_id,
                kind=ExtensionKind.LANGUAGE,
                manifest_format=ManifestFormat.TOML,
                captures_used=frozenset(captures),
            )
            for ext_id, captures in (("b", b_captures), ("a", a_captures))
        ]
        return CorpusIndex.build(languages + themes)

    def test_given_equal_exact_scores_when_scored_then_identical_floats(
        self, tied_index: CorpusIndex
    ) -> None:
        # When
        score_a = language_theme_support_score(tied_index, "a")
        score_b = language_theme_support_score(tied_index, "b")

        # Then
        assert score_a == score_b
        assert score_a == pytest.approx(24.08)

    @pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
    def test_given_equal_scores_when_ranked_then_ordered_by_key(
        self, tied_index: CorpusIndex, order: SortOrder
    ) -> None:
        """Ties fall back to key order in both directions."""
        entries = languages_by_theme_support(tied_index, order, 0)

        assert [e.key for e in entries] == ["a", "b"]
