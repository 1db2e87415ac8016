"""Capture Analysis Engine.

Every query is a pure function of a CorpusIndex and its parameters. Ranking
queries return RankedEntry rows (see ranking.py for order, ties and limit);
membership queries return sorted extension ids. Unknown capture names are not
errors: they simply have no languages and no themes.
"""

from __future__ import annotations

from fractions import Fraction

from captally.analysis.ranking import RankedEntry, SortOrder, rank
from captally.config.constants import BREADTH_WEIGHT, DEPTH_WEIGHT
from captally.corpus.index import CorpusIndex


def captures_by_usage(
    index: CorpusIndex,
    order: SortOrder | str,
    limit: int,
    *,
    include_unused: bool = False,
) -> list[RankedEntry]:
    """Captures ranked by the number of language extensions using them.

    With include_unused, captures only themes know about are listed with 0.
    """
    scores: dict[str, int] = {c: len(ids) for c, ids in index.capture_to_languages.items()}
    if include_unused:
        for capture in index.capture_to_themes:
            scores.setdefault(capture, 0)
    return rank(scores, order, limit)


def captures_by_theme_support(
    index: CorpusIndex,
    order: SortOrder | str,
    limit: int,
    *,
    include_unsupported: bool = False,
) -> list[RankedEntry]:
    """Captures ranked by the number of theme extensions styling them.

    With include_unsupported, used captures no theme styles are listed with 0.
    """
    scores: dict[str, int] = {c: len(ids) for c, ids in index.capture_to_themes.items()}
    if include_unsupported:
        for capture in index.used_captures:
            scores.setdefault(capture, 0)
    return rank(scores, order, limit)


def themes_supporting_capture(index: CorpusIndex, capture: str) -> list[str]:
    return sorted(index.themes_supporting(capture))


def languages_using_capture(index: CorpusIndex, capture: str) -> list[str]:
    return sorted(index.languages_using(capture))


def language_theme_support_score(index: CorpusIndex, language_id: str) -> float:
    """Score one language by how well themes cover the captures it uses.

    With U the captures the language uses and N = |U|:
        depth   = mean number of themes supporting each capture in U
        breadth = number of themes supporting at least one capture in U
        score   = DEPTH_WEIGHT * depth / N + BREADTH_WEIGHT * breadth

    A language using no captures scores 0 on depth. The sum is exact and
    rounded to float once, so equal scores compare equal in rankings.
    """
    used = index.records[language_id].captures_used
    n = len(used)

    supporters: set[str] = set()
    total_support = 0
    for capture in used:
        themes = index.themes_supporting(capture)
        total_support += len(themes)
        supporters |= themes

    depth_component = Fraction(total_support, n * n) if n else Fraction(0)
    return float(DEPTH_WEIGHT * depth_component + BREADTH_WEIGHT * len(supporters))


def languages_by_theme_support(
    index: CorpusIndex,
    order: SortOrder | str,
    limit: int,
) -> list[RankedEntry]:
    """Language extensions ranked by depth and breadth of theme support."""
    scores = {
        record.id: language_theme_support_score(index, record.id) for record in index.languages
    }
    return rank(scores, order, limit)


def themes_by_capture_support(
    index: CorpusIndex,
    order: SortOrder | str,
    limit: int,
) -> list[RankedEntry]:
    """Theme extensions ranked by how many *used* captures they style.

    Captures no language uses do not count toward a theme's score.
    """
    scores = {
        record.id: len(record.captures_supported & index.used_captures) for record in index.themes
    }
    return rank(scores, order, limit)
