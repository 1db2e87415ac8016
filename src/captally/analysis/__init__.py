"""Counting and capture analysis over a CorpusIndex."""

from captally.analysis.captures import (
    captures_by_theme_support,
    captures_by_usage,
    language_theme_support_score,
    languages_by_theme_support,
    languages_using_capture,
    themes_by_capture_support,
    themes_supporting_capture,
)
from captally.analysis.counting import CountCategory, count, filter_records
from captally.analysis.ranking import RankedEntry, SortOrder, rank

__all__ = [
    "CountCategory",
    "RankedEntry",
    "SortOrder",
    "captures_by_theme_support",
    "captures_by_usage",
    "count",
    "filter_records",
    "language_theme_support_score",
    "languages_by_theme_support",
    "languages_using_capture",
    "rank",
    "themes_by_capture_support",
    "themes_supporting_capture",
]
