"""Corpus Index: cross-referenced, read-only lookups over a set of records.

Built once per run and passed by reference to every query. All mappings are
derived from the records alone, so equal record sets give equal indexes
regardless of input order.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from captally.corpus.models import ExtensionRecord


def _freeze(mapping: Mapping[str, set[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({key: frozenset(ids) for key, ids in sorted(mapping.items())})


@dataclass(frozen=True)
class CorpusIndex:
    """Lookup structures for capture analysis.

    Attributes:
        records: Every record, keyed by id.
        capture_to_languages: Capture name -> ids of languages using it.
        capture_to_themes: Capture name -> ids of themes supporting it.
        used_captures: Every capture used by at least one language.
    """

    records: Mapping[str, ExtensionRecord]
    capture_to_languages: Mapping[str, frozenset[str]]
    capture_to_themes: Mapping[str, frozenset[str]]
    used_captures: frozenset[str]

    @classmethod
    def build(cls, records: Iterable[ExtensionRecord]) -> CorpusIndex:
        """Aggregate records into an index.

        Raises:
            ValueError: If two records share an id.
        """
        by_id: dict[str, ExtensionRecord] = {}
        to_languages: defaultdict[str, set[str]] = defaultdict(set)
        to_themes: defaultdict[str, set[str]] = defaultdict(set)

        for record in records:
            if record.id in by_id:
                raise ValueError(f"duplicate extension id: {record.id}")
            by_id[record.id] = record
            if record.is_language:
                for capture in record.captures_used:
                    to_languages[capture].add(record.id)
            else:
                for capture in record.captures_supported:
                    to_themes[capture].add(record.id)

        return cls(
            records=MappingProxyType(dict(sorted(by_id.items()))),
            capture_to_languages=_freeze(to_languages),
            capture_to_themes=_freeze(to_themes),
            used_captures=frozenset(to_languages),
        )

    @property
    def languages(self) -> list[ExtensionRecord]:
        return [r for r in self.records.values() if r.is_language]

    @property
    def themes(self) -> list[ExtensionRecord]:
        return [r for r in self.records.values() if r.is_theme]

    def languages_using(self, capture: str) -> frozenset[str]:
        """Ids of languages using a capture; empty for unknown captures."""
        return self.capture_to_languages.get(capture, frozenset())

    def themes_supporting(self, capture: str) -> frozenset[str]:
        """Ids of themes supporting a capture; empty for unknown captures."""
        return self.capture_to_themes.get(capture, frozenset())


def build_index(records: Iterable[ExtensionRecord]) -> CorpusIndex:
    return CorpusIndex.build(records)
