"""Counting Engine: tallies of record attributes, plus attribute filtering."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import StrEnum

from captally.core.errors import InvocationError
from captally.corpus.models import (
    ExtensionKind,
    ExtensionRecord,
    ManifestFormat,
    ThemeSchema,
)


class CountCategory(StrEnum):
    BY_TYPE = "by-type"
    BY_MANIFEST = "by-manifest"
    BY_GIT_PROVIDER = "by-git-provider"
    BY_THEME_SCHEMA = "by-theme-schema"

    @classmethod
    def parse(cls, value: str) -> CountCategory:
        """Parse a category name.

        Raises:
            InvocationError: For unknown names.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvocationError.unknown_category(value, [c.value for c in cls]) from None


def _tally(labels: Iterable[str], buckets: Iterable[str] = ()) -> dict[str, int]:
    """Count labels; every name in buckets appears even when its count is 0."""
    counts = Counter({bucket: 0 for bucket in buckets})
    counts.update(labels)
    return dict(sorted(counts.items()))


def count_by_type(records: Iterable[ExtensionRecord]) -> dict[str, int]:
    return _tally((r.kind.value for r in records), [k.value for k in ExtensionKind])


def count_by_manifest(records: Iterable[ExtensionRecord]) -> dict[str, int]:
    return _tally((r.manifest_format.value for r in records), [m.value for m in ManifestFormat])


def count_by_git_provider(records: Iterable[ExtensionRecord]) -> dict[str, int]:
    # Open-ended: each unrecognised host is its own bucket
    return _tally(r.git_provider.label for r in records)


def count_by_theme_schema(records: Iterable[ExtensionRecord]) -> dict[str, int]:
    """Only theme records are counted."""
    return _tally(
        (r.theme_schema.value for r in records if r.is_theme and r.theme_schema is not None),
        [s.value for s in ThemeSchema],
    )


_COUNTERS = {
    CountCategory.BY_TYPE: count_by_type,
    CountCategory.BY_MANIFEST: count_by_manifest,
    CountCategory.BY_GIT_PROVIDER: count_by_git_provider,
    CountCategory.BY_THEME_SCHEMA: count_by_theme_schema,
}


def count(records: Iterable[ExtensionRecord], category: CountCategory | str) -> dict[str, int]:
    """Tally records for one category, bucket label -> count.

    Raises:
        InvocationError: If category is an unknown name.
    """
    if not isinstance(category, CountCategory):
        category = CountCategory.parse(category)
    return _COUNTERS[category](list(records))


def filter_records(
    records: Iterable[ExtensionRecord],
    *,
    kind: ExtensionKind | None = None,
    manifest_format: ManifestFormat | None = None,
    git_provider: str | None = None,
    theme_schema: ThemeSchema | None = None,
) -> list[str]:
    """Ids of records matching every given criterion, sorted.

    git_provider matches a bucket label ('github', 'gitlab', 'none' or a host).
    A theme_schema criterion excludes every language record.
    """
    matched: list[str] = []
    for record in records:
        if kind is not None and record.kind is not kind:
            continue
        if manifest_format is not None and record.manifest_format is not manifest_format:
            continue
        if git_provider is not None and record.git_provider.label != git_provider.lower():
            continue
        if theme_schema is not None and (
            not record.is_theme or record.theme_schema is not theme_schema
        ):
            continue
        matched.append(record.id)
    return sorted(matched)
