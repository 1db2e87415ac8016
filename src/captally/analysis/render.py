"""Result Formatter: text lines and JSON payloads for query results."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from captally.analysis.ranking import RankedEntry
from captally.core.formatting import format_score


def render_counts(counts: Mapping[str, int]) -> list[str]:
    """One ``label: count`` line per bucket, sorted by label."""
    return [f"{label}: {counts[label]}" for label in sorted(counts)]


def render_ranking(entries: list[RankedEntry]) -> list[str]:
    """One ``key: score`` line per entry, in ranking order."""
    return [f"{entry.key}: {format_score(entry.score)}" for entry in entries]


def render_members(members: list[str], *, count: bool = False) -> list[str]:
    """Member ids one per line, or a single line with their number."""
    if count:
        return [str(len(members))]
    return list(members)


def counts_payload(category: str, counts: Mapping[str, int]) -> dict[str, Any]:
    return {
        "category": category,
        "total": sum(counts.values()),
        "counts": {label: counts[label] for label in sorted(counts)},
    }


def ranking_payload(
    query: str, order: str, limit: int, entries: list[RankedEntry]
) -> dict[str, Any]:
    return {
        "query": query,
        "order": order,
        "limit": limit if limit > 0 else None,
        "results": [{"key": e.key, "score": e.score} for e in entries],
    }


def members_payload(
    query: str, capture: str, members: list[str], *, count: bool = False
) -> dict[str, Any]:
    payload: dict[str, Any] = {"query": query, "capture": capture, "count": len(members)}
    if not count:
        payload["members"] = list(members)
    return payload
