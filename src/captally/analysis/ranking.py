"""Shared ranking contract for every ``*-by-*`` query.

Scores sort descending for DESC and ascending for ASC. Equal scores are
ordered by key name ascending in both directions, so output never depends on
dict or set iteration order. A limit of zero or less disables truncation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from captally.core.errors import InvocationError

_ORDER_ALIASES = {
    "asc": "asc",
    "ascending": "asc",
    "desc": "desc",
    "descending": "desc",
}


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str) -> SortOrder:
        """Parse asc/ascending/desc/descending, case-insensitively.

        Raises:
            InvocationError: For anything else.
        """
        canonical = _ORDER_ALIASES.get(value.strip().lower())
        if canonical is None:
            raise InvocationError.unknown_order(value, list(_ORDER_ALIASES))
        return cls(canonical)


@dataclass(frozen=True, slots=True)
class RankedEntry:
    key: str
    score: int | float


def rank(
    scores: Mapping[str, int | float],
    order: SortOrder | str,
    limit: int,
) -> list[RankedEntry]:
    """Sort scores by order, break ties by key, keep the first ``limit`` rows."""
    if not isinstance(order, SortOrder):
        order = SortOrder.parse(order)

    if order is SortOrder.DESC:
        ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    else:
        ordered = sorted(scores.items(), key=lambda item: (item[1], item[0]))

    if limit > 0:
        ordered = ordered[:limit]
    return [RankedEntry(key, score) for key, score in ordered]
