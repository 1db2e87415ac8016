"""Capture name extraction from tree-sitter query files (``*.scm``).

Query files are themselves parsed with tree-sitter, using the grammar of the
query language. Every ``@name`` capture is a ``capture`` node whose
``identifier`` child holds the name without the ``@``; comments and string
literals never produce such nodes, so they are not miscounted.
"""

from __future__ import annotations

from functools import cache

import tree_sitter
import tree_sitter_query
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from captally.config.constants import CAPTURE_NAME_QUERY, PRIVATE_CAPTURE_PREFIX


@cache
def _query_language() -> tree_sitter.Language:
    return tree_sitter.Language(tree_sitter_query.language())


@cache
def _capture_name_query() -> _TSQuery:
    return _TSQuery(_query_language(), CAPTURE_NAME_QUERY)


def extract_capture_names(source: str) -> set[str]:
    """Return the public capture names referenced by a query file.

    Names starting with ``_`` are helper captures used only inside predicates
    and are left out. Unparsable regions are skipped by tree-sitter's error
    recovery; whatever parses still contributes.
    """
    if not source.strip():
        return set()

    parser = tree_sitter.Parser(_query_language())
    tree = parser.parse(source.encode("utf-8"))

    cursor = _TSQueryCursor(_capture_name_query())
    captures = cursor.captures(tree.root_node)

    names: set[str] = set()
    for node in captures.get("name", []):
        if node.text is None:
            continue
        name = node.text.decode("utf-8", errors="replace")
        if name and not name.startswith(PRIVATE_CAPTURE_PREFIX):
            names.add(name)
    return names
