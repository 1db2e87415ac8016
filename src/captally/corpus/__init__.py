"""Corpus scanning and indexing.

Public API:
    load_corpus(root, config) -> CorpusLoad
    build_record(source) -> ExtensionRecord
    CorpusIndex.build(records) -> CorpusIndex
"""

from captally.corpus.builder import build_record
from captally.corpus.index import CorpusIndex, build_index
from captally.corpus.loader import CorpusLoad, build_records, load_corpus
from captally.corpus.models import (
    ExtensionKind,
    ExtensionRecord,
    ExtensionSource,
    GitProvider,
    GitProviderKind,
    LanguageSource,
    ManifestFormat,
    ThemeSchema,
)

__all__ = [
    "CorpusIndex",
    "CorpusLoad",
    "ExtensionKind",
    "ExtensionRecord",
    "ExtensionSource",
    "GitProvider",
    "GitProviderKind",
    "LanguageSource",
    "ManifestFormat",
    "ThemeSchema",
    "build_index",
    "build_record",
    "build_records",
    "load_corpus",
]
