"""Load a corpus: discover, build records, skip what is malformed, index the rest."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from captally.config.models import CorpusConfig
from captally.core.errors import InternalError, MalformedExtension
from captally.corpus.builder import build_record
from captally.corpus.discovery import discover_sources
from captally.corpus.index import CorpusIndex
from captally.corpus.models import ExtensionRecord, ExtensionSource

log = structlog.get_logger()


@dataclass
class CorpusLoad:
    """Outcome of one corpus scan."""

    root: Path
    records: list[ExtensionRecord]
    skipped: list[MalformedExtension] = field(default_factory=list)
    elapsed_s: float = 0.0

    def build_index(self) -> CorpusIndex:
        """Index the loaded records.

        Raises:
            InternalError: If records share an id, which build_records never allows.
        """
        try:
            return CorpusIndex.build(self.records)
        except ValueError as e:
            raise InternalError.unexpected(str(e), root=str(self.root)) from e


def build_records(
    sources: list[ExtensionSource],
) -> tuple[list[ExtensionRecord], list[MalformedExtension]]:
    """Build records for every source, collecting failures instead of raising.

    The first source with a given id wins; later ones are reported as duplicates.
    """
    records: list[ExtensionRecord] = []
    skipped: list[MalformedExtension] = []
    seen: set[str] = set()
    for source in sources:
        if source.extension_id in seen:
            skipped.append(MalformedExtension.duplicate_id(source.extension_id, source.path))
            continue
        try:
            record = build_record(source)
        except MalformedExtension as e:
            skipped.append(e)
            continue
        seen.add(record.id)
        records.append(record)
    return records, skipped


def load_corpus(root: Path, config: CorpusConfig) -> CorpusLoad:
    """Scan a corpus root into records.

    Individual extension failures never abort the scan; they are logged as
    warnings and returned in ``CorpusLoad.skipped``.

    Raises:
        FileNotFoundError: If root is not a directory.
    """
    start = time.perf_counter()
    discovered = discover_sources(root, config)
    records, build_failures = build_records(discovered.sources)
    skipped = [*discovered.failures, *build_failures]

    for failure in skipped:
        log.warning(
            "extension_skipped",
            extension_id=failure.extension_id,
            error=failure.error_name,
            reason=failure.message,
        )

    elapsed = time.perf_counter() - start
    log.debug(
        "corpus_loaded",
        root=str(root),
        extensions=len(records),
        skipped=len(skipped),
        elapsed_s=round(elapsed, 3),
    )
    return CorpusLoad(root=root, records=records, skipped=skipped, elapsed_s=elapsed)
