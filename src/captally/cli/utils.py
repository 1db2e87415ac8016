"""CLI utilities shared by every command."""

import json
import tomllib
from pathlib import Path
from typing import Any

import click
import structlog
from rich.markup import escape

from captally.config.models import CaptallyConfig
from captally.core.errors import InvocationError
from captally.core.formatting import format_duration, pluralize
from captally.core.logging import get_log_file_path
from captally.core.progress import spinner, status
from captally.corpus.index import CorpusIndex
from captally.corpus.loader import CorpusLoad, load_corpus

log = structlog.get_logger()


def with_log_pointer(message: str) -> str:
    """Append where the full log lives, when logging goes to a file."""
    log_file = get_log_file_path()
    if log_file is None:
        return message
    return f"{message}. See {log_file} for details."


def get_config(ctx: click.Context) -> CaptallyConfig:
    return ctx.find_root().obj["config"]  # type: ignore[no-any-return]


def get_corpus_root(ctx: click.Context) -> Path:
    return ctx.find_root().obj["corpus_root"]  # type: ignore[no-any-return]


def load_corpus_index(ctx: click.Context) -> tuple[CorpusLoad, CorpusIndex]:
    """Scan the corpus and build its index, reporting skipped extensions on stderr.

    Raises:
        click.ClickException: If the corpus root or its registry cannot be read.
    """
    root = get_corpus_root(ctx)
    config = get_config(ctx)
    try:
        with spinner(f"Scanning extensions in {escape(str(root))}"):
            load = load_corpus(root, config.corpus)
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.error("corpus_unreadable", root=str(root), error=str(e))
        raise click.ClickException(with_log_pointer(f"Cannot read corpus at {root}: {e}")) from e

    status(
        f"Loaded {pluralize(len(load.records), 'extension')} "
        f"in {format_duration(load.elapsed_s)}",
        style="success",
    )
    if load.skipped:
        status(f"Skipped {pluralize(len(load.skipped), 'malformed extension')}", style="warning")
        for failure in load.skipped:
            status(escape(f"{failure.extension_id}: {failure.message}"), indent=2)
        if get_log_file_path() is not None:
            status(escape(with_log_pointer("Skip reasons are logged")), indent=2)

    return load, load.build_index()


def usage_error(ctx: click.Context, error: InvocationError) -> click.UsageError:
    return click.UsageError(error.message, ctx=ctx)


def echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))
