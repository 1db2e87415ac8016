"""captally find command - list extensions matching attribute filters."""

import click

from captally.analysis.counting import filter_records
from captally.cli.utils import echo_lines, load_corpus_index
from captally.corpus.models import ExtensionKind, ManifestFormat, ThemeSchema
from captally.core.formatting import pluralize
from captally.core.progress import status


@click.command()
@click.option(
    "--type",
    "kind",
    type=click.Choice([k.value for k in ExtensionKind]),
    default=None,
    help="Extension type",
)
@click.option(
    "--manifest",
    "manifest_format",
    type=click.Choice([f.value for f in ManifestFormat]),
    default=None,
    help="Manifest file format",
)
@click.option(
    "--git-provider",
    default=None,
    help="Repository host bucket: github, gitlab, none, or a host name",
)
@click.option(
    "--theme-schema",
    type=click.Choice([s.value for s in ThemeSchema]),
    default=None,
    help="Theme schema version (implies themes only)",
)
@click.option("--count", "count_only", is_flag=True, help="Print only the number of matches")
@click.pass_context
def find_command(
    ctx: click.Context,
    kind: str | None,
    manifest_format: str | None,
    git_provider: str | None,
    theme_schema: str | None,
    count_only: bool,
) -> None:
    """List ids of extensions matching every given filter."""
    load, _index = load_corpus_index(ctx)
    ids = filter_records(
        load.records,
        kind=ExtensionKind(kind) if kind else None,
        manifest_format=ManifestFormat(manifest_format) if manifest_format else None,
        git_provider=git_provider,
        theme_schema=ThemeSchema(theme_schema) if theme_schema else None,
    )

    if count_only:
        click.echo(len(ids))
        return
    echo_lines(ids)
    status(pluralize(len(ids), "match", "matches"))
