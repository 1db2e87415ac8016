"""captally count command - tally extensions by one attribute."""

import click

from captally.analysis.counting import CountCategory, count
from captally.analysis.render import counts_payload, render_counts
from captally.cli.utils import echo_json, echo_lines, load_corpus_index, usage_error
from captally.core.errors import InvocationError


@click.command()
@click.argument("category")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def count_command(ctx: click.Context, category: str, as_json: bool) -> None:
    """Count extensions per CATEGORY bucket.

    CATEGORY is one of: by-type, by-manifest, by-git-provider, by-theme-schema.
    """
    try:
        parsed = CountCategory.parse(category)
    except InvocationError as e:
        raise usage_error(ctx, e) from e

    load, _index = load_corpus_index(ctx)
    counts = count(load.records, parsed)

    if as_json:
        echo_json(counts_payload(parsed.value, counts))
    else:
        echo_lines(render_counts(counts))
