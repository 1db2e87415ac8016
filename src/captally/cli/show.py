"""captally show command - print one extension record."""

import click

from captally.cli.utils import echo_json, load_corpus_index


@click.command()
@click.argument("extension_id")
@click.pass_context
def show_command(ctx: click.Context, extension_id: str) -> None:
    """Print the record built for EXTENSION_ID as JSON."""
    _load, index = load_corpus_index(ctx)
    record = index.records.get(extension_id)
    if record is None:
        raise click.ClickException(f"No extension with id '{extension_id}'")
    echo_json(record.to_dict())
