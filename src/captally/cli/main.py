"""Captally CLI - captally command."""

from pathlib import Path

import click

from captally import __version__
from captally.cli.analyze import analyze_group
from captally.cli.count import count_command
from captally.cli.find import find_command
from captally.cli.show import show_command
from captally.config.loader import load_config
from captally.core.errors import ConfigError
from captally.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="captally")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--corpus",
    type=click.Path(path_type=Path, file_okay=False),
    envvar="CAPTALLY_CORPUS",
    default=None,
    help="Extension corpus root (default: corpus.root from config, else cwd)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML config file (default: <corpus>/.captally.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, corpus: Path | None, config_path: Path | None) -> None:
    """Captally - capture usage and theme support across editor extensions."""
    ctx.ensure_object(dict)

    try:
        config = load_config(corpus_root=corpus or Path.cwd(), config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    set_run_id()

    if corpus is not None:
        corpus_root = corpus
    elif config.corpus.root:
        corpus_root = Path(config.corpus.root).expanduser()
    else:
        corpus_root = Path.cwd()

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config
    ctx.obj["corpus_root"] = corpus_root.resolve()


cli.add_command(count_command, name="count")
cli.add_command(analyze_group, name="analyze")
cli.add_command(show_command, name="show")
cli.add_command(find_command, name="find")


if __name__ == "__main__":
    cli()
