"""captally analyze commands - capture usage and theme support queries."""

from collections.abc import Callable

import click

from captally.analysis.captures import (
    captures_by_theme_support,
    captures_by_usage,
    languages_by_theme_support,
    languages_using_capture,
    themes_by_capture_support,
    themes_supporting_capture,
)
from captally.analysis.ranking import RankedEntry, SortOrder
from captally.analysis.render import (
    members_payload,
    ranking_payload,
    render_members,
    render_ranking,
)
from captally.cli.utils import echo_json, echo_lines, get_config, load_corpus_index, usage_error
from captally.core.errors import InvocationError
from captally.corpus.index import CorpusIndex

_json_option = click.option("--json", "as_json", is_flag=True, help="Output as JSON")
_limit_option = click.option(
    "--limit",
    type=int,
    default=None,
    help="Maximum rows (default: analysis.default_limit; 0 or less for all)",
)
_count_option = click.option("--count", "count_only", is_flag=True, help="Print only the number")


@click.group()
def analyze_group() -> None:
    """Capture usage and theme support analysis.

    Ranking queries take ORDER (asc/ascending/desc/descending). Ties are
    broken by name.
    """


def _parse_order(ctx: click.Context, order: str) -> SortOrder:
    try:
        return SortOrder.parse(order)
    except InvocationError as e:
        raise usage_error(ctx, e) from e


def _run_ranking(
    ctx: click.Context,
    query: Callable[[CorpusIndex, SortOrder, int], list[RankedEntry]],
    order: str,
    limit: int | None,
    as_json: bool,
) -> None:
    parsed = _parse_order(ctx, order)
    if limit is None:
        limit = get_config(ctx).analysis.default_limit

    _load, index = load_corpus_index(ctx)
    entries = query(index, parsed, limit)

    if as_json:
        echo_json(ranking_payload(ctx.info_name or "", parsed.value, limit, entries))
    else:
        echo_lines(render_ranking(entries))


def _run_members(
    ctx: click.Context,
    query: Callable[[CorpusIndex, str], list[str]],
    capture: str,
    count_only: bool,
    as_json: bool,
) -> None:
    _load, index = load_corpus_index(ctx)
    members = query(index, capture)

    if as_json:
        echo_json(members_payload(ctx.info_name or "", capture, members, count=count_only))
    else:
        echo_lines(render_members(members, count=count_only))


@analyze_group.command("captures-by-usage")
@click.argument("order")
@_limit_option
@click.option(
    "--include-unused",
    is_flag=True,
    help="Also list captures only themes style, with a score of 0",
)
@_json_option
@click.pass_context
def captures_by_usage_command(
    ctx: click.Context, order: str, limit: int | None, include_unused: bool, as_json: bool
) -> None:
    """Captures ranked by how many languages use them."""
    _run_ranking(
        ctx,
        lambda index, o, n: captures_by_usage(index, o, n, include_unused=include_unused),
        order,
        limit,
        as_json,
    )


@analyze_group.command("captures-by-theme-support")
@click.argument("order")
@_limit_option
@click.option(
    "--include-unsupported",
    is_flag=True,
    help="Also list used captures no theme styles, with a score of 0",
)
@_json_option
@click.pass_context
def captures_by_theme_support_command(
    ctx: click.Context, order: str, limit: int | None, include_unsupported: bool, as_json: bool
) -> None:
    """Captures ranked by how many themes style them."""
    _run_ranking(
        ctx,
        lambda index, o, n: captures_by_theme_support(
            index, o, n, include_unsupported=include_unsupported
        ),
        order,
        limit,
        as_json,
    )


@analyze_group.command("languages-by-theme-support")
@click.argument("order")
@_limit_option
@_json_option
@click.pass_context
def languages_by_theme_support_command(
    ctx: click.Context, order: str, limit: int | None, as_json: bool
) -> None:
    """Languages ranked by depth and breadth of theme support for their captures."""
    _run_ranking(ctx, languages_by_theme_support, order, limit, as_json)


@analyze_group.command("themes-by-capture-support")
@click.argument("order")
@_limit_option
@_json_option
@click.pass_context
def themes_by_capture_support_command(
    ctx: click.Context, order: str, limit: int | None, as_json: bool
) -> None:
    """Themes ranked by how many used captures they style."""
    _run_ranking(ctx, themes_by_capture_support, order, limit, as_json)


@analyze_group.command("themes-supporting-capture")
@click.argument("capture")
@_count_option
@_json_option
@click.pass_context
def themes_supporting_capture_command(
    ctx: click.Context, capture: str, count_only: bool, as_json: bool
) -> None:
    """Themes that style CAPTURE."""
    _run_members(ctx, themes_supporting_capture, capture, count_only, as_json)


@analyze_group.command("languages-using-capture")
@click.argument("capture")
@_count_option
@_json_option
@click.pass_context
def languages_using_capture_command(
    ctx: click.Context, capture: str, count_only: bool, as_json: bool
) -> None:
    """Languages whose highlight queries use CAPTURE."""
    _run_members(ctx, languages_using_capture, capture, count_only, as_json)
