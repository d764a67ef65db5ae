"""shower-map CLI - query particle shower trees from an event file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console

from shower_map import __version__
from shower_map.analysis import Analysis
from shower_map.conditions import (
    Condition,
    accept_all,
    all_of,
    any_of,
    min_quantity,
    negate,
    particle_type,
)
from shower_map.config import (
    ConfigLoadError,
    ConfigValidationError,
    ShowerMapConfig,
    VALID_LOG_LEVELS,
    VALID_OUTPUT_FORMATS,
    generate_config_template_string,
    get_config,
    get_global_config_path,
    get_project_config_path,
)
from shower_map.forest.model import ShowerMapError
from shower_map.loader import load_event_file
from shower_map.particles import ParticleTable
from shower_map.renderers import OutputFormat, format_quantity, render_forest

logger = logging.getLogger(__name__)

console = Console()

SUM_SCOPES = ("siblings", "children", "branch", "ancestors")

event_file_argument = click.argument(
    "event_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
type_option = click.option(
    "--type", "-t", "types", multiple=True,
    help="Particle type to match (repeatable, any of them matches)",
)
exclude_type_option = click.option(
    "--exclude-type", "-x", "exclude_types", multiple=True,
    help="Particle type to reject (repeatable)",
)
min_value_option = click.option(
    "--min-value", type=float, default=None, help="Only match quantities >= this value",
)


def filter_options(f):
    """Attach --type, --exclude-type and --min-value to a command."""
    f = min_value_option(f)
    f = exclude_type_option(f)
    return type_option(f)


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper())
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("shower_map").setLevel(numeric)


def _load(event_file: Path) -> tuple[Analysis, ParticleTable]:
    table = ParticleTable()
    try:
        analysis = load_event_file(event_file, table=table)
    except ShowerMapError as e:
        raise click.ClickException(str(e))
    return analysis, table


def _build_condition(
    table: ParticleTable,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> Condition:
    """Combine --type, --exclude-type and --min-value into one condition."""
    conditions: list[Condition] = []
    if types:
        conditions.append(any_of(*(particle_type(table.get(t)) for t in types)))
    if exclude_types:
        conditions.append(negate(any_of(*(particle_type(table.get(t)) for t in exclude_types))))
    if min_value is not None:
        conditions.append(min_quantity(min_value))
    if not conditions:
        return accept_all
    if len(conditions) == 1:
        return conditions[0]
    return all_of(*conditions)


def _require(analysis: Analysis, node_id: int) -> None:
    if not analysis.exists(node_id):
        raise click.ClickException(f"Unknown node id: {node_id}")


def _precision(ctx: click.Context) -> int:
    return ctx.obj["config"].render.precision


@click.group()
@click.version_option(__version__, prog_name="shower-map")
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default from config, WARNING otherwise)",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of ./.shower_map.json",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None, config_path: Path | None) -> None:
    """Query hierarchical particle showers."""
    try:
        config = get_config(config_path=config_path)
    except (ConfigLoadError, ConfigValidationError) as e:
        raise click.ClickException(str(e))
    if log_level is not None:
        config.log_level = log_level.upper()
    _configure_logging(config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@event_file_argument
@click.option(
    "--format", "output_format",
    type=click.Choice(VALID_OUTPUT_FORMATS, case_sensitive=False),
    default=None,
    help="Output format (default from config)",
)
@click.option("--precision", type=click.IntRange(min=0), default=None)
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Maximum depth below each root")
@click.pass_context
def show(
    ctx: click.Context,
    event_file: Path,
    output_format: str | None,
    precision: int | None,
    depth: int | None,
) -> None:
    """Render the shower stored in EVENT_FILE."""
    config: ShowerMapConfig = ctx.obj["config"]
    analysis, _ = _load(event_file)
    output = render_forest(
        analysis.forest,
        format=OutputFormat((output_format or config.render.output_format).lower()),
        precision=config.render.precision if precision is None else precision,
        depth=depth,
        width=config.render.width,
    )
    click.echo(output, nl=False)


@main.command()
@event_file_argument
@click.argument("node_id", type=int)
@filter_options
@click.pass_context
def value(
    ctx: click.Context,
    event_file: Path,
    node_id: int,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> None:
    """Print the quantity of NODE_ID (exit 1 if it does not match)."""
    analysis, table = _load(event_file)
    _require(analysis, node_id)
    cond = _build_condition(table, types, exclude_types, min_value)
    matched, quantity = analysis.value_of(node_id, cond)
    click.echo(format_quantity(quantity, _precision(ctx)))
    ctx.exit(0 if matched else 1)


@main.command(name="sum")
@event_file_argument
@click.argument("node_id", type=int)
@click.option(
    "--scope",
    type=click.Choice(SUM_SCOPES),
    default="branch",
    show_default=True,
    help="Which nodes around NODE_ID to sum over",
)
@filter_options
@click.pass_context
def sum_command(
    ctx: click.Context,
    event_file: Path,
    node_id: int,
    scope: str,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> None:
    """Sum quantities around NODE_ID.

    For children and ancestors the exit code is 1 when nothing matched.
    """
    analysis, table = _load(event_file)
    _require(analysis, node_id)
    cond = _build_condition(table, types, exclude_types, min_value)

    matched = True
    if scope == "children":
        matched, total = analysis.sum_of_children(node_id, cond)
    elif scope == "ancestors":
        matched, total = analysis.sum_of_ancestors(node_id, cond)
    else:
        analysis.forest.select(node_id)
        if scope == "siblings":
            total = analysis.engine.sum_siblings(cond)
        else:
            total = analysis.engine.sum_branch(cond)

    logger.debug("sum scope=%s node=%s total=%s", scope, node_id, total)
    click.echo(format_quantity(total, _precision(ctx)))
    ctx.exit(0 if matched else 1)


@main.command()
@event_file_argument
@click.argument("node_id", type=int)
@filter_options
@click.pass_context
def ancestor(
    ctx: click.Context,
    event_file: Path,
    node_id: int,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> None:
    """Print the nearest matching ancestor of NODE_ID."""
    analysis, table = _load(event_file)
    _require(analysis, node_id)
    cond = _build_condition(table, types, exclude_types, min_value)
    found, ancestor_id = analysis.parent_matches(node_id, cond)
    if not found:
        console.print("No matching ancestor", style="yellow")
        ctx.exit(1)
    click.echo(str(ancestor_id))


@main.command()
@event_file_argument
@click.argument("node_id", type=int)
@filter_options
@click.pass_context
def children(
    ctx: click.Context,
    event_file: Path,
    node_id: int,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> None:
    """List the matching direct children of NODE_ID."""
    analysis, table = _load(event_file)
    _require(analysis, node_id)
    cond = _build_condition(table, types, exclude_types, min_value)
    found, ids = analysis.children_ids(node_id, cond)
    click.echo(" ".join(str(i) for i in ids))
    ctx.exit(0 if found else 1)


@main.command()
@event_file_argument
@filter_options
@click.pass_context
def heads(
    ctx: click.Context,
    event_file: Path,
    types: tuple[str, ...],
    exclude_types: tuple[str, ...],
    min_value: float | None,
) -> None:
    """List the heads of every matching chain in the shower."""
    analysis, table = _load(event_file)
    cond = _build_condition(table, types, exclude_types, min_value)
    found, ids = analysis.heads(cond)
    click.echo(" ".join(str(i) for i in ids))
    ctx.exit(0 if found else 1)


@main.group()
def config() -> None:
    """Manage configuration files."""


@config.command("init")
@click.option("--global", "is_global", is_flag=True, help="Create global config at ~/.shower_map_config.json")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config file")
def config_init(is_global: bool, force: bool) -> None:
    """Write a commented config template."""
    path = get_global_config_path() if is_global else get_project_config_path()
    if path.exists() and not force:
        raise click.ClickException(f"Config file already exists: {path} (use --force to overwrite)")
    path.write_text(generate_config_template_string() + "\n")
    console.print(f"[green]Created config:[/green] {path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as JSON."""
    click.echo(json.dumps(ctx.obj["config"].to_dict(), indent=2))


if __name__ == "__main__":
    main()
