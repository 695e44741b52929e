"""Command-line interface for varorder."""

import json
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import LoggingConfig, VarOrderConfig, load_config
from .core.loader import load_variables
from .models.order import Group
from .observability.logger import LogContext, configure_logging
from .resolver import build_order, new_graph
from .utils.exceptions import VariableOrderError

app = typer.Typer(
    name="varorder",
    help="Compute the evaluation order of dashboard variables",
    add_completion=False,
)

console = Console()
logger = structlog.get_logger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Also write logs to file"),
) -> None:
    """Compute the evaluation order of dashboard variables."""
    ctx.obj = {"log_level": log_level, "json_logs": json_logs, "log_file": log_file}
    _apply_logging(ctx.obj, VarOrderConfig.from_env().logging)


def _apply_logging(options: dict, settings: LoggingConfig) -> None:
    # Command line options override the configured settings
    configure_logging(
        level=options["log_level"] or settings.level,
        json_logs=options["json_logs"] or settings.format == "json",
        log_file=options["log_file"] or settings.file,
    )


def _load_config(
    ctx: typer.Context, config_file: Path | None, all_errors: bool = False
) -> VarOrderConfig:
    config = load_config(config_file)
    if config_file:
        _apply_logging(ctx.obj, config.logging)
    if all_errors:
        config.resolver.collect_all_errors = True
    return config


def _fail(error: Exception) -> typer.Exit:
    console.print(f"\n[red]ERROR:[/red] {escape(str(error))}", soft_wrap=True)
    return typer.Exit(code=1)


@app.command()
def check(
    ctx: typer.Context,
    dashboard_file: Path = typer.Argument(..., help="Dashboard YAML/JSON file", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    all_errors: bool = typer.Option(
        False, "--all-errors", help="Report every naming/reference error at once"
    ),
) -> None:
    """
    Verify that the dashboard variables can be ordered.

    Checks:
    - Variable names
    - References to undefined variables
    - Circular dependencies

    Examples:
        varorder check dashboards/node.yaml
        varorder check dashboards/node.yaml --all-errors
    """
    with LogContext(dashboard=str(dashboard_file)):
        try:
            config = _load_config(ctx, config_file, all_errors)
            variables = load_variables(dashboard_file)
            order = build_order(variables, config.resolver)
        except (VariableOrderError, OSError, ValueError) as e:
            raise _fail(e) from e

    logger.info("Dashboard variables checked", variables=len(variables), groups=len(order))
    console.print(
        f"[green]PASS:[/green] {len(variables)} variable(s) in {len(order)} group(s)"
    )


@app.command()
def order(
    ctx: typer.Context,
    dashboard_file: Path = typer.Argument(..., help="Dashboard YAML/JSON file", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
    as_json: bool = typer.Option(False, "--json", help="Print the groups as JSON"),
) -> None:
    """
    Print the build order of the dashboard variables.

    Variables listed in the same group can be evaluated in parallel.

    Examples:
        varorder order dashboards/node.yaml
        varorder order dashboards/node.yaml --json
    """
    with LogContext(dashboard=str(dashboard_file)):
        try:
            config = _load_config(ctx, config_file)
            variables = load_variables(dashboard_file)
            groups = build_order(variables, config.resolver)
        except (VariableOrderError, OSError, ValueError) as e:
            raise _fail(e) from e

    logger.info("Dashboard build order computed", groups=len(groups))

    if as_json:
        typer.echo(json.dumps([list(group.variables) for group in groups], indent=2))
        return

    console.print(_order_table(groups))


@app.command()
def graph(
    ctx: typer.Context,
    dashboard_file: Path = typer.Argument(..., help="Dashboard YAML/JSON file", exists=True),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """
    Print the variable dependency graph in Graphviz DOT format.

    Examples:
        varorder graph dashboards/node.yaml | dot -Tpng -o vars.png
    """
    with LogContext(dashboard=str(dashboard_file)):
        try:
            config = _load_config(ctx, config_file)
            variables = load_variables(dashboard_file)
            dependency_graph = new_graph(variables, config.resolver)
        except (VariableOrderError, OSError, ValueError) as e:
            raise _fail(e) from e

    # Plain echo: DOT attribute brackets would be read as rich markup
    typer.echo(dependency_graph.to_dot())


def _order_table(groups: list[Group]) -> Table:
    table = Table(title="Variable Build Order")
    table.add_column("Group", justify="right", style="cyan")
    table.add_column("Variables", style="green")
    table.add_column("Count", justify="right")
    for group in groups:
        table.add_row(str(group.index), escape(", ".join(group.variables)), str(len(group)))
    return table
